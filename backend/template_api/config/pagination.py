"""Limit/offset handling shared by list endpoints."""
DEFAULT_LIMIT = 25
MAX_LIMIT = 100


def normalize_pagination(limit_raw, offset_raw):
    """Return a clamped (limit, offset) pair; non-integer input raises ValueError."""
    try:
        limit = int(limit_raw) if limit_raw not in (None, '') else DEFAULT_LIMIT
        offset = int(offset_raw) if offset_raw not in (None, '') else 0
    except ValueError:
        raise ValueError('limit/offset must be int')
    return max(1, min(limit, MAX_LIMIT)), max(0, offset)
