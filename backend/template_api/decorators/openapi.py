"""Route annotations read by the OpenAPI builder.

Usage:

@demo_bp.get('/cache/<key>')
@tags('Caches')
def get_cache(key): ...

Tags attach to the view function, so they apply to every method the rule
serves. Views without tags are given a default tag by the document filters.
"""
from typing import Callable, List

TAGS_ATTR = '__openapi_tags__'


def tags(*names: str):
    def outer(fn: Callable):
        existing: List[str] = list(getattr(fn, TAGS_ATTR, []))
        for n in names:
            if n not in existing:
                existing.append(n)
        setattr(fn, TAGS_ATTR, existing)
        return fn
    return outer


def get_tags(fn: Callable) -> List[str]:
    return list(getattr(fn, TAGS_ATTR, []))


__all__ = ['tags', 'get_tags', 'TAGS_ATTR']
