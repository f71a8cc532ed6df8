from functools import wraps
from flask import abort, current_app, request
from ..openapi_parts.constants import API_KEY_HEADER

API_KEY_ATTR = '__requires_api_key__'


def require_api_key(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        supplied = request.headers.get(API_KEY_HEADER)
        if not supplied:
            abort(401, description='Missing API key')
        registered = current_app.config.get('REGISTERED_API_KEYS') or ()
        if not registered:
            abort(500, description='No API keys registered')
        if supplied not in registered:
            abort(401, description='Invalid API key')
        return fn(*args, **kwargs)
    setattr(wrapper, API_KEY_ATTR, True)
    return wrapper


def requires_api_key(fn) -> bool:
    return bool(getattr(fn, API_KEY_ATTR, False))


__all__ = ['require_api_key', 'requires_api_key']
