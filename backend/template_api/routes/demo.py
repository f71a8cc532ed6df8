from flask import Blueprint, request, abort, current_app
from ..decorators.openapi import tags
from ..services.cache import MISSING

demo_bp = Blueprint('demo', __name__)

LOG_LEVELS = frozenset({'info', 'warning', 'error'})


def _cache():
    return current_app.extensions['demo_cache']


@demo_bp.get('/ping')
def ping():
    """Liveness check for the demo document."""
    return {'status': 'ok', 'message': 'pong'}


@demo_bp.post('/log/<level>')
@tags('System Logging')
def write_log(level):
    """Write a message to the application log."""
    method = level.lower()
    if method not in LOG_LEVELS:
        abort(400, description=f'Invalid log level {level}')
    data = request.get_json(silent=True) or {}
    message = data.get('message')
    if not message:
        abort(400, description='message required')
    getattr(current_app.logger, method)('demo log: %s', message)
    return {'level': method, 'message': message}, 201


@demo_bp.get('/cache')
@tags('Caches')
def list_cache_keys():
    """List cached keys."""
    return {'data': _cache().keys()}


@demo_bp.get('/cache/<key>')
@tags('Caches')
def get_cache(key):
    """Read a cached value."""
    value = _cache().get(key, MISSING)
    if value is MISSING:
        abort(404, description=f'Cache key {key} not found')
    return {'key': key, 'value': value}


@demo_bp.put('/cache/<key>')
@tags('Caches')
def put_cache(key):
    """Create or replace a cached value (optional `expiration_minutes`)."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'value' not in data:
        abort(400, description='value required')
    ttl = data.get('expiration_minutes')
    if ttl is not None and (isinstance(ttl, bool) or not isinstance(ttl, int) or ttl <= 0):
        abort(400, description='expiration_minutes must be a positive integer')
    created = _cache().set(key, data['value'], ttl)
    return {'key': key, 'value': data['value']}, (201 if created else 200)


@demo_bp.delete('/cache/<key>')
@tags('Caches')
def delete_cache(key):
    """Remove a cached value."""
    if not _cache().delete(key):
        abort(404, description=f'Cache key {key} not found')
    return '', 204
