from __future__ import annotations
from flask import Blueprint, request, abort
from sqlalchemy.exc import IntegrityError
from .. import get_db
from ..models.user import User
from ..config.pagination import normalize_pagination
from ..decorators.auth import require_api_key
from ..decorators.openapi import tags

users_bp = Blueprint('users', __name__)


def _payload(required: bool):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        abort(400, description='JSON body required')
    if required:
        for field in ('name', 'email'):
            if not data.get(field):
                abort(400, description=f'{field} required')
    return data


def _get_or_404(session, user_id: int) -> User:
    user = session.get(User, user_id)
    if not user:
        abort(404, description='User not found')
    return user


@users_bp.get('')
@require_api_key
def list_users():
    """List users."""
    session = get_db()
    try:
        limit, offset = normalize_pagination(request.args.get('limit'), request.args.get('offset'))
    except ValueError as e:
        abort(400, description=str(e))
    q = session.query(User)
    total = q.count()
    rows = q.order_by(User.id.asc()).offset(offset).limit(limit).all()
    return {
        'data': [u.to_json() for u in rows],
        'pagination': {'total': total, 'limit': limit, 'offset': offset, 'returned': len(rows)},
    }


@users_bp.post('')
@tags('Users')
@require_api_key
def create_user():
    """Create a user."""
    data = _payload(required=True)
    session = get_db()
    user = User(name=data['name'], email=data['email'], is_active=bool(data.get('is_active', True)))
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        abort(409, description='Email already registered')
    return user.to_json(), 201


@users_bp.get('/<int:user_id>')
@tags('Users')
@require_api_key
def get_user(user_id):
    """Get a user."""
    return _get_or_404(get_db(), user_id).to_json()


@users_bp.put('/<int:user_id>')
@tags('Users')
@require_api_key
def update_user(user_id):
    """Update a user."""
    data = _payload(required=False)
    session = get_db()
    user = _get_or_404(session, user_id)
    for field in ('name', 'email'):
        if field in data:
            if not data[field]:
                abort(400, description=f'{field} must not be empty')
            setattr(user, field, data[field])
    if 'is_active' in data:
        user.is_active = bool(data['is_active'])
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        abort(409, description='Email already registered')
    return user.to_json()


@users_bp.delete('/<int:user_id>')
@tags('Users')
@require_api_key
def delete_user(user_id):
    """Delete a user."""
    session = get_db()
    user = _get_or_404(session, user_id)
    session.delete(user)
    session.commit()
    return '', 204
