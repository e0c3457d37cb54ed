from functools import wraps

from flask import jsonify
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from shiftboard.extensions import db
from shiftboard.models.user import User


def get_current_user():
    """Loads the user behind the current JWT, or None if the identity is stale."""
    try:
        user_id = int(get_jwt_identity())
    except (TypeError, ValueError):
        return None
    return db.session.get(User, user_id)


def login_required(*roles, message=None):
    """
    Requires a valid JWT and, when roles are given, one of those roles.
    The loaded user is passed to the view as its first argument.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            user = get_current_user()
            if not user:
                return jsonify({"error": "Unauthorized"}), 401
            if roles and user.role not in roles:
                return jsonify({"error": message or "Access denied"}), 403
            return fn(user, *args, **kwargs)
        return wrapper
    return decorator
