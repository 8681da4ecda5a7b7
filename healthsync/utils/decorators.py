# healthsync/utils/decorators.py
from functools import wraps
from flask import g
from flask_jwt_extended import get_jwt_identity, jwt_required
from healthsync.errors import UnauthorizedError, ForbiddenError
from healthsync.extensions import db
from healthsync.models import User, UserRole, RolePermission, Permission


def load_current_user():
    """Return the active user behind the JWT identity, or raise 401."""
    user_id = get_jwt_identity()
    try:
        user = db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        user = None
    if not user or not user.is_active:
        raise UnauthorizedError("User account no longer exists or is disabled")
    return user


def user_has_permission(user_id, code):
    """Resolve UserRole -> RolePermission -> Permission for one code."""
    return db.session.query(Permission.id)\
        .join(RolePermission, RolePermission.permission_id == Permission.id)\
        .join(UserRole, UserRole.role_id == RolePermission.role_id)\
        .filter(UserRole.user_id == user_id, Permission.permission_code == code)\
        .first() is not None


def login_required(view_func):
    """Require a valid JWT belonging to an existing, active user.

    The user is stored on ``flask.g.current_user``.
    """
    @wraps(view_func)
    @jwt_required()
    def wrapper(*args, **kwargs):
        g.current_user = load_current_user()
        return view_func(*args, **kwargs)
    return wrapper


def require_permission(code):
    """Allow the view only when one of the caller's roles grants ``code``."""
    def decorator(view_func):
        @wraps(view_func)
        @jwt_required()
        def wrapper(*args, **kwargs):
            user = load_current_user()
            if not user_has_permission(user.id, code):
                raise ForbiddenError(f"Permission denied: {code} required")
            g.current_user = user
            return view_func(*args, **kwargs)
        return wrapper
    return decorator
