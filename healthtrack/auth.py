# healthtrack/auth.py
from functools import wraps

from flask_jwt_extended import get_jwt_identity, jwt_required

from . import db
from .errors import ForbiddenError, UnauthorizedError
from .models.user import User


def current_user_id() -> int:
    return int(get_jwt_identity())


def get_current_user() -> User:
    user = db.session.get(User, current_user_id())
    if not user:
        raise UnauthorizedError("user not found")
    return user


def admin_required(view_func):
    """
    Requires a valid access token whose user has the admin role.
    The admin User is passed to the view as `current_user`.
    """

    @wraps(view_func)
    @jwt_required()
    def wrapper(*args, **kwargs):
        user = get_current_user()
        if not user.is_admin:
            raise ForbiddenError("admin role required")
        kwargs["current_user"] = user
        return view_func(*args, **kwargs)

    return wrapper
