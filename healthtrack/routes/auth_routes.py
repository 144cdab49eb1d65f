# healthtrack/routes/auth_routes.py
import re

from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    jwt_required,
)
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from .. import db
from ..auth import current_user_id, get_current_user
from ..errors import ConflictError, UnauthorizedError, ValidationError
from ..models.user import ROLE_USER, User
from ..validation import get_json_body, parse_string

auth_bp = Blueprint("auth", __name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

PASSWORD_MIN_LENGTH = 8
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20


# -----------------------------
# Helpers
# -----------------------------
def _issue_tokens(user: User):
    claims = {"email": user.email, "username": user.username, "role": user.role}
    return {
        "accessToken": create_access_token(identity=str(user.id), additional_claims=claims),
        "refreshToken": create_refresh_token(identity=str(user.id), additional_claims=claims),
    }


def _text(data, key) -> str:
    value = data.get(key)
    if value is None:
        return ""
    return parse_string(value, key)


def _optional_name(data, key):
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value.strip() or None


# -----------------------------
# Routes
# -----------------------------
@auth_bp.route("/register", methods=["POST"])
def register():
    data = get_json_body()

    email = _text(data, "email").strip().lower()
    username = _text(data, "username").strip()
    password = _text(data, "password")  # do NOT strip passwords

    if not email or not username or not password:
        raise ValidationError("email, username and password are required")

    if not _EMAIL_RE.match(email):
        raise ValidationError("invalid email format")

    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters"
        )

    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"password must be at least {PASSWORD_MIN_LENGTH} characters")

    existing = User.query.filter(
        or_(User.email == email, User.username == username)
    ).first()
    if existing:
        raise ConflictError("email or username already exists")

    user = User(
        email=email,
        username=username,
        first_name=_optional_name(data, "first_name"),
        last_name=_optional_name(data, "last_name"),
        role=ROLE_USER,
    )
    user.set_password(password)

    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        # lost a race against a concurrent registration
        db.session.rollback()
        raise ConflictError("email or username already exists")
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Registration Error: {e}")
        return jsonify({"message": "Internal server error"}), 500

    current_app.logger.info(f"[auth/register] user_id={user.id} email='{user.email}'")
    return jsonify({"user": user.to_dict(), **_issue_tokens(user)}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    """
    Accepts:
      - { "email": "...", "password": "..." }
      - { "username": "...", "password": "..." }
      - { "identifier": "...", "password": "..." }  # email or username
    """
    data = get_json_body()

    identifier = (
        _text(data, "identifier") or _text(data, "email") or _text(data, "username")
    ).strip()
    password = _text(data, "password")

    if not identifier or not password:
        raise ValidationError("identifier and password are required")

    user = User.query.filter(
        or_(
            User.email == identifier.lower(),
            User.username == identifier,
        )
    ).first()

    if not user:
        current_app.logger.info(f"[auth/login] user NOT found for '{identifier}'")
        raise UnauthorizedError("invalid credentials")

    if not user.check_password(password):
        current_app.logger.info(f"[auth/login] bad password for user_id={user.id}")
        raise UnauthorizedError("invalid credentials")

    current_app.logger.info(f"[auth/login] user_id={user.id} logged in")
    return jsonify({"user": user.to_dict(), **_issue_tokens(user)}), 200


@auth_bp.route("/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh():
    user = db.session.get(User, current_user_id())
    if not user:
        raise UnauthorizedError("user not found")
    return jsonify(_issue_tokens(user)), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    user = get_current_user()
    return jsonify({"user": user.to_dict()}), 200
