# healthtrack/models/user.py
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from .. import db

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    username = db.Column(db.String(50), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    avatar_url = db.Column(db.String(255))
    role = db.Column(
        db.Enum(ROLE_USER, ROLE_ADMIN, name="user_role_enum"),
        nullable=False,
        default=ROLE_USER,
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    # per-user data goes with the user
    body_records = db.relationship(
        "BodyRecord", backref="user", cascade="all, delete-orphan", lazy="dynamic"
    )
    meals = db.relationship(
        "UserMeal", backref="user", cascade="all, delete-orphan", lazy="dynamic"
    )
    exercises = db.relationship(
        "UserExercise", backref="user", cascade="all, delete-orphan", lazy="dynamic"
    )
    diary_entries = db.relationship(
        "DiaryEntry", backref="user", cascade="all, delete-orphan", lazy="dynamic"
    )
    daily_goals = db.relationship(
        "DailyGoal", backref="user", cascade="all, delete-orphan", lazy="dynamic"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def to_author_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "avatar_url": self.avatar_url,
        }

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "username": self.username,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "avatar_url": self.avatar_url,
            "role": self.role,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
