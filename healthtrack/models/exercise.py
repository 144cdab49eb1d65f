# healthtrack/models/exercise.py
from datetime import datetime
from .. import db


class ExercisePreset(db.Model):
    __tablename__ = "exercise_presets"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    description = db.Column(db.String(255))
    calories_per_unit = db.Column(db.Integer, nullable=False, default=0)  # per 10 minutes
    image_url = db.Column(db.String(255))

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "calories_per_unit": self.calories_per_unit,
            "image_url": self.image_url,
        }


class UserExercise(db.Model):
    __tablename__ = "user_exercises"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    exercise_preset_id = db.Column(db.Integer, db.ForeignKey("exercise_presets.id"))
    custom_name = db.Column(db.String(100))
    entry_date = db.Column(db.Date, nullable=False)
    entry_time = db.Column(db.String(5))
    duration = db.Column(db.Integer, nullable=False)  # minutes
    calories_burned = db.Column(db.Integer, nullable=False, default=0)
    notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    exercise_preset = db.relationship("ExercisePreset")

    __table_args__ = (
        db.Index("ix_user_exercises_user_date", "user_id", "entry_date"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "exercise_preset_id": self.exercise_preset_id,
            "exercise_preset": self.exercise_preset.to_dict()
            if self.exercise_preset
            else None,
            "custom_name": self.custom_name,
            "date": self.entry_date.isoformat() if self.entry_date else None,
            "time": self.entry_time,
            "duration": self.duration,
            "calories_burned": self.calories_burned,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
