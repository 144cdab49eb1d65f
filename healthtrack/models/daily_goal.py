# healthtrack/models/daily_goal.py
from datetime import datetime
from .. import db


class DailyGoal(db.Model):
    """
    One row per (user, calendar day).

    Each *_logged counter never exceeds its target, and achievement_rate is
    only written by goals.recount() from those counters.
    """

    __tablename__ = "daily_goals"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    goal_date = db.Column(db.Date, nullable=False)

    target_meals = db.Column(db.Integer, default=3, nullable=False)
    target_exercises = db.Column(db.Integer, default=1, nullable=False)
    target_diary = db.Column(db.Integer, default=1, nullable=False)

    meals_logged = db.Column(db.Integer, default=0, nullable=False)
    exercises_logged = db.Column(db.Integer, default=0, nullable=False)
    diary_written = db.Column(db.Integer, default=0, nullable=False)

    achievement_rate = db.Column(db.Integer, default=0, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        db.UniqueConstraint("user_id", "goal_date", name="uq_daily_goals_user_date"),
    )

    @property
    def total_logged(self) -> int:
        return (self.meals_logged or 0) + (self.exercises_logged or 0) + (self.diary_written or 0)

    @property
    def total_targets(self) -> int:
        return (self.target_meals or 0) + (self.target_exercises or 0) + (self.target_diary or 0)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "date": self.goal_date.isoformat() if self.goal_date else None,
            "target_meals": self.target_meals,
            "target_exercises": self.target_exercises,
            "target_diary": self.target_diary,
            "meals_logged": self.meals_logged,
            "exercises_logged": self.exercises_logged,
            "diary_written": self.diary_written,
            "achievement_rate": self.achievement_rate,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
