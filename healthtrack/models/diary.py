# healthtrack/models/diary.py
from datetime import datetime
from .. import db


class DiaryEntry(db.Model):
    __tablename__ = "diary_entries"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    mood = db.Column(db.String(30))  # happy, neutral, sad, excited
    image_url = db.Column(db.String(255))
    entry_date = db.Column(db.Date, nullable=False)
    entry_time = db.Column(db.String(5))

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (
        db.Index("ix_diary_entries_user_date", "user_id", "entry_date"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "content": self.content,
            "mood": self.mood,
            "image_url": self.image_url,
            "date": self.entry_date.isoformat() if self.entry_date else None,
            "time": self.entry_time,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
