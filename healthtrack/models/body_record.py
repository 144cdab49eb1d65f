# healthtrack/models/body_record.py
from datetime import datetime
from .. import db


class BodyRecord(db.Model):
    __tablename__ = "body_records"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    weight = db.Column(db.Float, nullable=False)
    body_fat_percentage = db.Column(db.Float)
    record_date = db.Column(db.Date, nullable=False)
    notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    def to_trend_dict(self):
        return {
            "date": self.record_date.isoformat(),
            "weight": self.weight,
            "body_fat_percentage": self.body_fat_percentage,
        }

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "weight": self.weight,
            "body_fat_percentage": self.body_fat_percentage,
            "date": self.record_date.isoformat() if self.record_date else None,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
