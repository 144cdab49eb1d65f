# healthtrack/models/meal.py
from datetime import datetime
from .. import db


# -----------------------------
# Presets (shared reference data)
# -----------------------------
class MealCategory(db.Model):
    __tablename__ = "meal_categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False)
    description = db.Column(db.String(255))

    presets = db.relationship("MealPreset", back_populates="category")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
        }


class MealPreset(db.Model):
    __tablename__ = "meal_presets"

    id = db.Column(db.Integer, primary_key=True)
    category_id = db.Column(
        db.Integer, db.ForeignKey("meal_categories.id"), nullable=False
    )
    name = db.Column(db.String(100), nullable=False)
    calories = db.Column(db.Integer, nullable=False, default=0)
    description = db.Column(db.String(255))
    image_url = db.Column(db.String(255))

    category = db.relationship("MealCategory", back_populates="presets")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "calories": self.calories,
            "description": self.description,
            "image_url": self.image_url,
            "category": self.category.to_dict() if self.category else None,
        }


# -----------------------------
# Logged meals
# -----------------------------
class UserMeal(db.Model):
    __tablename__ = "user_meals"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    meal_preset_id = db.Column(db.Integer, db.ForeignKey("meal_presets.id"))
    custom_name = db.Column(db.String(100))
    entry_date = db.Column(db.Date, nullable=False)
    entry_time = db.Column(db.String(5))  # "HH:MM"
    calories = db.Column(db.Integer, nullable=False, default=0)
    servings = db.Column(db.Float, nullable=False, default=1)
    image_url = db.Column(db.String(255))
    notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    meal_preset = db.relationship("MealPreset")

    __table_args__ = (db.Index("ix_user_meals_user_date", "user_id", "entry_date"),)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "meal_preset_id": self.meal_preset_id,
            "meal_preset": self.meal_preset.to_dict() if self.meal_preset else None,
            "custom_name": self.custom_name,
            "date": self.entry_date.isoformat() if self.entry_date else None,
            "time": self.entry_time,
            "calories": self.calories,
            "servings": self.servings,
            "image_url": self.image_url,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
