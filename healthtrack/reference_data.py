# healthtrack/reference_data.py
"""
Shared reference data: meal categories and presets, exercise presets and
column categories. Safe to run repeatedly; existing rows (matched by name)
are left untouched.
"""
from typing import Dict, Optional

from flask import current_app
from sqlalchemy import or_

from . import db
from .models.column import ColumnCategory
from .models.exercise import ExercisePreset
from .models.meal import MealCategory, MealPreset
from .models.user import ROLE_ADMIN, User

MEAL_CATEGORIES = ["Breakfast", "Lunch", "Dinner", "Snack"]

# category -> [(name, calories, description)]
MEAL_PRESETS = {
    "Breakfast": [
        ("Oatmeal with Berries", 350, "Oatmeal with fresh blueberries and honey"),
        ("Scrambled Eggs & Toast", 400, "Two eggs with whole wheat toast and butter"),
        ("Smoothie Bowl", 320, "Protein smoothie with granola and coconut"),
    ],
    "Lunch": [
        ("Chicken Caesar Salad", 480, "Grilled chicken with romaine and parmesan"),
        ("Tuna Sandwich", 420, "Tuna mayo on whole wheat with vegetables"),
        ("Pasta Primavera", 550, "Whole wheat pasta with seasonal vegetables"),
    ],
    "Dinner": [
        ("Grilled Salmon", 520, "Salmon fillet with asparagus and lemon"),
        ("Beef Stir Fry", 580, "Lean beef with broccoli and brown rice"),
        ("Vegetable Curry", 420, "Mild curry with chickpeas and vegetables"),
    ],
    "Snack": [
        ("Protein Bar", 200, "Energy bar with nuts and chocolate"),
        ("Apple with Almond Butter", 250, "Fresh apple with 2 tbsp almond butter"),
    ],
}

# (name, description, calories per 10 minutes)
EXERCISE_PRESETS = [
    ("Running", "Steady pace running", 80),
    ("Cycling", "Moderate intensity cycling", 70),
    ("Swimming", "Freestyle swimming", 90),
    ("Walking", "Brisk walking", 40),
    ("Yoga", "Flow yoga session", 30),
    ("Strength Training", "Full-body weight training", 60),
]

# (name, description)
COLUMN_CATEGORIES = [
    ("Column", "Health columns and essays"),
    ("Diet", "Nutrition and healthy eating"),
    ("Beauty", "Skin care and wellbeing"),
    ("Health", "General health tips"),
]


def seed_reference_data(
    admin_email: Optional[str] = None,
    admin_username: Optional[str] = None,
    admin_password: Optional[str] = None,
) -> Dict[str, int]:
    """
    Insert missing reference rows (and optionally an admin account).
    Must run inside an app context. Returns counts of rows created.
    Raises ValueError, with nothing committed, when the admin username
    belongs to a different account.
    """
    created = {
        "meal_categories": 0,
        "meal_presets": 0,
        "exercise_presets": 0,
        "column_categories": 0,
        "admins": 0,
    }

    categories = {c.name: c for c in MealCategory.query.all()}
    for name in MEAL_CATEGORIES:
        if name not in categories:
            categories[name] = MealCategory(name=name)
            db.session.add(categories[name])
            created["meal_categories"] += 1
    db.session.flush()

    existing_meals = {p.name for p in MealPreset.query.all()}
    for category_name, presets in MEAL_PRESETS.items():
        for name, calories, description in presets:
            if name in existing_meals:
                continue
            db.session.add(
                MealPreset(
                    name=name,
                    calories=calories,
                    description=description,
                    category_id=categories[category_name].id,
                )
            )
            created["meal_presets"] += 1

    existing_exercises = {p.name for p in ExercisePreset.query.all()}
    for name, description, calories_per_unit in EXERCISE_PRESETS:
        if name not in existing_exercises:
            db.session.add(
                ExercisePreset(
                    name=name,
                    description=description,
                    calories_per_unit=calories_per_unit,
                )
            )
            created["exercise_presets"] += 1

    existing_columns = {c.name for c in ColumnCategory.query.all()}
    for order, (name, description) in enumerate(COLUMN_CATEGORIES, start=1):
        if name not in existing_columns:
            db.session.add(
                ColumnCategory(name=name, description=description, display_order=order)
            )
            created["column_categories"] += 1

    if admin_email and admin_password:
        email = admin_email.strip().lower()
        username = admin_username or email.split("@")[0]
        existing = User.query.filter(
            or_(User.email == email, User.username == username)
        ).first()
        if existing and existing.email != email:
            db.session.rollback()
            raise ValueError(f"username '{username}' is already taken by another account")
        if not existing:
            admin = User(email=email, username=username, role=ROLE_ADMIN)
            admin.set_password(admin_password)
            db.session.add(admin)
            created["admins"] += 1

    db.session.commit()
    current_app.logger.info(f"[seed] reference data created: {created}")
    return created
