from .user import User, ROLE_USER, ROLE_ADMIN
from .body_record import BodyRecord
from .meal import MealCategory, MealPreset, UserMeal
from .exercise import ExercisePreset, UserExercise
from .diary import DiaryEntry
from .daily_goal import DailyGoal
from .column import ColumnCategory, Column

__all__ = [
    "User",
    "ROLE_USER",
    "ROLE_ADMIN",
    "BodyRecord",
    "MealCategory",
    "MealPreset",
    "UserMeal",
    "ExercisePreset",
    "UserExercise",
    "DiaryEntry",
    "DailyGoal",
    "ColumnCategory",
    "Column",
]
