# healthtrack/goals.py
"""
Daily goal tracking.

Every meal / exercise / diary write ends with a recount of the affected day's
DailyGoal row in the same transaction as the write itself. Reads either fetch
(creating on first access) a single day's goal, or aggregate a window of goals.

    get_or_create_goal(user_id, day)   -> DailyGoal
    recount(user_id, day, kind)        -> DailyGoal   kind: meals|exercises|diary
    achievement_rate(...)              -> int (0..100)
    achievement_summary(user_id, day)  -> dict
    range_stats(user_id, days)         -> dict
"""
import math
from datetime import date, timedelta
from typing import Any, Dict, Iterable, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from . import db
from .models.daily_goal import DailyGoal
from .models.diary import DiaryEntry
from .models.exercise import UserExercise
from .models.meal import UserMeal

KIND_MEALS = "meals"
KIND_EXERCISES = "exercises"
KIND_DIARY = "diary"

# kind -> (entry model, logged column, target column)
_KINDS = {
    KIND_MEALS: (UserMeal, "meals_logged", "target_meals"),
    KIND_EXERCISES: (UserExercise, "exercises_logged", "target_exercises"),
    KIND_DIARY: (DiaryEntry, "diary_written", "target_diary"),
}


# ------------------------------
# Rate calculation
# ------------------------------
def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def achievement_rate(
    meals_logged: int,
    exercises_logged: int,
    diary_written: int,
    target_meals: int,
    target_exercises: int,
    target_diary: int,
) -> int:
    """
    round(100 * done / targets) with halves rounded up; 0 when there are no targets.
    """
    done = meals_logged + exercises_logged + diary_written
    targets = target_meals + target_exercises + target_diary
    if targets <= 0:
        return 0
    # integer form of floor(100 * done / targets + 0.5)
    return (200 * done + targets) // (2 * targets)


def goal_rate(goal: DailyGoal) -> float:
    """Unrounded rate computed from the goal's counters (ignores the stored column)."""
    targets = goal.total_targets
    if targets <= 0:
        return 0.0
    return goal.total_logged / targets * 100


# ------------------------------
# Goal record manager
# ------------------------------
def _find_goal(user_id: int, day: date) -> Optional[DailyGoal]:
    return DailyGoal.query.filter_by(user_id=user_id, goal_date=day).first()


def _insert_goal(user_id: int, day: date) -> Optional[DailyGoal]:
    """
    Insert a default goal inside a SAVEPOINT.

    Returns None when (user_id, goal_date) already exists; the savepoint is
    rolled back and the surrounding transaction stays usable.
    """
    cfg = current_app.config
    goal = DailyGoal(
        user_id=user_id,
        goal_date=day,
        target_meals=cfg.get("DEFAULT_TARGET_MEALS", 3),
        target_exercises=cfg.get("DEFAULT_TARGET_EXERCISES", 1),
        target_diary=cfg.get("DEFAULT_TARGET_DIARY", 1),
        meals_logged=0,
        exercises_logged=0,
        diary_written=0,
        achievement_rate=0,
    )
    try:
        with db.session.begin_nested():
            db.session.add(goal)
    except IntegrityError:
        current_app.logger.info(
            f"[goals] goal for user_id={user_id} date={day} created concurrently, re-reading"
        )
        return None
    return goal


def get_or_create_goal(user_id: int, day: date) -> DailyGoal:
    goal = _find_goal(user_id, day)
    if goal is not None:
        return goal

    goal = _insert_goal(user_id, day)
    if goal is None:
        goal = _find_goal(user_id, day)
    return goal


# ------------------------------
# Progress updater
# ------------------------------
def recount(user_id: int, day: date, kind: str) -> DailyGoal:
    try:
        model, logged_attr, target_attr = _KINDS[kind]
    except KeyError:
        raise ValueError(f"unknown goal kind: {kind!r}")

    goal = get_or_create_goal(user_id, day)

    # entry_date is a Date column, so equality covers the whole calendar day
    count = model.query.filter(
        model.user_id == user_id,
        model.entry_date == day,
    ).count()

    setattr(goal, logged_attr, min(count, getattr(goal, target_attr)))
    goal.achievement_rate = achievement_rate(
        goal.meals_logged,
        goal.exercises_logged,
        goal.diary_written,
        goal.target_meals,
        goal.target_exercises,
        goal.target_diary,
    )
    db.session.flush()

    current_app.logger.debug(
        f"[goals] recount user_id={user_id} date={day} kind={kind} "
        f"count={count} rate={goal.achievement_rate}"
    )
    return goal


def recount_dates(user_id: int, kind: str, days: Iterable[date]) -> None:
    """Recount every distinct day given (old and new date of a moved entry)."""
    for day in sorted(set(d for d in days if d is not None)):
        recount(user_id, day, kind)


def commit_with_recount(user_id: int, kind: str, days: Iterable[date]) -> None:
    """
    Recount the given days and commit them together with whatever entry
    change is pending in the session. Nothing is committed on failure.
    """
    try:
        recount_dates(user_id, kind, days)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception(
            f"[goals] failed to save {kind} change for user_id={user_id}"
        )
        raise


# ------------------------------
# Read side
# ------------------------------
def achievement_summary(user_id: int, day: date) -> Dict[str, Any]:
    goal = get_or_create_goal(user_id, day)
    return {
        "date": day.isoformat(),
        "achievement_rate": round_half_up(goal_rate(goal)),
        "completed": {
            "meals": goal.meals_logged,
            "exercises": goal.exercises_logged,
            "diary": goal.diary_written,
        },
        "targets": {
            "meals": goal.target_meals,
            "exercises": goal.target_exercises,
            "diary": goal.target_diary,
        },
        "progress": f"{goal.total_logged}/{goal.total_targets}",
    }


def range_stats(user_id: int, days: int, today: Optional[date] = None) -> Dict[str, Any]:
    today = today or date.today()
    start = today - timedelta(days=days)

    goals = (
        DailyGoal.query.filter(
            DailyGoal.user_id == user_id,
            DailyGoal.goal_date >= start,
        )
        .order_by(DailyGoal.goal_date.asc())
        .all()
    )

    total = len(goals)
    average = round_half_up(sum(goal_rate(g) for g in goals) / total) if total else 0

    best = None
    best_rate = None
    for g in goals:
        rate = goal_rate(g)
        if best is None or rate > best_rate:
            best, best_rate = g, rate

    return {
        "days": days,
        "averageAchievementRate": average,
        "bestDay": best.to_dict() if best else None,
        "totalGoals": total,
    }
