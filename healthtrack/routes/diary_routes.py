# healthtrack/routes/diary_routes.py
from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from .. import db
from ..auth import current_user_id
from ..errors import NotFoundError
from ..goals import (
    KIND_DIARY,
    achievement_summary,
    commit_with_recount,
    get_or_create_goal,
    range_stats,
)
from ..models.diary import DiaryEntry
from ..validation import (
    days_arg,
    get_json_body,
    is_missing,
    optional,
    pagination_args,
    parse_date,
    parse_string,
    parse_time,
    required,
)

diary_bp = Blueprint("diary", __name__)

DEFAULT_STATS_DAYS = 30
MOODS = ("happy", "neutral", "sad", "excited")


def _get_owned_entry(entry_id: int, user_id: int) -> DiaryEntry:
    entry = DiaryEntry.query.filter_by(id=entry_id, user_id=user_id).first()
    if not entry:
        raise NotFoundError("Diary entry not found")
    return entry


def _mood_arg(data):
    mood = optional(data, "mood", parse_string, 30)
    if is_missing(mood):
        return mood
    # free text is accepted; known moods are normalised
    lowered = mood.strip().lower()
    return lowered if lowered in MOODS else mood.strip()


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------

@diary_bp.route("/entries", methods=["POST"])
@jwt_required()
def create_entry():
    user_id = current_user_id()
    data = get_json_body()

    mood = _mood_arg(data)
    image_url = optional(data, "image_url", parse_string, 255)

    entry = DiaryEntry(
        user_id=user_id,
        title=required(data, "title", parse_string, 200),
        content=required(data, "content", parse_string),
        mood=None if is_missing(mood) else mood,
        image_url=None if is_missing(image_url) else image_url,
        entry_date=required(data, "date", parse_date),
        entry_time=parse_time(data.get("time")),
    )
    db.session.add(entry)
    commit_with_recount(user_id, KIND_DIARY, [entry.entry_date])

    return jsonify({"entry": entry.to_dict()}), 201


@diary_bp.route("/entries", methods=["GET"])
@jwt_required()
def list_entries():
    user_id = current_user_id()
    skip, take = pagination_args()

    rows = (
        DiaryEntry.query.filter_by(user_id=user_id)
        .order_by(DiaryEntry.entry_date.desc(), DiaryEntry.id.desc())
        .offset(skip)
        .limit(take)
        .all()
    )
    return jsonify({"entries": [e.to_dict() for e in rows]}), 200


@diary_bp.route("/entries/date/<day>", methods=["GET"])
@jwt_required()
def entries_by_date(day):
    user_id = current_user_id()
    entry_date = parse_date(day)

    rows = (
        DiaryEntry.query.filter_by(user_id=user_id, entry_date=entry_date)
        .order_by(DiaryEntry.entry_time.asc(), DiaryEntry.id.asc())
        .all()
    )
    return jsonify({"date": entry_date.isoformat(), "entries": [e.to_dict() for e in rows]}), 200


@diary_bp.route("/entries/<int:entry_id>", methods=["GET"])
@jwt_required()
def get_entry(entry_id: int):
    entry = _get_owned_entry(entry_id, current_user_id())
    return jsonify({"entry": entry.to_dict()}), 200


@diary_bp.route("/entries/<int:entry_id>", methods=["PUT"])
@jwt_required()
def update_entry(entry_id: int):
    user_id = current_user_id()
    entry = _get_owned_entry(entry_id, user_id)
    data = get_json_body()
    old_date = entry.entry_date

    title = optional(data, "title", parse_string, 200)
    if not is_missing(title):
        entry.title = title
    content = optional(data, "content", parse_string)
    if not is_missing(content):
        entry.content = content
    mood = _mood_arg(data)
    if not is_missing(mood):
        entry.mood = mood
    image_url = optional(data, "image_url", parse_string, 255)
    if not is_missing(image_url):
        entry.image_url = image_url
    entry_date = optional(data, "date", parse_date)
    if not is_missing(entry_date):
        entry.entry_date = entry_date
    if "time" in data:
        entry.entry_time = parse_time(data.get("time"))

    commit_with_recount(user_id, KIND_DIARY, [old_date, entry.entry_date])
    return jsonify({"entry": entry.to_dict()}), 200


@diary_bp.route("/entries/<int:entry_id>", methods=["DELETE"])
@jwt_required()
def delete_entry(entry_id: int):
    user_id = current_user_id()
    entry = _get_owned_entry(entry_id, user_id)
    entry_date = entry.entry_date

    db.session.delete(entry)
    commit_with_recount(user_id, KIND_DIARY, [entry_date])
    return "", 204


# ---------------------------------------------------------------------------
# Daily goals & achievement
# ---------------------------------------------------------------------------

@diary_bp.route("/goals/date/<day>", methods=["GET"])
@jwt_required()
def daily_goal(day):
    """
    Goal record for one day; created with default targets on first access.
    """
    user_id = current_user_id()
    goal = get_or_create_goal(user_id, parse_date(day))
    db.session.commit()
    return jsonify({"goal": goal.to_dict()}), 200


@diary_bp.route("/achievement/date/<day>", methods=["GET"])
@jwt_required()
def achievement_for_date(day):
    """
    Returns:
    {
      "date": "2025-10-31",
      "achievement_rate": 80,
      "completed": {"meals": 2, "exercises": 1, "diary": 1},
      "targets": {"meals": 3, "exercises": 1, "diary": 1},
      "progress": "4/5"
    }
    """
    user_id = current_user_id()
    summary = achievement_summary(user_id, parse_date(day))
    db.session.commit()
    return jsonify(summary), 200


@diary_bp.route("/achievement/stats", methods=["GET"])
@jwt_required()
def achievement_stats():
    """
    GET /api/diary/achievement/stats?days=30
    """
    user_id = current_user_id()
    stats = range_stats(user_id, days_arg(DEFAULT_STATS_DAYS))
    return jsonify(stats), 200
