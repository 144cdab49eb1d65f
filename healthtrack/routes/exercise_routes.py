# healthtrack/routes/exercise_routes.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from .. import db
from ..auth import current_user_id
from ..errors import NotFoundError, ValidationError
from ..goals import KIND_EXERCISES, commit_with_recount, round_half_up
from ..models.exercise import ExercisePreset, UserExercise
from ..validation import (
    get_json_body,
    is_missing,
    optional,
    pagination_args,
    parse_date,
    parse_number,
    parse_string,
    parse_time,
    required,
)

exercises_bp = Blueprint("exercises", __name__)

# preset calories_per_unit is per this many minutes
MINUTES_PER_UNIT = 10


def _get_preset_or_404(preset_id) -> ExercisePreset:
    preset = db.session.get(ExercisePreset, preset_id)
    if not preset:
        raise NotFoundError("Exercise preset not found")
    return preset


def _get_owned_exercise(exercise_id: int, user_id: int) -> UserExercise:
    exercise = UserExercise.query.filter_by(id=exercise_id, user_id=user_id).first()
    if not exercise:
        raise NotFoundError("Exercise not found")
    return exercise


def _preset_id_arg(data):
    value = data.get("exercise_preset_id")
    if value is None:
        return None
    return parse_number(value, "exercise_preset_id", minimum=1, integer=True)


def _estimate_calories(preset: ExercisePreset, duration: int) -> int:
    return round_half_up(preset.calories_per_unit * duration / MINUTES_PER_UNIT)


@exercises_bp.route("/presets", methods=["GET"])
def list_presets():
    """
    Public: list all exercise presets.

    GET /api/exercises/presets
    """
    rows = ExercisePreset.query.order_by(ExercisePreset.name.asc()).all()
    return jsonify({"presets": [p.to_dict() for p in rows]}), 200


@exercises_bp.route("/presets/<int:preset_id>", methods=["GET"])
def get_preset(preset_id: int):
    """
    Public: get a single exercise preset.

    GET /api/exercises/presets/<preset_id>
    """
    preset = _get_preset_or_404(preset_id)
    return jsonify({"preset": preset.to_dict()}), 200


@exercises_bp.route("/user", methods=["POST"])
@jwt_required()
def create_exercise():
    """
    Expected body:
    {
      "exercise_preset_id": 1,        # or "custom_name": "HIIT"
      "date": "2025-10-31",
      "time": "14:30",                # optional
      "duration": 30,                 # minutes
      "calories_burned": 250,         # optional when a preset is given
      "notes": "..."
    }
    """
    user_id = current_user_id()
    data = get_json_body()

    preset_id = _preset_id_arg(data)
    custom_name = optional(data, "custom_name", parse_string, 100)
    custom_name = None if is_missing(custom_name) else (custom_name.strip() or None)

    if not preset_id and not custom_name:
        raise ValidationError("Either exercise_preset_id or custom_name must be provided")

    preset = _get_preset_or_404(preset_id) if preset_id else None
    duration = required(data, "duration", parse_number, 1, None, True)

    calories_burned = optional(data, "calories_burned", parse_number, 0, None, True)
    if is_missing(calories_burned):
        if not preset:
            raise ValidationError("calories_burned is required")
        calories_burned = _estimate_calories(preset, duration)

    notes = optional(data, "notes", parse_string)

    exercise = UserExercise(
        user_id=user_id,
        exercise_preset_id=preset.id if preset else None,
        custom_name=custom_name,
        entry_date=required(data, "date", parse_date),
        entry_time=parse_time(data.get("time")),
        duration=duration,
        calories_burned=calories_burned,
        notes=None if is_missing(notes) else notes,
    )
    db.session.add(exercise)
    commit_with_recount(user_id, KIND_EXERCISES, [exercise.entry_date])

    return jsonify({"exercise": exercise.to_dict()}), 201


@exercises_bp.route("/user", methods=["GET"])
@jwt_required()
def list_exercises():
    user_id = current_user_id()
    skip, take = pagination_args()

    q = UserExercise.query.filter(UserExercise.user_id == user_id)
    if request.args.get("date"):
        q = q.filter(UserExercise.entry_date == parse_date(request.args["date"]))

    rows = (
        q.order_by(UserExercise.entry_date.desc(), UserExercise.id.desc())
        .offset(skip)
        .limit(take)
        .all()
    )
    return jsonify({"exercises": [e.to_dict() for e in rows]}), 200


@exercises_bp.route("/user/date/<day>", methods=["GET"])
@jwt_required()
def exercises_by_date(day):
    user_id = current_user_id()
    entry_date = parse_date(day)

    rows = (
        UserExercise.query.filter_by(user_id=user_id, entry_date=entry_date)
        .order_by(UserExercise.entry_time.asc(), UserExercise.id.asc())
        .all()
    )
    return (
        jsonify({"date": entry_date.isoformat(), "exercises": [e.to_dict() for e in rows]}),
        200,
    )


@exercises_bp.route("/user/stats/<day>", methods=["GET"])
@jwt_required()
def exercise_stats(day):
    user_id = current_user_id()
    entry_date = parse_date(day)

    rows = UserExercise.query.filter_by(user_id=user_id, entry_date=entry_date).all()
    count = len(rows)
    total_duration = sum(e.duration or 0 for e in rows)
    total_calories = sum(e.calories_burned or 0 for e in rows)

    return (
        jsonify(
            {
                "date": entry_date.isoformat(),
                "exercises": count,
                "totalDuration": total_duration,
                "totalCalories": total_calories,
                "averageCalories": round_half_up(total_calories / count) if count else 0,
            }
        ),
        200,
    )


@exercises_bp.route("/user/<int:exercise_id>", methods=["GET"])
@jwt_required()
def get_exercise(exercise_id: int):
    exercise = _get_owned_exercise(exercise_id, current_user_id())
    return jsonify({"exercise": exercise.to_dict()}), 200


@exercises_bp.route("/user/<int:exercise_id>", methods=["PUT"])
@jwt_required()
def update_exercise(exercise_id: int):
    user_id = current_user_id()
    exercise = _get_owned_exercise(exercise_id, user_id)
    data = get_json_body()
    old_date = exercise.entry_date

    preset_id = _preset_id_arg(data)
    if preset_id and preset_id != exercise.exercise_preset_id:
        exercise.exercise_preset_id = _get_preset_or_404(preset_id).id

    custom_name = optional(data, "custom_name", parse_string, 100)
    if not is_missing(custom_name):
        exercise.custom_name = custom_name.strip() or None

    if not exercise.exercise_preset_id and not exercise.custom_name:
        raise ValidationError("Either exercise_preset_id or custom_name must be provided")

    entry_date = optional(data, "date", parse_date)
    if not is_missing(entry_date):
        exercise.entry_date = entry_date
    if "time" in data:
        exercise.entry_time = parse_time(data.get("time"))

    duration = optional(data, "duration", parse_number, 1, None, True)
    if not is_missing(duration):
        exercise.duration = duration
    calories_burned = optional(data, "calories_burned", parse_number, 0, None, True)
    if not is_missing(calories_burned):
        exercise.calories_burned = calories_burned
    notes = optional(data, "notes", parse_string)
    if not is_missing(notes):
        exercise.notes = notes

    commit_with_recount(user_id, KIND_EXERCISES, [old_date, exercise.entry_date])
    return jsonify({"exercise": exercise.to_dict()}), 200


@exercises_bp.route("/user/<int:exercise_id>", methods=["DELETE"])
@jwt_required()
def delete_exercise(exercise_id: int):
    user_id = current_user_id()
    exercise = _get_owned_exercise(exercise_id, user_id)
    entry_date = exercise.entry_date

    db.session.delete(exercise)
    commit_with_recount(user_id, KIND_EXERCISES, [entry_date])
    return "", 204
