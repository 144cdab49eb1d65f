# healthtrack/routes/meal_routes.py
from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from .. import db
from ..auth import current_user_id
from ..errors import NotFoundError, ValidationError
from ..goals import KIND_MEALS, commit_with_recount, round_half_up
from ..models.meal import MealCategory, MealPreset, UserMeal
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

meals_bp = Blueprint("meals", __name__)

MIN_SERVINGS = 0.5


# ------------------------------
# Helpers
# ------------------------------
def _get_preset_or_404(preset_id) -> MealPreset:
    preset = db.session.get(MealPreset, preset_id)
    if not preset:
        raise NotFoundError("Meal preset not found")
    return preset


def _get_owned_meal(meal_id: int, user_id: int) -> UserMeal:
    meal = UserMeal.query.filter_by(id=meal_id, user_id=user_id).first()
    if not meal:
        raise NotFoundError("Meal not found")
    return meal


def _preset_id_arg(data):
    value = data.get("meal_preset_id")
    if value is None:
        return None
    return parse_number(value, "meal_preset_id", minimum=1, integer=True)


# ------------------------------
# Presets (public)
# ------------------------------
@meals_bp.route("/presets", methods=["GET"])
def list_presets():
    """
    GET /api/meals/presets?categoryId=1
    """
    q = MealPreset.query
    category_id = request.args.get("categoryId")
    if category_id:
        try:
            q = q.filter(MealPreset.category_id == int(category_id))
        except ValueError:
            raise ValidationError("categoryId must be an integer")

    rows = q.order_by(MealPreset.name.asc()).all()
    return jsonify({"presets": [p.to_dict() for p in rows]}), 200


@meals_bp.route("/presets/categories", methods=["GET"])
def list_categories():
    rows = MealCategory.query.order_by(MealCategory.name.asc()).all()
    return jsonify({"categories": [c.to_dict() for c in rows]}), 200


@meals_bp.route("/presets/<int:preset_id>", methods=["GET"])
def get_preset(preset_id: int):
    preset = _get_preset_or_404(preset_id)
    return jsonify({"preset": preset.to_dict()}), 200


# ------------------------------
# User meals
# ------------------------------
@meals_bp.route("/user", methods=["POST"])
@jwt_required()
def create_meal():
    user_id = current_user_id()
    data = get_json_body()

    preset_id = _preset_id_arg(data)
    custom_name = optional(data, "custom_name", parse_string, 100)
    custom_name = None if is_missing(custom_name) else (custom_name.strip() or None)

    if not preset_id and not custom_name:
        raise ValidationError("Either meal_preset_id or custom_name must be provided")

    preset = _get_preset_or_404(preset_id) if preset_id else None

    servings = optional(data, "servings", parse_number, MIN_SERVINGS)
    servings = 1.0 if is_missing(servings) else servings

    calories = optional(data, "calories", parse_number, 0, None, True)
    if is_missing(calories):
        calories = round_half_up(preset.calories * servings) if preset else 0

    image_url = optional(data, "image_url", parse_string, 255)
    notes = optional(data, "notes", parse_string)

    meal = UserMeal(
        user_id=user_id,
        meal_preset_id=preset.id if preset else None,
        custom_name=custom_name,
        entry_date=required(data, "date", parse_date),
        entry_time=parse_time(data.get("time")),
        calories=calories,
        servings=servings,
        image_url=None if is_missing(image_url) else image_url,
        notes=None if is_missing(notes) else notes,
    )
    db.session.add(meal)
    commit_with_recount(user_id, KIND_MEALS, [meal.entry_date])

    return jsonify({"meal": meal.to_dict()}), 201


@meals_bp.route("/user", methods=["GET"])
@jwt_required()
def list_meals():
    """
    GET /api/meals/user?skip=0&take=30&date=2025-10-31
    """
    user_id = current_user_id()
    skip, take = pagination_args()

    q = UserMeal.query.filter(UserMeal.user_id == user_id)
    if request.args.get("date"):
        q = q.filter(UserMeal.entry_date == parse_date(request.args["date"]))

    rows = (
        q.order_by(UserMeal.entry_date.desc(), UserMeal.id.desc())
        .offset(skip)
        .limit(take)
        .all()
    )
    return jsonify({"meals": [m.to_dict() for m in rows]}), 200


@meals_bp.route("/user/date/<day>", methods=["GET"])
@jwt_required()
def meals_by_date(day):
    user_id = current_user_id()
    entry_date = parse_date(day)

    rows = (
        UserMeal.query.filter_by(user_id=user_id, entry_date=entry_date)
        .order_by(UserMeal.entry_time.asc(), UserMeal.id.asc())
        .all()
    )
    return jsonify({"date": entry_date.isoformat(), "meals": [m.to_dict() for m in rows]}), 200


@meals_bp.route("/user/stats/<day>", methods=["GET"])
@jwt_required()
def meal_stats(day):
    user_id = current_user_id()
    entry_date = parse_date(day)

    rows = UserMeal.query.filter_by(user_id=user_id, entry_date=entry_date).all()
    count = len(rows)
    total_calories = sum(m.calories or 0 for m in rows)

    return (
        jsonify(
            {
                "date": entry_date.isoformat(),
                "meals": count,
                "totalCalories": total_calories,
                "averageCalories": round_half_up(total_calories / count) if count else 0,
            }
        ),
        200,
    )


@meals_bp.route("/user/<int:meal_id>", methods=["GET"])
@jwt_required()
def get_meal(meal_id: int):
    meal = _get_owned_meal(meal_id, current_user_id())
    return jsonify({"meal": meal.to_dict()}), 200


@meals_bp.route("/user/<int:meal_id>", methods=["PUT"])
@jwt_required()
def update_meal(meal_id: int):
    user_id = current_user_id()
    meal = _get_owned_meal(meal_id, user_id)
    data = get_json_body()
    old_date = meal.entry_date

    preset_id = _preset_id_arg(data)
    if preset_id and preset_id != meal.meal_preset_id:
        meal.meal_preset_id = _get_preset_or_404(preset_id).id

    custom_name = optional(data, "custom_name", parse_string, 100)
    if not is_missing(custom_name):
        meal.custom_name = custom_name.strip() or None

    if not meal.meal_preset_id and not meal.custom_name:
        raise ValidationError("Either meal_preset_id or custom_name must be provided")

    entry_date = optional(data, "date", parse_date)
    if not is_missing(entry_date):
        meal.entry_date = entry_date
    if "time" in data:
        meal.entry_time = parse_time(data.get("time"))

    calories = optional(data, "calories", parse_number, 0, None, True)
    if not is_missing(calories):
        meal.calories = calories
    servings = optional(data, "servings", parse_number, MIN_SERVINGS)
    if not is_missing(servings):
        meal.servings = servings
    image_url = optional(data, "image_url", parse_string, 255)
    if not is_missing(image_url):
        meal.image_url = image_url
    notes = optional(data, "notes", parse_string)
    if not is_missing(notes):
        meal.notes = notes

    commit_with_recount(user_id, KIND_MEALS, [old_date, meal.entry_date])
    return jsonify({"meal": meal.to_dict()}), 200


@meals_bp.route("/user/<int:meal_id>", methods=["DELETE"])
@jwt_required()
def delete_meal(meal_id: int):
    user_id = current_user_id()
    meal = _get_owned_meal(meal_id, user_id)
    entry_date = meal.entry_date

    db.session.delete(meal)
    commit_with_recount(user_id, KIND_MEALS, [entry_date])
    return "", 204
