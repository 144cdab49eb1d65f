# healthtrack/routes/body_record_routes.py
from datetime import date, timedelta

from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from .. import db
from ..auth import current_user_id
from ..errors import NotFoundError
from ..models.body_record import BodyRecord
from ..validation import (
    days_arg,
    get_json_body,
    is_missing,
    optional,
    pagination_args,
    parse_date,
    parse_number,
    parse_string,
    required,
)

body_records_bp = Blueprint("body_records", __name__)

WEIGHT_MIN, WEIGHT_MAX = 30, 200
BODY_FAT_MIN, BODY_FAT_MAX = 0, 100
DEFAULT_TREND_DAYS = 180


def _get_owned_record(record_id: int, user_id: int) -> BodyRecord:
    record = BodyRecord.query.filter_by(id=record_id, user_id=user_id).first()
    if not record:
        raise NotFoundError("Body record not found")
    return record


@body_records_bp.route("", methods=["POST"])
@jwt_required()
def create_record():
    user_id = current_user_id()
    data = get_json_body()

    body_fat = optional(data, "body_fat_percentage", parse_number, BODY_FAT_MIN, BODY_FAT_MAX)
    notes = optional(data, "notes", parse_string)

    record = BodyRecord(
        user_id=user_id,
        weight=required(data, "weight", parse_number, WEIGHT_MIN, WEIGHT_MAX),
        body_fat_percentage=None if is_missing(body_fat) else body_fat,
        record_date=required(data, "date", parse_date),
        notes=None if is_missing(notes) else notes,
    )
    db.session.add(record)
    db.session.commit()

    return jsonify({"record": record.to_dict()}), 201


@body_records_bp.route("", methods=["GET"])
@jwt_required()
def list_records():
    user_id = current_user_id()
    skip, take = pagination_args()

    rows = (
        BodyRecord.query.filter_by(user_id=user_id)
        .order_by(BodyRecord.record_date.desc(), BodyRecord.id.desc())
        .offset(skip)
        .limit(take)
        .all()
    )
    return jsonify({"records": [r.to_dict() for r in rows]}), 200


@body_records_bp.route("/latest", methods=["GET"])
@jwt_required()
def latest_record():
    user_id = current_user_id()
    record = (
        BodyRecord.query.filter_by(user_id=user_id)
        .order_by(BodyRecord.record_date.desc(), BodyRecord.id.desc())
        .first()
    )
    return jsonify({"record": record.to_dict() if record else None}), 200


@body_records_bp.route("/trend", methods=["GET"])
@jwt_required()
def trend():
    """
    Weight / body-fat points for the last `days` days, oldest first.

    GET /api/body-records/trend?days=180
    """
    user_id = current_user_id()
    days = days_arg(DEFAULT_TREND_DAYS)
    start = date.today() - timedelta(days=days)

    rows = (
        BodyRecord.query.filter(
            BodyRecord.user_id == user_id,
            BodyRecord.record_date >= start,
        )
        .order_by(BodyRecord.record_date.asc(), BodyRecord.id.asc())
        .all()
    )
    return jsonify({"days": days, "trend": [r.to_trend_dict() for r in rows]}), 200


@body_records_bp.route("/stats", methods=["GET"])
@jwt_required()
def stats():
    """
    Current measurement plus the change between the newest and oldest record.
    `stats` is null when the user has no records.
    """
    user_id = current_user_id()
    rows = (
        BodyRecord.query.filter_by(user_id=user_id)
        .order_by(BodyRecord.record_date.desc(), BodyRecord.id.desc())
        .all()
    )
    if not rows:
        return jsonify({"stats": None}), 200

    latest, oldest = rows[0], rows[-1]
    return (
        jsonify(
            {
                "stats": {
                    "current": {
                        "weight": latest.weight,
                        "body_fat_percentage": latest.body_fat_percentage,
                        "date": latest.record_date.isoformat(),
                    },
                    "change": {
                        "weight": round(latest.weight - oldest.weight, 2),
                        "body_fat_percentage": round(
                            (latest.body_fat_percentage or 0)
                            - (oldest.body_fat_percentage or 0),
                            2,
                        ),
                    },
                    "records": len(rows),
                }
            }
        ),
        200,
    )


@body_records_bp.route("/<int:record_id>", methods=["GET"])
@jwt_required()
def get_record(record_id: int):
    record = _get_owned_record(record_id, current_user_id())
    return jsonify({"record": record.to_dict()}), 200


@body_records_bp.route("/<int:record_id>", methods=["PUT"])
@jwt_required()
def update_record(record_id: int):
    record = _get_owned_record(record_id, current_user_id())
    data = get_json_body()

    weight = optional(data, "weight", parse_number, WEIGHT_MIN, WEIGHT_MAX)
    body_fat = optional(data, "body_fat_percentage", parse_number, BODY_FAT_MIN, BODY_FAT_MAX)
    record_date = optional(data, "date", parse_date)
    notes = optional(data, "notes", parse_string)

    if not is_missing(weight):
        record.weight = weight
    if not is_missing(body_fat):
        record.body_fat_percentage = body_fat
    if not is_missing(record_date):
        record.record_date = record_date
    if not is_missing(notes):
        record.notes = notes

    db.session.commit()
    return jsonify({"record": record.to_dict()}), 200


@body_records_bp.route("/<int:record_id>", methods=["DELETE"])
@jwt_required()
def delete_record(record_id: int):
    record = _get_owned_record(record_id, current_user_id())
    db.session.delete(record)
    db.session.commit()
    return "", 204
