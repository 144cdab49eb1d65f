# healthtrack/routes/column_routes.py
from flask import Blueprint, current_app, jsonify

from .. import db
from ..auth import admin_required
from ..errors import ForbiddenError, NotFoundError, ValidationError
from ..models.column import Column, ColumnCategory
from ..validation import (
    get_json_body,
    is_missing,
    optional,
    parse_bool,
    parse_number,
    parse_string,
    required,
)

columns_bp = Blueprint("columns", __name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _category_or_400(category_id) -> ColumnCategory:
    category = db.session.get(ColumnCategory, category_id)
    if not category:
        raise ValidationError("Category does not exist")
    return category


def _authored_column(column_id: int, admin_id: int, action: str) -> Column:
    column = db.session.get(Column, column_id)
    if not column:
        raise NotFoundError("Column not found")
    if column.admin_id != admin_id:
        raise ForbiddenError(f"You do not have permission to {action} this column")
    return column


def _published_query():
    return Column.query.filter(Column.published.is_(True)).order_by(
        Column.created_at.desc(), Column.id.desc()
    )


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

@columns_bp.route("/categories", methods=["GET"])
def list_categories():
    rows = ColumnCategory.query.order_by(
        ColumnCategory.display_order.asc(), ColumnCategory.id.asc()
    ).all()
    return jsonify({"categories": [c.to_dict() for c in rows]}), 200


@columns_bp.route("", methods=["GET"])
def list_columns():
    rows = _published_query().all()
    return jsonify({"columns": [c.to_dict() for c in rows]}), 200


@columns_bp.route("/category/<int:category_id>", methods=["GET"])
def columns_by_category(category_id: int):
    category = db.session.get(ColumnCategory, category_id)
    if not category:
        raise NotFoundError("Category not found")

    rows = _published_query().filter(Column.category_id == category_id).all()
    return jsonify({"category": category.to_dict(), "columns": [c.to_dict() for c in rows]}), 200


@columns_bp.route("/<int:column_id>", methods=["GET"])
def column_details(column_id: int):
    """
    Published column by id. Every fetch counts as a view.
    """
    column = db.session.get(Column, column_id)
    if not column or not column.published:
        raise NotFoundError("Column not found")

    # single UPDATE so concurrent readers never lose an increment
    Column.query.filter(Column.id == column_id).update(
        {Column.view_count: Column.view_count + 1}, synchronize_session=False
    )
    db.session.commit()
    db.session.refresh(column)

    return jsonify({"column": column.to_dict()}), 200


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------

@columns_bp.route("/admin/my-columns", methods=["GET"])
@admin_required
def my_columns(current_user):
    rows = (
        Column.query.filter_by(admin_id=current_user.id)
        .order_by(Column.created_at.desc(), Column.id.desc())
        .all()
    )
    return jsonify({"columns": [c.to_dict(include_author=False) for c in rows]}), 200


@columns_bp.route("", methods=["POST"])
@admin_required
def create_column(current_user):
    data = get_json_body()

    title = required(data, "title", parse_string, 200)
    content = required(data, "content", parse_string)
    category = _category_or_400(
        required(data, "category_id", parse_number, 1, None, True)
    )
    image_url = optional(data, "image_url", parse_string, 255)
    published = optional(data, "published", parse_bool)

    column = Column(
        admin_id=current_user.id,
        category_id=category.id,
        title=title,
        content=content,
        image_url=None if is_missing(image_url) else image_url,
        published=False if is_missing(published) else published,
        view_count=0,
    )
    db.session.add(column)
    db.session.commit()

    current_app.logger.info(f"[columns] admin_id={current_user.id} created column_id={column.id}")
    return jsonify({"column": column.to_dict()}), 201


@columns_bp.route("/<int:column_id>", methods=["PUT"])
@admin_required
def update_column(column_id: int, current_user):
    column = _authored_column(column_id, current_user.id, "update")
    data = get_json_body()

    title = optional(data, "title", parse_string, 200)
    if not is_missing(title):
        column.title = title
    content = optional(data, "content", parse_string)
    if not is_missing(content):
        column.content = content
    category_id = optional(data, "category_id", parse_number, 1, None, True)
    if not is_missing(category_id):
        column.category_id = _category_or_400(category_id).id
    image_url = optional(data, "image_url", parse_string, 255)
    if not is_missing(image_url):
        column.image_url = image_url
    published = optional(data, "published", parse_bool)
    if not is_missing(published):
        column.published = published

    db.session.commit()
    return jsonify({"column": column.to_dict()}), 200


@columns_bp.route("/<int:column_id>", methods=["DELETE"])
@admin_required
def delete_column(column_id: int, current_user):
    column = _authored_column(column_id, current_user.id, "delete")
    db.session.delete(column)
    db.session.commit()

    current_app.logger.info(f"[columns] admin_id={current_user.id} deleted column_id={column_id}")
    return "", 204
