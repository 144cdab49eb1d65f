# healthtrack/models/column.py
from datetime import datetime
from .. import db


class ColumnCategory(db.Model):
    __tablename__ = "column_categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    description = db.Column(db.String(255))
    display_order = db.Column(db.Integer, nullable=False, default=0)

    columns = db.relationship("Column", back_populates="category")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "display_order": self.display_order,
        }


class Column(db.Model):
    __tablename__ = "columns"

    id = db.Column(db.Integer, primary_key=True)
    admin_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    category_id = db.Column(
        db.Integer, db.ForeignKey("column_categories.id"), nullable=False
    )
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.String(255))
    published = db.Column(db.Boolean, nullable=False, default=False)
    view_count = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    category = db.relationship("ColumnCategory", back_populates="columns")
    admin = db.relationship("User", backref="columns")

    def to_dict(self, include_author: bool = True):
        data = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "image_url": self.image_url,
            "published": self.published,
            "view_count": self.view_count,
            "category_id": self.category_id,
            "category": self.category.to_dict() if self.category else None,
            "admin_id": self.admin_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_author:
            data["admin"] = self.admin.to_author_dict() if self.admin else None
        return data
