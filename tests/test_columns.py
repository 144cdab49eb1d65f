# tests/test_columns.py
import pytest

from healthtrack import db
from healthtrack.models.column import ColumnCategory
from tests.conftest import make_admin


@pytest.fixture
def category_id(app):
    with app.app_context():
        diet = ColumnCategory(name="Diet", description="Nutrition", display_order=2)
        health = ColumnCategory(name="Health", display_order=1)
        db.session.add_all([diet, health])
        db.session.commit()
        return diet.id


def _create(client, headers, category_id, **overrides):
    payload = {"title": "Eat more greens", "content": "...", "category_id": category_id}
    payload.update(overrides)
    return client.post("/api/columns", json=payload, headers=headers)


def test_categories_in_display_order(client, category_id):
    names = [c["name"] for c in client.get("/api/columns/categories").get_json()["categories"]]
    assert names == ["Health", "Diet"]


def test_only_admins_can_write(client, auth_headers, category_id):
    resp = _create(client, auth_headers, category_id)
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "admin role required"
    assert client.post("/api/columns", json={}).status_code == 401


def test_create_defaults_to_unpublished(client, admin_headers, category_id):
    resp = _create(client, admin_headers, category_id)
    assert resp.status_code == 201
    column = resp.get_json()["column"]
    assert column["published"] is False
    assert column["view_count"] == 0
    assert column["admin"]["username"] == "admin"

    assert client.get("/api/columns").get_json()["columns"] == []
    assert client.get(f"/api/columns/{column['id']}").status_code == 404

    mine = client.get("/api/columns/admin/my-columns", headers=admin_headers).get_json()["columns"]
    assert [c["id"] for c in mine] == [column["id"]]


def test_create_with_unknown_category(client, admin_headers, category_id):
    resp = _create(client, admin_headers, 999)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Category does not exist"


def test_view_count_increments(client, admin_headers, category_id):
    column_id = _create(client, admin_headers, category_id, published=True).get_json()["column"]["id"]

    counts = [
        client.get(f"/api/columns/{column_id}").get_json()["column"]["view_count"]
        for _ in range(3)
    ]
    assert counts == [1, 2, 3]


def test_published_listing_by_category(client, admin_headers, category_id):
    _create(client, admin_headers, category_id, title="First", published=True)
    _create(client, admin_headers, category_id, title="Draft")

    titles = [c["title"] for c in client.get("/api/columns").get_json()["columns"]]
    assert titles == ["First"]

    body = client.get(f"/api/columns/category/{category_id}").get_json()
    assert body["category"]["name"] == "Diet"
    assert [c["title"] for c in body["columns"]] == ["First"]

    assert client.get("/api/columns/category/999").status_code == 404


def test_only_author_can_update_or_delete(app, client, admin_headers, category_id):
    column_id = _create(client, admin_headers, category_id).get_json()["column"]["id"]
    other_admin = make_admin(app, client, "editor@example.com", "editor")

    resp = client.put(f"/api/columns/{column_id}", json={"title": "Hijacked"}, headers=other_admin)
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "You do not have permission to update this column"

    resp = client.delete(f"/api/columns/{column_id}", headers=other_admin)
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "You do not have permission to delete this column"

    resp = client.put(
        f"/api/columns/{column_id}", json={"title": "Greens, revisited", "published": True}, headers=admin_headers
    )
    assert resp.status_code == 200
    assert resp.get_json()["column"]["title"] == "Greens, revisited"
    assert client.get(f"/api/columns/{column_id}").status_code == 200

    assert client.delete(f"/api/columns/{column_id}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/columns/{column_id}").status_code == 404
    assert client.delete("/api/columns/999", headers=admin_headers).status_code == 404
