# tests/test_body_records.py
from datetime import date, timedelta

from tests.conftest import bearer, register


def _create(client, headers, **overrides):
    payload = {"weight": 70.5, "body_fat_percentage": 20.0, "date": "2025-10-01"}
    payload.update(overrides)
    return client.post("/api/body-records", json=payload, headers=headers)


def test_create_and_get(client, auth_headers):
    resp = _create(client, auth_headers, notes="morning")
    assert resp.status_code == 201
    record = resp.get_json()["record"]
    assert record["weight"] == 70.5
    assert record["date"] == "2025-10-01"
    assert record["notes"] == "morning"

    resp = client.get(f"/api/body-records/{record['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["record"]["id"] == record["id"]


def test_validation(client, auth_headers):
    assert _create(client, auth_headers, weight=29).status_code == 400
    assert _create(client, auth_headers, weight=201).status_code == 400
    assert _create(client, auth_headers, weight="70").status_code == 400
    assert _create(client, auth_headers, body_fat_percentage=101).status_code == 400
    assert _create(client, auth_headers, date="2025/10/01").status_code == 400
    assert _create(client, auth_headers, date=None).status_code == 400
    assert _create(client, auth_headers, weight=None).status_code == 400


def test_list_is_newest_first_and_paginated(client, auth_headers):
    for day in ("2025-10-01", "2025-10-03", "2025-10-02"):
        assert _create(client, auth_headers, date=day).status_code == 201

    records = client.get("/api/body-records", headers=auth_headers).get_json()["records"]
    assert [r["date"] for r in records] == ["2025-10-03", "2025-10-02", "2025-10-01"]

    page = client.get("/api/body-records?skip=1&take=1", headers=auth_headers).get_json()["records"]
    assert [r["date"] for r in page] == ["2025-10-02"]


def test_latest_and_stats(client, auth_headers):
    assert client.get("/api/body-records/latest", headers=auth_headers).get_json() == {"record": None}
    assert client.get("/api/body-records/stats", headers=auth_headers).get_json() == {"stats": None}

    _create(client, auth_headers, weight=72.0, body_fat_percentage=22.0, date="2025-10-01")
    _create(client, auth_headers, weight=70.0, body_fat_percentage=20.5, date="2025-10-10")

    latest = client.get("/api/body-records/latest", headers=auth_headers).get_json()["record"]
    assert latest["date"] == "2025-10-10"

    stats = client.get("/api/body-records/stats", headers=auth_headers).get_json()["stats"]
    assert stats["current"]["weight"] == 70.0
    assert stats["change"]["weight"] == -2.0
    assert stats["change"]["body_fat_percentage"] == -1.5
    assert stats["records"] == 2


def test_trend_window(client, auth_headers):
    today = date.today()
    _create(client, auth_headers, date=(today - timedelta(days=200)).isoformat())
    _create(client, auth_headers, weight=71.0, date=(today - timedelta(days=5)).isoformat())
    _create(client, auth_headers, weight=70.0, date=today.isoformat())

    body = client.get("/api/body-records/trend", headers=auth_headers).get_json()
    assert body["days"] == 180
    assert [p["weight"] for p in body["trend"]] == [71.0, 70.0]

    body = client.get("/api/body-records/trend?days=1", headers=auth_headers).get_json()
    assert len(body["trend"]) == 1

    resp = client.get("/api/body-records/trend?days=abc", headers=auth_headers)
    assert resp.status_code == 400


def test_update_and_delete(client, auth_headers):
    record_id = _create(client, auth_headers).get_json()["record"]["id"]

    resp = client.put(f"/api/body-records/{record_id}", json={"weight": 68.0}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["record"]["weight"] == 68.0
    assert resp.get_json()["record"]["body_fat_percentage"] == 20.0

    resp = client.delete(f"/api/body-records/{record_id}", headers=auth_headers)
    assert resp.status_code == 204
    resp = client.get(f"/api/body-records/{record_id}", headers=auth_headers)
    assert resp.status_code == 404


def test_other_users_records_are_not_found(client, auth_headers):
    record_id = _create(client, auth_headers).get_json()["record"]["id"]
    other = bearer(register(client, email="carol@example.com", username="carol")["accessToken"])

    assert client.get(f"/api/body-records/{record_id}", headers=other).status_code == 404
    assert client.put(f"/api/body-records/{record_id}", json={"weight": 60}, headers=other).status_code == 404
    assert client.delete(f"/api/body-records/{record_id}", headers=other).status_code == 404
    assert client.get("/api/body-records", headers=other).get_json()["records"] == []


def test_requires_auth(client):
    assert client.get("/api/body-records").status_code == 401


def test_trend_rejects_oversized_window(client, auth_headers):
    resp = client.get("/api/body-records/trend?days=1000000", headers=auth_headers)
    assert resp.status_code == 400
