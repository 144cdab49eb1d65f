# tests/test_diary.py
from tests.conftest import bearer, register

DAY = "2025-10-31"


def _create(client, headers, **overrides):
    payload = {"title": "Good day", "content": "Walked to work", "date": DAY}
    payload.update(overrides)
    return client.post("/api/diary/entries", json=payload, headers=headers)


def test_create_entry(client, auth_headers):
    resp = _create(client, auth_headers, mood="Happy", time="21:30")
    assert resp.status_code == 201
    entry = resp.get_json()["entry"]
    assert entry["mood"] == "happy"
    assert entry["time"] == "21:30"
    assert entry["date"] == DAY


def test_free_text_mood_is_kept(client, auth_headers):
    entry = _create(client, auth_headers, mood="Tired ").get_json()["entry"]
    assert entry["mood"] == "Tired"


def test_title_and_content_required(client, auth_headers):
    resp = _create(client, auth_headers, title="")
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "title is required"
    assert _create(client, auth_headers, content=None).status_code == 400
    assert _create(client, auth_headers, date="31-10-2025").status_code == 400


def test_list_and_by_date(client, auth_headers):
    _create(client, auth_headers, time="09:00")
    _create(client, auth_headers, time="07:00")
    _create(client, auth_headers, date="2025-11-01")

    entries = client.get("/api/diary/entries", headers=auth_headers).get_json()["entries"]
    assert [e["date"] for e in entries] == ["2025-11-01", DAY, DAY]

    body = client.get(f"/api/diary/entries/date/{DAY}", headers=auth_headers).get_json()
    assert [e["time"] for e in body["entries"]] == ["07:00", "09:00"]

    take = client.get("/api/diary/entries?take=500", headers=auth_headers).get_json()["entries"]
    assert len(take) == 3


def test_update_keeps_unsent_fields(client, auth_headers):
    entry = _create(client, auth_headers, mood="sad").get_json()["entry"]
    resp = client.put(
        f"/api/diary/entries/{entry['id']}", json={"title": "Better day"}, headers=auth_headers
    )
    assert resp.status_code == 200
    updated = resp.get_json()["entry"]
    assert updated["title"] == "Better day"
    assert updated["content"] == "Walked to work"
    assert updated["mood"] == "sad"


def test_entries_are_private(client, auth_headers):
    entry = _create(client, auth_headers).get_json()["entry"]
    other = bearer(register(client, email="carol@example.com", username="carol")["accessToken"])

    resp = client.get(f"/api/diary/entries/{entry['id']}", headers=other)
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Diary entry not found"
    assert client.put(f"/api/diary/entries/{entry['id']}", json={"title": "x"}, headers=other).status_code == 404


def test_goal_endpoint_creates_once(client, auth_headers):
    first = client.get(f"/api/diary/goals/date/{DAY}", headers=auth_headers).get_json()["goal"]
    second = client.get(f"/api/diary/goals/date/{DAY}", headers=auth_headers).get_json()["goal"]
    assert first["id"] == second["id"]
    assert first["target_meals"] == 3
    assert first["date"] == DAY


def test_goal_endpoint_rejects_bad_date(client, auth_headers):
    resp = client.get("/api/diary/goals/date/2025-02-30", headers=auth_headers)
    assert resp.status_code == 400
    resp = client.get("/api/diary/achievement/date/today", headers=auth_headers)
    assert resp.status_code == 400


def test_stats_rejects_negative_days(client, auth_headers):
    resp = client.get("/api/diary/achievement/stats?days=-1", headers=auth_headers)
    assert resp.status_code == 400
