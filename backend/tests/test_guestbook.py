"""Test guestbook endpoints."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

from bson import ObjectId


def test_sign_guestbook(client, fake_db):
    response = client.post("/api/guestbook", json={"name": "Ana", "message": "Congrats!"})

    assert response.status_code == 201
    data = response.json()
    assert ObjectId.is_valid(data["_id"])
    assert data["name"] == "Ana"
    assert data["message"] == "Congrats!"
    assert "createdAt" in data
    assert len(fake_db["guestbook"].docs) == 1


def test_empty_name_or_message_rejected(client, fake_db):
    for body in (
        {"name": "", "message": "hi"},
        {"name": "Ana", "message": ""},
        {"name": "Ana"},
        {"message": "hi"},
        {},
    ):
        response = client.post("/api/guestbook", json=body)

        assert response.status_code == 400, body
        assert response.json() == {"error": "name and message are required"}

    assert fake_db["guestbook"].docs == []


def test_list_newest_first(client, fake_db):
    base = datetime(2024, 2, 14, tzinfo=timezone.utc)
    for i, name in enumerate(["first", "second", "third"]):
        fake_db["guestbook"].docs.append({
            "_id": ObjectId(),
            "name": name,
            "message": "hello",
            "createdAt": base + timedelta(minutes=i),
        })

    response = client.get("/api/guestbook")

    assert response.status_code == 200
    assert [e["name"] for e in response.json()] == ["third", "second", "first"]


def test_list_empty(client):
    response = client.get("/api/guestbook")

    assert response.status_code == 200
    assert response.json() == []


def test_store_failure_uses_fallback_message(client):
    with patch("sweet_memories.routes.guestbook.insert_guestbook_entry", new_callable=AsyncMock) as mock_insert:
        mock_insert.side_effect = RuntimeError("")
        response = client.post("/api/guestbook", json={"name": "Ana", "message": "hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to add guestbook entry"}


def test_empty_entry_rejected_without_database(unconnected_client):
    response = unconnected_client.post("/api/guestbook", json={"name": ""})

    assert response.status_code == 400
    assert response.json() == {"error": "name and message are required"}
