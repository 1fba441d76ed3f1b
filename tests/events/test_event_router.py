from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.events import service
from app.exceptions import EventNotFoundError
from app.models import Event

WHEN = datetime(2025, 5, 20, 10, 0, tzinfo=timezone.utc)


def _event(event_id: int = 1, title: str = "Spring Summit", slug: str = "spring-summit") -> Event:
    return Event(
        id=event_id,
        title=title,
        slug=slug,
        description=None,
        date=WHEN,
        location="Jakarta",
        participants=120,
        thumbnail="uploads/events/summit.png",
        image=None,
        created_at=WHEN,
        updated_at=WHEN,
    )


@pytest.fixture
def stored(monkeypatch: pytest.MonkeyPatch) -> dict[int, Event]:
    """Replace the event service with a dict-backed one."""
    events: dict[int, Event] = {}

    async def create_event(db, **fields):
        slugs = {e.slug for e in events.values()}
        base = fields["title"].lower().replace(" ", "-")
        slug, n = base, 1
        while slug in slugs:
            n += 1
            slug = f"{base}-{n}"
        event = _event(len(events) + 1, fields["title"], slug)
        events[event.id] = event
        return event

    async def get_event_by_id(db, event_id):
        if event_id not in events:
            raise EventNotFoundError(str(event_id))
        return events[event_id]

    async def get_event_by_slug(db, slug):
        for event in events.values():
            if event.slug == slug:
                return event
        raise EventNotFoundError(slug)

    async def list_events(db, *, limit, offset):
        items = list(events.values())
        return items[offset:offset + limit], len(items)

    async def delete_event(db, event_id):
        await get_event_by_id(db, event_id)
        del events[event_id]

    monkeypatch.setattr(service, "create_event", create_event)
    monkeypatch.setattr(service, "get_event_by_id", get_event_by_id)
    monkeypatch.setattr(service, "get_event_by_slug", get_event_by_slug)
    monkeypatch.setattr(service, "list_events", list_events)
    monkeypatch.setattr(service, "delete_event", delete_event)
    return events


PAYLOAD = {
    "title": "Spring Summit",
    "date": WHEN.isoformat(),
    "location": "Jakarta",
    "participants": 120,
    "thumbnail": "uploads/events/summit.png",
}


def test_admin_creates_event(client: TestClient, admin_headers, stored) -> None:
    response = client.post("/api/events", json=PAYLOAD, headers=admin_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["message"] == "Event created successfully."
    assert body["data"]["slug"] == "spring-summit"


def test_same_title_gets_suffixed_slug(client: TestClient, admin_headers, stored) -> None:
    client.post("/api/events", json=PAYLOAD, headers=admin_headers)
    second = client.post("/api/events", json=PAYLOAD, headers=admin_headers)
    assert second.json()["data"]["slug"] == "spring-summit-2"


def test_user_cannot_create_event(client: TestClient, user_headers, stored) -> None:
    response = client.post("/api/events", json=PAYLOAD, headers=user_headers)
    assert response.status_code == 403
    assert stored == {}


def test_create_requires_thumbnail(client: TestClient, admin_headers, stored) -> None:
    payload = {k: v for k, v in PAYLOAD.items() if k != "thumbnail"}
    response = client.post("/api/events", json=payload, headers=admin_headers)
    assert response.status_code == 422


def test_list_is_paginated(client: TestClient, api_key_headers, stored) -> None:
    for n in range(3):
        stored[n + 1] = _event(n + 1, f"Event {n}", f"event-{n}")

    response = client.get("/api/events", params={"page": 2, "page_size": 2}, headers=api_key_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 3
    assert data["total_pages"] == 2
    assert [e["slug"] for e in data["items"]] == ["event-2"]


def test_get_by_id_and_slug(client: TestClient, api_key_headers, stored) -> None:
    stored[1] = _event()

    by_id = client.get("/api/events/1", headers=api_key_headers)
    by_slug = client.get("/api/events/slug/spring-summit", headers=api_key_headers)

    assert by_id.status_code == by_slug.status_code == 200
    assert by_id.json()["data"] == by_slug.json()["data"]
    assert by_id.json()["data"]["createdAt"]


def test_get_missing(client: TestClient, api_key_headers, stored) -> None:
    response = client.get("/api/events/9", headers=api_key_headers)
    assert response.status_code == 404
    assert response.json()["status"] == "fail"
    assert response.json()["message"] == "Event not found."


def test_delete_event(client: TestClient, admin_headers, stored) -> None:
    stored[1] = _event()

    response = client.delete("/api/events/1", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Event deleted successfully."
    assert stored == {}
