from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from app.certificates.repository import SqlAlchemyCertificateRepository
from app.certificates import service as certificate_service
from app.events import service
from app.exceptions import EventNotFoundError

WHEN = datetime(2025, 8, 17, 9, 0, tzinfo=timezone.utc)


async def _create(db, title: str = "Open House", **overrides):
    fields = {"date": WHEN, "location": "Bandung", "participants": 50, "thumbnail": "t.png"}
    fields.update(overrides)
    return await service.create_event(db, title=title, **fields)


@pytest.mark.asyncio
async def test_identical_titles(db_session) -> None:
    slugs = [(await _create(db_session)).slug for _ in range(3)]
    assert slugs == ["open-house", "open-house-2", "open-house-3"]


@pytest.mark.asyncio
async def test_title_without_word_characters(db_session) -> None:
    event = await _create(db_session, title="!!!")
    assert event.slug == "event"


@pytest.mark.asyncio
async def test_other_integrity_errors_are_not_slug_conflicts(db_session) -> None:
    with pytest.raises(IntegrityError):
        await _create(db_session, title="Broken", location=None)


@pytest.mark.asyncio
async def test_get_by_slug_and_pagination(db_session) -> None:
    for n in range(3):
        await _create(db_session, title=f"Meetup {n}", date=WHEN.replace(day=n + 1))

    page, total = await service.list_events(db_session, limit=2, offset=0)
    assert total == 3
    assert [e.title for e in page] == ["Meetup 2", "Meetup 1"]
    assert (await service.get_event_by_slug(db_session, "meetup-0")).title == "Meetup 0"
    with pytest.raises(EventNotFoundError):
        await service.get_event_by_slug(db_session, "nope")


@pytest.mark.asyncio
async def test_delete_keeps_certificates(db_session, settings) -> None:
    event = await _create(db_session)
    repo = SqlAlchemyCertificateRepository(db_session)
    cert = await certificate_service.issue_certificate(
        repo, name="Jane", event_id=event.id, settings=settings,
    )

    await service.delete_event(db_session, event.id)
    await db_session.refresh(cert)

    assert cert.event_id is None
    with pytest.raises(EventNotFoundError):
        await service.get_event_by_id(db_session, event.id)
