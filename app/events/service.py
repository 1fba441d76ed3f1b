"""Event service: CRUD with unique slug assignment. No FastAPI imports."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import EventNotFoundError
from app.models.event import Event
from app.slugs import assign_unique_slug, sqlalchemy_slug_claim

logger = logging.getLogger(__name__)


async def create_event(
    db: AsyncSession,
    *,
    title: str,
    date: datetime,
    location: str,
    participants: int,
    description: str | None = None,
    thumbnail: str | None = None,
    image: str | None = None,
) -> Event:
    def build(slug: str) -> Event:
        return Event(
            title=title,
            slug=slug,
            description=description,
            date=date,
            location=location,
            participants=participants,
            thumbnail=thumbnail,
            image=image,
        )

    event = await assign_unique_slug(
        title, sqlalchemy_slug_claim(db, Event, build), fallback="event",
    )
    await db.refresh(event)
    logger.info("Created event %s (slug=%s)", event.id, event.slug)
    return event


async def get_event_by_id(db: AsyncSession, event_id: int) -> Event:
    event = await db.get(Event, event_id)
    if event is None:
        raise EventNotFoundError(str(event_id))
    return event


async def get_event_by_slug(db: AsyncSession, slug: str) -> Event:
    result = await db.execute(select(Event).where(Event.slug == slug))
    event = result.scalar_one_or_none()
    if event is None:
        raise EventNotFoundError(slug)
    return event


async def list_events(
    db: AsyncSession,
    *,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[Event], int]:
    total = await db.scalar(select(func.count()).select_from(Event)) or 0
    stmt = select(Event).order_by(Event.date.desc(), Event.id.desc()).limit(limit).offset(offset)
    result = await db.execute(stmt)
    return list(result.scalars().all()), total


async def update_event(db: AsyncSession, event_id: int, **fields: object) -> Event:
    # The slug stays fixed after creation so published links keep working.
    event = await get_event_by_id(db, event_id)
    for key, value in fields.items():
        if value is not None:
            setattr(event, key, value)
    await db.flush()
    await db.refresh(event)
    return event


async def delete_event(db: AsyncSession, event_id: int) -> None:
    event = await get_event_by_id(db, event_id)
    await db.delete(event)
    await db.flush()
    logger.info("Deleted event %s", event_id)
