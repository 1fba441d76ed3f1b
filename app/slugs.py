"""Unique slug assignment shared by courses and events.

The unique constraint on the slug column is the source of truth: each
candidate (``base``, ``base-2``, ``base-3``, ...) is claimed by inserting
the row, and a rejected insert moves on to the next suffix. There is no
existence pre-check, so two requests creating the same title cannot both
end up with the same slug.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable, Iterator
from typing import Any, TypeVar

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import SlugExhaustedError, SlugTakenError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_SLUG_ATTEMPTS = 100


def slugify(title: str) -> str:
    slug = title.lower().strip()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^\w-]", "", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def candidate_slugs(base_slug: str, limit: int = MAX_SLUG_ATTEMPTS) -> Iterator[str]:
    yield base_slug
    for counter in range(2, limit + 1):
        yield f"{base_slug}-{counter}"


async def assign_unique_slug(
    title: str,
    claim: Callable[[str], Awaitable[T]],
    *,
    fallback: str = "item",
    max_attempts: int = MAX_SLUG_ATTEMPTS,
) -> T:
    """Claim the first free slug derived from ``title`` and return what ``claim`` built.

    ``claim`` must raise ``SlugTakenError`` when the slug is already used;
    any other exception propagates unchanged.
    """
    base_slug = slugify(title) or fallback
    for slug in candidate_slugs(base_slug, max_attempts):
        try:
            return await claim(slug)
        except SlugTakenError:
            logger.debug("Slug %r taken, trying next suffix", slug)
    raise SlugExhaustedError(base_slug)


def sqlalchemy_slug_claim(
    db: AsyncSession,
    model: Any,
    build: Callable[[str], T],
) -> Callable[[str], Awaitable[T]]:
    """Claim that inserts ``build(slug)`` inside a savepoint.

    An ``IntegrityError`` counts as "taken" only when a row with that slug
    exists; any other constraint failure is re-raised.
    """

    async def claim(slug: str) -> T:
        entity = build(slug)
        try:
            async with db.begin_nested():
                db.add(entity)
                await db.flush()
        except IntegrityError:
            taken = await db.scalar(select(exists().where(model.slug == slug)))
            if taken:
                raise SlugTakenError(slug)
            raise
        return entity

    return claim
