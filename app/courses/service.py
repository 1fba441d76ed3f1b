"""Course service: CRUD with unique slugs and author-or-admin ownership."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import CourseNotFoundError, NotResourceOwnerError
from app.models.course import Course
from app.slugs import assign_unique_slug, sqlalchemy_slug_claim
from shared.models import CurrentUser

logger = logging.getLogger(__name__)


def _ensure_can_modify(course: Course, user: CurrentUser) -> None:
    if course.author_id != user.id and not user.is_admin:
        raise NotResourceOwnerError()


async def create_course(
    db: AsyncSession,
    author_id: int,
    *,
    title: str,
    uploader: str,
    description: str | None = None,
    file_path: str | None = None,
    thumbnail: str | None = None,
) -> Course:
    def build(slug: str) -> Course:
        return Course(
            title=title,
            slug=slug,
            uploader=uploader,
            description=description,
            author_id=author_id,
            file_path=file_path,
            thumbnail=thumbnail,
        )

    course = await assign_unique_slug(
        title, sqlalchemy_slug_claim(db, Course, build), fallback="course",
    )
    await db.refresh(course)
    logger.info("Created course %s (slug=%s) by author=%s", course.id, course.slug, author_id)
    return course


async def get_course_by_id(db: AsyncSession, course_id: int) -> Course:
    course = await db.get(Course, course_id)
    if course is None:
        raise CourseNotFoundError(str(course_id))
    return course


async def get_course_by_slug(db: AsyncSession, slug: str) -> Course:
    stmt = select(Course).where(Course.slug == slug)
    result = await db.execute(stmt)
    course = result.scalar_one_or_none()
    if course is None:
        raise CourseNotFoundError(slug)
    return course


async def list_courses(
    db: AsyncSession,
    *,
    author_id: int | None = None,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[Course], int]:
    base = select(Course)
    count_base = select(func.count()).select_from(Course)
    if author_id is not None:
        base = base.where(Course.author_id == author_id)
        count_base = count_base.where(Course.author_id == author_id)

    total = await db.scalar(count_base) or 0
    stmt = base.order_by(Course.created_at.desc(), Course.id.desc()).limit(limit).offset(offset)
    result = await db.execute(stmt)
    return list(result.scalars().all()), total


async def update_course(
    db: AsyncSession,
    course_id: int,
    user: CurrentUser,
    **fields: object,
) -> Course:
    course = await get_course_by_id(db, course_id)
    _ensure_can_modify(course, user)
    for key, value in fields.items():
        if value is not None:
            setattr(course, key, value)
    await db.flush()
    await db.refresh(course)
    return course


async def delete_course(db: AsyncSession, course_id: int, user: CurrentUser) -> None:
    course = await get_course_by_id(db, course_id)
    _ensure_can_modify(course, user)
    await db.delete(course)
    await db.flush()
    logger.info("Deleted course %s (by user=%s)", course_id, user.id)
