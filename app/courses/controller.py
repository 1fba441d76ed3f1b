"""Course controller: maps service results to HTTP responses, catches domain exceptions."""

from __future__ import annotations

import logging
import math

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.courses import service
from app.courses.schemas import CoursePage, CourseResponse, CreateCourseRequest, UpdateCourseRequest
from app.exceptions import CourseNotFoundError, NotResourceOwnerError, SlugExhaustedError
from shared.models import ApiResponse, CurrentUser, PaginationParams

logger = logging.getLogger(__name__)


def _handle_domain_error(exc: Exception) -> HTTPException:
    if isinstance(exc, CourseNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found.")
    if isinstance(exc, NotResourceOwnerError):
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: You can only modify your own courses.",
        )
    if isinstance(exc, SlugExhaustedError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    logger.exception("Unexpected course failure")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An internal server error occurred.",
    )


async def create_course(
    db: AsyncSession, user: CurrentUser, body: CreateCourseRequest,
) -> ApiResponse[CourseResponse]:
    try:
        course = await service.create_course(db, user.id, **body.model_dump())
        return ApiResponse(
            message="Course created successfully.",
            data=CourseResponse.model_validate(course),
        )
    except Exception as exc:
        raise _handle_domain_error(exc) from exc


async def list_courses(
    db: AsyncSession, params: PaginationParams, author_id: int | None,
) -> ApiResponse[CoursePage]:
    try:
        courses, total = await service.list_courses(
            db, author_id=author_id, limit=params.limit(), offset=params.offset(),
        )
    except Exception as exc:
        raise _handle_domain_error(exc) from exc
    page = CoursePage(
        items=[CourseResponse.model_validate(c) for c in courses],
        total=total,
        page=params.page,
        page_size=params.page_size,
        total_pages=math.ceil(total / params.page_size) if total else 0,
    )
    return ApiResponse(message="Courses retrieved successfully.", data=page)


async def get_course(db: AsyncSession, course_id: int) -> ApiResponse[CourseResponse]:
    try:
        course = await service.get_course_by_id(db, course_id)
        return ApiResponse(
            message="Course retrieved successfully.",
            data=CourseResponse.model_validate(course),
        )
    except Exception as exc:
        raise _handle_domain_error(exc) from exc


async def get_course_by_slug(db: AsyncSession, slug: str) -> ApiResponse[CourseResponse]:
    try:
        course = await service.get_course_by_slug(db, slug)
        return ApiResponse(
            message="Course retrieved successfully.",
            data=CourseResponse.model_validate(course),
        )
    except Exception as exc:
        raise _handle_domain_error(exc) from exc


async def update_course(
    db: AsyncSession,
    course_id: int,
    user: CurrentUser,
    body: UpdateCourseRequest,
) -> ApiResponse[CourseResponse]:
    try:
        course = await service.update_course(
            db, course_id, user, **body.model_dump(exclude_unset=True),
        )
        return ApiResponse(
            message="Course updated successfully.",
            data=CourseResponse.model_validate(course),
        )
    except Exception as exc:
        raise _handle_domain_error(exc) from exc


async def delete_course(db: AsyncSession, course_id: int, user: CurrentUser) -> ApiResponse[None]:
    try:
        await service.delete_course(db, course_id, user)
    except Exception as exc:
        raise _handle_domain_error(exc) from exc
    return ApiResponse(message="Course deleted successfully.")
