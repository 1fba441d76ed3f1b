"""Course router: public reads, authenticated writes restricted to the author or an admin."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.courses import controller
from app.courses.schemas import CoursePage, CourseResponse, CreateCourseRequest, UpdateCourseRequest
from app.database import get_db
from app.dependencies import get_pagination
from shared.auth import get_current_user
from shared.models import ApiResponse, CurrentUser, PaginationParams

router = APIRouter(prefix="/courses", tags=["Courses"])


@router.post(
    "",
    response_model=ApiResponse[CourseResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create course",
    description="Any authenticated user. The caller becomes the course author.",
)
async def create_course(
    body: CreateCourseRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[CourseResponse]:
    return await controller.create_course(db, user, body)


@router.get(
    "",
    response_model=ApiResponse[CoursePage],
    summary="List courses",
)
async def list_courses(
    params: PaginationParams = Depends(get_pagination),
    author_id: int | None = Query(None, alias="authorId", description="Only courses by this author"),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[CoursePage]:
    return await controller.list_courses(db, params, author_id)


@router.get(
    "/slug/{slug}",
    response_model=ApiResponse[CourseResponse],
    summary="Get course by slug",
)
async def get_course_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[CourseResponse]:
    return await controller.get_course_by_slug(db, slug)


@router.get(
    "/{course_id}",
    response_model=ApiResponse[CourseResponse],
    summary="Get course by ID",
)
async def get_course(
    course_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[CourseResponse]:
    return await controller.get_course(db, course_id)


@router.put(
    "/{course_id}",
    response_model=ApiResponse[CourseResponse],
    summary="Update course",
    description="Author or admin only. The slug does not change.",
)
async def update_course(
    course_id: int,
    body: UpdateCourseRequest,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[CourseResponse]:
    return await controller.update_course(db, course_id, user, body)


@router.delete(
    "/{course_id}",
    response_model=ApiResponse[None],
    summary="Delete course",
    description="Author or admin only.",
)
async def delete_course(
    course_id: int,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> ApiResponse[None]:
    return await controller.delete_course(db, course_id, user)
