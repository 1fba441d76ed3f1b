"""Event router: public reads, admin-only writes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_pagination, require_admin
from app.events import controller
from app.events.schemas import CreateEventRequest, EventPage, EventResponse, UpdateEventRequest
from shared.models import ApiResponse, PaginationParams

router = APIRouter(prefix="/events", tags=["Events"])


@router.post(
    "",
    response_model=ApiResponse[EventResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create event",
    description="Admin only. The slug is derived from the title; "
    "a taken slug gets the next free numeric suffix (-2, -3, ...).",
    dependencies=[Depends(require_admin)],
)
async def create_event(
    body: CreateEventRequest,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[EventResponse]:
    return await controller.create_event(db, body)


@router.get(
    "",
    response_model=ApiResponse[EventPage],
    summary="List events",
)
async def list_events(
    params: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[EventPage]:
    return await controller.list_events(db, params)


@router.get(
    "/slug/{slug}",
    response_model=ApiResponse[EventResponse],
    summary="Get event by slug",
)
async def get_event_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[EventResponse]:
    return await controller.get_event_by_slug(db, slug)


@router.get(
    "/{event_id}",
    response_model=ApiResponse[EventResponse],
    summary="Get event by ID",
)
async def get_event(
    event_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[EventResponse]:
    return await controller.get_event(db, event_id)


@router.put(
    "/{event_id}",
    response_model=ApiResponse[EventResponse],
    summary="Update event",
    description="Admin only. Partial update; the slug does not change.",
    dependencies=[Depends(require_admin)],
)
async def update_event(
    event_id: int,
    body: UpdateEventRequest,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[EventResponse]:
    return await controller.update_event(db, event_id, body)


@router.delete(
    "/{event_id}",
    response_model=ApiResponse[None],
    summary="Delete event",
    description="Admin only. Certificates of the event keep existing with eventId set to null.",
    dependencies=[Depends(require_admin)],
)
async def delete_event(
    event_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[None]:
    return await controller.delete_event(db, event_id)
