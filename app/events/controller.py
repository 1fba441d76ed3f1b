"""Event controller: wraps service results in the ``{status, message, data}`` envelope."""

from __future__ import annotations

import logging
import math

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.events import service
from app.events.schemas import CreateEventRequest, EventPage, EventResponse, UpdateEventRequest
from app.exceptions import EventNotFoundError, SlugExhaustedError
from shared.models import ApiResponse, PaginationParams

logger = logging.getLogger(__name__)


def _handle_domain_error(exc: Exception) -> HTTPException:
    if isinstance(exc, EventNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found.")
    if isinstance(exc, SlugExhaustedError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    logger.exception("Unexpected event failure")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An internal server error occurred.",
    )


async def create_event(db: AsyncSession, body: CreateEventRequest) -> ApiResponse[EventResponse]:
    try:
        event = await service.create_event(db, **body.model_dump())
        return ApiResponse(
            message="Event created successfully.",
            data=EventResponse.model_validate(event),
        )
    except Exception as exc:
        raise _handle_domain_error(exc) from exc


async def list_events(db: AsyncSession, params: PaginationParams) -> ApiResponse[EventPage]:
    try:
        events, total = await service.list_events(
            db, limit=params.limit(), offset=params.offset(),
        )
    except Exception as exc:
        raise _handle_domain_error(exc) from exc
    page = EventPage(
        items=[EventResponse.model_validate(e) for e in events],
        total=total,
        page=params.page,
        page_size=params.page_size,
        total_pages=math.ceil(total / params.page_size) if total else 0,
    )
    return ApiResponse(message="Events retrieved successfully.", data=page)


async def get_event(db: AsyncSession, event_id: int) -> ApiResponse[EventResponse]:
    try:
        event = await service.get_event_by_id(db, event_id)
        return ApiResponse(
            message="Event retrieved successfully.",
            data=EventResponse.model_validate(event),
        )
    except Exception as exc:
        raise _handle_domain_error(exc) from exc


async def get_event_by_slug(db: AsyncSession, slug: str) -> ApiResponse[EventResponse]:
    try:
        event = await service.get_event_by_slug(db, slug)
        return ApiResponse(
            message="Event retrieved successfully.",
            data=EventResponse.model_validate(event),
        )
    except Exception as exc:
        raise _handle_domain_error(exc) from exc


async def update_event(
    db: AsyncSession, event_id: int, body: UpdateEventRequest,
) -> ApiResponse[EventResponse]:
    try:
        event = await service.update_event(db, event_id, **body.model_dump(exclude_unset=True))
        return ApiResponse(
            message="Event updated successfully.",
            data=EventResponse.model_validate(event),
        )
    except Exception as exc:
        raise _handle_domain_error(exc) from exc


async def delete_event(db: AsyncSession, event_id: int) -> ApiResponse[None]:
    try:
        await service.delete_event(db, event_id)
    except Exception as exc:
        raise _handle_domain_error(exc) from exc
    return ApiResponse(message="Event deleted successfully.")
