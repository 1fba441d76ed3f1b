"""Event request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from shared.models import PaginatedResponse


class CreateEventRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=300)
    description: str | None = None
    date: datetime
    location: str = Field(min_length=1, max_length=300)
    participants: int = Field(ge=0)
    thumbnail: str = Field(min_length=1, max_length=500, description="Stored path of the thumbnail.")
    image: str | None = Field(default=None, max_length=500)


class UpdateEventRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = None
    date: datetime | None = None
    location: str | None = Field(default=None, min_length=1, max_length=300)
    participants: int | None = Field(default=None, ge=0)
    thumbnail: str | None = Field(default=None, max_length=500)
    image: str | None = Field(default=None, max_length=500)


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    description: str | None
    date: datetime
    location: str
    participants: int
    thumbnail: str | None
    image: str | None
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


EventPage = PaginatedResponse[EventResponse]
