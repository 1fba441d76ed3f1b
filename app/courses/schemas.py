"""Course request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from shared.models import PaginatedResponse


class CreateCourseRequest(BaseModel):
    """The author is always the authenticated principal, never taken from the body."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    title: str = Field(min_length=1, max_length=300)
    uploader: str = Field(min_length=1, max_length=200, description="Display name of the uploader.")
    description: str | None = None
    file_path: str | None = Field(
        default=None, alias="filePath", max_length=500, description="Stored path of the course PDF.",
    )
    thumbnail: str | None = Field(default=None, max_length=500)


class UpdateCourseRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=300)
    uploader: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    thumbnail: str | None = Field(default=None, max_length=500)


class CourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    uploader: str
    description: str | None
    author_id: int = Field(serialization_alias="authorId")
    file_path: str | None = Field(serialization_alias="filePath")
    thumbnail: str | None
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


CoursePage = PaginatedResponse[CourseResponse]
