"""Certificate request/response schemas.

Wire names follow the original public API: ``certificate_code``,
``issued_at`` and ``revoked`` are snake_case while ``eventId``,
``createdAt`` and ``updatedAt`` are camelCase.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateCertificateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Display name of the certificate holder.")
    event_id: int = Field(..., alias="eventId", description="Event the certificate belongs to.")


class BatchCertificateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    names: list[str] = Field(..., description="One certificate is issued per name.")
    event_id: int = Field(..., alias="eventId")


class UpdateCertificateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str | None = None
    event_id: int | None = Field(default=None, alias="eventId")
    revoked: bool | None = None


class CertificateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    certificate_code: str
    hash: str
    event_id: int | None = Field(default=None, serialization_alias="eventId")
    issued_at: datetime
    revoked: bool
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class EventSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    description: str | None = None
    date: datetime
    location: str


class CertificateWithEventResponse(CertificateResponse):
    event: EventSummary | None = None


class CertificateVerifyResponse(BaseModel):
    valid: bool
    certificate: CertificateWithEventResponse
