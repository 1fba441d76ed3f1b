"""Certificate router: issuance, lookup, revocation and public verification."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from app.certificates import controller
from app.certificates.dependencies import get_certificate_repository
from app.certificates.repository import CertificateRepository
from app.certificates.schemas import (
    BatchCertificateRequest,
    CertificateResponse,
    CertificateVerifyResponse,
    CreateCertificateRequest,
    UpdateCertificateRequest,
)
from app.config import Settings
from app.dependencies import get_settings, require_admin, require_reader

router = APIRouter(prefix="/certificates", tags=["Certificates"])


# Static paths are registered before "/{certificate_id}".


@router.get(
    "/verify/{hash}",
    response_model=CertificateVerifyResponse,
    summary="Verify certificate by hash",
    description="Only the API key is required. "
    "Returns 404 for an unknown hash and 400 for a revoked certificate.",
)
async def verify_certificate(
    hash: str,
    repo: CertificateRepository = Depends(get_certificate_repository),
) -> CertificateVerifyResponse:
    return await controller.verify_certificate(repo, hash)


@router.get(
    "/search",
    response_model=list[CertificateResponse],
    summary="Search certificates",
    description="Case-insensitive substring match on holder name or certificate code, "
    "newest first.",
    dependencies=[Depends(require_reader)],
)
async def search_certificates(
    query: str = Query(default="", description="Text to look for."),
    repo: CertificateRepository = Depends(get_certificate_repository),
) -> list[CertificateResponse]:
    return await controller.search_certificates(repo, query)


@router.post(
    "/batch",
    response_model=list[CertificateResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Issue certificates in batch",
    description="Issues one certificate per name for the same event. "
    "All-or-nothing: a single failure rolls back the whole batch.",
    dependencies=[Depends(require_admin)],
)
async def create_batch(
    body: BatchCertificateRequest,
    repo: CertificateRepository = Depends(get_certificate_repository),
    settings: Settings = Depends(get_settings),
) -> list[CertificateResponse]:
    return await controller.create_batch(repo, body, settings)


@router.post(
    "",
    response_model=CertificateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Issue a certificate",
    dependencies=[Depends(require_admin)],
)
async def create_certificate(
    body: CreateCertificateRequest,
    repo: CertificateRepository = Depends(get_certificate_repository),
    settings: Settings = Depends(get_settings),
) -> CertificateResponse:
    return await controller.create_certificate(repo, body, settings)


@router.get(
    "",
    response_model=list[CertificateResponse],
    summary="List certificates",
    dependencies=[Depends(require_reader)],
)
async def list_certificates(
    repo: CertificateRepository = Depends(get_certificate_repository),
) -> list[CertificateResponse]:
    return await controller.list_certificates(repo)


@router.get(
    "/{certificate_id}",
    response_model=CertificateResponse,
    summary="Get certificate by ID",
    dependencies=[Depends(require_reader)],
)
async def get_certificate(
    certificate_id: int,
    repo: CertificateRepository = Depends(get_certificate_repository),
) -> CertificateResponse:
    return await controller.get_certificate(repo, certificate_id)


@router.put(
    "/{certificate_id}",
    response_model=CertificateResponse,
    summary="Update certificate",
    description="Partial update of name, eventId and revoked. "
    "Setting revoked to false here re-activates a revoked certificate.",
    dependencies=[Depends(require_admin)],
)
async def update_certificate(
    certificate_id: int,
    body: UpdateCertificateRequest,
    repo: CertificateRepository = Depends(get_certificate_repository),
) -> CertificateResponse:
    return await controller.update_certificate(repo, certificate_id, body)


@router.patch(
    "/{certificate_id}/revoke",
    response_model=CertificateResponse,
    summary="Revoke certificate",
    description="One-way transition. Returns 400 if the certificate is already revoked.",
    dependencies=[Depends(require_admin)],
)
async def revoke_certificate(
    certificate_id: int,
    repo: CertificateRepository = Depends(get_certificate_repository),
) -> CertificateResponse:
    return await controller.revoke_certificate(repo, certificate_id)


@router.delete(
    "/{certificate_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete certificate",
    dependencies=[Depends(require_admin)],
)
async def delete_certificate(
    certificate_id: int,
    repo: CertificateRepository = Depends(get_certificate_repository),
) -> Response:
    await controller.delete_certificate(repo, certificate_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
