"""Certificate controller: maps service results to HTTP responses.

Certificate routes answer with the bare record (or list) on success and
``{"error": ...}`` on failure, unlike the ``{status, message, data}``
envelope used by events and courses.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.certificates import service
from app.certificates.repository import CertificateRepository
from app.certificates.schemas import (
    BatchCertificateRequest,
    CertificateResponse,
    CertificateVerifyResponse,
    CertificateWithEventResponse,
    CreateCertificateRequest,
    UpdateCertificateRequest,
)
from app.certificates.service import VerificationOutcome
from app.config import Settings
from app.exceptions import (
    CertificateAlreadyRevokedError,
    CertificateIssueError,
    CertificateNotFoundError,
    CertificateUpdateError,
    CodeGenerationError,
    EmptyBatchError,
)

logger = logging.getLogger(__name__)

BATCH_BODY_ERROR = 'Invalid request body. "names" must be a non-empty array.'


def _error(status_code: int, message: str, **extra: object) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"error": message, **extra})


def _handle_domain_error(exc: Exception, fallback: str) -> HTTPException:
    if isinstance(exc, CertificateNotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, "Certificate not found")
    if isinstance(exc, CertificateAlreadyRevokedError):
        return _error(status.HTTP_400_BAD_REQUEST, "Certificate has already been revoked")
    if isinstance(exc, EmptyBatchError):
        return _error(status.HTTP_400_BAD_REQUEST, BATCH_BODY_ERROR)
    if isinstance(exc, (CertificateIssueError, CertificateUpdateError, CodeGenerationError, ValueError)):
        return _error(status.HTTP_400_BAD_REQUEST, fallback, details=str(exc))
    logger.exception("Unexpected certificate failure: %s", fallback)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, fallback, details=str(exc))


async def create_certificate(
    repo: CertificateRepository,
    body: CreateCertificateRequest,
    settings: Settings,
) -> CertificateResponse:
    try:
        cert = await service.issue_certificate(
            repo, name=body.name, event_id=body.event_id, settings=settings,
        )
    except Exception as exc:
        raise _handle_domain_error(exc, "Failed to create certificate") from exc
    return CertificateResponse.model_validate(cert)


async def create_batch(
    repo: CertificateRepository,
    body: BatchCertificateRequest,
    settings: Settings,
) -> list[CertificateResponse]:
    try:
        certs = await service.issue_batch(
            repo, names=body.names, event_id=body.event_id, settings=settings,
        )
    except Exception as exc:
        raise _handle_domain_error(exc, "Failed to create certificates in batch.") from exc
    return [CertificateResponse.model_validate(c) for c in certs]


async def list_certificates(repo: CertificateRepository) -> list[CertificateResponse]:
    try:
        certs = await service.list_certificates(repo)
    except Exception as exc:
        raise _handle_domain_error(exc, "Failed to fetch certificates") from exc
    return [CertificateResponse.model_validate(c) for c in certs]


async def search_certificates(
    repo: CertificateRepository, query: str,
) -> list[CertificateResponse]:
    try:
        certs = await service.search_certificates(repo, query)
    except Exception as exc:
        raise _handle_domain_error(exc, "Failed to search certificates") from exc
    return [CertificateResponse.model_validate(c) for c in certs]


async def get_certificate(
    repo: CertificateRepository, certificate_id: int,
) -> CertificateResponse:
    try:
        cert = await service.get_certificate(repo, certificate_id)
    except Exception as exc:
        raise _handle_domain_error(exc, "Failed to fetch certificate") from exc
    return CertificateResponse.model_validate(cert)


async def update_certificate(
    repo: CertificateRepository,
    certificate_id: int,
    body: UpdateCertificateRequest,
) -> CertificateResponse:
    try:
        cert = await service.update_certificate(
            repo, certificate_id, body.model_dump(exclude_unset=True),
        )
    except Exception as exc:
        if isinstance(exc, CertificateNotFoundError):
            # The update path has no not-found outcome of its own.
            raise _error(
                status.HTTP_400_BAD_REQUEST, "Failed to update certificate", details=str(exc),
            ) from exc
        raise _handle_domain_error(exc, "Failed to update certificate") from exc
    return CertificateResponse.model_validate(cert)


async def revoke_certificate(
    repo: CertificateRepository, certificate_id: int,
) -> CertificateResponse:
    try:
        cert = await service.revoke_certificate(repo, certificate_id)
    except Exception as exc:
        raise _handle_domain_error(exc, "Failed to revoke certificate") from exc
    return CertificateResponse.model_validate(cert)


async def delete_certificate(repo: CertificateRepository, certificate_id: int) -> None:
    try:
        await service.delete_certificate(repo, certificate_id)
    except Exception as exc:
        raise _handle_domain_error(exc, "Failed to delete certificate") from exc


async def verify_certificate(
    repo: CertificateRepository, hash_: str,
) -> CertificateVerifyResponse:
    try:
        result = await service.verify_certificate(repo, hash_)
    except Exception as exc:
        raise _handle_domain_error(exc, "Failed to verify certificate") from exc

    if result.outcome is VerificationOutcome.NOT_FOUND:
        raise _error(status.HTTP_404_NOT_FOUND, "Certificate not found", valid=False)
    if result.outcome is VerificationOutcome.REVOKED:
        raise _error(
            status.HTTP_400_BAD_REQUEST,
            "Certificate has been revoked",
            valid=False,
            revoked=True,
        )
    return CertificateVerifyResponse(
        valid=True,
        certificate=CertificateWithEventResponse.model_validate(result.certificate),
    )


def _validation_message(request: Request) -> str:
    if request.url.path.endswith("/batch"):
        return BATCH_BODY_ERROR
    if request.method == "POST":
        return "Failed to create certificate"
    if request.method == "PUT":
        return "Failed to update certificate"
    return "Invalid request."


async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed certificate requests answer 400 ``{error, details}``, not 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": _validation_message(request),
            "details": jsonable_encoder(exc.errors()),
        },
    )
