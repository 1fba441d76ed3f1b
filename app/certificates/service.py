"""Certificate registry: issuance, verification, revocation, lookup.

Pure business logic, no FastAPI imports. Every function takes the
``CertificateRepository`` it works against as its first argument.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from app.certificates.codes import generate_batch, generate_pair
from app.certificates.repository import CertificateRepository
from app.config import Settings
from app.exceptions import (
    CertificateAlreadyRevokedError,
    CertificateNotFoundError,
    EmptyBatchError,
)
from app.models.certificate import Certificate

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"name", "event_id", "revoked"})


# ---------------------------------------------------------------------------
# Issuance
# ---------------------------------------------------------------------------


async def issue_certificate(
    repo: CertificateRepository,
    *,
    name: str,
    event_id: int,
    settings: Settings,
    now: datetime | None = None,
) -> Certificate:
    """Issue one certificate. Store rejections surface as ``CertificateIssueError``."""
    issued_at = now or datetime.now(timezone.utc)
    pair = generate_pair(issued_at, program_tag=settings.certificate_program_tag)
    cert = Certificate(
        name=name,
        event_id=event_id,
        certificate_code=pair.certificate_code,
        hash=pair.hash,
        issued_at=issued_at,
        revoked=False,
    )
    cert = await repo.add(cert)
    logger.info("Issued certificate %s for event=%s", cert.certificate_code, event_id)
    return cert


async def issue_batch(
    repo: CertificateRepository,
    *,
    names: Sequence[str],
    event_id: int,
    settings: Settings,
    now: datetime | None = None,
) -> list[Certificate]:
    """Issue one certificate per name, all-or-nothing, in input order."""
    if not names:
        raise EmptyBatchError('"names" must be a non-empty array.')

    issued_at = now or datetime.now(timezone.utc)
    pairs = generate_batch(
        len(names),
        issued_at,
        program_tag=settings.certificate_program_tag,
        suffix_length=settings.certificate_suffix_length,
    )
    certs = [
        Certificate(
            name=name,
            event_id=event_id,
            certificate_code=pair.certificate_code,
            hash=pair.hash,
            issued_at=issued_at,
            revoked=False,
        )
        for name, pair in zip(names, pairs)
    ]
    created = await repo.add_all(certs)
    logger.info("Issued batch of %d certificates for event=%s", len(created), event_id)
    return created


# ---------------------------------------------------------------------------
# Public verification
# ---------------------------------------------------------------------------


class VerificationOutcome(str, enum.Enum):
    VALID = "VALID"
    REVOKED = "REVOKED"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class VerificationResult:
    outcome: VerificationOutcome
    certificate: Certificate | None = None

    @property
    def is_valid(self) -> bool:
        return self.outcome is VerificationOutcome.VALID


async def verify_certificate(repo: CertificateRepository, hash_: str) -> VerificationResult:
    """Public verification, no auth required.

    A revoked certificate is reported as REVOKED, never as NOT_FOUND: it
    did exist and was later invalidated.
    """
    cert = await repo.get_by_hash(hash_)
    if cert is None:
        logger.info("Verification miss for hash=%s", hash_)
        return VerificationResult(VerificationOutcome.NOT_FOUND)
    if cert.revoked:
        logger.warning("Verification of revoked certificate %s", cert.certificate_code)
        return VerificationResult(VerificationOutcome.REVOKED, cert)
    return VerificationResult(VerificationOutcome.VALID, cert)


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


async def revoke_certificate(repo: CertificateRepository, certificate_id: int) -> Certificate:
    cert = await repo.get(certificate_id)
    if cert is None:
        raise CertificateNotFoundError(str(certificate_id))
    if cert.revoked:
        raise CertificateAlreadyRevokedError(str(certificate_id))

    revoked = await repo.mark_revoked(certificate_id)
    if revoked is None:
        # A concurrent revoke won between the read and the conditional update.
        raise CertificateAlreadyRevokedError(str(certificate_id))
    logger.info("Revoked certificate %s", revoked.certificate_code)
    return revoked


async def update_certificate(
    repo: CertificateRepository,
    certificate_id: int,
    changes: dict[str, Any],
) -> Certificate:
    """Partial update of name / event_id / revoked.

    Setting ``revoked`` here skips the already-revoked guard of
    ``revoke_certificate`` and can clear the flag; kept as the admin
    override path.
    """
    cert = await repo.get(certificate_id)
    if cert is None:
        raise CertificateNotFoundError(str(certificate_id))

    unknown = set(changes) - _UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields not updatable: {sorted(unknown)}")
    if changes.get("revoked") is False and cert.revoked:
        logger.warning("Certificate %s un-revoked through update", cert.certificate_code)

    return await repo.update(cert, changes)


async def delete_certificate(repo: CertificateRepository, certificate_id: int) -> None:
    cert = await repo.get(certificate_id)
    if cert is None:
        raise CertificateNotFoundError(str(certificate_id))
    await repo.delete(cert)
    logger.info("Deleted certificate %s", cert.certificate_code)


# ---------------------------------------------------------------------------
# Retrieval
# ---------------------------------------------------------------------------


async def get_certificate(repo: CertificateRepository, certificate_id: int) -> Certificate:
    cert = await repo.get(certificate_id)
    if cert is None:
        raise CertificateNotFoundError(str(certificate_id))
    return cert


async def list_certificates(repo: CertificateRepository) -> list[Certificate]:
    return await repo.list_all()


async def search_certificates(repo: CertificateRepository, query: str) -> list[Certificate]:
    return await repo.search(query)
