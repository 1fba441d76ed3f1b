"""Certificate persistence.

``CertificateRepository`` is the seam the registry depends on; the
SQLAlchemy implementation is bound per request in ``dependencies.py``
and tests substitute an in-memory one.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import CertificateIssueError, CertificateUpdateError
from app.models.certificate import Certificate


class CertificateRepository(Protocol):
    async def add(self, certificate: Certificate) -> Certificate: ...

    async def add_all(self, certificates: Sequence[Certificate]) -> list[Certificate]:
        """Insert every row or none of them."""
        ...

    async def get(self, certificate_id: int) -> Certificate | None: ...

    async def get_by_hash(self, hash_: str) -> Certificate | None:
        """Exact hash match with ``event`` loaded."""
        ...

    async def list_all(self) -> list[Certificate]: ...

    async def search(self, query: str) -> list[Certificate]: ...

    async def update(
        self, certificate: Certificate, changes: Mapping[str, Any]
    ) -> Certificate: ...

    async def mark_revoked(self, certificate_id: int) -> Certificate | None:
        """Flip ``revoked`` to true only if it is currently false."""
        ...

    async def delete(self, certificate: Certificate) -> None: ...


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SqlAlchemyCertificateRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def add(self, certificate: Certificate) -> Certificate:
        try:
            async with self.db.begin_nested():
                self.db.add(certificate)
                await self.db.flush()
        except IntegrityError as exc:
            raise CertificateIssueError(str(exc.orig)) from exc
        await self.db.refresh(certificate)
        return certificate

    async def add_all(self, certificates: Sequence[Certificate]) -> list[Certificate]:
        # One savepoint for the whole batch: a single bad row rolls back every row.
        try:
            async with self.db.begin_nested():
                self.db.add_all(certificates)
                await self.db.flush()
        except IntegrityError as exc:
            raise CertificateIssueError(str(exc.orig)) from exc
        return list(certificates)

    async def get(self, certificate_id: int) -> Certificate | None:
        return await self.db.get(Certificate, certificate_id)

    async def get_by_hash(self, hash_: str) -> Certificate | None:
        stmt = (
            select(Certificate)
            .options(selectinload(Certificate.event))
            .where(Certificate.hash == hash_)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Certificate]:
        stmt = select(Certificate).order_by(Certificate.updated_at.desc(), Certificate.id.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def search(self, query: str) -> list[Certificate]:
        pattern = _like_pattern(query)
        stmt = (
            select(Certificate)
            .where(
                or_(
                    Certificate.name.ilike(pattern, escape="\\"),
                    Certificate.certificate_code.ilike(pattern, escape="\\"),
                )
            )
            .order_by(Certificate.updated_at.desc(), Certificate.id.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update(self, certificate: Certificate, changes: Mapping[str, Any]) -> Certificate:
        try:
            async with self.db.begin_nested():
                for field, value in changes.items():
                    setattr(certificate, field, value)
                await self.db.flush()
        except IntegrityError as exc:
            raise CertificateUpdateError(str(exc.orig)) from exc
        await self.db.refresh(certificate)
        return certificate

    async def mark_revoked(self, certificate_id: int) -> Certificate | None:
        stmt = (
            update(Certificate)
            .where(Certificate.id == certificate_id, Certificate.revoked.is_(False))
            .values(revoked=True)
            .returning(Certificate)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def delete(self, certificate: Certificate) -> None:
        await self.db.delete(certificate)
        await self.db.flush()
