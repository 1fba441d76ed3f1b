from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.certificates.repository import CertificateRepository, SqlAlchemyCertificateRepository
from app.database import get_db


async def get_certificate_repository(
    db: AsyncSession = Depends(get_db),
) -> CertificateRepository:
    return SqlAlchemyCertificateRepository(db)
