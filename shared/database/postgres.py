import ssl
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def ssl_connect_args(mode: str | None, cert_path: str | None = None) -> dict[str, Any]:
    """asyncpg ``connect_args`` for ``mode``; empty or ``disable`` means plain TCP.

    A readable ``cert_path`` pins the CA bundle, otherwise the server
    certificate is required but not verified.
    """
    if not mode or mode.lower() == "disable":
        return {}
    if cert_path and Path(cert_path).exists():
        return {"ssl": ssl.create_default_context(cafile=cert_path)}
    return {"ssl": "require"}


def get_async_session_factory(
    database_url: str,
    *,
    ssl_mode: str | None = None,
    ssl_cert_path: str | None = None,
    expire_on_commit: bool = False,
) -> async_sessionmaker[AsyncSession]:
    engine = create_async_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,
        connect_args=ssl_connect_args(ssl_mode, ssl_cert_path),
    )
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=expire_on_commit,
        autoflush=False,
    )


async def get_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """One unit of work: commit when the consumer finishes, roll back on error."""
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
