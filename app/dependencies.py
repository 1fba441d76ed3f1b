from fastapi import Depends, Header, Query

from app.config import Settings
from shared.auth import Permission, require_permission, verify_api_key
from shared.models import PaginationParams

require_reader = require_permission(Permission.READ)
require_admin = require_permission(Permission.MANAGE)


def get_settings() -> Settings:
    return Settings()


async def require_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> None:
    verify_api_key(x_api_key, settings.api_key)


def get_pagination(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(10, ge=1, le=100, description="Items per page"),
) -> PaginationParams:
    return PaginationParams(page=page, page_size=page_size)
