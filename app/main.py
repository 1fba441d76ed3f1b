import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.certificates import controller as certificates_controller
from app.certificates.router import router as certificates_router
from app.courses.router import router as courses_router
from app.database import dispose_db, get_session_factory, init_db
from app.dependencies import get_settings, require_api_key
from app.events.router import router as events_router
from shared.middleware.error_handler import error_envelope_middleware, http_exception_handler
from shared.middleware.request_id import request_id_middleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    init_db(settings)
    logger.info("Starting sinari (env=%s)", settings.env_name)

    yield

    # Shutdown
    await dispose_db()


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Certificate routes keep their 400 {error} shape; everything else stays 422.
    if request.url.path.startswith("/api" + certificates_router.prefix):
        return await certificates_controller.request_validation_error(request, exc)
    return await request_validation_exception_handler(request, exc)


async def probe_database() -> bool:
    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
    except (RuntimeError, SQLAlchemyError, OSError) as exc:
        logger.warning("Database probe failed: %s", exc)
        return False
    return True


SWAGGER_DESCRIPTION = """\
## Sinari Platform API

Community and education backend: events, courses and a certificate
registry with public verification.

### Domain Tags

| Tag | Description |
|-----|-------------|
| **Certificates** | Issuance (single + batch), search, revocation, verification by hash |
| **Events** | Event CRUD with unique slugs |
| **Courses** | Course CRUD with unique slugs, author-owned |

### Authentication

Every `/api` route requires the `X-API-Key` header. Write routes also
require a JWT Bearer token in the `Authorization` header.
Token structure: `{"sub": "<user_id>", "role": "ADMIN" | "USER"}`.

### Certificate Lifecycle

```
issued (revoked=false) → revoked (revoked=true)
```

`GET /api/certificates/verify/{hash}` answers 200 (valid),
400 (revoked) or 404 (unknown hash).
"""


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(levelname)s:%(name)s: %(message)s",
    )
    app = FastAPI(
        title="Sinari Platform",
        version="0.1.0",
        description=SWAGGER_DESCRIPTION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(error_envelope_middleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    api_dependencies = [Depends(require_api_key)]
    app.include_router(certificates_router, prefix="/api", dependencies=api_dependencies)
    app.include_router(events_router, prefix="/api", dependencies=api_dependencies)
    app.include_router(courses_router, prefix="/api", dependencies=api_dependencies)

    @app.get("/health", tags=["Health"])
    async def health() -> JSONResponse:
        connected = await probe_database()
        return JSONResponse(
            status_code=status.HTTP_200_OK if connected else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "ok",
                "service": "sinari",
                "database": "connected" if connected else "disconnected",
            },
        )

    return app


app = create_app()
