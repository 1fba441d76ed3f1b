"""Error envelopes.

``{status, message}`` is the platform-wide shape: ``fail`` for 4xx,
``error`` for 5xx. A dict ``detail`` is rendered as-is so routers that
answer with their own body shape (``{"error": ...}``) keep it.
"""

import logging
from collections.abc import Awaitable, Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def _status_word(status_code: int) -> str:
    return "error" if status_code >= 500 else "fail"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    headers = getattr(exc, "headers", None)
    if isinstance(exc.detail, dict):
        return JSONResponse(status_code=exc.status_code, content=exc.detail, headers=headers)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status": _status_word(exc.status_code),
            "message": exc.detail if isinstance(exc.detail, str) else str(exc.detail),
            "request_id": getattr(request.state, "request_id", None),
        },
        headers=headers,
    )


async def error_envelope_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": "error",
                "message": "An internal server error occurred.",
                "error": str(exc),
                "request_id": getattr(request.state, "request_id", None),
            },
        )
