import logging
from collections.abc import Awaitable, Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def _envelope(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {"code": code, "message": message},
            "request_id": getattr(request.state, "request_id", None),
        },
    )


async def error_envelope_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Wrap escaped exceptions in the standard {"error": ..., "request_id": ...} body."""
    try:
        return await call_next(request)
    except StarletteHTTPException as exc:
        if isinstance(exc.detail, str):
            return _envelope(request, exc.status_code, "http_error", exc.detail)
        return _envelope(request, exc.status_code, "http_error", str(exc.detail))
    except Exception:
        logger.exception(
            "Unhandled exception on %s %s", request.method, request.url.path
        )
        return _envelope(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_error",
            "An unexpected error occurred",
        )
