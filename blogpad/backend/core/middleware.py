"""
Request Context Middleware.

Binds request_id, source, method and path into the structlog context for
the duration of a request, so repository and service logs (entry saved,
corrupt data quarantined) can be traced back to the form post or API
call that caused them.

Writes (form posts, API POST/PUT/DELETE) are logged at INFO when they
complete, reads at DEBUG. Health checks are not logged at all.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from blogpad.backend.core.logging import get_logger

logger = get_logger(__name__)

WRITE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def request_source(path: str) -> str:
    """'api' for the JSON API, 'internal' for health checks, 'web' for the blog page."""
    if path.startswith("/api/"):
        return "api"
    if path.startswith("/health"):
        return "internal"
    return "web"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Request id and timing for every request.

    Headers:
    - X-Request-ID: taken from the request, generated if missing
    - X-Response-Time: duration in milliseconds
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        path = request.url.path
        source = request_source(path)
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            source=source,
            method=request.method,
            path=path,
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            # exception handlers build the response
            logger.exception(
                "Request raised",
                extra={"duration_ms": _elapsed_ms(started)},
            )
            raise
        else:
            duration_ms = _elapsed_ms(started)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            if source != "internal":
                log = logger.info if request.method in WRITE_METHODS else logger.debug
                log(
                    "Request completed",
                    extra={"status_code": response.status_code, "duration_ms": duration_ms},
                )
            return response
        finally:
            structlog.contextvars.clear_contextvars()


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
