"""
Exception Handlers.

One app serves both the blog page and the JSON API, so every error is
answered in the caller's format: requests under /api and /health get the
ErrorResponse envelope, page requests get an HTML error page linking back
to the post list.

Request id, method and path are already bound to the log context by
RequestContextMiddleware and are not repeated here.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, Response

from blogpad.backend.core.exceptions import ApplicationError, NotFoundError, StorageError
from blogpad.backend.core.logging import get_logger
from blogpad.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata
from blogpad.backend.web.view import render_error_page

logger = get_logger(__name__)

STATUS_BY_ERROR: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    StorageError: 503,
}

# What a reader of the page sees; the API gets the exception message
PAGE_MESSAGES = {
    404: "That post does not exist.",
    422: "The submitted form could not be read.",
    503: "Posts could not be loaded or saved. Please try again.",
}
DEFAULT_PAGE_MESSAGE = "Something went wrong."

JSON_PREFIXES = ("/api/", "/health")


def wants_json(request: Request) -> bool:
    return request.url.path.startswith(JSON_PREFIXES)


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id")


def _page_title(request: Request) -> str:
    context = getattr(request.app.state, "context", None)
    return context.display.page_title if context is not None else "Blogpad"


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict | None = None,
) -> Response:
    """Build the JSON envelope or the HTML error page for a failed request."""
    if wants_json(request):
        body = ErrorResponse(
            error=ErrorDetail(code=code, message=message, details=details),
            metadata=ResponseMetadata(request_id=_request_id(request)),
        )
        return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))

    page = render_error_page(
        _page_title(request),
        status_code,
        PAGE_MESSAGES.get(status_code, DEFAULT_PAGE_MESSAGE),
    )
    return HTMLResponse(page, status_code=status_code)


async def application_error_handler(request: Request, exc: ApplicationError) -> Response:
    """NotFoundError -> 404, StorageError -> 503, any other ApplicationError -> 500."""
    status_code = STATUS_BY_ERROR.get(type(exc), 500)
    log = logger.error if status_code >= 500 else logger.warning
    log("Request failed", extra={"code": exc.code, "status": status_code, "error": exc.message})
    return error_response(request, status_code, exc.code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    """Malformed path, query, form or JSON body -> 422 VAL_REQUEST_INVALID."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        extra={"fields": [error["field"] for error in errors]},
    )
    return error_response(
        request,
        422,
        "VAL_REQUEST_INVALID",
        "Request validation failed",
        {"validation_errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    """Anything else -> 500 without internal details."""
    logger.exception("Unhandled exception", extra={"exception_type": type(exc).__name__})
    return error_response(request, 500, "SYS_INTERNAL_ERROR", "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
