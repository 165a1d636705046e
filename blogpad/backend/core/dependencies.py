"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header, Request

from blogpad.backend.context import AppContext
from blogpad.backend.web.controller import BlogController


def get_context(request: Request) -> AppContext:
    """Application context built in create_app()."""
    return request.app.state.context


def get_controller(request: Request) -> BlogController:
    return get_context(request).controller


async def get_request_id(
    request: Request,
    x_request_id: str | None = Header(None),
) -> str:
    """
    Request ID assigned by RequestContextMiddleware, else the header, else a new one.

    Used for request tracing and correlation.
    """
    return (
        getattr(request.state, "request_id", None)
        or x_request_id
        or str(uuid.uuid4())
    )


Context = Annotated[AppContext, Depends(get_context)]
ControllerDep = Annotated[BlogController, Depends(get_controller)]
RequestId = Annotated[str, Depends(get_request_id)]
