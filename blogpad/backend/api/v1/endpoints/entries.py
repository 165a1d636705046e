"""
Entries API Endpoints.

REST API endpoints for entry management.
"""

from fastapi import APIRouter, Query, Response

from blogpad.backend.context import AppContext
from blogpad.backend.core.dependencies import Context, RequestId
from blogpad.backend.models.entry import Entry
from blogpad.backend.schemas.base import ApiResponse, ResponseMetadata
from blogpad.backend.schemas.entry import EntryCreate, EntryResponse, EntryUpdate

router = APIRouter()


def _to_response(entry: Entry, context: AppContext) -> EntryResponse:
    display = context.display
    return EntryResponse(
        id=entry.id,
        title=entry.title,
        content=entry.content,
        tags=entry.tags,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
        updated_label=entry.formatted_updated_at(display.locale, display.timezone),
    )


@router.get(
    "",
    response_model=ApiResponse[list[EntryResponse]],
    summary="List entries",
    description="List entries, newest update first, optionally filtered by tag.",
)
async def list_entries(
    context: Context,
    request_id: RequestId,
    tag: str | None = Query(default=None, description="Only entries carrying this tag"),
) -> ApiResponse[list[EntryResponse]]:
    """List entries."""
    entries = context.service.filter_by_tag(tag)
    return ApiResponse(
        data=[_to_response(entry, context) for entry in entries],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/tags",
    response_model=ApiResponse[list[str]],
    summary="List tags",
    description="Every tag in use, deduplicated and sorted.",
)
async def list_tags(context: Context, request_id: RequestId) -> ApiResponse[list[str]]:
    """List tags."""
    return ApiResponse(
        data=context.service.all_tags(),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "",
    response_model=ApiResponse[EntryResponse],
    status_code=201,
    summary="Create an entry",
    description="Create a new entry. Title and content must not be blank.",
)
async def create_entry(
    data: EntryCreate,
    context: Context,
    request_id: RequestId,
) -> ApiResponse[EntryResponse]:
    """Create a new entry."""
    entry = context.service.add(data.title, data.content, data.tags)
    context.controller.refresh_tag_options()
    return ApiResponse(
        data=_to_response(entry, context),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{entry_id}",
    response_model=ApiResponse[EntryResponse],
    summary="Get an entry",
    description="Get a single entry by ID.",
)
async def get_entry(
    entry_id: int,
    context: Context,
    request_id: RequestId,
) -> ApiResponse[EntryResponse]:
    """Get an entry by ID."""
    entry = context.service.require(entry_id)
    return ApiResponse(
        data=_to_response(entry, context),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "/{entry_id}",
    response_model=ApiResponse[EntryResponse],
    summary="Replace an entry",
    description="Replace title, content and tags of an existing entry.",
)
async def update_entry(
    entry_id: int,
    data: EntryUpdate,
    context: Context,
    request_id: RequestId,
) -> ApiResponse[EntryResponse]:
    """Update an entry."""
    context.service.require(entry_id)
    entry = context.service.update(entry_id, data.title, data.content, data.tags)
    context.controller.refresh_tag_options()
    return ApiResponse(
        data=_to_response(entry, context),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{entry_id}",
    status_code=204,
    summary="Delete an entry",
    description="Delete an entry. Unknown IDs are accepted.",
)
async def delete_entry(
    entry_id: int,
    context: Context,
    request_id: RequestId,
) -> Response:
    """Delete an entry."""
    context.service.delete(entry_id)
    context.controller.refresh_tag_options()
    return Response(status_code=204)
