"""
Blog Page Routes.

Server-rendered HTML front end. Every POST goes through BlogController and
answers 303 See Other to "/", which renders the page from scratch.

Handlers are async and never await while the controller runs, so user
actions are applied one at a time.
"""

from fastapi import APIRouter, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from blogpad.backend.core.dependencies import ControllerDep
from blogpad.backend.core.logging import get_logger
from blogpad.backend.web.controller import DELETE_CONFIRMATION
from blogpad.backend.web.view import render_confirm_page, render_page

router = APIRouter()
logger = get_logger(__name__)


def _back_home(fragment: str = "") -> RedirectResponse:
    return RedirectResponse(url=f"/{fragment}", status_code=303)


@router.get("/", response_class=HTMLResponse)
async def index(controller: ControllerDep) -> HTMLResponse:
    """Render the blog page."""
    return HTMLResponse(render_page(controller.render()))


@router.post("/entries")
async def submit_entry(
    controller: ControllerDep,
    title: str = Form(""),
    content: str = Form(""),
    tags: str = Form(""),
    edit_id: str = Form(""),
) -> RedirectResponse:
    """Create or update an entry from the editor form."""
    controller.submit(title, content, tags, edit_id=edit_id)
    return _back_home()


@router.post("/entries/{entry_id}/edit")
async def begin_edit(entry_id: int, controller: ControllerDep) -> RedirectResponse:
    """Load an entry into the editor."""
    if controller.begin_edit(entry_id):
        return _back_home("#top")
    return _back_home()


@router.post("/cancel")
async def cancel_edit(controller: ControllerDep) -> RedirectResponse:
    """Leave edit mode."""
    controller.cancel_edit()
    return _back_home()


@router.get("/entries/{entry_id}/delete", response_class=HTMLResponse, response_model=None)
async def confirm_delete(
    entry_id: int,
    controller: ControllerDep,
) -> HTMLResponse | RedirectResponse:
    """Ask before deleting."""
    post = controller.post_view(entry_id)
    if post is None:
        return _back_home()
    page_title = controller.display.page_title
    return HTMLResponse(render_confirm_page(page_title, DELETE_CONFIRMATION, post))


@router.post("/entries/{entry_id}/delete")
async def delete_entry(
    entry_id: int,
    controller: ControllerDep,
    confirmed: str = Form("no"),
) -> RedirectResponse:
    """Delete an entry if the confirmation page was accepted."""
    accepted = confirmed.lower() == "yes"
    controller.request_delete(entry_id, confirm=lambda _message: accepted)
    return _back_home()


@router.post("/filter")
async def change_filter(
    controller: ControllerDep,
    tag: str = Form(""),
) -> RedirectResponse:
    """Change the tag filter."""
    controller.change_filter(tag)
    return _back_home()
