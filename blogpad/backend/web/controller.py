"""
Blog Controller.

Presentation controller for the blog page. Holds the editor form state
(create or edit mode), the selected tag filter and the tag options, and
turns user actions into EntryService calls. No HTTP or HTML here: routes
feed it form values and the view renders the PageView it returns.
"""

from dataclasses import dataclass
from typing import Callable

from blogpad.backend.core.logging import get_logger
from blogpad.backend.models.entry import Entry
from blogpad.backend.services.entry import EntryService
from blogpad.backend.web.view_models import (
    ALL_TAGS,
    FormMode,
    FormView,
    PageView,
    PostView,
    TagOption,
)

logger = get_logger(__name__)

CREATE_HEADING = "Write a new post"
EDIT_HEADING = "Edit post"
ALL_TAGS_LABEL = "All"
DELETE_CONFIRMATION = "Delete this post?"


def parse_tags(raw: str) -> list[str]:
    """Split a comma-separated tag string, trimming and dropping empties."""
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def parse_edit_id(raw: str | int | None) -> int | None:
    """Read the hidden edit-id field. Anything unparsable means create mode."""
    if raw is None or raw == "":
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value or None


@dataclass
class FormState:
    """Current contents of the editor form."""

    title: str = ""
    content: str = ""
    tags: str = ""
    edit_id: int | None = None

    @property
    def mode(self) -> FormMode:
        return FormMode.EDIT if self.edit_id is not None else FormMode.CREATE


@dataclass
class DisplayOptions:
    page_title: str = "Blogpad"
    locale: str = "th_TH"
    timezone: str = "Asia/Bangkok"


class BlogController:
    """
    Two-mode controller: create (no edit id) and edit (edit id set).

    Every mutating action ends by resetting or re-reading state from the
    service, so nothing here outlives a mutation except ids and strings.
    """

    def __init__(
        self,
        service: EntryService,
        display: DisplayOptions | None = None,
    ) -> None:
        self.service = service
        self.display = display or DisplayOptions()
        self.form = FormState()
        self.selected_tag = ALL_TAGS
        self.tag_options: list[TagOption] = []
        self._scroll_to_top = False
        self.refresh_tag_options()

    @property
    def mode(self) -> FormMode:
        return self.form.mode

    def submit(
        self,
        title: str,
        content: str,
        raw_tags: str,
        edit_id: str | int | None = "",
    ) -> Entry | None:
        """
        Handle the editor form.

        Args:
            title: Title field
            content: Content field
            raw_tags: Comma-separated tags field
            edit_id: Hidden edit-id field; empty in create mode

        Returns:
            The added or updated entry, or None when nothing was saved
        """
        title = title.strip()
        content = content.strip()
        tags = parse_tags(raw_tags)

        if not title or not content:
            logger.debug("Submit ignored, title or content empty")
            return None

        target_id = parse_edit_id(edit_id)
        if target_id is not None:
            entry = self.service.update(target_id, title, content, tags)
        else:
            entry = self.service.add(title, content, tags)

        self._reset_form()
        self.refresh_tag_options()
        return entry

    def begin_edit(self, entry_id: int) -> bool:
        """Load an entry into the form and switch to edit mode."""
        entry = self.service.get(entry_id)
        if entry is None:
            return False

        self.form = FormState(
            title=entry.title,
            content=entry.content,
            tags=", ".join(entry.tags),
            edit_id=entry.id,
        )
        self._scroll_to_top = True
        return True

    def cancel_edit(self) -> None:
        """Clear the form and return to create mode."""
        self._reset_form()

    def request_delete(
        self,
        entry_id: int,
        confirm: Callable[[str], bool],
    ) -> bool:
        """
        Delete an entry once confirm() accepts.

        Args:
            entry_id: Entry to delete
            confirm: Blocking yes/no prompt given the confirmation message

        Returns:
            True if the delete was dispatched
        """
        if not confirm(DELETE_CONFIRMATION):
            return False

        self.service.delete(entry_id)
        if self.form.edit_id == entry_id:
            self._reset_form()
        self.refresh_tag_options()
        return True

    def change_filter(self, tag: str | None) -> None:
        """Select a tag to filter by; empty selects all posts."""
        tag = tag or ALL_TAGS
        if tag != ALL_TAGS and tag not in self.service.all_tags():
            tag = ALL_TAGS
        self.selected_tag = tag
        self.tag_options = self._build_tag_options(self.service.all_tags())

    def refresh_tag_options(self) -> list[TagOption]:
        """
        Rebuild the filter options from the current tags.

        The selected tag is kept if it still exists, otherwise the filter
        falls back to all posts.
        """
        tags = self.service.all_tags()
        if self.selected_tag not in tags:
            self.selected_tag = ALL_TAGS
        self.tag_options = self._build_tag_options(tags)
        return self.tag_options

    def render(self) -> PageView:
        """Build a fresh view model from the current collection."""
        entries = self.service.filter_by_tag(self.selected_tag)
        autofocus, self._scroll_to_top = self._scroll_to_top, False

        form = self.form
        editing = form.mode is FormMode.EDIT
        form_view = FormView(
            mode=form.mode,
            heading=EDIT_HEADING if editing else CREATE_HEADING,
            title=form.title,
            content=form.content,
            tags=form.tags,
            edit_id=str(form.edit_id) if editing else "",
            show_cancel=editing,
            autofocus=autofocus,
        )

        return PageView(
            page_title=self.display.page_title,
            form=form_view,
            tag_options=list(self.tag_options),
            selected_tag=self.selected_tag,
            posts=[self._post_view(entry) for entry in entries],
        )

    def post_view(self, entry_id: int) -> PostView | None:
        """View model of a single entry, or None if it does not exist."""
        entry = self.service.get(entry_id)
        if entry is None:
            return None
        return self._post_view(entry)

    def _post_view(self, entry: Entry) -> PostView:
        return PostView(
            id=entry.id,
            title=entry.title,
            updated_label=entry.formatted_updated_at(
                self.display.locale, self.display.timezone
            ),
            tags=list(entry.tags),
            content_lines=entry.content.replace("\r\n", "\n").split("\n"),
        )

    def _build_tag_options(self, tags: list[str]) -> list[TagOption]:
        options = [
            TagOption(
                value=ALL_TAGS,
                label=ALL_TAGS_LABEL,
                selected=self.selected_tag == ALL_TAGS,
            )
        ]
        options.extend(
            TagOption(value=tag, label=tag, selected=tag == self.selected_tag)
            for tag in tags
        )
        return options

    def _reset_form(self) -> None:
        self.form = FormState()
