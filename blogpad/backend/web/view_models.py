"""
View Models.

Plain data handed from BlogController to the view. A PageView is rebuilt
from the collection on every render and holds no references to Entry.
"""

from dataclasses import dataclass, field
from enum import Enum

ALL_TAGS = ""
"""Filter value meaning no tag filter."""


class FormMode(str, Enum):
    """The two states of the editor form."""

    CREATE = "create"
    EDIT = "edit"


@dataclass
class FormView:
    mode: FormMode
    heading: str
    title: str
    content: str
    tags: str
    edit_id: str
    show_cancel: bool
    autofocus: bool = False


@dataclass(frozen=True)
class TagOption:
    value: str
    label: str
    selected: bool = False


@dataclass
class PostView:
    id: int
    title: str
    updated_label: str
    tags: list[str]
    content_lines: list[str]


@dataclass
class PageView:
    page_title: str
    form: FormView
    tag_options: list[TagOption]
    selected_tag: str
    posts: list[PostView] = field(default_factory=list)
