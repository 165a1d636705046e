"""
Page View.

Turns a PageView into an element tree and the tree into HTML. The whole
page is rebuilt on every render; there is no incremental update. All text
goes through markupsafe escaping.
"""

from dataclasses import dataclass, field
from typing import Union

from markupsafe import Markup, escape

from blogpad.backend.web.view_models import FormView, PageView, PostView, TagOption

VOID_TAGS = frozenset({"br", "input", "meta", "link"})

STYLESHEET = """
body { font-family: sans-serif; max-width: 46rem; margin: 0 auto; padding: 1rem; }
form.editor input, form.editor textarea { width: 100%; margin-bottom: .5rem; }
.blog-post { border-bottom: 1px solid #ddd; padding: 1rem 0; }
.blog-date { color: #666; font-size: .85rem; }
.tag { background: #eef; border-radius: 3px; padding: 0 .4rem; margin-right: .3rem; }
.blog-actions form { display: inline; }
.hidden { display: none; }
"""

Node = Union["Element", str, Markup]


@dataclass
class Element:
    """An HTML element. Attribute values of True render as bare attributes."""

    tag: str
    attrs: dict[str, str | bool] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    def render(self) -> Markup:
        parts = [Markup("<{}").format(Markup(self.tag))]
        for name, value in self.attrs.items():
            if value is False or value is None:
                continue
            if value is True:
                parts.append(Markup(" {}").format(Markup(name)))
            else:
                parts.append(Markup(' {}="{}"').format(Markup(name), value))
        parts.append(Markup(">"))

        if self.tag in VOID_TAGS:
            return Markup("").join(parts)

        for child in self.children:
            parts.append(child.render() if isinstance(child, Element) else escape(child))
        parts.append(Markup("</{}>").format(Markup(self.tag)))
        return Markup("").join(parts)


def el(tag: str, attrs: dict[str, str | bool] | None = None, *children: Node) -> Element:
    return Element(tag, attrs or {}, list(children))


def render_page(page: PageView) -> str:
    """Full HTML document for the blog page."""
    body = el(
        "body",
        {},
        el("a", {"id": "top"}),
        el("h1", {}, page.page_title),
        build_form(page.form),
        build_filter(page.tag_options),
        build_post_list(page.posts),
    )
    return _document(page.page_title, body)


def render_confirm_page(page_title: str, message: str, post: PostView) -> str:
    """Confirmation page shown before a delete takes effect."""
    action = f"/entries/{post.id}/delete"
    body = el(
        "body",
        {},
        el("h1", {}, page_title),
        el("p", {"class": "confirm-message"}, message),
        el("p", {}, el("strong", {}, post.title)),
        el(
            "form",
            {"method": "post", "action": action, "class": "confirm"},
            el("button", {"type": "submit", "name": "confirmed", "value": "yes"}, "Delete"),
            el("button", {"type": "submit", "name": "confirmed", "value": "no"}, "Cancel"),
        ),
    )
    return _document(page_title, body)


def render_error_page(page_title: str, status_code: int, message: str) -> str:
    """Error page for failed page requests, with a way back to the list."""
    body = el(
        "body",
        {},
        el("h1", {}, page_title),
        el("h2", {"class": "error"}, f"Error {status_code}"),
        el("p", {"class": "error-message"}, message),
        el("p", {}, el("a", {"href": "/"}, "Back to posts")),
    )
    return _document(page_title, body)


def build_form(form: FormView) -> Element:
    cancel_attrs: dict[str, str | bool] = {
        "type": "submit",
        "formaction": "/cancel",
        "id": "cancel-btn",
        "formnovalidate": True,
    }
    if not form.show_cancel:
        cancel_attrs["class"] = "hidden"
        cancel_attrs["hidden"] = True

    return el(
        "section",
        {"class": "editor", "data-mode": form.mode.value},
        el("h2", {"id": "form-title"}, form.heading),
        el(
            "form",
            {"method": "post", "action": "/entries", "class": "editor", "id": "blog-form"},
            el("input", {"type": "hidden", "name": "edit_id", "id": "edit-id", "value": form.edit_id}),
            el("label", {"for": "title"}, "Title"),
            el(
                "input",
                {
                    "type": "text",
                    "name": "title",
                    "id": "title",
                    "value": form.title,
                    "required": True,
                    "autofocus": form.autofocus,
                },
            ),
            el("label", {"for": "content"}, "Content"),
            el("textarea", {"name": "content", "id": "content", "rows": "6", "required": True}, form.content),
            el("label", {"for": "tags"}, "Tags (comma separated)"),
            el("input", {"type": "text", "name": "tags", "id": "tags", "value": form.tags}),
            el("button", {"type": "submit"}, "Save"),
            el("button", cancel_attrs, "Cancel"),
        ),
    )


def build_filter(options: list[TagOption]) -> Element:
    return el(
        "form",
        {"method": "post", "action": "/filter", "class": "tag-filter"},
        el("label", {"for": "tag-filter"}, "Filter by tag"),
        el(
            "select",
            {"name": "tag", "id": "tag-filter", "onchange": "this.form.submit()"},
            *[
                el("option", {"value": option.value, "selected": option.selected}, option.label)
                for option in options
            ],
        ),
        el("noscript", {}, el("button", {"type": "submit"}, "Apply")),
    )


def build_post_list(posts: list[PostView]) -> Element:
    return el("div", {"id": "blog-list"}, *[build_post(post) for post in posts])


def build_post(post: PostView) -> Element:
    content: list[Node] = []
    for index, line in enumerate(post.content_lines):
        if index:
            content.append(el("br"))
        content.append(line)

    return el(
        "article",
        {"class": "blog-post", "id": f"post-{post.id}"},
        el("h2", {"class": "blog-title"}, post.title),
        el("div", {"class": "blog-date"}, f"Updated: {post.updated_label}"),
        el("div", {"class": "blog-tags"}, *[el("span", {"class": "tag"}, tag) for tag in post.tags]),
        el("div", {"class": "blog-content"}, *content),
        el(
            "div",
            {"class": "blog-actions"},
            el(
                "form",
                {"method": "post", "action": f"/entries/{post.id}/edit"},
                el("button", {"type": "submit", "class": "btn-edit"}, "Edit"),
            ),
            el(
                "form",
                {"method": "get", "action": f"/entries/{post.id}/delete"},
                el("button", {"type": "submit", "class": "btn-delete"}, "Delete"),
            ),
        ),
    )


def _document(title: str, body: Element) -> str:
    head = el(
        "head",
        {},
        el("meta", {"charset": "utf-8"}),
        el("title", {}, title),
        el("style", {}, Markup(STYLESHEET)),
    )
    html = el("html", {}, head, body)
    return str(Markup("<!DOCTYPE html>\n") + html.render())
