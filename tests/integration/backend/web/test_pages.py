"""
Integration Tests for the blog page.

Drives the HTML front end with form posts and follows the 303 redirects
back to the page.
"""

import pytest


async def _submit(client, title="A", content="body", tags="", edit_id=""):
    return await client.post(
        "/entries",
        data={"title": title, "content": content, "tags": tags, "edit_id": edit_id},
    )


class TestIndex:
    """Tests for GET /."""

    async def test_empty_page(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "<h1>Test Blog</h1>" in response.text
        assert 'data-mode="create"' in response.text
        assert '<div id="blog-list"></div>' in response.text

    async def test_page_not_in_openapi(self, client):
        response = await client.get("/openapi.json")

        assert "/entries" not in response.json()["paths"]


class TestSubmit:
    """Tests for POST /entries."""

    async def test_create_redirects_and_lists_post(self, client, context):
        response = await _submit(client, title="Hello", content="one\ntwo", tags="a, b")

        assert response.status_code == 303
        assert response.headers["location"] == "/"

        page = (await client.get("/")).text
        [entry] = context.service.entries
        assert f'id="post-{entry.id}"' in page
        assert "one<br>two" in page
        assert '<span class="tag">a</span><span class="tag">b</span>' in page
        assert '<option value="a">a</option>' in page

    async def test_empty_content_adds_nothing(self, client, context):
        response = await _submit(client, title="Hello", content="")

        assert response.status_code == 303
        assert context.service.entries == []

    async def test_html_is_escaped(self, client):
        await _submit(client, title="<script>alert(1)</script>", content="x")

        page = (await client.get("/")).text
        assert "<script>alert(1)</script>" not in page
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in page


class TestEditFlow:
    """Tests for editing through the page."""

    async def test_edit_then_save(self, client, context):
        await _submit(client, title="A", content="body1", tags="x")
        [entry] = context.service.entries

        response = await client.post(f"/entries/{entry.id}/edit")
        assert response.status_code == 303
        assert response.headers["location"] == "/#top"

        page = (await client.get("/")).text
        assert 'data-mode="edit"' in page
        assert f'value="{entry.id}"' in page
        assert 'value="A"' in page
        assert 'class="hidden"' not in page

        await _submit(client, title="A2", content="body2", tags="", edit_id=str(entry.id))

        [updated] = context.service.entries
        assert updated.id == entry.id
        assert updated.title == "A2"
        assert updated.updated_at > updated.created_at
        assert 'data-mode="create"' in (await client.get("/")).text

    async def test_edit_unknown_entry(self, client):
        response = await client.post("/entries/999/edit")

        assert response.headers["location"] == "/"

    async def test_cancel(self, client, context):
        await _submit(client)
        [entry] = context.service.entries
        await client.post(f"/entries/{entry.id}/edit")

        response = await client.post("/cancel")

        assert response.status_code == 303
        assert 'data-mode="create"' in (await client.get("/")).text
        assert context.service.entries == [entry]


class TestDeleteFlow:
    """Tests for the confirm-then-delete flow."""

    async def test_confirm_page(self, client, context):
        await _submit(client, title="Doomed")
        [entry] = context.service.entries

        response = await client.get(f"/entries/{entry.id}/delete")

        assert response.status_code == 200
        assert "Delete this post?" in response.text
        assert "<strong>Doomed</strong>" in response.text

    async def test_confirm_page_for_unknown_entry_redirects(self, client):
        response = await client.get("/entries/999/delete")

        assert response.status_code == 303

    @pytest.mark.parametrize(("answer", "remaining"), [("yes", 0), ("no", 1)])
    async def test_delete_answer(self, client, context, answer, remaining):
        await _submit(client)
        [entry] = context.service.entries

        response = await client.post(f"/entries/{entry.id}/delete", data={"confirmed": answer})

        assert response.status_code == 303
        assert len(context.service.entries) == remaining


class TestFilter:
    """Tests for POST /filter."""

    async def test_filter_by_tag(self, client):
        await _submit(client, title="A", tags="x")
        await _submit(client, title="B", tags="x, y")

        await client.post("/filter", data={"tag": "y"})
        page = (await client.get("/")).text

        assert '<h2 class="blog-title">B</h2>' in page
        assert '<h2 class="blog-title">A</h2>' not in page
        assert '<option value="y" selected>y</option>' in page

        await client.post("/filter", data={"tag": ""})
        page = (await client.get("/")).text

        assert '<h2 class="blog-title">A</h2>' in page


class TestErrorPages:
    """Failed page requests answer with an HTML page, not the API envelope."""

    async def test_malformed_entry_id(self, client):
        response = await client.post("/entries/abc/edit")

        assert response.status_code == 422
        assert response.headers["content-type"].startswith("text/html")
        assert "<h1>Test Blog</h1>" in response.text
        assert "Error 422" in response.text
        assert '<a href="/">Back to posts</a>' in response.text

    async def test_store_failure(self, client, context, monkeypatch):
        def broken_set(key, value):
            raise OSError("disk full")

        monkeypatch.setattr(context.store, "set", broken_set)

        response = await _submit(client, title="Hello", content="body")

        assert response.status_code == 503
        assert response.headers["content-type"].startswith("text/html")
        assert "Posts could not be loaded or saved" in response.text
        assert "disk full" not in response.text
