"""
Integration Test Fixtures.

The full FastAPI app (page routes, JSON API, health) running against the
in-memory context from the root conftest.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import AsyncClient, ASGITransport, Response

from blogpad.backend.context import AppContext
from blogpad.backend.main import create_app

ENTRIES_URL = "/api/v1/entries"


@pytest.fixture
async def client(context: AppContext) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for an app built around the test context."""
    app = create_app(context=context)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client


class EntriesApi:
    """
    Calls and envelope checks for /api/v1/entries.

    ok() and error() unwrap the ApiResponse / ErrorResponse envelope after
    checking the status, so tests assert on entries rather than plumbing.
    """

    def __init__(self, client: AsyncClient) -> None:
        self.client = client

    async def create(
        self,
        title: str = "A",
        content: str = "body",
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        response = await self.client.post(
            ENTRIES_URL,
            json={"title": title, "content": content, "tags": tags or []},
        )
        return self.ok(response, 201)

    async def list_entries(self, tag: str | None = None) -> list[dict[str, Any]]:
        params = {"tag": tag} if tag is not None else None
        return self.ok(await self.client.get(ENTRIES_URL, params=params))

    async def titles(self, tag: str | None = None) -> list[str]:
        return [entry["title"] for entry in await self.list_entries(tag)]

    @staticmethod
    def ok(response: Response, status: int = 200) -> Any:
        """Assert a successful envelope and return its data."""
        assert response.status_code == status, f"{response.status_code}: {response.text}"
        body = response.json()
        assert body["success"] is True, body
        return body["data"]

    @staticmethod
    def error(response: Response, status: int, code: str) -> dict[str, Any]:
        """Assert an error envelope with the given code and return its error."""
        assert response.status_code == status, f"{response.status_code}: {response.text}"
        body = response.json()
        assert body["success"] is False, body
        assert body["error"]["code"] == code, body["error"]
        return body["error"]

    @classmethod
    def invalid_fields(cls, response: Response) -> list[str]:
        """Assert a 422 request validation error and return the offending fields."""
        error = cls.error(response, 422, "VAL_REQUEST_INVALID")
        return [item["field"] for item in error["details"]["validation_errors"]]


@pytest.fixture
def entries(client: AsyncClient) -> EntriesApi:
    """Entries API helper on the test client."""
    return EntriesApi(client)
