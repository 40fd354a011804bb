"""Pytest configuration and fixtures."""

from typing import Any, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from browser_ide.main import create_app
from browser_ide.subhosting.client import SubhostingClient

TOKEN = "test-token"
ORG_ID = "org-123"
ENDPOINT = "https://api.test/v1"

Handler = Callable[[httpx.Request], httpx.Response]


class FakeSubhostingAPI:
    """Stand-in for the Subhosting API behind an ``httpx.MockTransport``.

    Answers are registered per (method, path); every request is recorded.
    Unknown routes answer 404 the way the real API does.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Handler] = {}

    def add(
        self,
        method: str,
        path: str,
        json: Any = None,
        *,
        status_code: int = 200,
        handler: Handler | None = None,
        error: Exception | None = None,
    ) -> None:
        if handler is None:

            def handler(request: httpx.Request) -> httpx.Response:
                if error is not None:
                    raise error
                return httpx.Response(status_code, json=json)

        self._routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"code": "notFound"})
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def fake_api() -> FakeSubhostingAPI:
    """A fresh fake Subhosting API."""
    return FakeSubhostingAPI()


@pytest.fixture
async def subhosting(fake_api: FakeSubhostingAPI) -> SubhostingClient:
    """Subhosting client wired to the fake API."""
    client = SubhostingClient(
        TOKEN, ORG_ID, endpoint=ENDPOINT, transport=fake_api.transport
    )
    yield client
    await client.aclose()


@pytest.fixture
def app(subhosting: SubhostingClient):
    """Application instance using the fake-backed client."""
    return create_app(subhosting)


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async test client talking to the application in-process."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def sample_deployments() -> list[dict[str, Any]]:
    """Deployments as the API lists them, newest first."""
    return [
        {
            "id": "dpl-2",
            "projectId": "proj-1",
            "status": "success",
            "domains": ["proj-1-dpl-2.deno.dev"],
            "createdAt": "2026-10-19T10:05:00Z",
            "updatedAt": "2026-10-19T10:05:12Z",
        },
        {
            "id": "dpl-1",
            "projectId": "proj-1",
            "status": "pending",
            "domains": [],
            "createdAt": "2026-10-19T10:00:00Z",
            "updatedAt": "2026-10-19T10:00:01Z",
        },
    ]
