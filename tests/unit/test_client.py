"""Unit tests for the Subhosting API client."""

import json

import httpx
import pytest
from pydantic import ValidationError

from browser_ide.core.exceptions import ConfigurationError
from browser_ide.models.deployment import DeploymentCreate
from browser_ide.subhosting.client import (
    ACCESS_TOKEN_ENV,
    DEFAULT_ENDPOINT,
    ORG_ID_ENV,
    SubhostingClient,
)
from tests.conftest import ORG_ID, TOKEN, FakeSubhostingAPI


class TestClientConfiguration:
    """Tests for resolving credentials."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv(ACCESS_TOKEN_ENV, raising=False)
        monkeypatch.delenv(ORG_ID_ENV, raising=False)

    def test_missing_everything_fails(self):
        with pytest.raises(ConfigurationError) as exc_info:
            SubhostingClient()
        assert exc_info.value.details["setting"] == ACCESS_TOKEN_ENV

    def test_missing_org_id_fails(self):
        with pytest.raises(ConfigurationError) as exc_info:
            SubhostingClient(access_token="tok")
        assert exc_info.value.details["setting"] == ORG_ID_ENV

    def test_empty_values_are_missing(self):
        with pytest.raises(ConfigurationError):
            SubhostingClient(access_token="", org_id="")

    def test_explicit_arguments(self):
        client = SubhostingClient("tok", "org")
        assert client.config.access_token == "tok"
        assert client.config.org_id == "org"
        assert client.config.endpoint == DEFAULT_ENDPOINT
        assert client.config.timeout is None

    def test_environment_fallback(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(ACCESS_TOKEN_ENV, "env-token")
        monkeypatch.setenv(ORG_ID_ENV, "env-org")

        client = SubhostingClient()

        assert client.config.access_token == "env-token"
        assert client.org_id == "env-org"
        assert client.org_url == "/organizations/env-org"

    def test_explicit_arguments_win_over_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv(ACCESS_TOKEN_ENV, "env-token")
        monkeypatch.setenv(ORG_ID_ENV, "env-org")

        client = SubhostingClient("tok", "org")

        assert client.config.access_token == "tok"
        assert client.org_id == "org"

    def test_config_is_immutable(self):
        client = SubhostingClient("tok", "org")
        with pytest.raises(ValidationError):
            client.config.org_id = "other"

    def test_token_not_in_repr(self):
        client = SubhostingClient("super-secret", "org")
        assert "super-secret" not in repr(client.config)


class TestClientRequests:
    """Tests for the requests the client sends."""

    @pytest.mark.asyncio
    async def test_list_projects_without_query(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        fake_api.add("GET", f"/v1/organizations/{ORG_ID}/projects", [])

        response = await subhosting.list_projects()

        assert response.status_code == 200
        assert len(fake_api.requests) == 1
        request = fake_api.requests[0]
        assert request.method == "GET"
        assert request.url.path == f"/v1/organizations/{ORG_ID}/projects"
        assert len(request.url.params) == 0

    @pytest.mark.asyncio
    async def test_default_headers(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        await subhosting.list_projects()

        request = fake_api.requests[0]
        assert request.headers["Authorization"] == f"Bearer {TOKEN}"
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_caller_headers_override_defaults(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        await subhosting.fetch(
            "/organizations/x",
            headers={"content-type": "text/plain", "X-Trace": "1"},
        )

        request = fake_api.requests[0]
        assert request.headers.get_list("Content-Type") == ["text/plain"]
        assert request.headers["X-Trace"] == "1"
        assert request.headers["Authorization"] == f"Bearer {TOKEN}"

    @pytest.mark.asyncio
    async def test_list_projects_with_query(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        await subhosting.list_projects({"q": "demo", "limit": 5})

        params = fake_api.requests[0].url.params
        assert params["q"] == "demo"
        assert params["limit"] == "5"

    @pytest.mark.asyncio
    async def test_create_project_with_name(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        fake_api.add(
            "POST",
            f"/v1/organizations/{ORG_ID}/projects",
            {"id": "proj-1", "name": "demo"},
        )

        response = await subhosting.create_project("demo")

        request = fake_api.requests[0]
        assert request.method == "POST"
        assert json.loads(request.content) == {"name": "demo"}
        assert response.json()["id"] == "proj-1"

    @pytest.mark.asyncio
    async def test_create_project_without_name(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        await subhosting.create_project()

        assert json.loads(fake_api.requests[0].content) == {}

    @pytest.mark.asyncio
    async def test_list_deployments(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        await subhosting.list_deployments("proj-1", {"order": "desc"})

        request = fake_api.requests[0]
        assert request.url.path == "/v1/projects/proj-1/deployments"
        assert dict(request.url.params) == {"order": "desc"}

    @pytest.mark.asyncio
    async def test_list_app_logs(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        await subhosting.list_app_logs("dpl-1", {"level": "error"})

        request = fake_api.requests[0]
        assert request.url.path == "/v1/deployments/dpl-1/app_logs"
        assert dict(request.url.params) == {"level": "error"}

    @pytest.mark.asyncio
    async def test_create_deployment_sends_options_verbatim(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        options = {
            "entryPointUrl": "main.ts",
            "assets": {
                "main.ts": {"kind": "file", "content": "Deno.serve(() => new Response('hi'));", "encoding": "utf-8"},
            },
            "envVars": {"MODE": "test"},
        }

        await subhosting.create_deployment("proj-1", options)

        request = fake_api.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/projects/proj-1/deployments"
        assert json.loads(request.content) == options

    @pytest.mark.asyncio
    async def test_create_deployment_from_model(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        await subhosting.create_deployment(
            "proj-1", DeploymentCreate.from_code("console.log(1)")
        )

        assert json.loads(fake_api.requests[0].content) == {
            "entryPointUrl": "main.ts",
            "assets": {
                "main.ts": {
                    "kind": "file",
                    "content": "console.log(1)",
                    "encoding": "utf-8",
                }
            },
            "envVars": {},
        }

    @pytest.mark.asyncio
    async def test_responses_are_returned_raw(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        fake_api.add(
            "GET",
            "/v1/projects/nope/deployments",
            {"code": "projectNotFound"},
            status_code=404,
        )

        response = await subhosting.list_deployments("nope")

        assert response.status_code == 404
        assert response.json() == {"code": "projectNotFound"}

    @pytest.mark.asyncio
    async def test_fetch_url_skips_endpoint(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        await subhosting.fetch_url("https://elsewhere.test/v1/projects?page=2")

        request = fake_api.requests[0]
        assert request.url.host == "elsewhere.test"
        assert request.url.path == "/v1/projects"
        assert request.headers["Authorization"] == f"Bearer {TOKEN}"

    @pytest.mark.asyncio
    async def test_network_errors_propagate_without_retry(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        fake_api.add(
            "GET",
            f"/v1/organizations/{ORG_ID}/projects",
            error=httpx.ConnectError("connection refused"),
        )

        with pytest.raises(httpx.ConnectError):
            await subhosting.list_projects()
        assert len(fake_api.requests) == 1

    @pytest.mark.asyncio
    async def test_iter_pages_follows_next_links(
        self, subhosting: SubhostingClient, fake_api: FakeSubhostingAPI
    ):
        path = f"/v1/organizations/{ORG_ID}/projects"

        def paginated(request: httpx.Request) -> httpx.Response:
            page = int(request.url.params.get("page", "1"))
            headers = {}
            if page < 3:
                headers["Link"] = f'<https://api.test{path}?page={page + 1}>; rel="next"'
            return httpx.Response(200, json=[{"id": f"p{page}", "name": f"project {page}"}], headers=headers)

        fake_api.add("GET", path, handler=paginated)

        first = await subhosting.list_projects()
        pages = [response.json() async for response in subhosting.iter_pages(first)]

        assert [page[0]["id"] for page in pages] == ["p1", "p2", "p3"]
        assert len(fake_api.requests) == 3

    @pytest.mark.asyncio
    async def test_context_manager_closes_connection_pool(
        self, fake_api: FakeSubhostingAPI
    ):
        async with SubhostingClient(TOKEN, ORG_ID, transport=fake_api.transport) as client:
            assert not client._http.is_closed
        assert client._http.is_closed
