"""Client for the Deno Subhosting REST API.

Docs: https://docs.deno.com/deploy/api/rest/
"""

import os
from types import TracebackType
from typing import Any, AsyncIterator, Mapping

import httpx
from pydantic import BaseModel, ConfigDict, Field

from browser_ide.core.exceptions import ConfigurationError
from browser_ide.utils.logging import get_logger
from browser_ide.utils.url import url_join

logger = get_logger(__name__)

DEFAULT_ENDPOINT = "https://api.deno.com/v1"
ACCESS_TOKEN_ENV = "DEPLOY_ACCESS_TOKEN"
ORG_ID_ENV = "DEPLOY_ORG_ID"


class ClientConfig(BaseModel):
    """Resolved, immutable configuration of a :class:`SubhostingClient`."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(..., min_length=1, repr=False)
    org_id: str = Field(..., min_length=1)
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float | None = None


class SubhostingClient:
    """Async client for the Subhosting API of a single organization.

    Provides ``fetch``/``fetch_url`` for arbitrary requests against the API
    and helpers for the common project and deployment calls. Every method
    returns the raw :class:`httpx.Response`; interpreting status codes and
    bodies is left to the caller. Nothing is retried.

    Credentials not passed explicitly are read from the environment:

    - ``DEPLOY_ACCESS_TOKEN`` - a valid Deno Deploy access token
    - ``DEPLOY_ORG_ID`` - the identifier of your Subhosting organization
    """

    def __init__(
        self,
        access_token: str | None = None,
        org_id: str | None = None,
        *,
        endpoint: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        token = access_token or os.environ.get(ACCESS_TOKEN_ENV)
        if not token:
            raise ConfigurationError(
                "A Deno Deploy access token is required "
                f"(or set {ACCESS_TOKEN_ENV} env variable).",
                setting=ACCESS_TOKEN_ENV,
            )

        org = org_id or os.environ.get(ORG_ID_ENV)
        if not org:
            raise ConfigurationError(
                f"Deno Subhosting org ID is required (or set {ORG_ID_ENV} env variable).",
                setting=ORG_ID_ENV,
            )

        self.config = ClientConfig(
            access_token=token,
            org_id=org,
            endpoint=endpoint or DEFAULT_ENDPOINT,
            timeout=timeout,
        )
        self._http = httpx.AsyncClient(transport=transport, timeout=timeout)

    @property
    def org_id(self) -> str:
        return self.config.org_id

    @property
    def org_url(self) -> str:
        """URL fragment of the configured organization."""
        return f"/organizations/{self.config.org_id}"

    async def __aenter__(self) -> "SubhostingClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def fetch(
        self,
        path: str,
        method: str = "GET",
        *,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
        content: str | bytes | None = None,
    ) -> httpx.Response:
        """Send a request to a resource below the API endpoint.

        Args:
            path: Resource path, e.g. ``/organizations/foo``
            method: HTTP method
            headers: Extra headers; they override the defaults
            json: Body to send as JSON
            content: Raw body to send

        Returns:
            The response, whatever its status code
        """
        url = url_join(self.config.endpoint, path)
        return await self.fetch_url(
            url, method, headers=headers, json=json, content=content
        )

    async def fetch_url(
        self,
        url: str,
        method: str = "GET",
        *,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
        content: str | bytes | None = None,
    ) -> httpx.Response:
        """Send a request to a fully qualified URL, e.g. a pagination link."""
        final_headers = httpx.Headers(
            {
                "Authorization": f"Bearer {self.config.access_token}",
                "Content-Type": "application/json",
            }
        )
        if headers:
            final_headers.update(headers)

        logger.debug("subhosting.request", method=method, url=url)
        response = await self._http.request(
            method,
            url,
            headers=final_headers,
            json=json,
            content=content,
        )
        log = logger.debug if response.is_success else logger.warning
        log(
            "subhosting.response",
            method=method,
            url=url,
            status_code=response.status_code,
        )
        return response

    async def iter_pages(
        self, response: httpx.Response
    ) -> AsyncIterator[httpx.Response]:
        """Yield ``response`` and every page after it.

        Pages are chained through the ``Link: <...>; rel="next"`` header the
        API sends on paginated listings.
        """
        yield response
        next_link = response.links.get("next")
        while next_link:
            response = await self.fetch_url(next_link["url"])
            yield response
            next_link = response.links.get("next")

    async def list_projects(
        self, query: Mapping[str, Any] | None = None
    ) -> httpx.Response:
        """List the projects of the organization.

        https://docs.deno.com/deploy/api/rest/organizations#list-projects-for-an-organization
        """
        return await self.fetch(_with_query(f"{self.org_url}/projects", query))

    async def create_project(self, name: str | None = None) -> httpx.Response:
        """Create a project; without a name the API picks a random one.

        https://docs.deno.com/deploy/api/rest/organizations#create-a-new-project-for-an-organization
        """
        body = {"name": name} if name is not None else {}
        return await self.fetch(f"{self.org_url}/projects", "POST", json=body)

    async def list_deployments(
        self, project_id: str, query: Mapping[str, Any] | None = None
    ) -> httpx.Response:
        """List the deployments of a project.

        https://docs.deno.com/deploy/api/rest/projects#get-project-deployments
        """
        return await self.fetch(
            _with_query(f"/projects/{project_id}/deployments", query)
        )

    async def list_app_logs(
        self, deployment_id: str, query: Mapping[str, Any] | None = None
    ) -> httpx.Response:
        """List the application logs of a deployment.

        https://docs.deno.com/deploy/api/rest/deployments#get-deployment-app-logs
        """
        return await self.fetch(
            _with_query(f"/deployments/{deployment_id}/app_logs", query)
        )

    async def create_deployment(
        self,
        project_id: str,
        deployment_options: BaseModel | Mapping[str, Any],
    ) -> httpx.Response:
        """Create a deployment for a project.

        https://docs.deno.com/deploy/api/rest/deployments
        """
        if isinstance(deployment_options, BaseModel):
            body = deployment_options.model_dump(by_alias=True, mode="json")
        else:
            body = dict(deployment_options)
        return await self.fetch(
            f"/projects/{project_id}/deployments", "POST", json=body
        )


def _with_query(path: str, query: Mapping[str, Any] | None) -> str:
    return f"{path}?{httpx.QueryParams(query or {})}"
