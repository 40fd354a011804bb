"""Dashboard page and Subhosting proxy endpoints."""

from typing import Annotated, Any

import httpx
from fastapi import APIRouter, Form, Query, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from pydantic import ValidationError

from browser_ide.api.deps import SubhostingDep
from browser_ide.config import settings
from browser_ide.core.exceptions import UpstreamResponseError
from browser_ide.models.deployment import DeploymentCreate, DeployRequest
from browser_ide.models.project import ProjectCreate, ProjectList
from browser_ide.ui.render import STARTER_CODE, templates
from browser_ide.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _read_json(response: httpx.Response) -> Any:
    """Decode an upstream body, failing loudly when it is not JSON."""
    try:
        return response.json()
    except ValueError as e:
        raise UpstreamResponseError(
            str(response.request.url), response.status_code, response.text
        ) from e


def _proxy(response: httpx.Response) -> JSONResponse:
    """Hand an upstream JSON answer back to the browser as-is."""
    return JSONResponse(content=_read_json(response), status_code=response.status_code)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(request: Request, subhosting: SubhostingDep) -> HTMLResponse:
    """Render the editor page with the organization's projects."""
    response = await subhosting.list_projects()
    payload = _read_json(response)
    try:
        projects = ProjectList.validate_python(payload)
    except ValidationError:
        logger.warning(
            "projects.unexpected_payload",
            status_code=response.status_code,
            payload=payload,
        )
        projects = []

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "projects": projects,
            "starter_code": STARTER_CODE,
            "poll_interval_ms": settings.poll_interval_ms,
        },
    )


@router.get("/deployments", summary="List deployments of a project")
async def list_deployments(
    subhosting: SubhostingDep,
    project_id: Annotated[str, Query(alias="projectId")] = "",
) -> JSONResponse:
    """Poll deployment data from the Subhosting API, newest first."""
    response = await subhosting.list_deployments(project_id, {"order": "desc"})
    return _proxy(response)


@router.post("/deployment", summary="Deploy code to a project")
async def create_deployment(
    data: DeployRequest,
    subhosting: SubhostingDep,
) -> JSONResponse:
    """Deploy the posted code as a single-file deployment."""
    response = await subhosting.create_deployment(
        data.project_id,
        DeploymentCreate.from_code(data.code),
    )
    logger.info(
        "deployment.requested",
        project_id=data.project_id,
        status_code=response.status_code,
    )
    return _proxy(response)


@router.post("/project", include_in_schema=False)
async def create_project(
    data: Annotated[ProjectCreate, Form()],
    subhosting: SubhostingDep,
) -> RedirectResponse:
    """Create a project and go back to the editor page."""
    response = await subhosting.create_project(data.name or None)
    if response.is_success:
        logger.info("project.created", status_code=response.status_code)
    else:
        logger.warning(
            "project.create_failed",
            status_code=response.status_code,
            body=response.text[:500],
        )

    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/logs", summary="List application logs of a deployment")
async def list_app_logs(
    request: Request,
    subhosting: SubhostingDep,
    deployment_id: Annotated[str, Query(alias="deploymentId")] = "",
) -> JSONResponse:
    """Proxy app logs; extra query parameters are forwarded untouched."""
    query = {
        key: value
        for key, value in request.query_params.items()
        if key != "deploymentId"
    }
    response = await subhosting.list_app_logs(deployment_id, query)
    return _proxy(response)
