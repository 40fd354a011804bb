"""Deployments panel controller.

Python counterpart of ``static/app.js``: it talks to the dashboard server over
the same HTTP routes the browser uses, keeps the rendered deployments panel
and polls it on an interval. The editor is handed in explicitly so the
controller never reaches for global state.
"""

import asyncio
from contextlib import suppress
from dataclasses import dataclass
from typing import Protocol

import httpx

from browser_ide.models.deployment import DeploymentList, DeployRequest
from browser_ide.ui.render import (
    CREATING_MESSAGE,
    STARTER_CODE,
    render_deployments,
    render_message,
)
from browser_ide.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_POLL_INTERVAL = 5.0


class Editor(Protocol):
    """Anything that can hand out the code currently being edited."""

    def get_value(self) -> str: ...


class TextBuffer:
    """Plain in-memory editor."""

    def __init__(self, value: str = STARTER_CODE):
        self._value = value

    def get_value(self) -> str:
        return self._value

    def set_value(self, value: str) -> None:
        self._value = value


@dataclass
class DeploymentsPanel:
    """Rendered HTML of the deployments panel."""

    html: str = ""


class DashboardController:
    """Keeps a deployments panel in sync with the selected project.

    Polls run on a fixed interval and right after the project selection
    changes. A failed poll is logged and leaves the panel as it was.
    Deploying only shows a transient notice; the next poll picks up the new
    deployment.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        editor: Editor,
        *,
        project_id: str = "",
        panel: DeploymentsPanel | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self._http = http
        self._editor = editor
        self.project_id = project_id
        self.panel = panel or DeploymentsPanel()
        self.poll_interval = poll_interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the polling timer and poll once right away."""
        if self.running:
            return
        self._task = asyncio.create_task(self._poll_forever())
        await self.poll()

    async def stop(self) -> None:
        """Stop the polling timer."""
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def _poll_forever(self) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)
            await self.poll()

    async def poll(self) -> None:
        """Refresh the panel with the deployments of the selected project."""
        project_id = self.project_id
        try:
            response = await self._http.get(
                "/deployments", params={"projectId": project_id}
            )
            payload = response.json()
            deployments = (
                [] if payload is None else DeploymentList.validate_python(payload)
            )
        except Exception:
            logger.exception("dashboard.poll_failed", project_id=project_id)
            return

        self.panel.html = render_deployments(deployments)
        logger.debug(
            "dashboard.polled",
            project_id=project_id,
            deployments=len(deployments),
        )

    async def select_project(self, project_id: str) -> None:
        """Switch to another project and refresh without waiting for the timer."""
        self.project_id = project_id
        await self.poll()

    async def deploy(self) -> httpx.Response:
        """Deploy the editor content to the selected project.

        The panel is not updated from the result.
        """
        self.panel.html = render_message(CREATING_MESSAGE) + self.panel.html

        request = DeployRequest(
            project_id=self.project_id,
            code=self._editor.get_value(),
        )
        response = await self._http.post(
            "/deployment", json=request.model_dump(by_alias=True)
        )
        logger.info(
            "dashboard.deployment_requested",
            project_id=request.project_id,
            status_code=response.status_code,
        )
        return response
