"""Dependency injection for API endpoints."""

from typing import Annotated

from fastapi import Depends, Request

from browser_ide.subhosting.client import SubhostingClient


async def get_subhosting_client(request: Request) -> SubhostingClient:
    """Get the process-wide Subhosting client."""
    return request.app.state.subhosting


# Type aliases for cleaner signatures
SubhostingDep = Annotated[SubhostingClient, Depends(get_subhosting_client)]
