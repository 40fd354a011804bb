"""Data models for Browser IDE."""

from browser_ide.models.deployment import (
    ENTRY_POINT,
    Asset,
    Deployment,
    DeploymentCreate,
    DeploymentList,
    DeployRequest,
)
from browser_ide.models.project import Project, ProjectCreate, ProjectList

__all__ = [
    # Project models
    "Project",
    "ProjectCreate",
    "ProjectList",
    # Deployment models
    "ENTRY_POINT",
    "Asset",
    "Deployment",
    "DeploymentCreate",
    "DeploymentList",
    "DeployRequest",
]
