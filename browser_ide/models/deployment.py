"""Deployment data models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

ENTRY_POINT = "main.ts"


class Deployment(BaseModel):
    """A deployment as returned by the Subhosting API."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = None
    domains: list[str] = Field(default_factory=list)
    status: str = ""
    updated_at: str = Field(default="", alias="updatedAt")

    @property
    def primary_domain(self) -> str | None:
        """First domain the deployment answers on, if one is assigned yet."""
        return self.domains[0] if self.domains else None


class Asset(BaseModel):
    """A single file inside a deployment's asset bundle."""

    kind: Literal["file"] = "file"
    content: str
    encoding: Literal["utf-8", "base64"] = "utf-8"


class DeploymentCreate(BaseModel):
    """Body sent to the API when creating a deployment."""

    model_config = ConfigDict(populate_by_name=True)

    entry_point_url: str = Field(default=ENTRY_POINT, alias="entryPointUrl")
    assets: dict[str, Asset]
    env_vars: dict[str, str] = Field(default_factory=dict, alias="envVars")

    @classmethod
    def from_code(cls, code: str) -> "DeploymentCreate":
        """Bundle editor content as a single-file deployment."""
        return cls(assets={ENTRY_POINT: Asset(content=code)})


class DeployRequest(BaseModel):
    """Body posted by the browser when the user hits "Save & Deploy"."""

    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(alias="projectId")
    code: str = ""


DeploymentList = TypeAdapter(list[Deployment])
