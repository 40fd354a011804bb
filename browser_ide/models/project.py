"""Project-related data models."""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Project(BaseModel):
    """A Subhosting project as returned by the API.

    Only the fields the dashboard displays are declared; anything else the
    API sends is kept untouched.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    description: str | None = None


class ProjectCreate(BaseModel):
    """Form data for creating a new project."""

    name: str | None = Field(default=None, max_length=100)


ProjectList = TypeAdapter(list[Project])
