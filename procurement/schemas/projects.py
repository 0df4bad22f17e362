#procurement/schemas/projects.py
from __future__ import annotations

from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator

from procurement.models.enums import ProjectEvent, ProjectState

# Names travel unencoded in URL paths: no "/", "?" or "#", no surrounding whitespace.
PROJECT_NAME_PATTERN = r"^[^/?#\s](?:[^/?#]*[^/?#\s])?$"


class ProjectCreateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=128, pattern=PROJECT_NAME_PATTERN)
    buyer: str = Field(..., min_length=1, max_length=128)
    description: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("buyer")
    @classmethod
    def _buyer_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("buyer must not be blank")
        return v


class ProjectEventRequest(BaseModel):
    event: ProjectEvent

    @field_validator("event", mode="before")
    @classmethod
    def _upper(cls, v):
        return v.upper() if isinstance(v, str) else v


class ProjectResponse(BaseModel):
    projectId: str
    name: str
    buyer: str
    state: ProjectState
    description: Optional[str] = None
    createdAtIso: str
    updatedAtIso: str


class ProjectData(BaseModel):
    project: ProjectResponse


class ProjectListData(BaseModel):
    projects: List[ProjectResponse]
