"""Project Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - title: 1-255 chars, not blank, stored exactly as sent (it is the lookup key)
    - title never contains "/": it must fit in a single /projects/{title} path segment
    - ProjectUpdate carries only the fields the client sent (model_fields_set)
    - title and status may be omitted from an update but never set to null
    - Unknown body fields are ignored; id and timestamps are never client-writable
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from projects_api.core.domain_types import ProjectStatus
from projects_api.core.project_status import INITIAL_STATUS


def _check_title(v: str | None) -> str | None:
    if v is None:
        return v
    if not v.strip():
        raise ValueError("title cannot be empty or whitespace")
    if "/" in v:
        raise ValueError("title cannot contain '/'")
    return v


class ProjectCreate(BaseModel):
    """Project creation: title required, store assigns id and timestamps."""
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(None, max_length=10_000)
    status: ProjectStatus = INITIAL_STATUS

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        return _check_title(v)


class ProjectUpdate(BaseModel):
    """Partial update: every field optional, only sent fields are applied."""
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=10_000)
    status: ProjectStatus | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str | None) -> str | None:
        return _check_title(v)

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        for name in ("title", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Fields to overwrite, with enums flattened to their stored values."""
        data = self.model_dump(exclude_unset=True)
        if "status" in data:
            data["status"] = ProjectStatus(data["status"]).value
        return data


class ProjectResponse(BaseModel):
    """Project response: public-facing project data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    status: ProjectStatus
    created_at: datetime
    updated_at: datetime
