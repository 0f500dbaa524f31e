"""Boundary Protocols — contract between the project handlers and persistence.

Invariants:
    - Handlers only reach the database through ProjectRepository
    - Every method either returns a result or raises DatabaseError

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async methods: implementations do IO; callers await them in the request task,
      so cancellation of the request propagates into the store call
"""

from typing import TYPE_CHECKING, Protocol

from projects_api.core.domain_types import ProjectTitle

if TYPE_CHECKING:
    from projects_api.models.project import Project


class ProjectRepository(Protocol):
    """Contract for project persistence: implemented by infrastructure."""
    async def find_all(self) -> list["Project"]: ...
    async def find_by_title(self, title: ProjectTitle) -> "Project | None": ...
    async def save(self, project: "Project") -> "Project": ...
    async def delete(self, project: "Project") -> None: ...
