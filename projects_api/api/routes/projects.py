"""Project Resource Handler — list, create, read, update, delete, archive, restore.

Invariants:
    - Every handler performs one decode-validate-persist-respond cycle
    - Projects are addressed by title; get_project_or_404 gates every
      title-based operation and stops the request with 404 when absent
    - Handlers hold no state between requests: repository and tracer are
      injected per request
    - Status changes go through core/project_status.py (pure transitions)
    - Every route runs inside a span (TracedRoute); span names are the route names
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import ValidationError

from projects_api.core.domain_types import ProjectTitle
from projects_api.core.errors import ProjectNotFoundError, RequestDecodeError
from projects_api.core.project_status import archive, restore
from projects_api.core.repository_protocols import ProjectRepository
from projects_api.infrastructure.project_repository import get_project_repository
from projects_api.infrastructure.tracing import TracedRoute
from projects_api.models.project import Project
from projects_api.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/projects", tags=["projects"], route_class=TracedRoute)


async def get_project_or_404(
    title: str, repository: ProjectRepository,
) -> Project:
    """Get project by title or raise 404."""
    project = await repository.find_by_title(ProjectTitle(title))
    if project is None:
        raise ProjectNotFoundError(title)
    return project


def decode_update(raw: bytes) -> ProjectUpdate:
    """Decode an update body or raise RequestDecodeError (400)."""
    try:
        return ProjectUpdate.model_validate_json(raw)
    except ValidationError as e:
        raise RequestDecodeError.from_errors(e.errors()) from e


@router.get("", response_model=list[ProjectResponse], name="GetAllProjects")
async def list_projects(
    repository: ProjectRepository = Depends(get_project_repository),
):
    """List every project."""
    return await repository.find_all()


@router.post(
    "", response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED, name="CreateProject",
)
async def create_project(
    body: ProjectCreate,
    repository: ProjectRepository = Depends(get_project_repository),
):
    """Create a project. The store assigns id and timestamps."""
    project = Project(
        title=body.title,
        description=body.description,
        status=body.status.value,
    )
    return await repository.save(project)


@router.get("/{title}", response_model=ProjectResponse, name="GetProject")
async def get_project(
    title: str, repository: ProjectRepository = Depends(get_project_repository),
):
    return await get_project_or_404(title, repository)


@router.put("/{title}", response_model=ProjectResponse, name="UpdateProject")
async def update_project(
    title: str,
    request: Request,
    repository: ProjectRepository = Depends(get_project_repository),
):
    """Overwrite the fields present in the body; others keep their values.

    The body is decoded only after the lookup, so an unknown title is a 404
    whatever the body holds.
    """
    project = await get_project_or_404(title, repository)
    body = decode_update(await request.body())
    for field, value in body.changes().items():
        setattr(project, field, value)
    return await repository.save(project)


@router.delete(
    "/{title}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response, name="DeleteProject",
)
async def delete_project(
    title: str, repository: ProjectRepository = Depends(get_project_repository),
):
    """Hard-delete a project."""
    project = await get_project_or_404(title, repository)
    await repository.delete(project)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{title}/archive", response_model=ProjectResponse, name="ArchiveProject",
)
async def archive_project(
    title: str, repository: ProjectRepository = Depends(get_project_repository),
):
    """Archive a project. Archiving an archived project is a no-op."""
    project = await get_project_or_404(title, repository)
    project.status = archive(project.project_status).value
    return await repository.save(project)


@router.put(
    "/{title}/restore", response_model=ProjectResponse, name="RestoreProject",
)
async def restore_project(
    title: str, repository: ProjectRepository = Depends(get_project_repository),
):
    """Restore a project to active. Restoring an active project is a no-op."""
    project = await get_project_or_404(title, repository)
    project.status = restore(project.project_status).value
    return await repository.save(project)
