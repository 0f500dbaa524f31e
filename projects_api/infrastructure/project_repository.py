"""SQL Project Repository — SQLAlchemy implementation of ProjectRepository.

Invariants:
    - One repository per request, bound to that request's AsyncSession
    - save() and delete() commit immediately (single-statement unit of work)
    - Any SQLAlchemyError is rolled back and re-raised as DatabaseError
    - Every call runs in a child span of the current request span
"""

import logging
from contextlib import contextmanager
from typing import Iterator, NoReturn

from fastapi import Depends, Request
from opentelemetry.trace import Span, SpanKind, Tracer
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from projects_api.core.domain_types import ProjectTitle
from projects_api.infrastructure.database import get_db, to_database_error
from projects_api.infrastructure.tracing import get_request_tracer
from projects_api.models.project import Project

logger = logging.getLogger(__name__)


class SqlProjectRepository:
    """Project persistence over an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession, tracer: Tracer):
        self._session = session
        self._tracer = tracer

    @contextmanager
    def _span(self, operation: str, title: str | None = None) -> Iterator[Span]:
        with self._tracer.start_as_current_span(
            f"ProjectRepository.{operation}", kind=SpanKind.CLIENT,
        ) as span:
            span.set_attribute("db.operation.name", operation)
            span.set_attribute("db.collection.name", Project.__tablename__)
            if title is not None:
                span.set_attribute("project.title", title)
            yield span

    async def _fail(self, exc: SQLAlchemyError, operation: str) -> NoReturn:
        await self._session.rollback()
        raise to_database_error(exc, operation) from exc

    async def find_all(self) -> list[Project]:
        with self._span("find_all") as span:
            try:
                result = await self._session.execute(
                    select(Project).order_by(Project.id),
                )
            except SQLAlchemyError as e:
                await self._fail(e, "find_all")
            projects = list(result.scalars().all())
            span.set_attribute("db.response.returned_rows", len(projects))
            return projects

    async def find_by_title(self, title: ProjectTitle) -> Project | None:
        with self._span("find_by_title", title):
            try:
                result = await self._session.execute(
                    select(Project).where(Project.title == title),
                )
                return result.scalar_one_or_none()
            except SQLAlchemyError as e:
                await self._fail(e, "find_by_title")

    async def save(self, project: Project) -> Project:
        with self._span("save", project.title):
            try:
                self._session.add(project)
                await self._session.commit()
                await self._session.refresh(project)
            except SQLAlchemyError as e:
                await self._fail(e, "save")
            logger.info(
                f"Saved project {project.title!r}",
                extra={"project_title": project.title, "operation": "save"},
            )
            return project

    async def delete(self, project: Project) -> None:
        with self._span("delete", project.title):
            try:
                await self._session.delete(project)
                await self._session.commit()
            except SQLAlchemyError as e:
                await self._fail(e, "delete")
            logger.info(
                f"Deleted project {project.title!r}",
                extra={"project_title": project.title, "operation": "delete"},
            )


def get_project_repository(
    request: Request, db: AsyncSession = Depends(get_db),
) -> SqlProjectRepository:
    """FastAPI dependency: repository bound to the request session and app tracer."""
    return SqlProjectRepository(db, get_request_tracer(request))
