"""Project ORM — persisted representation of a Project resource.

Invariants:
    - title is UNIQUE and non-nullable: the lookup key for every handler
    - status is one of ProjectStatus values, default "active"
    - created_at/updated_at are managed here, never by request bodies
    - No behavior on the entity: status transitions live in core/project_status.py
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from projects_api.core.domain_types import ProjectStatus
from projects_api.core.project_status import INITIAL_STATUS
from projects_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    """A project, addressed by its unique title."""
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=INITIAL_STATUS.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    @property
    def project_status(self) -> ProjectStatus:
        return ProjectStatus(self.status)

    def __repr__(self) -> str:
        return f"<Project id={self.id} title={self.title!r} status={self.status}>"
