"""Project Status Transitions — pure functions over ProjectStatus.

Invariants:
    - archive() always yields ARCHIVED, restore() always yields ACTIVE
    - Both transitions are idempotent and defined for every current status
    - Initial status for a new project is ACTIVE
"""

from projects_api.core.domain_types import ProjectStatus

INITIAL_STATUS = ProjectStatus.ACTIVE


def archive(current: ProjectStatus) -> ProjectStatus:
    """Status after archiving a project in `current` state."""
    return ProjectStatus.ARCHIVED


def restore(current: ProjectStatus) -> ProjectStatus:
    """Status after restoring a project in `current` state."""
    return ProjectStatus.ACTIVE
