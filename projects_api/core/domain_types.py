"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProjectTitle is the business key for every lookup (ids are never exposed as keys)
    - All valid states encoded as Enums: no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProjectTitle = NewType("ProjectTitle", str)


# ─── State Enums ─────────────────────────────────────────────────

class ProjectStatus(str, Enum):
    """Project lifecycle status. Both states are reachable from each other."""
    ACTIVE = "active"
    ARCHIVED = "archived"
