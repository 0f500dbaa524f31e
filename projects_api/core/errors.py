"""Error Hierarchy — typed, categorized exceptions for all Project Registry failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
      and the HTTP status it maps to
    - to_response() always produces {"error": "<message>"} (plus optional details)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ProjectsApiError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and spans."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    project_title: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class ProjectsApiError(Exception):
    """Base exception for all Project Registry errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.message}

    def log_extra(self) -> dict:
        """Structured fields for logger.*(extra=...)."""
        return {
            "error_code": self.code,
            "project_title": self.context.project_title,
            "operation": self.context.operation,
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class RequestDecodeError(ProjectsApiError):
    """Request body is not valid JSON or does not match the Project shape."""
    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Invalid request body: {message}",
            "DECODE_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.details = details or []

    @classmethod
    def from_errors(cls, errors: list[dict]) -> "RequestDecodeError":
        """Summarize Pydantic error dicts: first problem in the message, all in details.

        JSON syntax errors get a fixed message; their byte offset is dropped
        from the field path.
        """
        details = []
        for e in errors:
            loc = e.get("loc", ())
            if e.get("type") == "json_invalid":
                loc = [part for part in loc if not isinstance(part, int)]
            details.append({
                "field": ".".join(str(part) for part in loc),
                "message": e.get("msg", ""),
                "type": e.get("type", ""),
            })
        if not details:
            return cls("malformed request")
        first = details[0]
        if first["type"] == "json_invalid":
            summary = "malformed JSON"
        elif first["field"]:
            summary = f"{first['field']}: {first['message']}"
        else:
            summary = first["message"]
        return cls(summary, details)

    def to_response(self) -> dict:
        response = super().to_response()
        if self.details:
            response["details"] = self.details
        return response


class ResourceNotFoundError(ProjectsApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_key: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_key}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_key = resource_key


class ProjectNotFoundError(ResourceNotFoundError):
    """No project has the requested title."""
    def __init__(self, title: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.project_title = title
        super().__init__("Project", title, ctx)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ProjectsApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
