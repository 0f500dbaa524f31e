"""Error Handlers — global exception handlers for the Project Registry API.

Invariants:
    - ProjectsApiError → its http_status with {"error": message}
    - RequestValidationError (bad JSON, wrong shape) → 400 via RequestDecodeError
    - Exception (catch-all) → 500, never leaks internal details
    - 4xx logged at WARNING, 5xx at ERROR, with error_code and path extras
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from projects_api.core.errors import ProjectsApiError, RequestDecodeError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _log_error(exc: ProjectsApiError, request: Request) -> None:
    extra = {**exc.log_extra(), "path": request.url.path}
    if exc.http_status >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}", extra=extra)
    else:
        logger.warning(f"{type(exc).__name__}: {exc.message}", extra=extra)


def _register_domain_error_handler(app: FastAPI) -> None:
    @app.exception_handler(ProjectsApiError)
    async def projects_error_handler(request: Request, exc: ProjectsApiError):
        """Handle all Project Registry domain/infrastructure errors."""
        _log_error(exc, request)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Undecodable or invalid request bodies become 400 decode errors."""
        decode_error = build_decode_error(exc)
        _log_error(decode_error, request)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=decode_error.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "An unexpected error occurred"},
        )


def build_decode_error(exc: RequestValidationError) -> RequestDecodeError:
    return RequestDecodeError.from_errors(exc.errors())
