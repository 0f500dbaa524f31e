"""Project Registry API — FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Store (db_manager) and tracer injected through create_app onto app.state;
      no module-level handles are read by request code
    - Global error handlers map ProjectsApiError → {"error": message} responses
    - CORS configured from settings (not hardcoded)

Design Decisions:
    - Lifespan context manager owns logging setup, table bootstrap and engine disposal
    - Module-level `app` built from environment settings for `uvicorn projects_api.main:app`
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from opentelemetry.trace import TracerProvider

from projects_api import __version__
from projects_api.api.error_handlers import register_error_handlers
from projects_api.api.routes import health, projects
from projects_api.config import Settings, get_settings
from projects_api.infrastructure.database import DatabaseSessionManager
from projects_api.infrastructure.observability import setup_logging
from projects_api.infrastructure.tracing import build_tracer, setup_tracing

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    tracer_provider: TracerProvider | None = None,
    db_manager: DatabaseSessionManager | None = None,
) -> FastAPI:
    """Build the application with its store and tracer injected."""
    settings = settings or get_settings()
    if tracer_provider is None:
        tracer_provider = setup_tracing(
            settings.tracing_exporter, settings.service_name,
        )
    if db_manager is None:
        db_manager = DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        if settings.database_create_tables:
            await db_manager.create_tables()
        logger.info("Project Registry API started")
        yield
        logger.info("Project Registry API shutting down")
        await db_manager.close()
        shutdown = getattr(tracer_provider, "shutdown", None)
        if shutdown is not None:
            shutdown()

    app = FastAPI(
        title=settings.service_name, version=__version__, lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_manager = db_manager
    app.state.tracer = build_tracer(tracer_provider)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(projects.router)

    register_error_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "projects_api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
