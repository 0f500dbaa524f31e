"""API test fixtures — in-memory SQLite store, recording tracer, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with tables created
    - Store and tracer are injected through create_app, exactly as in production
    - span_exporter collects every finished span of the test's app
"""

import pytest
from httpx import ASGITransport, AsyncClient
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from projects_api.config import Settings
from projects_api.infrastructure.database import DatabaseSessionManager
from projects_api.main import create_app
from projects_api.models.project import Project


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        database_create_tables=False,
        tracing_exporter="none",
        log_format="text",
    )


@pytest.fixture
async def db_manager(settings):
    manager = DatabaseSessionManager(settings.database_url)
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
def span_exporter():
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(span_exporter):
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider


@pytest.fixture
def app(settings, tracer_provider, db_manager):
    return create_app(
        settings=settings, tracer_provider=tracer_provider, db_manager=db_manager,
    )


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def seed_project(db_manager):
    """Insert a project directly into the test DB."""
    async with db_manager.session() as db:
        project = Project(title="seeded", description="from fixture")
        db.add(project)
        await db.commit()
        await db.refresh(project)
        return project
