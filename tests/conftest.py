"""Root conftest — shared test configuration."""

import os

# Module-level app in projects_api.main is built from the environment on import
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_CREATE_TABLES", "false")
os.environ.setdefault("TRACING_EXPORTER", "none")
os.environ.setdefault("LOG_FORMAT", "text")
