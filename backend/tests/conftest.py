"""Root conftest — shared test configuration."""

import os

# Tests never touch a real Postgres; the engine under test is in-memory SQLite
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
