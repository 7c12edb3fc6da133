"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database
os.environ.setdefault(
    "POSTGRES_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("BACKEND_URL", "http://sanitas.test")
os.environ.setdefault("LOG_FORMAT", "text")
