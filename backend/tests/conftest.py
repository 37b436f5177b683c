"""Root conftest — shared test configuration."""

import os

# Must be set before app.config.get_settings() is first called
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
