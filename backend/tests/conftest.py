"""Root conftest — shared test configuration."""

import os

# Never sign test credentials with a real secret or touch a real database
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")
