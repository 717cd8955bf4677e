"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real Redis
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("LOG_FORMAT", "text")
