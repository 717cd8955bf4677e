"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All connection strings come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Id range is half-open: instance_id_min <= id < instance_id_max

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - redis_url also read from KV_URL: Vercel KV / Upstash expose the Redis URL under that name
    - Defaults provided for all settings: works out-of-the-box against a local Redis
"""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    store_backend: Literal["redis", "memory"] = "redis"
    redis_url: str = Field(
        "redis://localhost:6379/0",
        validation_alias=AliasChoices("redis_url", "kv_url"),
    )
    redis_timeout_seconds: float = 5.0

    @field_validator("redis_url", mode="before")
    @classmethod
    def require_redis_scheme(cls, v: str) -> str:
        """Only Redis-protocol URLs; the KV REST endpoint (https://) is not supported."""
        if isinstance(v, str) and not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("redis_url must use redis://, rediss:// or unix://")
        return v

    # Instances
    instance_ttl_seconds: int = Field(600, gt=0)
    instance_key_prefix: str = "instance:"
    instance_id_min: int = Field(100_000, ge=0)
    # Request ids are at most 16 digits (schemas/instance.py)
    instance_id_max: int = Field(1_000_000, le=10**16)
    create_max_attempts: int = Field(1, ge=1, le=10)

    @model_validator(mode="after")
    def check_id_range(self):
        if self.instance_id_min >= self.instance_id_max:
            raise ValueError("instance_id_min must be below instance_id_max")
        return self

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
