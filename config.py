"""Verification settings, environment-driven via pydantic-settings.

Invariants:
    - Every setting has a default; the library works with no environment
    - get_settings() is cached (lru_cache), so one instance per process

Environment variables use the ``DISCRETE_`` prefix, e.g.
``DISCRETE_EXHAUSTIVE_THRESHOLD=64``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Knobs for contract verification and logging."""

    model_config = SettingsConfigDict(
        env_prefix="DISCRETE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Verification domain
    exhaustive_threshold: int = Field(default=64, ge=1)
    sample_count: int = Field(default=2000, ge=1)
    sample_seed: int = 0
    native_sample_bound: int = Field(default=10_000, ge=2)

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format")
    @classmethod
    def known_format(cls, v: str) -> str:
        if v not in ("json", "text"):
            raise ValueError(f"log_format must be 'json' or 'text', got {v!r}")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
