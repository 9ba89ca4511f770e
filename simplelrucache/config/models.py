"""Config models and loader.

This module defines Pydantic models for file- and environment-based cache
configuration. JSON files are parsed with `orjson`. Validation failures
surface as :class:`pydantic.ValidationError`, which is a ``ValueError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import orjson
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

Reference = Literal["strong", "weak"]


class CacheConfig(BaseModel):
    """Configuration for a single cache.

    Attributes
    ----------
    name: str
        Identifier used in log records.
    ttl_seconds: float
        Default time-to-live for entries, strictly positive.
    max_size: int
        Capacity of the LRU store.
    reference: str
        Entry reference strength, "strong" or "weak".
    compute_once: bool
        Serialise get-or-compute per key.
    """

    name: str = Field("default", description="Cache identifier for logs")
    ttl_seconds: float = Field(300.0, gt=0, description="Default entry TTL")
    max_size: int = Field(1024, ge=1, description="Maximum number of entries")
    reference: Reference = Field("strong", description="Entry reference strength")
    compute_once: bool = Field(
        False, description="Run suppliers at most once per key and miss"
    )

    @staticmethod
    def load(path: Path) -> "CacheConfig":
        """Load cache config from a JSON file."""
        data = orjson.loads(path.read_bytes())
        return CacheConfig.model_validate(data)


class CacheSettings(BaseSettings):
    """Environment-driven settings and .env support.

    Attributes
    ----------
    log_level: str
        Logging level name (e.g., "DEBUG", "INFO"). Defaults to "INFO".
    name, ttl_seconds, max_size, reference, compute_once
        Same meaning as on :class:`CacheConfig`.
    """

    model_config = SettingsConfigDict(env_file=".env", env_prefix="SIMPLE_LRU_CACHE_")

    log_level: str = Field("INFO")
    name: str = Field("default")
    ttl_seconds: float = Field(300.0, gt=0)
    max_size: int = Field(1024, ge=1)
    reference: Reference = Field("strong")
    compute_once: bool = Field(False)

    def to_cache_config(self) -> CacheConfig:
        """Project the cache-related settings onto a :class:`CacheConfig`."""
        return CacheConfig(
            name=self.name,
            ttl_seconds=self.ttl_seconds,
            max_size=self.max_size,
            reference=self.reference,
            compute_once=self.compute_once,
        )
