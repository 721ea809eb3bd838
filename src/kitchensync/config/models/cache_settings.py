"""Response cache configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from kitchensync.shared.constants import CacheConfig


class CacheSettings(BaseModel):
    """Read-through cache configuration."""

    backend: Literal["sqlite", "memory"] = Field(
        default="sqlite",
        description="Cache store backend",
    )
    db_path: str = Field(
        default=CacheConfig.DEFAULT_DB_PATH,
        description="SQLite database file of the sqlite backend",
    )
    ttl_seconds: int = Field(
        default=CacheConfig.DEFAULT_TTL,
        gt=0,
        description="Lifetime of a cached lookup result in seconds",
    )


__all__ = ["CacheSettings"]
