"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support.

Usage:
    from hexfront.config import CacheSettings, ViewportSettings, DiffSettings

    # Load from environment variables (HEXFRONT_CACHE_*, HEXFRONT_VIEWPORT_*, ...)
    cache_settings = CacheSettings()

    # Or override with explicit values
    cache_settings = CacheSettings(invalidation_cooldown_ms=2000)
"""

from __future__ import annotations

from typing import Literal

try:
    from pydantic import Field
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install pydantic-settings"
    ) from e

SNAPSHOT_UPDATE_INTERVAL_MS = 15 * 60 * 1000
"""Upstream snapshots are generated every 15 minutes."""

INVALIDATION_COOLDOWN_MS = 5_000


class CacheSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the snapshot cache.

    Attributes:
        update_interval_ms: Snapshot validity window, matching the upstream
            refresh cadence. Measured from the snapshot's own created_at.
        invalidation_cooldown_ms: Invalidations closer together than this are
            coalesced into one.

    Environment Variables:
        HEXFRONT_CACHE_UPDATE_INTERVAL_MS
        HEXFRONT_CACHE_INVALIDATION_COOLDOWN_MS
    """

    model_config = SettingsConfigDict(
        env_prefix="HEXFRONT_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    update_interval_ms: int = Field(default=SNAPSHOT_UPDATE_INTERVAL_MS, gt=0)
    invalidation_cooldown_ms: int = Field(default=INVALIDATION_COOLDOWN_MS, ge=0)


class ViewportSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for viewport culling.

    Attributes:
        padding: Draw-space margin added on every side of the viewport.
        frame_interval_s: Delay used by the asyncio frame scheduler.

    Environment Variables:
        HEXFRONT_VIEWPORT_PADDING
        HEXFRONT_VIEWPORT_FRAME_INTERVAL_S
    """

    model_config = SettingsConfigDict(
        env_prefix="HEXFRONT_VIEWPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    padding: float = Field(default=64.0, ge=0.0)
    frame_interval_s: float = Field(default=1 / 60, gt=0.0)


class DiffSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for period diffs.

    Attributes:
        lookback_ms: History fetched beyond the period length so a baseline
            older than the cutoff is available.
        default_period: Period used when the caller does not name one.

    Environment Variables:
        HEXFRONT_DIFF_LOOKBACK_MS
        HEXFRONT_DIFF_DEFAULT_PERIOD
    """

    model_config = SettingsConfigDict(
        env_prefix="HEXFRONT_DIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    lookback_ms: int = Field(default=6 * 60 * 60 * 1000, ge=0)
    default_period: Literal["daily", "weekly"] = "daily"
