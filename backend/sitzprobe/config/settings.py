from __future__ import annotations

"""backend/sitzprobe/config/settings.py

Agent configuration using environment-driven settings.

This module centralizes:
- probe cadence (interval in minutes) and probe amount (millisatoshis)
- route / target-selection bounds (max hops, random draw budget)
- the optional HTTP report server binding
- the optional Statsig telemetry key

Environment variables use the SITZPROBE_ prefix, e.g.
SITZPROBE_PROBE_INTERVAL_MINUTES=15. When running inside lightningd the
plugin options `sitzprobe-freq` / `sitzprobe-amt` are fed through the same
class, so bad values get the same fallback-with-warning treatment.
"""

import logging
from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MINUTES = 60
DEFAULT_AMOUNT_MSAT = 1
DEFAULT_MAX_HOPS = 5
DEFAULT_MAX_CHANNEL_DRAWS = 1000


def parse_interval(raw: Any) -> int:
    """Parse a probe interval in minutes, falling back to the default.

    Non-numeric and non-positive values are rejected with a logged warning.
    """
    try:
        minutes = int(str(raw).strip())
    except (TypeError, ValueError):
        logger.warning(
            "Invalid frequency set (%s), defaulting to %d", raw, DEFAULT_INTERVAL_MINUTES
        )
        return DEFAULT_INTERVAL_MINUTES
    if minutes <= 0:
        logger.warning(
            "Invalid frequency set (%s), defaulting to %d", raw, DEFAULT_INTERVAL_MINUTES
        )
        return DEFAULT_INTERVAL_MINUTES
    return minutes


def parse_amount(raw: Any) -> int:
    """Parse a probe amount in millisatoshis, falling back to the default."""
    try:
        amount = int(str(raw).strip())
    except (TypeError, ValueError):
        amount = -1
    if amount < 0:
        logger.warning("Invalid amount set (%s), defaulting to %d", raw, DEFAULT_AMOUNT_MSAT)
        return DEFAULT_AMOUNT_MSAT
    return amount


class Settings(BaseSettings):
    app_name: str = "sitzprobe"
    environment: str = "development"

    # Probe cadence / size
    probe_interval_minutes: int = DEFAULT_INTERVAL_MINUTES
    probe_amount_msat: int = DEFAULT_AMOUNT_MSAT

    # Routing / selection bounds
    max_hops: int = DEFAULT_MAX_HOPS
    max_channel_draws: int = DEFAULT_MAX_CHANNEL_DRAWS
    route_riskfactor: int = 1

    # Shared seed for target selection and payment handles; None seeds from time
    random_seed: int | None = None

    # HTTP report server; port 0 keeps it off
    http_host: str = "127.0.0.1"
    http_port: int = 0

    # Telemetry
    statsig_server_secret: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="SITZPROBE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("probe_interval_minutes", mode="before")
    @classmethod
    def _validate_interval(cls, value: Any) -> int:
        return parse_interval(value)

    @field_validator("probe_amount_msat", mode="before")
    @classmethod
    def _validate_amount(cls, value: Any) -> int:
        return parse_amount(value)

    @property
    def probe_interval_seconds(self) -> float:
        return float(self.probe_interval_minutes * 60)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
