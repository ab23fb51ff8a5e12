# backend/sitzprobe/schemas/__init__.py
from __future__ import annotations

"""
Pydantic schemas for response models.

This module is the API contract layer. It is used by:
- sitzprobe.api.report (HTTP response model)
"""

from typing import Dict

from pydantic import BaseModel, Field


class ReportRead(BaseModel):
    """Probe report as returned by `GET /api/report` and `sitzprobe-report`."""

    frequency: str = Field(examples=["every 60 min"])
    started_at: str = Field(examples=["2024-01-01T00:00:00+0000"])
    runs: int
    successes: int
    failures: int
    stats: Dict[str, int] = Field(default_factory=dict)


class HealthRead(BaseModel):
    status: str
    cycle: int
