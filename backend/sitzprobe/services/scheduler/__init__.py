# backend/sitzprobe/services/scheduler/__init__.py
from __future__ import annotations

"""
Probe scheduler package.

This package provides:
- ProbeScheduler, the self-rescheduling probe loop (runner.py)
- A high-level build_scheduler(host, aggregator, settings) helper

The host adapter is injected by the caller; the plugin entrypoint passes a
LightningHost, tests pass a scripted fake.
"""

import random
import time

from sitzprobe.config import Settings
from sitzprobe.services.host.base import HostNodeProtocol
from sitzprobe.services.reports.aggregator import ReportAggregator
from sitzprobe.services.statsig_client import StatsigAdapter

from .runner import ProbeScheduler  # noqa: F401


def build_scheduler(
    host: HostNodeProtocol,
    aggregator: ReportAggregator,
    settings: Settings,
    telemetry: StatsigAdapter | None = None,
) -> ProbeScheduler:
    """
    Wire a ProbeScheduler from settings.

    One random source is seeded here and shared by target selection and
    payment handle generation.
    """
    seed = settings.random_seed if settings.random_seed is not None else time.time_ns()
    return ProbeScheduler(
        host,
        aggregator,
        amount_msat=settings.probe_amount_msat,
        interval_seconds=settings.probe_interval_seconds,
        rng=random.Random(seed),
        max_hops=settings.max_hops,
        max_channel_draws=settings.max_channel_draws,
        telemetry=telemetry,
    )
