# backend/sitzprobe/services/reports/__init__.py
from __future__ import annotations

"""
Reporting utilities for probe outcomes.

This package provides:
- ReportAggregator: thread-safe counters keyed by outcome symbol
- ReportSnapshot: immutable view handed to readers

High-level helpers exposed:

- build_report(snapshot) -> dict
- build_report_from_aggregator(aggregator) -> dict
"""

from .aggregator import ReportAggregator, ReportSnapshot  # noqa: F401
from .summary import build_report, build_report_from_aggregator  # noqa: F401
