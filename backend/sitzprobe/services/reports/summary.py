# backend/sitzprobe/services/reports/summary.py
from __future__ import annotations

"""
Report payload shared by the `sitzprobe-report` RPC method and the HTTP
`/api/report` endpoint.

Keys:
- frequency: human-readable probe interval ("every 60 min")
- started_at: process start time, ISO-8601 with UTC offset
- runs / successes / failures: headline numbers
- stats: every counter, including dynamically discovered failure codes
"""

from typing import Any, Dict

from sitzprobe.services.reports.aggregator import ReportAggregator, ReportSnapshot


def build_report(snapshot: ReportSnapshot) -> Dict[str, Any]:
    return {
        "frequency": snapshot.frequency,
        "started_at": snapshot.started_at_iso,
        "runs": snapshot.runs,
        "successes": snapshot.successes,
        "failures": snapshot.failures,
        "stats": dict(snapshot.counters),
    }


def build_report_from_aggregator(aggregator: ReportAggregator) -> Dict[str, Any]:
    """Take a fresh snapshot and render it."""
    return build_report(aggregator.snapshot())
