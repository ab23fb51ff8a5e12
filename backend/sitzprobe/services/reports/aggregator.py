from __future__ import annotations

"""backend/sitzprobe/services/reports/aggregator.py

In-memory outcome counters for the probe agent.

One ReportAggregator is created at startup and lives for the whole process.
The scheduler thread is its only writer; the RPC method and the HTTP
endpoint read it through snapshot(). The lock is held only for a single
dict update or copy, so a reader can never stall the probe loop.
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Dict, Mapping

from sitzprobe.models import NON_FAILURE_OUTCOMES, Outcome, outcome_key

STARTED_AT_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def _sum_failures(counters: Mapping[str, int]) -> int:
    return sum(v for k, v in counters.items() if k not in NON_FAILURE_OUTCOMES)


@dataclass(frozen=True)
class ReportSnapshot:
    """Immutable copy of the report state at one point in time."""

    counters: Mapping[str, int]
    interval_minutes: int
    amount_msat: int
    started_at: datetime

    @property
    def runs(self) -> int:
        return self.counters.get(Outcome.RUNS_STARTED.value, 0)

    @property
    def successes(self) -> int:
        return self.counters.get(Outcome.SUCCESS.value, 0)

    @property
    def failures(self) -> int:
        return _sum_failures(self.counters)

    @property
    def frequency(self) -> str:
        return f"every {self.interval_minutes} min"

    @property
    def started_at_iso(self) -> str:
        return self.started_at.strftime(STARTED_AT_FORMAT)


class ReportAggregator:
    """Process-lifetime outcome counters plus the agent's configuration."""

    def __init__(
        self,
        *,
        interval_minutes: int,
        amount_msat: int,
        started_at: datetime | None = None,
    ) -> None:
        self.interval_minutes = interval_minutes
        self.amount_msat = amount_msat
        self.started_at = (started_at or datetime.now(timezone.utc)).astimezone(timezone.utc)
        self._counters: Dict[str, int] = {}
        self._lock = threading.Lock()

    def increment(self, symbol: Outcome | str) -> int:
        """Add one to `symbol`'s counter, creating it if unseen. Returns the new count."""
        key = outcome_key(symbol)
        with self._lock:
            value = self._counters.get(key, 0) + 1
            self._counters[key] = value
        return value

    def count(self, symbol: Outcome | str) -> int:
        with self._lock:
            return self._counters.get(outcome_key(symbol), 0)

    def counters(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counters)

    def failures(self) -> int:
        """Sum of every counter except success and runs_started, from current values."""
        return _sum_failures(self.counters())

    def snapshot(self) -> ReportSnapshot:
        return ReportSnapshot(
            counters=MappingProxyType(self.counters()),
            interval_minutes=self.interval_minutes,
            amount_msat=self.amount_msat,
            started_at=self.started_at,
        )
