# backend/sitzprobe/models/__init__.py
from __future__ import annotations

"""
Core in-memory models for the probe agent.

This module is pure data and has no dependencies on the rest of the package.

It is used by:
- sitzprobe.services.host (Channel, Route, PaymentResult)
- sitzprobe.services.prober (ProbeAttempt, DispatchResult)
- sitzprobe.services.diagnostics / reports / scheduler (Outcome)

Models:
- Outcome: the fixed part of the outcome taxonomy
- Channel: a channel the node can route through
- Route: a host-computed path to a destination
- ProbeAttempt: one dispatch-and-wait cycle's payment handle + route
- PaymentResult: terminal state reported by the host for a payment
- DispatchResult: what the dispatcher hands back to the scheduler
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class Outcome(str, enum.Enum):
    # NOTE: anything added here that is not a failure must also be excluded
    # in ReportAggregator.failures().
    SUCCESS = "success"
    NO_ACTIVE_CHANNEL_FOUND = "no_active_channel_found"
    CHANNELS_UNAVAILABLE = "channels_unavailable"
    NO_ROUTE_FOUND = "no_route_found"
    SENDPAY_CALL_FAILED = "sendpay_call_failed"
    RUNS_STARTED = "runs_started"
    UNKNOWN_ERROR = "unknown_error"


NON_FAILURE_OUTCOMES = frozenset({Outcome.SUCCESS.value, Outcome.RUNS_STARTED.value})


def outcome_key(symbol: Outcome | str) -> str:
    """Return the plain string counter key for an Outcome or a raw token."""
    if isinstance(symbol, Outcome):
        return symbol.value
    return str(symbol)


@dataclass(frozen=True)
class Channel:
    """A channel as reported by the host. Read-only to us."""

    destination: str
    active: bool
    short_channel_id: str | None = None


@dataclass(frozen=True)
class Route:
    """Ordered hops towards `destination`; hop dicts are passed back to the host as-is."""

    destination: str
    amount_msat: int
    hops: List[Dict[str, Any]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.hops)


@dataclass(frozen=True)
class ProbeAttempt:
    payment_handle: str
    route: Route
    amount_msat: int


@dataclass(frozen=True)
class PaymentResult:
    """Terminal state of a probe payment.

    `succeeded` is only ever true when the destination somehow accepted a
    fabricated payment handle.
    """

    succeeded: bool
    destination: Optional[str] = None
    failure_message: Optional[str] = None


class DispatchStatus(str, enum.Enum):
    SUCCEEDED = "SUCCEEDED"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    ABORTED = "ABORTED"


@dataclass(frozen=True)
class DispatchResult:
    """Result of one dispatcher run.

    - SUCCEEDED: the payment resolved successfully (anomalous)
    - PAYMENT_FAILED: `failure_message` holds the raw message to classify
    - ABORTED: `outcome` holds the failure kind to record directly
    """

    status: DispatchStatus
    outcome: Optional[Outcome] = None
    failure_message: Optional[str] = None
    attempt: Optional[ProbeAttempt] = None
    detail: Optional[str] = None

    @classmethod
    def aborted(
        cls,
        outcome: Outcome,
        detail: str | None = None,
        attempt: ProbeAttempt | None = None,
    ) -> "DispatchResult":
        return cls(status=DispatchStatus.ABORTED, outcome=outcome, detail=detail, attempt=attempt)
