"""Lightweight Statsig integration for probe outcome events."""
from __future__ import annotations

import logging
from typing import Any

from statsig.statsig_event import StatsigEvent
from statsig.statsig_options import StatsigOptions
from statsig.statsig_server import StatsigServer
from statsig.statsig_user import StatsigUser

logger = logging.getLogger(__name__)

PROBE_OUTCOME_EVENT = "probe_outcome"


class StatsigAdapter:
    def __init__(self, secret_key: str | None, environment: str, *, node_id: str = "sitzprobe"):
        self._client: StatsigServer | None = None
        self.node_id = node_id
        if not secret_key:
            return

        try:
            client = StatsigServer()
            client.initialize(secret_key, StatsigOptions(environment={"tier": environment}))
            self._client = client
        except Exception as exc:  # noqa: BLE001
            logger.warning("Statsig initialization failed: %s", exc)
            self._client = None

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def log_event(
        self,
        *,
        event_name: str,
        value: float | int | str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        if not self._client:
            return

        try:
            self._client.log_event(
                StatsigEvent(StatsigUser(self.node_id), event_name, value=value, metadata=metadata)
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("Statsig event failed: %s", exc)

    def log_probe_outcome(self, symbol: str, *, cycle: int) -> None:
        self.log_event(
            event_name=PROBE_OUTCOME_EVENT,
            value=symbol,
            metadata={"cycle": str(cycle)},
        )

    def shutdown(self) -> None:
        if not self._client:
            return

        try:
            self._client.shutdown()
        except Exception as exc:  # noqa: BLE001
            logger.debug("Statsig shutdown failed: %s", exc)
