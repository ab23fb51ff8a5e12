from __future__ import annotations

"""backend/sitzprobe/services/scheduler/runner.py

Core probe loop orchestration.

Responsibilities:
- Run one probe cycle: pick a target, dispatch a probe, classify the result
- Record exactly one outcome per cycle (plus `runs_started`) in the aggregator
- Sleep for the configured interval and start the next cycle, forever

Cycles never overlap: the next cycle is only started after the current one
has recorded its outcome, and the whole sequence runs on a single thread as
an explicit loop. A failure inside a cycle ends that cycle only; nothing is
retried and nothing stops the loop.
"""

import logging
import random
import threading
import time
from typing import Callable, Optional

from sitzprobe.config.settings import DEFAULT_MAX_CHANNEL_DRAWS, DEFAULT_MAX_HOPS
from sitzprobe.models import DispatchStatus, Outcome, outcome_key
from sitzprobe.services.diagnostics.outcome_classifier import classify_payment_failure
from sitzprobe.services.host.base import ChannelsUnavailable, HostNodeProtocol
from sitzprobe.services.prober.dispatcher import ProbeDispatcher
from sitzprobe.services.prober.selector import select_active_channel
from sitzprobe.services.reports.aggregator import ReportAggregator
from sitzprobe.services.statsig_client import StatsigAdapter

logger = logging.getLogger(__name__)


class ProbeScheduler:
    """Self-rescheduling probe loop."""

    def __init__(
        self,
        host: HostNodeProtocol,
        aggregator: ReportAggregator,
        *,
        amount_msat: int,
        interval_seconds: float,
        rng: random.Random,
        max_hops: int = DEFAULT_MAX_HOPS,
        max_channel_draws: int = DEFAULT_MAX_CHANNEL_DRAWS,
        telemetry: StatsigAdapter | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.host = host
        self.aggregator = aggregator
        self.interval_seconds = interval_seconds
        self.rng = rng
        self.max_channel_draws = max_channel_draws
        self.telemetry = telemetry
        self._sleep = sleep
        self.dispatcher = ProbeDispatcher(
            host, amount_msat=amount_msat, rng=rng, max_hops=max_hops
        )
        # Number of the cycle currently running or last completed; 0 before start.
        self.cycle = 0
        self._thread: threading.Thread | None = None

    def _record(self, cycle: int, symbol: Outcome | str) -> str:
        key = outcome_key(symbol)
        self.aggregator.increment(key)
        if self.telemetry is not None:
            self.telemetry.log_probe_outcome(key, cycle=cycle)
        return key

    def _probe(self, cycle: int) -> Outcome | str:
        try:
            channels = self.host.list_channels()
        except ChannelsUnavailable as exc:
            logger.warning("(RUN%d)Unable to fetch channel list: %s", cycle, exc.message)
            return Outcome.CHANNELS_UNAVAILABLE

        channel = select_active_channel(channels, self.rng, self.max_channel_draws)
        if channel is None:
            logger.warning(
                "(RUN%d)Unable to find active channel out of %d channels", cycle, len(channels)
            )
            return Outcome.NO_ACTIVE_CHANNEL_FOUND

        result = self.dispatcher.probe(channel.destination)

        if result.status == DispatchStatus.ABORTED:
            if result.outcome == Outcome.NO_ROUTE_FOUND:
                logger.warning(
                    "(RUN%d)Unable to find route to node id %s: %s",
                    cycle,
                    channel.destination,
                    result.detail,
                )
            else:
                logger.warning(
                    "(RUN%d)Unable to send payment along route: %s", cycle, result.detail
                )
            return result.outcome or Outcome.UNKNOWN_ERROR

        if result.status == DispatchStatus.SUCCEEDED:
            logger.warning(
                "(RUN%d)Probe payment unexpectedly succeeded. Peer %s reached",
                cycle,
                result.detail,
            )
            return Outcome.SUCCESS

        logger.info("(RUN%d)Payment failed as expected: %s", cycle, result.failure_message)
        return classify_payment_failure(result.failure_message)

    def run_cycle(self, cycle: int) -> str:
        """Run one full probe cycle and return the outcome symbol recorded for it."""
        self.cycle = cycle
        self._record(cycle, Outcome.RUNS_STARTED)
        try:
            outcome = self._probe(cycle)
        except Exception as exc:  # noqa: BLE001
            logger.exception("(RUN%d)Probe cycle crashed: %s", cycle, exc)
            outcome = Outcome.UNKNOWN_ERROR
        symbol = self._record(cycle, outcome)
        logger.info("(RUN%d)Recorded outcome %s", cycle, symbol)
        return symbol

    def run_forever(self, max_cycles: Optional[int] = None) -> None:
        """Probe immediately, then once per interval.

        `max_cycles` bounds the loop for tooling and tests; the plugin runs
        with no bound.
        """
        cycle = 1
        while True:
            self.run_cycle(cycle)
            if max_cycles is not None and cycle >= max_cycles:
                return
            logger.debug(
                "(RUN%d)Next probe in %.0f seconds", cycle, self.interval_seconds
            )
            self._sleep(self.interval_seconds)
            cycle += 1

    def start(self) -> threading.Thread:
        """Run the loop on a daemon thread; it lives until the process exits."""
        if self._thread is not None and self._thread.is_alive():
            return self._thread
        thread = threading.Thread(
            target=self.run_forever, name="sitzprobe-scheduler", daemon=True
        )
        thread.start()
        self._thread = thread
        return thread
