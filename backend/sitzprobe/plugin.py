#!/usr/bin/env python3
"""Core Lightning plugin that continuously probes the node's routing ability.

On startup the plugin begins a probe loop: every `sitzprobe-freq` minutes
it picks a random active channel from the gossip view, asks lightningd for
a route to its destination and sends a payment with a random
`payment_hash`. Nobody holds the preimage, so a healthy route ends with the
destination rejecting the payment (WIRE_INCORRECT_OR_UNKNOWN_PAYMENT_DETAILS)
and no funds move. Every other failure code is counted on its own.

Counters live in memory only and are reset when the plugin restarts:

```bash
lightning-cli sitzprobe-report
```

Setting SITZPROBE_HTTP_PORT also serves the same report at
`GET /api/report`.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from pyln.client import Plugin

from sitzprobe.config import Settings
from sitzprobe.config.settings import DEFAULT_AMOUNT_MSAT, DEFAULT_INTERVAL_MINUTES
from sitzprobe.main import create_app, serve_in_background
from sitzprobe.services.host.lightning import LightningHost
from sitzprobe.services.reports import ReportAggregator, build_report_from_aggregator
from sitzprobe.services.scheduler import ProbeScheduler, build_scheduler
from sitzprobe.services.statsig_client import StatsigAdapter

FREQUENCY_OPTION = "sitzprobe-freq"
AMOUNT_OPTION = "sitzprobe-amt"
REPORT_METHOD = "sitzprobe-report"

_LEVELS = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}

logger = logging.getLogger("sitzprobe")
plugin = Plugin(autopatch=False)


class PluginLogHandler(logging.Handler):
    """Forward log records to lightningd's log via plugin.log."""

    def __init__(self, target: Plugin) -> None:
        super().__init__()
        self.target = target

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _LEVELS.get(record.levelno, "info")
            self.target.log(self.format(record), level=level)
        except Exception:  # noqa: BLE001
            self.handleError(record)


def configure_logging(target: Plugin, level: int = logging.INFO) -> None:
    handler = PluginLogHandler(target)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.handlers = [handler]
    logger.setLevel(level)
    logger.propagate = False


def settings_from_options(options: Mapping[str, Any]) -> Settings:
    """Build settings with the plugin options layered over the environment."""
    return Settings(
        probe_interval_minutes=options.get(FREQUENCY_OPTION, DEFAULT_INTERVAL_MINUTES),
        probe_amount_msat=options.get(AMOUNT_OPTION, DEFAULT_AMOUNT_MSAT),
    )


def start_agent(rpc: Any, settings: Settings) -> tuple[ReportAggregator, ProbeScheduler]:
    """Create the report state and probe loop for `rpc` and start probing."""
    aggregator = ReportAggregator(
        interval_minutes=settings.probe_interval_minutes,
        amount_msat=settings.probe_amount_msat,
    )
    telemetry = StatsigAdapter(settings.statsig_server_secret, settings.environment)
    host = LightningHost(rpc, riskfactor=settings.route_riskfactor)
    scheduler = build_scheduler(host, aggregator, settings, telemetry=telemetry)
    scheduler.start()

    if settings.http_port > 0:
        app = create_app(aggregator, settings=settings, scheduler=scheduler)
        serve_in_background(app, host=settings.http_host, port=settings.http_port)
        logger.info("Serving probe report on %s:%d", settings.http_host, settings.http_port)

    return aggregator, scheduler


@plugin.init()
def init(options, configuration, plugin, **kwargs):
    configure_logging(plugin)
    settings = settings_from_options(options)
    plugin.aggregator, plugin.scheduler = start_agent(plugin.rpc, settings)
    logger.info(
        "sitzprobe started: probing every %d min with %d msat",
        settings.probe_interval_minutes,
        settings.probe_amount_msat,
    )


@plugin.method(
    REPORT_METHOD,
    desc="Print a probe report",
    long_desc="Returns a set of metrics around probes, including failures and successes",
)
def report(plugin, **kwargs) -> Dict[str, Any]:
    return build_report_from_aggregator(plugin.aggregator)


plugin.add_option(
    FREQUENCY_OPTION,
    str(DEFAULT_INTERVAL_MINUTES),
    "Interval to run sitzprobe on, in minutes",
)
plugin.add_option(
    AMOUNT_OPTION,
    str(DEFAULT_AMOUNT_MSAT),
    "Amount to probe with, in millisatoshis",
)


def main() -> None:
    plugin.run()


if __name__ == "__main__":
    main()
