# backend/tests/test_plugin.py
import logging

import pytest

from sitzprobe.plugin import (
    AMOUNT_OPTION,
    FREQUENCY_OPTION,
    REPORT_METHOD,
    PluginLogHandler,
    plugin,
    report,
    settings_from_options,
)


class RecordingPlugin:
    """Stand-in for pyln's Plugin: records plugin.log calls, holds an aggregator."""

    def __init__(self, aggregator=None):
        self.aggregator = aggregator
        self.lines = []

    def log(self, message, level="info"):
        self.lines.append((level, message))


def test_options_and_report_method_are_registered():
    assert FREQUENCY_OPTION in plugin.options
    assert AMOUNT_OPTION in plugin.options
    assert REPORT_METHOD in plugin.methods


def test_unparsable_frequency_option_falls_back(caplog):
    with caplog.at_level(logging.WARNING):
        settings = settings_from_options({FREQUENCY_OPTION: "abc", AMOUNT_OPTION: "5"})
    assert settings.probe_interval_minutes == 60
    assert settings.probe_amount_msat == 5
    assert "Invalid frequency set (abc), defaulting to 60" in caplog.text


def test_options_override_environment(monkeypatch):
    monkeypatch.setenv("SITZPROBE_PROBE_INTERVAL_MINUTES", "30")
    monkeypatch.setenv("SITZPROBE_MAX_HOPS", "4")
    settings = settings_from_options({FREQUENCY_OPTION: "10", AMOUNT_OPTION: "1000"})
    assert settings.probe_interval_minutes == 10
    assert settings.probe_amount_msat == 1000
    assert settings.max_hops == 4


def test_missing_options_use_defaults():
    settings = settings_from_options({})
    assert settings.probe_interval_minutes == 60
    assert settings.probe_amount_msat == 1


@pytest.mark.parametrize(
    "level, expected",
    [
        (logging.DEBUG, "debug"),
        (logging.INFO, "info"),
        (logging.WARNING, "warn"),
        (logging.ERROR, "error"),
        (logging.CRITICAL, "error"),
    ],
)
def test_log_handler_maps_levels(level, expected):
    target = RecordingPlugin()
    handler = PluginLogHandler(target)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    log = logging.getLogger("sitzprobe.tests.forwarding")
    log.handlers = [handler]
    log.setLevel(logging.DEBUG)
    log.propagate = False
    try:
        log.log(level, "(RUN%d)Unable to fetch channel list", 4)
    finally:
        log.handlers = []
        log.propagate = True

    assert target.lines == [
        (expected, "sitzprobe.tests.forwarding: (RUN4)Unable to fetch channel list")
    ]


def test_report_method_payload(aggregator):
    for symbol in ["runs_started", "runs_started", "success", "WIRE_UNKNOWN_NEXT_PEER"]:
        aggregator.increment(symbol)

    assert report(RecordingPlugin(aggregator)) == {
        "frequency": "every 60 min",
        "started_at": "2024-03-01T12:30:00+0000",
        "runs": 2,
        "successes": 1,
        "failures": 1,
        "stats": {"runs_started": 2, "success": 1, "WIRE_UNKNOWN_NEXT_PEER": 1},
    }
