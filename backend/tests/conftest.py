# backend/tests/conftest.py
import random
from collections import deque
from datetime import datetime, timezone

import pytest

from sitzprobe.models import Channel, PaymentResult, Route
from sitzprobe.services.host.base import ChannelsUnavailable, NoRouteFound, SendPayFailed
from sitzprobe.services.reports import ReportAggregator


class FakeHost:
    """
    Scripted HostNodeProtocol implementation.

    channels: list returned by list_channels, or an exception to raise
    route_error / send_error: message to raise NoRouteFound / SendPayFailed with
    results: deque of PaymentResult handed out by wait_payment_result;
             when empty, the probe fails with the benign code
    """

    def __init__(self, channels=None, route_error=None, send_error=None, results=None):
        self.channels = channels if channels is not None else []
        self.route_error = route_error
        self.send_error = send_error
        self.results = deque(results or [])
        self.calls = []

    def list_channels(self):
        self.calls.append(("list_channels",))
        if isinstance(self.channels, Exception):
            raise self.channels
        return list(self.channels)

    def get_route(self, destination, amount_msat, max_hops):
        self.calls.append(("get_route", destination, amount_msat, max_hops))
        if self.route_error is not None:
            raise NoRouteFound(self.route_error)
        return Route(
            destination=destination,
            amount_msat=amount_msat,
            hops=[{"id": destination, "channel": "1x1x1", "amount_msat": amount_msat}],
        )

    def send_payment(self, route, payment_handle):
        self.calls.append(("send_payment", route.destination, payment_handle))
        if self.send_error is not None:
            raise SendPayFailed(self.send_error)

    def wait_payment_result(self, payment_handle):
        self.calls.append(("wait_payment_result", payment_handle))
        if self.results:
            return self.results.popleft()
        return PaymentResult(
            succeeded=False,
            failure_message="failed: WIRE_INCORRECT_OR_UNKNOWN_PAYMENT_DETAILS (reply from remote)",
        )

    def called(self, name):
        return [c for c in self.calls if c[0] == name]


def payment_failure(message):
    return PaymentResult(succeeded=False, failure_message=message)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def active_channel():
    return Channel(destination="02" + "ab" * 32, active=True, short_channel_id="103x1x0")


@pytest.fixture
def aggregator():
    return ReportAggregator(
        interval_minutes=60,
        amount_msat=1,
        started_at=datetime(2024, 3, 1, 12, 30, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def unavailable():
    return ChannelsUnavailable("Connection refused")
