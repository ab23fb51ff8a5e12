# backend/tests/test_api_report.py
import random

from fastapi.testclient import TestClient

from sitzprobe.config import Settings
from sitzprobe.main import create_app
from sitzprobe.services.scheduler import ProbeScheduler

from conftest import FakeHost


def _client(aggregator, scheduler=None):
    app = create_app(aggregator, settings=Settings(_env_file=None), scheduler=scheduler)
    return TestClient(app)


def test_report_endpoint(aggregator):
    for symbol in ["runs_started", "runs_started", "success", "WIRE_TEMPORARY_CHANNEL_FAILURE"]:
        aggregator.increment(symbol)

    resp = _client(aggregator).get("/api/report")

    assert resp.status_code == 200
    assert resp.json() == {
        "frequency": "every 60 min",
        "started_at": "2024-03-01T12:30:00+0000",
        "runs": 2,
        "successes": 1,
        "failures": 1,
        "stats": {"runs_started": 2, "success": 1, "WIRE_TEMPORARY_CHANNEL_FAILURE": 1},
    }


def test_report_endpoint_before_first_cycle(aggregator):
    body = _client(aggregator).get("/api/report").json()
    assert body["runs"] == 0
    assert body["failures"] == 0
    assert body["stats"] == {}


def test_health_reports_cycle(aggregator):
    sched = ProbeScheduler(
        FakeHost(),
        aggregator,
        amount_msat=1,
        interval_seconds=1.0,
        rng=random.Random(0),
        sleep=lambda _: None,
    )
    sched.run_forever(max_cycles=2)

    resp = _client(aggregator, scheduler=sched).get("/health")
    assert resp.json() == {"status": "ok", "cycle": 2}
