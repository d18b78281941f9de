"""Shared fixtures for healthmon tests."""
from datetime import datetime, timedelta

import pytest

from healthmon.collectors.health_models import HealthSnapshot, Temperatures
from healthmon.core.alert_store import AlertStore
from healthmon.core.errors import MetricsSourceError


class FakeClock:
    """Deterministic clock advanced by hand."""

    def __init__(self, start=datetime(2024, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds=1):
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


class FakeMetricsSource:
    """Returns queued snapshots, or raises queued exceptions."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    def get_health_snapshot(self):
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


class RecordingSink:
    """Collects displayed alerts."""

    def __init__(self):
        self.displayed = []

    def display_alert(self, severity, title, message):
        self.displayed.append((severity, title, message))


def make_snapshot(cpu=10.0, total=1000, used=100, cpu_temp=None, gpu_temp=None):
    return HealthSnapshot(
        cpu_usage=cpu,
        total_memory=total,
        used_memory=used,
        temperatures=Temperatures(cpu=cpu_temp, gpu=gpu_temp),
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return AlertStore(clock=clock)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def healthy_snapshot():
    return make_snapshot()


@pytest.fixture
def failing_source():
    return FakeMetricsSource(MetricsSourceError("sensor read failed"))
