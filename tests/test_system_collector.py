"""Tests for the psutil metrics source."""
from collections import namedtuple

import psutil
import pytest

from healthmon.collectors import system_collector
from healthmon.collectors.system_collector import SystemCollector
from healthmon.core.errors import MetricsSourceError

Memory = namedtuple("Memory", "total used percent")
Sensor = namedtuple("Sensor", "label current high critical")


@pytest.fixture
def fake_psutil(monkeypatch):
    monkeypatch.setattr(system_collector.psutil, "cpu_percent", lambda interval=None: 42.5)
    monkeypatch.setattr(system_collector.psutil, "virtual_memory", lambda: Memory(8000, 2000, 25.0))
    monkeypatch.setattr(
        system_collector.psutil,
        "sensors_temperatures",
        lambda: {
            "acpitz": [Sensor("", 40.0, None, None)],
            "coretemp": [Sensor("Package id 0", 71.0, 100.0, 100.0)],
            "amdgpu": [Sensor("edge", 64.0, None, None)],
        },
        raising=False,
    )


def test_snapshot_from_psutil(fake_psutil):
    snapshot = SystemCollector(cpu_sample_interval=0).get_health_snapshot()
    assert snapshot.cpu_usage == 42.5
    assert (snapshot.total_memory, snapshot.used_memory) == (8000, 2000)
    assert snapshot.memory_percent == 25.0
    assert snapshot.temperatures.cpu == 71.0
    assert snapshot.temperatures.gpu == 64.0


def test_missing_sensors_leave_temperatures_empty(fake_psutil, monkeypatch):
    monkeypatch.setattr(system_collector.psutil, "sensors_temperatures", lambda: {}, raising=False)
    snapshot = SystemCollector().get_health_snapshot()
    assert snapshot.temperatures.cpu is None
    assert snapshot.temperatures.gpu is None


def test_platform_without_sensor_support(fake_psutil, monkeypatch):
    monkeypatch.delattr(system_collector.psutil, "sensors_temperatures", raising=False)
    snapshot = SystemCollector().get_health_snapshot()
    assert snapshot.temperatures.cpu is None


def test_psutil_errors_become_metrics_source_errors(fake_psutil, monkeypatch):
    def broken():
        raise psutil.AccessDenied()

    monkeypatch.setattr(system_collector.psutil, "virtual_memory", broken)
    with pytest.raises(MetricsSourceError):
        SystemCollector().get_health_snapshot()


def test_sensor_failure_keeps_cpu_and_memory(fake_psutil, monkeypatch):
    def broken():
        raise OSError("hwmon read failed")

    monkeypatch.setattr(system_collector.psutil, "sensors_temperatures", broken, raising=False)
    snapshot = SystemCollector().get_health_snapshot()
    assert snapshot.cpu_usage == 42.5
    assert snapshot.memory_percent == 25.0
    assert snapshot.temperatures.cpu is None
    assert snapshot.temperatures.gpu is None
