"""Tests for the tick scheduler and engine lifecycle."""
import threading
import time

from conftest import FakeMetricsSource, make_snapshot
from healthmon.core.engine import MonitoringEngine
from healthmon.core.scheduler import TickScheduler


def scheduler_threads():
    return [t for t in threading.enumerate() if t.name == "healthmon-scheduler"]


def test_start_runs_first_tick_immediately():
    ticked = threading.Event()
    scheduler = TickScheduler(ticked.set, lambda: 3600)

    assert scheduler.start() is True
    try:
        assert ticked.wait(2)
        assert scheduler.is_running
    finally:
        scheduler.stop()
    assert not scheduler.is_running


def test_ticks_repeat_at_interval():
    ticks = []
    enough = threading.Event()

    def tick():
        ticks.append(time.monotonic())
        if len(ticks) >= 3:
            enough.set()

    scheduler = TickScheduler(tick, lambda: 0.01)
    scheduler.start()
    try:
        assert enough.wait(2)
    finally:
        scheduler.stop()


def test_start_twice_keeps_one_thread():
    scheduler = TickScheduler(lambda: None, lambda: 3600)
    assert scheduler.start() is True
    try:
        assert scheduler.start() is False
        assert len(scheduler_threads()) == 1
    finally:
        scheduler.stop()
    assert scheduler_threads() == []


def test_stop_when_stopped_is_noop():
    scheduler = TickScheduler(lambda: None, lambda: 3600)
    assert scheduler.stop() is False
    scheduler.start()
    assert scheduler.stop() is True
    assert scheduler.stop() is False


def test_no_ticks_after_stop():
    count = []
    scheduler = TickScheduler(lambda: count.append(1), lambda: 0.01)
    scheduler.start()
    time.sleep(0.05)
    scheduler.stop()
    after_stop = len(count)
    time.sleep(0.05)
    assert len(count) == after_stop


def test_failing_tick_does_not_stop_scheduler():
    calls = []
    recovered = threading.Event()

    def tick():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")
        recovered.set()

    scheduler = TickScheduler(tick, lambda: 0.01)
    scheduler.start()
    try:
        assert recovered.wait(2)
        assert scheduler.is_running
    finally:
        scheduler.stop()


def test_ticks_do_not_overlap():
    active = []
    overlaps = []
    done = threading.Event()

    def tick():
        active.append(1)
        if len(active) > 1:
            overlaps.append(1)
        time.sleep(0.02)
        active.pop()
        done.set()

    scheduler = TickScheduler(tick, lambda: 0.001)
    scheduler.start()
    time.sleep(0.1)
    scheduler.stop()
    assert done.is_set()
    assert overlaps == []


def test_engine_start_stop_and_restart(sink):
    engine = MonitoringEngine(FakeMetricsSource(make_snapshot(cpu=99)), sink)
    engine.update_config(check_interval=3600)

    assert engine.start() is True
    assert engine.start() is False
    deadline = time.monotonic() + 2
    while not engine.get_alerts() and time.monotonic() < deadline:
        time.sleep(0.01)
    assert engine.get_health_status().is_monitoring is True
    assert [a.title for a in engine.get_alerts()] == ["High CPU Usage"]

    assert engine.stop() is True
    assert engine.stop() is False
    assert engine.get_health_status().is_monitoring is False

    assert engine.start() is True
    engine.stop()


def test_restart_waits_for_in_flight_tick():
    active = []
    overlaps = []
    started = threading.Event()
    ticks = []

    def slow_tick():
        active.append(1)
        if len(active) > 1:
            overlaps.append(1)
        started.set()
        time.sleep(0.3)
        active.pop()
        ticks.append(1)

    scheduler = TickScheduler(slow_tick, lambda: 3600, join_timeout=0.05)
    scheduler.start()
    assert started.wait(2)
    scheduler.stop()
    scheduler.start()
    deadline = time.monotonic() + 3
    while len(ticks) < 2 and time.monotonic() < deadline:
        time.sleep(0.01)
    scheduler.stop()

    assert len(ticks) == 2
    assert overlaps == []


def test_unusable_interval_falls_back():
    ticks = []
    enough = threading.Event()
    readings = iter([float("nan"), -1.0])

    def interval():
        try:
            return next(readings)
        except StopIteration:
            raise RuntimeError("config unavailable")

    def tick():
        ticks.append(1)
        if len(ticks) >= 4:
            enough.set()

    scheduler = TickScheduler(tick, interval, fallback_interval=0.01)
    scheduler.start()
    try:
        assert enough.wait(2)
        assert scheduler.is_running
    finally:
        scheduler.stop()


def test_huge_interval_keeps_thread_alive():
    ticked = threading.Event()
    scheduler = TickScheduler(ticked.set, lambda: 1e12)
    scheduler.start()
    try:
        assert ticked.wait(2)
        time.sleep(0.05)
        assert scheduler.is_running
        assert len(scheduler_threads()) == 1
    finally:
        scheduler.stop()
    assert scheduler_threads() == []
