from __future__ import annotations

import logging

import pytest

from bnm_rates_bot.bot import health as health_module
from bnm_rates_bot.bot.health import HealthCounters, HealthMonitor


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_counters_snapshot() -> None:
    clock = FakeClock()
    counters = HealthCounters(clock=clock)
    counters.record_message()
    counters.record_message()
    counters.record_error()
    counters.record_restart()
    clock.now = 160.0

    snapshot = counters.snapshot()

    assert snapshot.uptime_seconds == 60.0
    assert (snapshot.messages, snapshot.errors, snapshot.restarts) == (2, 1, 1)


def test_sample_logs_snapshot(caplog) -> None:
    monitor = HealthMonitor(HealthCounters(), memory_probe=lambda: 10.0)

    with caplog.at_level(logging.INFO, logger="bnm_rates_bot"):
        monitor.sample()

    assert any("Health: uptime" in record.getMessage() for record in caplog.records)


def test_sample_collects_garbage_under_memory_pressure(monkeypatch) -> None:
    calls: list[int] = []
    monkeypatch.setattr(health_module.gc, "collect", lambda: calls.append(1) or 0)

    HealthMonitor(HealthCounters(), memory_limit_mb=50, memory_probe=lambda: 10.0).sample()
    assert calls == []

    HealthMonitor(HealthCounters(), memory_limit_mb=50, memory_probe=lambda: 80.0).sample()
    assert calls == [1]


def test_monitor_thread_starts_and_stops() -> None:
    monitor = HealthMonitor(HealthCounters(), interval=0.01, memory_probe=lambda: 1.0)

    with monitor:
        assert monitor.running

    assert not monitor.running


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        HealthMonitor(HealthCounters(), interval=0)


def test_current_rss_mb_is_positive() -> None:
    assert health_module.current_rss_mb() > 0
