"""Uptime/error counters and the periodic health logger."""

from __future__ import annotations

import gc
import threading
import time
from dataclasses import dataclass
from typing import Callable

import psutil

from bnm_rates_bot.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class HealthSnapshot:
    uptime_seconds: float
    messages: int
    errors: int
    restarts: int


class HealthCounters:
    """Thread-safe counters written by the message loop and read by the monitor."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started = clock()
        self._lock = threading.Lock()
        self._messages = 0
        self._errors = 0
        self._restarts = 0

    def record_message(self) -> None:
        with self._lock:
            self._messages += 1

    def record_error(self) -> None:
        with self._lock:
            self._errors += 1

    def record_restart(self) -> None:
        with self._lock:
            self._restarts += 1

    def snapshot(self) -> HealthSnapshot:
        with self._lock:
            return HealthSnapshot(
                uptime_seconds=self._clock() - self._started,
                messages=self._messages,
                errors=self._errors,
                restarts=self._restarts,
            )


def current_rss_mb() -> float:
    """Resident set size of this process in megabytes."""
    return psutil.Process().memory_info().rss / 1024 / 1024


class HealthMonitor:
    """Background thread that logs a health snapshot every ``interval`` seconds.

    When the resident memory exceeds ``memory_limit_mb`` the monitor asks the
    garbage collector for a full collection. It never touches user sessions.
    """

    def __init__(
        self,
        counters: HealthCounters,
        *,
        interval: float = 300.0,
        memory_limit_mb: float = 256.0,
        memory_probe: Callable[[], float] = current_rss_mb,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.counters = counters
        self.interval = interval
        self.memory_limit_mb = memory_limit_mb
        self._memory_probe = memory_probe
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def sample(self) -> HealthSnapshot:
        """Log one health snapshot and collect garbage under memory pressure."""

        snapshot = self.counters.snapshot()
        rss_mb = self._memory_probe()
        LOGGER.info(
            "Health: uptime %.0fs, %s messages, %s errors, %s restarts, rss %.1f MB",
            snapshot.uptime_seconds,
            snapshot.messages,
            snapshot.errors,
            snapshot.restarts,
            rss_mb,
        )
        if rss_mb > self.memory_limit_mb:
            collected = gc.collect()
            LOGGER.warning(
                "Memory usage %.1f MB above %.1f MB; garbage collector freed %s objects",
                rss_mb,
                self.memory_limit_mb,
                collected,
            )
        return snapshot

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.sample()
            except Exception:  # pragma: no cover - monitoring must not kill the process
                LOGGER.exception("Health sampling failed")

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="health-monitor", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def __enter__(self) -> "HealthMonitor":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()


__all__ = ["HealthCounters", "HealthMonitor", "HealthSnapshot", "current_rss_mb"]
