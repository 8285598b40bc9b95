"""CLI + listening loop that connects Telegram to the conversation router."""

from __future__ import annotations

import argparse
import sys
import threading
from typing import Sequence

from bnm_rates_bot.bot.health import HealthCounters, HealthMonitor
from bnm_rates_bot.bot.router import ConversationRouter
from bnm_rates_bot.bot.telegram import TelegramClient, TelegramTransportError, parse_update
from bnm_rates_bot.ingestion.bnm_xml import BNMRatesClient
from bnm_rates_bot.utils.config import BotSettings, ConfigurationError, load_settings
from bnm_rates_bot.utils.logger import get_logger, set_log_level

LOGGER = get_logger(__name__)

__all__ = ["BotRunner", "build_runner", "parse_args", "main"]


class BotRunner:
    """Poll Telegram for updates and answer them one at a time.

    Transport failures restart polling after ``restart_delay`` seconds, with
    no upper bound on the number of restarts.
    """

    def __init__(
        self,
        client: TelegramClient,
        router: ConversationRouter,
        *,
        poll_timeout: int = 30,
        restart_delay: float = 5.0,
        monitor: HealthMonitor | None = None,
    ) -> None:
        self.client = client
        self.router = router
        self.poll_timeout = poll_timeout
        self.restart_delay = restart_delay
        self.monitor = monitor
        self.offset: int | None = None
        self._stopping = threading.Event()

    def poll_once(self) -> int:
        """Fetch one batch of updates, answer them and return how many were seen."""

        updates = self.client.get_updates(offset=self.offset, timeout=self.poll_timeout)
        for update in updates:
            update_id = update.get("update_id")
            if isinstance(update_id, int):
                self.offset = update_id + 1
            message = parse_update(update)
            if message is None:
                continue
            reply = self.router.handle(message)
            if reply is not None:
                self.client.send_reply(reply)
        return len(updates)

    def run_forever(self) -> None:
        if self.monitor is not None:
            self.monitor.start()
        LOGGER.info("Listening for Telegram updates")
        try:
            while not self._stopping.is_set():
                try:
                    self.poll_once()
                except TelegramTransportError as exc:
                    self._restart(f"Telegram transport error: {exc}")
                except Exception:
                    LOGGER.exception("Unexpected error in the listening loop")
                    self._restart("unexpected error")
        except KeyboardInterrupt:
            LOGGER.info("Interrupted; shutting down")
        finally:
            if self.monitor is not None:
                self.monitor.stop()
            LOGGER.info("Stopped listening")

    def _restart(self, reason: str) -> None:
        self.router.counters.record_restart()
        LOGGER.warning("Restarting the listening loop in %.1fs (%s)", self.restart_delay, reason)
        self._stopping.wait(self.restart_delay)

    def stop(self) -> None:
        self._stopping.set()


def build_runner(settings: BotSettings) -> BotRunner:
    counters = HealthCounters()
    router = ConversationRouter(
        BNMRatesClient(timeout=settings.request_timeout),
        counters=counters,
    )
    monitor = HealthMonitor(
        counters,
        interval=settings.health_interval,
        memory_limit_mb=settings.memory_limit_mb,
    )
    client = TelegramClient(settings.token.get_secret_value(), request_timeout=settings.request_timeout)
    return BotRunner(
        client,
        router,
        poll_timeout=settings.poll_timeout,
        restart_delay=settings.restart_delay,
        monitor=monitor,
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Telegram bot serving the official BNM exchange rates.")
    parser.add_argument("--log-level", dest="log_level", help="Override BOT_LOG_LEVEL (e.g. DEBUG)")
    parser.add_argument(
        "--health-interval",
        dest="health_interval",
        type=float,
        help="Seconds between health snapshots (overrides BOT_HEALTH_INTERVAL)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 2
    if args.health_interval is not None:
        if args.health_interval <= 0:
            LOGGER.error("Configuration error: --health-interval must be positive")
            return 2
        settings = settings.model_copy(update={"health_interval": args.health_interval})
    try:
        set_log_level(args.log_level or settings.log_level)
    except ValueError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 2

    LOGGER.info("Starting bnm-rates-bot with %r", settings)
    build_runner(settings).run_forever()
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
