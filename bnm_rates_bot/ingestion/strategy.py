"""Abstractions for pluggable rate sources."""

from __future__ import annotations

from typing import Protocol

from bnm_rates_bot.ingestion.models import RatesSnapshot


class RateSource(Protocol):
    """Contract for fetching the rates of a single business date.

    Implementations receive the date as ``dd.mm.yyyy`` text and return a
    :class:`RatesSnapshot`, or ``None`` when the rates are unavailable.
    Failures must not propagate to the caller.
    """

    def fetch(self, business_date: str) -> RatesSnapshot | None:
        ...  # pragma: no cover - protocol definition


__all__ = ["RateSource"]
