"""Helpers for turning calendar dates into BNM business dates."""

from __future__ import annotations

from datetime import date, datetime, timedelta

BNM_DATE_FORMAT = "%d.%m.%Y"

_SATURDAY = 5
_SUNDAY = 6


def resolve_business_date(day: date) -> date:
    """Roll weekend days back to the preceding Friday.

    BNM does not publish rates on weekends, so Saturday maps to the day before
    and Sunday to two days before. Weekdays are returned unchanged.
    """

    weekday = day.weekday()
    if weekday == _SUNDAY:
        return day - timedelta(days=2)
    if weekday == _SATURDAY:
        return day - timedelta(days=1)
    return day


def previous_business_date(day: date) -> date:
    """Return the business day immediately before the business day of ``day``."""

    return resolve_business_date(resolve_business_date(day) - timedelta(days=1))


def format_bnm_date(day: date) -> str:
    """Render ``day`` as ``dd.mm.yyyy``, the format BNM expects."""
    return day.strftime(BNM_DATE_FORMAT)


def parse_bnm_date(value: str | date) -> date:
    """Parse a ``dd.mm.yyyy`` string to :class:`date`."""

    if isinstance(value, date):
        return value
    return datetime.strptime(value.strip(), BNM_DATE_FORMAT).date()


__all__ = [
    "BNM_DATE_FORMAT",
    "format_bnm_date",
    "parse_bnm_date",
    "previous_business_date",
    "resolve_business_date",
]
