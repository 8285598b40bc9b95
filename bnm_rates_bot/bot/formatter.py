"""Render rate snapshots into localized chat messages."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from bnm_rates_bot.i18n.catalog import LanguageTag, get_text
from bnm_rates_bot.ingestion.models import CURRENCY_TABLE, RatesSnapshot

QUOTE_CURRENCY = "MDL"
TREND_UP = "⬆️"
TREND_DOWN = "⬇️"
TREND_EQUAL = "⏺"

_FOUR_PLACES = Decimal("0.0001")
_ZERO = Decimal("0")
# Larger magnitudes cannot be rates and are treated as unparsable.
_MAX_INTEGER_DIGITS = 100


def _to_decimal(value: str | None) -> Decimal:
    # Missing or unparsable values count as zero when comparing.
    if value is None:
        return _ZERO
    try:
        parsed = Decimal(value.strip().replace(",", "."))
    except InvalidOperation:
        return _ZERO
    if not parsed.is_finite() or parsed.adjusted() >= _MAX_INTEGER_DIGITS:
        return _ZERO
    return parsed


def rate_difference(today: str | None, yesterday: str | None) -> Decimal:
    """Return ``today - yesterday`` rounded to four decimal places."""

    minuend, subtrahend = _to_decimal(today), _to_decimal(yesterday)
    with localcontext() as ctx:
        # Room for every integer digit plus the four decimals.
        ctx.prec = max(ctx.prec, minuend.adjusted() + 7, subtrahend.adjusted() + 7)
        difference = (minuend - subtrahend).quantize(_FOUR_PLACES, rounding=ROUND_HALF_UP)
    if difference == _ZERO:
        # Drop the sign of a negative zero.
        return _ZERO.quantize(_FOUR_PLACES)
    return difference


def trend_marker(difference: Decimal) -> str:
    if difference > 0:
        return TREND_UP
    if difference < 0:
        return TREND_DOWN
    return TREND_EQUAL


def format_single(snapshot: RatesSnapshot | None, date_text: str, lang: LanguageTag | str) -> str:
    """Render the rates table for one business date.

    An unavailable snapshot yields the localized "data unavailable" text and
    nothing else.
    """

    if snapshot is None:
        return get_text(lang, "data_unavailable")

    lines = [get_text(lang, "rates_header", date=date_text)]
    for code in CURRENCY_TABLE:
        value = snapshot.value(code)
        if value is None:
            lines.append(f"{code.value}: {get_text(lang, 'value_unavailable')}")
        else:
            lines.append(f"{code.value}: {value} {QUOTE_CURRENCY}")
    lines.append(get_text(lang, "closing"))
    return "\n".join(lines)


def format_comparison(
    today: RatesSnapshot | None,
    yesterday: RatesSnapshot | None,
    today_text: str,
    yesterday_text: str,
    lang: LanguageTag | str,
) -> str:
    """Render today's rates with a trend marker and the change since yesterday.

    Both snapshots are required; if either one is unavailable the localized
    "data unavailable" text is returned instead of a partial comparison.
    """

    if today is None or yesterday is None:
        return get_text(lang, "data_unavailable")

    lines = [get_text(lang, "comparison_header", today=today_text, yesterday=yesterday_text)]
    for code in CURRENCY_TABLE:
        today_value = today.value(code)
        difference = rate_difference(today_value, yesterday.value(code))
        shown = today_value if today_value is not None else get_text(lang, "value_unavailable")
        lines.append(f"{code.value}: {shown} {QUOTE_CURRENCY} {trend_marker(difference)} ({difference:f})")
    return "\n".join(lines)


__all__ = [
    "QUOTE_CURRENCY",
    "TREND_DOWN",
    "TREND_EQUAL",
    "TREND_UP",
    "format_comparison",
    "format_single",
    "rate_difference",
    "trend_marker",
]
