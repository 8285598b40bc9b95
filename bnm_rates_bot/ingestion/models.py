"""Data models shared across ingestion and formatting modules."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class CurrencyCode(str, Enum):
    """Currencies reported by the bot, quoted against MDL."""

    EUR = "EUR"
    USD = "USD"
    UAH = "UAH"
    RON = "RON"
    RUB = "RUB"


# ``Valute/@ID`` of each currency in the BNM document. Order is display order.
CURRENCY_TABLE: Mapping[CurrencyCode, str] = MappingProxyType(
    {
        CurrencyCode.EUR: "47",
        CurrencyCode.USD: "44",
        CurrencyCode.UAH: "53",
        CurrencyCode.RON: "49",
        CurrencyCode.RUB: "51",
    }
)


@dataclass(frozen=True, slots=True)
class RatesSnapshot:
    """Rates published for a single business date.

    ``rates`` holds the upstream text verbatim; ``None`` marks a currency the
    document did not provide.
    """

    rate_date: date
    rates: Mapping[CurrencyCode, str | None]

    def __post_init__(self) -> None:
        missing = [code.value for code in CURRENCY_TABLE if code not in self.rates]
        if missing:
            raise ValueError(f"Snapshot is missing configured currencies: {', '.join(missing)}")
        ordered = {code: self.rates[code] for code in CURRENCY_TABLE}
        object.__setattr__(self, "rates", MappingProxyType(ordered))

    def value(self, code: CurrencyCode) -> str | None:
        return self.rates[code]

    @property
    def is_complete(self) -> bool:
        """True when every configured currency has a value."""

        return all(value is not None for value in self.rates.values())


__all__ = ["CURRENCY_TABLE", "CurrencyCode", "RatesSnapshot"]
