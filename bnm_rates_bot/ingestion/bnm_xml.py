"""Client and parser for the BNM official exchange rates XML feed."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import date
from typing import Mapping

import requests

from bnm_rates_bot.ingestion.models import CURRENCY_TABLE, CurrencyCode, RatesSnapshot
from bnm_rates_bot.utils.business_date import format_bnm_date, parse_bnm_date
from bnm_rates_bot.utils.logger import get_logger

LOGGER = get_logger(__name__)
BNM_RATES_URL = "https://www.bnm.md/en/official_exchange_rates"
DEFAULT_TIMEOUT = 10.0


class BNMParseError(ValueError):
    """Raised when the BNM response is not a rates document."""


def parse_bnm_xml(
    document: str | bytes,
    rate_date: date,
    *,
    currency_table: Mapping[CurrencyCode, str] = CURRENCY_TABLE,
) -> RatesSnapshot:
    """Extract the configured currencies from a BNM ``ValCurs`` document.

    Every entry is located by its ``Valute/@ID`` attribute and the text of its
    ``Value`` child is kept verbatim. A currency without a node, or with an
    empty value, is reported as ``None`` instead of failing the whole
    document.
    """

    if not document:
        raise BNMParseError("Empty response from BNM")
    if isinstance(document, str):
        document = document.encode("utf-8")
    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        raise BNMParseError(f"Malformed BNM document: {exc}") from exc
    if root.tag != "ValCurs":
        raise BNMParseError(f"Expected a ValCurs document, got <{root.tag}>")

    values_by_id = {node.get("ID"): node.findtext("Value") for node in root.findall("Valute")}
    rates: dict[CurrencyCode, str | None] = {}
    for code, valute_id in currency_table.items():
        text = (values_by_id.get(valute_id) or "").strip()
        if not text:
            LOGGER.warning("BNM document for %s has no value for %s", format_bnm_date(rate_date), code.value)
        rates[code] = text or None
    return RatesSnapshot(rate_date=rate_date, rates=rates)


class BNMRatesClient:
    """Fetch official rates from BNM for a given business date."""

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = BNM_RATES_URL,
    ) -> None:
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", "bnm-rates-bot/1.0")
        self.timeout = timeout
        self.base_url = base_url

    def fetch(self, business_date: str | date) -> RatesSnapshot | None:
        """Return the snapshot for ``business_date`` or ``None`` on failure.

        Nothing is cached and nothing is retried: a failed request simply
        yields ``None`` so the caller can answer with an "unavailable"
        message.
        """

        rate_date = parse_bnm_date(business_date)
        date_text = format_bnm_date(rate_date)
        try:
            response = self.session.get(
                self.base_url,
                params={"get_xml": "1", "date": date_text},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            LOGGER.warning("Failed to fetch BNM rates for %s: %s", date_text, exc)
            return None

        try:
            snapshot = parse_bnm_xml(response.content, rate_date)
        except BNMParseError as exc:
            LOGGER.warning("Failed to parse BNM rates for %s: %s", date_text, exc)
            return None
        LOGGER.info("Fetched BNM rates for %s", date_text)
        return snapshot


__all__ = ["BNMParseError", "BNMRatesClient", "BNM_RATES_URL", "parse_bnm_xml"]
