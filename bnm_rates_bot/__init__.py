"""Public interface for the bnm_rates_bot package."""

from __future__ import annotations

from importlib import metadata as importlib_metadata

from bnm_rates_bot.bot.formatter import format_comparison, format_single
from bnm_rates_bot.bot.router import ConversationRouter
from bnm_rates_bot.bot.sessions import SessionStore
from bnm_rates_bot.i18n.catalog import LanguageTag
from bnm_rates_bot.ingestion.bnm_xml import BNMRatesClient
from bnm_rates_bot.ingestion.models import CurrencyCode, RatesSnapshot
from bnm_rates_bot.utils.business_date import previous_business_date, resolve_business_date
from bnm_rates_bot.utils.config import BotSettings, ConfigurationError

__all__ = [
    "__version__",
    "BNMRatesClient",
    "BotSettings",
    "ConfigurationError",
    "ConversationRouter",
    "CurrencyCode",
    "LanguageTag",
    "RatesSnapshot",
    "SessionStore",
    "format_comparison",
    "format_single",
    "previous_business_date",
    "resolve_business_date",
    "run_bot",
]

try:
    __version__ = importlib_metadata.version("bnm-rates-bot")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


def run_bot(*args, **kwargs):
    from bnm_rates_bot.bot.runner import main as _main

    return _main(*args, **kwargs)
