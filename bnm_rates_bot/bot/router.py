"""Map inbound chat text to bot actions and build the replies."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Callable, Mapping

from bnm_rates_bot.bot.formatter import format_comparison, format_single
from bnm_rates_bot.bot.health import HealthCounters
from bnm_rates_bot.bot.models import InboundMessage, Reply
from bnm_rates_bot.bot.sessions import SessionStore
from bnm_rates_bot.i18n.catalog import (
    LANGUAGE_LABELS,
    TRANSLATIONS,
    LanguageTag,
    get_text,
    language_keyboard,
    main_menu_keyboard,
)
from bnm_rates_bot.ingestion.strategy import RateSource
from bnm_rates_bot.utils.business_date import format_bnm_date, previous_business_date, resolve_business_date
from bnm_rates_bot.utils.logger import get_logger

LOGGER = get_logger(__name__)


class Action(str, Enum):
    SHOW_LANGUAGES = "show_languages"
    SET_LANGUAGE = "set_language"
    TODAY = "today"
    YESTERDAY = "yesterday"
    COMPARE = "compare"


Route = tuple[Action, LanguageTag | None]

COMMANDS: Mapping[str, Action] = {
    "/start": Action.SHOW_LANGUAGES,
    "/language": Action.SHOW_LANGUAGES,
    "/get_rates": Action.TODAY,
    "/today": Action.TODAY,
    "/yesterday": Action.YESTERDAY,
    "/compare": Action.COMPARE,
}

_LABEL_ACTIONS: Mapping[str, Action] = {
    "btn_today": Action.TODAY,
    "btn_yesterday": Action.YESTERDAY,
    "btn_compare": Action.COMPARE,
    "btn_change_language": Action.SHOW_LANGUAGES,
}


def build_route_table() -> dict[str, Route]:
    """Combine commands and the button labels of every language into one lookup.

    A label is recognised whatever language the user currently has selected.
    """

    routes: dict[str, Route] = {command: (action, None) for command, action in COMMANDS.items()}
    for language, label in LANGUAGE_LABELS.items():
        routes[label] = (Action.SET_LANGUAGE, language)
    for bundle in TRANSLATIONS.values():
        for key, action in _LABEL_ACTIONS.items():
            label = bundle[key]
            existing = routes.setdefault(label, (action, None))
            if existing != (action, None):
                raise ValueError(f"Label {label!r} is bound to more than one action")
    return routes


def _normalise(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("/"):
        # "/start@SomeBot payload" -> "/start"
        return cleaned.split(maxsplit=1)[0].split("@", 1)[0].lower()
    return cleaned


class ConversationRouter:
    """Turn one inbound message into at most one reply.

    Messages are expected one at a time from a single thread. Any error raised
    while handling a message is logged and answered with the localized generic
    error so the next message is processed normally.
    """

    def __init__(
        self,
        rate_source: RateSource,
        *,
        sessions: SessionStore | None = None,
        counters: HealthCounters | None = None,
        today_provider: Callable[[], date] = date.today,
    ) -> None:
        self.rate_source = rate_source
        self.sessions = sessions if sessions is not None else SessionStore()
        self.counters = counters if counters is not None else HealthCounters()
        self.today_provider = today_provider
        self.routes = build_route_table()

    def resolve(self, text: str | None) -> Route | None:
        if not text:
            return None
        return self.routes.get(_normalise(text))

    def handle(self, message: InboundMessage) -> Reply | None:
        self.counters.record_message()
        try:
            language = self.sessions.ensure(message.user_id)
            route = self.resolve(message.text)
            if route is None:
                return None
            action, choice = route
            return self._dispatch(message, language, action, choice)
        except Exception:
            LOGGER.exception("Failed to handle message from user %s", message.user_id)
            self.counters.record_error()
            language = self.sessions.peek(message.user_id) or self.sessions.default_language
            return Reply(chat_id=message.chat_id, text=get_text(language, "generic_error"))

    def _dispatch(
        self,
        message: InboundMessage,
        language: LanguageTag,
        action: Action,
        choice: LanguageTag | None,
    ) -> Reply:
        if action is Action.SHOW_LANGUAGES:
            return Reply(message.chat_id, get_text(language, "choose_language"), language_keyboard())
        if action is Action.SET_LANGUAGE:
            if choice is None:
                raise ValueError("Language choice route without a language")
            language = self.sessions.set_language(message.user_id, choice)
            LOGGER.info("User %s switched language to %s", message.user_id, language.value)
            return Reply(message.chat_id, get_text(language, "main_menu"), main_menu_keyboard(language))
        if action is Action.TODAY:
            return Reply(message.chat_id, self.single_day_text(self.today_provider(), language))
        if action is Action.YESTERDAY:
            day = previous_business_date(self.today_provider())
            return Reply(message.chat_id, self.single_day_text(day, language))
        if action is Action.COMPARE:
            return Reply(message.chat_id, self.comparison_text(self.today_provider(), language))
        raise ValueError(f"Unhandled action: {action}")

    def single_day_text(self, day: date, language: LanguageTag) -> str:
        """Fetch and render the rates of the business date of ``day``."""

        date_text = format_bnm_date(resolve_business_date(day))
        return format_single(self.rate_source.fetch(date_text), date_text, language)

    def comparison_text(self, day: date, language: LanguageTag) -> str:
        today_text = format_bnm_date(resolve_business_date(day))
        yesterday_text = format_bnm_date(previous_business_date(day))
        today = self.rate_source.fetch(today_text)
        yesterday = self.rate_source.fetch(yesterday_text)
        return format_comparison(today, yesterday, today_text, yesterday_text, language)


__all__ = ["Action", "COMMANDS", "ConversationRouter", "build_route_table"]
