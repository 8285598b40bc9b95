"""Localized UI strings and reply keyboards."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class LanguageTag(str, Enum):
    """Languages the bot can talk in."""

    RO = "ro"
    RU = "ru"
    EN = "en"


DEFAULT_LANGUAGE = LanguageTag.RO

# Language choice labels read the same whatever the current language is.
LANGUAGE_LABELS: Mapping[LanguageTag, str] = MappingProxyType(
    {
        LanguageTag.RO: "🇷🇴 Română",
        LanguageTag.RU: "🇷🇺 Русский",
        LanguageTag.EN: "🇬🇧 English",
    }
)

MENU_KEYS = ("btn_today", "btn_yesterday", "btn_compare", "btn_change_language")

TRANSLATIONS: Mapping[LanguageTag, Mapping[str, str]] = MappingProxyType(
    {
        LanguageTag.RO: MappingProxyType(
            {
                "choose_language": "Alegeți limba / Выберите язык / Choose a language:",
                "main_menu": "Alegeți o opțiune din meniu:",
                "btn_today": "📈 Cursul de azi",
                "btn_yesterday": "📅 Cursul de ieri",
                "btn_compare": "📊 Comparație cu ieri",
                "btn_change_language": "🌐 Schimbă limba",
                "rates_header": "Curs valutar BNM, {date}:",
                "comparison_header": "Curs valutar BNM, {today} față de {yesterday}:",
                "closing": "Să aveți o zi productivă în continuare!",
                "data_unavailable": "Datele BNM nu sunt disponibile momentan. Încercați mai târziu.",
                "value_unavailable": "indisponibil",
                "generic_error": "A apărut o eroare. Vă rugăm să încercați din nou.",
            }
        ),
        LanguageTag.RU: MappingProxyType(
            {
                "choose_language": "Alegeți limba / Выберите язык / Choose a language:",
                "main_menu": "Выберите пункт меню:",
                "btn_today": "📈 Курс на сегодня",
                "btn_yesterday": "📅 Курс на вчера",
                "btn_compare": "📊 Сравнение со вчера",
                "btn_change_language": "🌐 Сменить язык",
                "rates_header": "Официальный курс НБМ, {date}:",
                "comparison_header": "Официальный курс НБМ, {today} по сравнению с {yesterday}:",
                "closing": "Желаем продуктивного дня!",
                "data_unavailable": "Данные НБМ сейчас недоступны. Попробуйте позже.",
                "value_unavailable": "нет данных",
                "generic_error": "Произошла ошибка. Пожалуйста, попробуйте ещё раз.",
            }
        ),
        LanguageTag.EN: MappingProxyType(
            {
                "choose_language": "Alegeți limba / Выберите язык / Choose a language:",
                "main_menu": "Choose a menu option:",
                "btn_today": "📈 Today's rates",
                "btn_yesterday": "📅 Yesterday's rates",
                "btn_compare": "📊 Compare with yesterday",
                "btn_change_language": "🌐 Change language",
                "rates_header": "BNM official exchange rates, {date}:",
                "comparison_header": "BNM official exchange rates, {today} compared to {yesterday}:",
                "closing": "Have a productive day!",
                "data_unavailable": "BNM data is currently unavailable. Please try again later.",
                "value_unavailable": "n/a",
                "generic_error": "Something went wrong. Please try again.",
            }
        ),
    }
)


def get_text(lang: LanguageTag | str, key: str, **substitutions: str) -> str:
    """Return the ``key`` string for ``lang``.

    Unknown languages or keys raise :class:`KeyError`; both sets are closed,
    so a miss is a bug rather than a runtime condition.
    """

    template = TRANSLATIONS[lang][key]
    if substitutions:
        return template.format(**substitutions)
    return template


def language_keyboard() -> list[list[str]]:
    return [[label] for label in LANGUAGE_LABELS.values()]


def main_menu_keyboard(lang: LanguageTag | str) -> list[list[str]]:
    """Two rows of two buttons: rates first, navigation second."""

    labels = [get_text(lang, key) for key in MENU_KEYS]
    return [labels[:2], labels[2:]]


__all__ = [
    "DEFAULT_LANGUAGE",
    "LANGUAGE_LABELS",
    "LanguageTag",
    "MENU_KEYS",
    "TRANSLATIONS",
    "get_text",
    "language_keyboard",
    "main_menu_keyboard",
]
