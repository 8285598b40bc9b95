"""Per-user language preference kept for the lifetime of the process."""

from __future__ import annotations

import threading
from typing import Dict, Hashable

from bnm_rates_bot.i18n.catalog import DEFAULT_LANGUAGE, LanguageTag


class SessionStore:
    """Map platform user identifiers to their selected language.

    The store has a single writer: the first thread that mutates it becomes
    its owner and mutations from any other thread raise ``RuntimeError``.
    Messages are handled one at a time by that thread, so no locking is
    needed.
    """

    def __init__(self, default_language: LanguageTag = DEFAULT_LANGUAGE) -> None:
        self.default_language = default_language
        self._languages: Dict[Hashable, LanguageTag] = {}
        self._owner: int | None = None

    def _claim(self) -> None:
        current = threading.get_ident()
        if self._owner is None:
            self._owner = current
        elif self._owner != current:
            raise RuntimeError("SessionStore may only be mutated by the message-handling thread")

    def ensure(self, user_id: Hashable) -> LanguageTag:
        """Return the user's language, creating the session on first contact."""

        language = self._languages.get(user_id)
        if language is None:
            self._claim()
            language = self._languages[user_id] = self.default_language
        return language

    def set_language(self, user_id: Hashable, language: LanguageTag | str) -> LanguageTag:
        self._claim()
        tag = LanguageTag(language)
        self._languages[user_id] = tag
        return tag

    def peek(self, user_id: Hashable) -> LanguageTag | None:
        """Return the stored language without creating a session."""
        return self._languages.get(user_id)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._languages

    def __len__(self) -> int:
        return len(self._languages)


__all__ = ["SessionStore"]
