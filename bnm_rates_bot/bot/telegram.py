"""Minimal Telegram Bot API transport built on ``requests``."""

from __future__ import annotations

import json
from typing import Any, Sequence

import requests

from bnm_rates_bot.bot.models import InboundMessage, Reply
from bnm_rates_bot.utils.logger import get_logger

LOGGER = get_logger(__name__)
TELEGRAM_API_URL = "https://api.telegram.org"


class TelegramTransportError(RuntimeError):
    """Raised when the Telegram API cannot be reached or rejects a call."""


def parse_update(update: dict[str, Any]) -> InboundMessage | None:
    """Convert a raw ``getUpdates`` entry into an :class:`InboundMessage`.

    Updates that carry no message (edits, callback queries, ...) return
    ``None``. Messages without text keep ``text=None``.
    """

    message = update.get("message")
    if not isinstance(message, dict):
        return None
    chat = message.get("chat") or {}
    sender = message.get("from") or {}
    chat_id = chat.get("id")
    if chat_id is None:
        return None
    user_id = sender.get("id", chat_id)
    text = message.get("text")
    return InboundMessage(user_id=user_id, chat_id=chat_id, text=text if isinstance(text, str) else None)


def build_reply_markup(keyboard: Sequence[Sequence[str]]) -> str:
    return json.dumps(
        {
            "keyboard": [[{"text": label} for label in row] for row in keyboard],
            "resize_keyboard": True,
        },
        ensure_ascii=False,
    )


class TelegramClient:
    """Long-polling client for the Telegram Bot API."""

    def __init__(
        self,
        token: str,
        *,
        session: requests.Session | None = None,
        api_url: str = TELEGRAM_API_URL,
        request_timeout: float = 10.0,
    ) -> None:
        if not token:
            raise ValueError("token must not be empty")
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", "bnm-rates-bot/1.0")
        self.request_timeout = request_timeout
        self._base_url = f"{api_url.rstrip('/')}/bot{token}"

    def _call(self, method: str, payload: dict[str, Any], *, timeout: float) -> Any:
        try:
            response = self.session.post(f"{self._base_url}/{method}", data=payload, timeout=timeout)
        except requests.RequestException as exc:
            # The token is part of the URL; do not echo the exception text.
            raise TelegramTransportError(f"Telegram {method} failed: {type(exc).__name__}") from exc
        try:
            body = response.json()
        except ValueError as exc:
            raise TelegramTransportError(
                f"Telegram {method} returned HTTP {response.status_code} with a non-JSON body"
            ) from exc
        if not isinstance(body, dict):
            body = {}
        if not response.ok or not body.get("ok"):
            description = body.get("description", "no description")
            raise TelegramTransportError(
                f"Telegram {method} returned HTTP {response.status_code}: {description}"
            )
        return body.get("result")

    def get_updates(self, offset: int | None = None, timeout: int = 30) -> list[dict[str, Any]]:
        """Long-poll for updates newer than ``offset``."""

        payload: dict[str, Any] = {"timeout": timeout, "allowed_updates": json.dumps(["message"])}
        if offset is not None:
            payload["offset"] = offset
        # Leave room for the server-side long poll on top of the request timeout.
        result = self._call("getUpdates", payload, timeout=timeout + self.request_timeout)
        return list(result or [])

    def send_message(
        self,
        chat_id: int | str,
        text: str,
        keyboard: Sequence[Sequence[str]] | None = None,
    ) -> None:
        payload: dict[str, Any] = {"chat_id": chat_id, "text": text}
        if keyboard:
            payload["reply_markup"] = build_reply_markup(keyboard)
        self._call("sendMessage", payload, timeout=self.request_timeout)

    def send_reply(self, reply: Reply) -> None:
        self.send_message(reply.chat_id, reply.text, reply.keyboard)


__all__ = [
    "TELEGRAM_API_URL",
    "TelegramClient",
    "TelegramTransportError",
    "build_reply_markup",
    "parse_update",
]
