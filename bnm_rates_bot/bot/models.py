"""Chat messages exchanged between the transport and the router."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Sequence


@dataclass(frozen=True, slots=True)
class InboundMessage:
    """A message received from a user. ``text`` is ``None`` for non-text payloads."""

    user_id: Hashable
    chat_id: int | str
    text: str | None


@dataclass(frozen=True, slots=True)
class Reply:
    """Text to send back, optionally with reply-keyboard rows of button labels."""

    chat_id: int | str
    text: str
    keyboard: Sequence[Sequence[str]] | None = None


__all__ = ["InboundMessage", "Reply"]
