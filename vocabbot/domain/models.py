from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class BotState(StrEnum):
    DEFAULT = "DEFAULT"
    READING_DICTIONARY = "READING_DICTIONARY"
    LANGUAGE_CHANGE = "LANGUAGE_CHANGE"
    AWAITING_PHRASE = "AWAITING_PHRASE"
    VIEWING_PHRASE = "VIEWING_PHRASE"


@dataclass(frozen=True, slots=True)
class ChatProfile:
    """Sender details taken from an inbound update."""

    chat_id: int
    username: str | None = None
    first_name: str | None = None


@dataclass(frozen=True, slots=True)
class UserRecord:
    id: int
    username: str | None
    first_name: str | None
    registered_at: datetime
    bot_state: BotState
    current_page: int
    language: str

    @property
    def display_name(self) -> str:
        return self.username or self.first_name or str(self.id)


@dataclass(frozen=True, slots=True)
class PhraseRecord:
    id: int
    user_id: int
    text: str
    created_at: datetime | None = None
