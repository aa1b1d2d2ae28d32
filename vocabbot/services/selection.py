from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass

from vocabbot.constants import DEFAULT_SELECTION_TTL_SECONDS


@dataclass(frozen=True, slots=True)
class _Selection:
    phrase: str
    expires_at: float


class PhraseSelectionStore:
    """Per-chat phrase picked from the dictionary, kept in memory until it expires."""

    def __init__(self, ttl_seconds: int = DEFAULT_SELECTION_TTL_SECONDS) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl_seconds = ttl_seconds
        self._selections: dict[int, _Selection] = {}
        self._lock = asyncio.Lock()

    async def select(self, chat_id: int, phrase: str) -> None:
        now = time.monotonic()
        async with self._lock:
            self._cleanup(now)
            self._selections[chat_id] = _Selection(
                phrase=phrase, expires_at=now + self._ttl_seconds
            )

    async def get(self, chat_id: int) -> str | None:
        now = time.monotonic()
        async with self._lock:
            self._cleanup(now)
            selection = self._selections.get(chat_id)
        return selection.phrase if selection else None

    async def pop(self, chat_id: int) -> str | None:
        now = time.monotonic()
        async with self._lock:
            self._cleanup(now)
            selection = self._selections.pop(chat_id, None)
        return selection.phrase if selection else None

    def _cleanup(self, now: float) -> None:
        expired = [
            chat_id
            for chat_id, selection in self._selections.items()
            if selection.expires_at <= now
        ]
        for chat_id in expired:
            del self._selections[chat_id]
