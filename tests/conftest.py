from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any

import pytest
from telegram.error import TelegramError

from vocabbot.domain.models import BotState, PhraseRecord, UserRecord
from vocabbot.errors import PhraseNotFoundError, UserNotFoundError
from vocabbot.handlers.chat import ChatHandler
from vocabbot.handlers.keyboards import KeyboardFactory
from vocabbot.i18n import Localization
from vocabbot.services.dispatcher import StateDispatcher
from vocabbot.services.pagination import PhrasePageRenderer
from vocabbot.services.selection import PhraseSelectionStore
from vocabbot.services.transport import TextMessage


class InMemoryUsersRepository:
    def __init__(self) -> None:
        self.users: dict[int, UserRecord] = {}
        self.writes: list[tuple[str, int, Any]] = []

    async def get(self, user_id: int) -> UserRecord | None:
        return self.users.get(user_id)

    async def find(self, user_id: int) -> UserRecord:
        user = self.users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def exists(self, user_id: int) -> bool:
        return user_id in self.users

    async def create(
        self, *, user_id: int, username: str | None, first_name: str | None, language: str
    ) -> UserRecord:
        self.writes.append(("create", user_id, username))
        existing = self.users.get(user_id)
        if existing is not None:
            user = replace(existing, username=username, first_name=first_name)
        else:
            user = UserRecord(
                id=user_id,
                username=username,
                first_name=first_name,
                registered_at=datetime.now(UTC),
                bot_state=BotState.DEFAULT,
                current_page=0,
                language=language,
            )
        self.users[user_id] = user
        return user

    async def set_bot_state(self, user_id: int, state: BotState) -> None:
        self.writes.append(("bot_state", user_id, state))
        self.users[user_id] = replace(self.users[user_id], bot_state=state)

    async def set_current_page(self, user_id: int, page: int) -> None:
        self.writes.append(("current_page", user_id, page))
        self.users[user_id] = replace(self.users[user_id], current_page=max(0, page))

    async def set_language(self, user_id: int, language: str) -> None:
        self.writes.append(("language", user_id, language))
        self.users[user_id] = replace(self.users[user_id], language=language)


class InMemoryPhrasesRepository:
    def __init__(self) -> None:
        self.phrases: dict[int, PhraseRecord] = {}
        self._next_id = 1

    async def add(self, *, user_id: int, text: str) -> PhraseRecord:
        record = PhraseRecord(id=self._next_id, user_id=user_id, text=text)
        self.phrases[record.id] = record
        self._next_id += 1
        return record

    async def get(self, phrase_id: int) -> PhraseRecord:
        record = self.phrases.get(phrase_id)
        if record is None:
            raise PhraseNotFoundError(phrase_id)
        return record

    async def find_by_text(self, *, user_id: int, text: str) -> PhraseRecord | None:
        for record in self.phrases.values():
            if record.user_id == user_id and record.text == text:
                return record
        return None

    async def exists(self, *, user_id: int, text: str) -> bool:
        return any(
            record.user_id == user_id and record.text.lower() == text.lower()
            for record in self.phrases.values()
        )

    async def list_texts(self, user_id: int) -> list[str]:
        return [
            record.text
            for record in sorted(self.phrases.values(), key=lambda item: item.id)
            if record.user_id == user_id
        ]

    async def count(self, user_id: int) -> int:
        return len(await self.list_texts(user_id))

    async def delete(self, phrase_id: int) -> None:
        if self.phrases.pop(phrase_id, None) is None:
            raise PhraseNotFoundError(phrase_id)


class RecordingTransport:
    def __init__(self) -> None:
        self.sent: list[Any] = []

    async def execute(self, message: Any) -> Any | None:
        self.sent.append(message)
        return None


class FakeBot:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def _record(self, name: str, kwargs: dict[str, Any]) -> Any:
        self.calls.append((name, kwargs))
        if self.fail:
            raise TelegramError("simulated send failure")
        return SimpleNamespace(message_id=len(self.calls))

    async def send_message(self, **kwargs: Any) -> Any:
        return await self._record("send_message", kwargs)

    async def send_voice(self, **kwargs: Any) -> Any:
        return await self._record("send_voice", kwargs)

    async def send_sticker(self, **kwargs: Any) -> Any:
        return await self._record("send_sticker", kwargs)

    async def delete_message(self, **kwargs: Any) -> Any:
        return await self._record("delete_message", kwargs)


class FakeTTS:
    def __init__(self, payload: bytes | None = b"ID3voice") -> None:
        self.payload = payload
        self.requests: list[str] = []

    async def synthesize_phrase(self, text: str) -> bytes | None:
        self.requests.append(text)
        return self.payload


class FakeCallbackQuery:
    def __init__(
        self, data: str, message_id: int = 500, answer_error: Exception | None = None
    ) -> None:
        self.data = data
        self.message = SimpleNamespace(message_id=message_id)
        self.answers: list[dict[str, Any]] = []
        self._answer_error = answer_error

    async def answer(self, text: str | None = None, show_alert: bool = False) -> None:
        if self._answer_error is not None:
            raise self._answer_error
        self.answers.append({"text": text, "show_alert": show_alert})


def text_update(chat_id: int, text: str, *, username: str | None = "learner") -> SimpleNamespace:
    return SimpleNamespace(
        effective_chat=SimpleNamespace(id=chat_id),
        effective_user=SimpleNamespace(username=username, first_name="Lea"),
        effective_message=SimpleNamespace(text=text),
        callback_query=None,
    )


def callback_update(
    chat_id: int, data: str, answer_error: Exception | None = None
) -> SimpleNamespace:
    return SimpleNamespace(
        effective_chat=SimpleNamespace(id=chat_id),
        effective_user=SimpleNamespace(username="learner", first_name="Lea"),
        effective_message=None,
        callback_query=FakeCallbackQuery(data, answer_error=answer_error),
    )


class ChatHarness:
    """Drives ``ChatHandler`` for one chat against in-memory stores."""

    chat_id = 100

    def __init__(self, *, tts_payload: bytes | None = b"voice", sticker: str | None = None) -> None:
        self.users = InMemoryUsersRepository()
        self.phrases = InMemoryPhrasesRepository()
        self.localization = Localization("en")
        self.keyboards = KeyboardFactory(self.localization)
        self.transport = RecordingTransport()
        self.selections = PhraseSelectionStore(ttl_seconds=600)
        self.tts = FakeTTS(tts_payload)
        self.handler = ChatHandler(
            users_repo=self.users,
            phrases_repo=self.phrases,
            dispatcher=StateDispatcher(self.users, self.localization),
            renderer=PhrasePageRenderer(
                self.users, self.phrases, self.keyboards, self.localization, page_size=10
            ),
            keyboards=self.keyboards,
            localization=self.localization,
            transport=self.transport,
            selections=self.selections,
            tts=self.tts,
            welcome_sticker_id=sticker,
        )

    def text(self, *messages: str) -> None:
        async def run_case():
            for message in messages:
                await self.handler.text_message(text_update(self.chat_id, message), None)

        asyncio.run(run_case())

    def callback(self, data: str, *, answer_error: Exception | None = None):
        update = callback_update(self.chat_id, data, answer_error)
        asyncio.run(self._dispatch_callback(update, data))
        return update.callback_query

    async def _dispatch_callback(self, update, data: str) -> None:
        if data.startswith("phrase: "):
            await self.handler.phrase_callback(update, None)
        elif data.startswith("page:"):
            await self.handler.page_callback(update, None)
        elif data.startswith("phrase_action:"):
            await self.handler.phrase_action_callback(update, None)
        else:
            await self.handler.delete_callback(update, None)

    @property
    def user(self) -> UserRecord:
        return self.users.users[self.chat_id]

    def texts(self) -> list[str]:
        return [item.text for item in self.transport.sent if isinstance(item, TextMessage)]


@pytest.fixture
def users_repo() -> InMemoryUsersRepository:
    return InMemoryUsersRepository()


@pytest.fixture
def phrases_repo() -> InMemoryPhrasesRepository:
    return InMemoryPhrasesRepository()


@pytest.fixture
def localization() -> Localization:
    return Localization("en")


@pytest.fixture
def fake_bot() -> FakeBot:
    return FakeBot()


@pytest.fixture
def make_harness():
    return ChatHarness


@pytest.fixture
def harness() -> ChatHarness:
    return ChatHarness()
