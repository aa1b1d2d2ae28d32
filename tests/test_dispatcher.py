from __future__ import annotations

import asyncio

import pytest

from vocabbot.domain.models import BotState, ChatProfile
from vocabbot.errors import UserNotFoundError
from vocabbot.services.dispatcher import StateDispatcher


@pytest.fixture
def dispatcher(users_repo, localization) -> StateDispatcher:
    return StateDispatcher(users_repo, localization)


def test_start_registers_user_once(dispatcher, users_repo, localization) -> None:
    chat = ChatProfile(chat_id=42, username="polyglot", first_name="Ann")

    async def run_case():
        first = await dispatcher.resolve("/start", chat)
        second = await dispatcher.resolve("/start", chat)
        return first, second

    first, second = asyncio.run(run_case())
    assert first == "👋 Hello @polyglot"
    assert second == localization.get("message.bot_started", "en")
    assert list(users_repo.users) == [42]
    assert [write for write in users_repo.writes if write[0] == "create"] == [("create", 42, "polyglot")]

    user = users_repo.users[42]
    assert user.bot_state is BotState.DEFAULT
    assert user.current_page == 0
    assert user.language == "en"


def test_greeting_escapes_markdown_in_username(dispatcher) -> None:
    reply = asyncio.run(dispatcher.resolve("/start", ChatProfile(chat_id=1, username="word_nerd")))
    assert reply == "👋 Hello @word\\_nerd"


def test_greeting_falls_back_to_first_name(dispatcher) -> None:
    reply = asyncio.run(dispatcher.resolve("/start", ChatProfile(chat_id=1, first_name="Ann")))
    assert reply == "👋 Hello, Ann"


def test_unrecognized_command_yields_empty_reply_without_writes(dispatcher, users_repo) -> None:
    chat = ChatProfile(chat_id=5, username="x")

    assert asyncio.run(dispatcher.resolve("/unknown", chat)) == ""
    assert asyncio.run(dispatcher.resolve("hello there", chat)) == ""
    assert users_repo.users == {}
    assert users_repo.writes == []


def test_known_command_for_unknown_chat_raises(dispatcher) -> None:
    with pytest.raises(UserNotFoundError) as excinfo:
        asyncio.run(dispatcher.resolve("/help", ChatProfile(chat_id=9)))
    assert excinfo.value.chat_id == 9


def test_replies_use_user_language_and_chosen_language(dispatcher, users_repo, localization) -> None:
    chat = ChatProfile(chat_id=3, username="ivan")

    async def run_case():
        await dispatcher.resolve("/start", chat)
        help_text = await dispatcher.resolve("/help", chat)
        russian = await dispatcher.resolve("/rus_lang", chat)
        english = await dispatcher.resolve("/eng_lang", chat)
        return help_text, russian, english

    help_text, russian, english = asyncio.run(run_case())
    assert help_text == localization.get("message.helping", "en")
    assert russian == localization.get("message.lang_chosen", "ru")
    assert english == localization.get("message.lang_chosen", "en")
    assert users_repo.users[3].language == "en"
