from __future__ import annotations

import logging

from telegram.helpers import escape_markdown

from vocabbot import constants
from vocabbot.db.repositories.users import UsersRepository
from vocabbot.domain.models import ChatProfile, UserRecord
from vocabbot.i18n import Localization

logger = logging.getLogger(__name__)

RESPONSE_KEYS: dict[str, str] = {
    constants.HELP: "message.helping",
    constants.WRITE: "message.writing",
    constants.PHRASE_STORED: "message.phrase_stored",
    constants.DICTIONARY: "message.dictionary",
    constants.LANGUAGE: "message.choose_language",
    constants.RUS_LANG: "message.lang_chosen",
    constants.ENG_LANG: "message.lang_chosen",
    constants.ILLEGAL_CHARACTERS: "message.illegal_chars",
    constants.PHRASE_ALREADY_STORED: "message.phrase_already_stored",
    constants.PHRASE_DELETED: "message.phrase_deleted",
    constants.PHRASE_NOT_FOUND: "message.phrase_not_found",
    constants.SELECTION_EXPIRED: "message.selection_expired",
    constants.VOICE_UNAVAILABLE: "message.voice_unavailable",
    constants.RETURN_TO_MAIN_MENU: "message.moving_back.main_menu",
    constants.RETURN_TO_DICTIONARY: "message.moving_back.dict",
}


def is_known_command(command: str) -> bool:
    return command == constants.START or command in RESPONSE_KEYS


class StateDispatcher:
    """Turns a command token into the reply text for a chat.

    Registering a chat that sends ``/start`` for the first time is the only
    write performed here; state transitions are applied by the caller.
    """

    def __init__(self, users_repo: UsersRepository, localization: Localization) -> None:
        self._users = users_repo
        self._localization = localization

    async def register(self, chat: ChatProfile) -> UserRecord:
        user = await self._users.create(
            user_id=chat.chat_id,
            username=chat.username,
            first_name=chat.first_name,
            language=self._localization.default_language,
        )
        logger.info("Registered user %s (@%s)", user.id, user.username or "-")
        return user

    async def resolve(self, command: str, chat: ChatProfile) -> str:
        if command == constants.START:
            return await self._resolve_start(chat)

        key = RESPONSE_KEYS.get(command)
        if key is None:
            return ""
        user = await self._users.find(chat.chat_id)
        language = constants.LANGUAGE_COMMANDS.get(command, user.language)
        return self._localization.get(key, language)

    async def _resolve_start(self, chat: ChatProfile) -> str:
        user = await self._users.get(chat.chat_id)
        if user is not None:
            return self._localization.get("message.bot_started", user.language)
        user = await self.register(chat)
        greeting = self._localization.get("chat.hello", user.language)
        if user.username:
            return f"{greeting} @{escape_markdown(user.username)}"
        return f"{greeting}, {escape_markdown(user.display_name)}"
