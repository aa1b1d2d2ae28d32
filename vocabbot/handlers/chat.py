from __future__ import annotations

import logging
from dataclasses import replace

from telegram import Update
from telegram.error import BadRequest
from telegram.ext import ContextTypes

from vocabbot import constants
from vocabbot.db.repositories.phrases import PhrasesRepository
from vocabbot.db.repositories.users import UsersRepository
from vocabbot.domain.models import BotState, ChatProfile, UserRecord
from vocabbot.domain.pagination import max_page_for
from vocabbot.domain.states import PAGE_RESET_COMMANDS, next_state
from vocabbot.domain.validation import extract_phrase, validate_phrase
from vocabbot.errors import PhraseNotFoundError, UserNotFoundError
from vocabbot.handlers.keyboards import (
    DELETE_CONFIRM,
    PAGE_PREFIX,
    PHRASE_BACK,
    PHRASE_DELETE,
    PHRASE_LISTEN,
    KeyboardFactory,
)
from vocabbot.handlers.markup import MarkupKind, select_markup_kind
from vocabbot.i18n import Localization
from vocabbot.services.dispatcher import StateDispatcher, is_known_command
from vocabbot.services.pagination import PhrasePageRenderer
from vocabbot.services.selection import PhraseSelectionStore
from vocabbot.services.transport import (
    DeleteMessage,
    Sticker,
    TelegramTransport,
    TextMessage,
    VoiceNote,
)
from vocabbot.services.tts import GTTSService

logger = logging.getLogger(__name__)


def command_token(text: str) -> str | None:
    if not text.startswith("/"):
        return None
    return text.split(maxsplit=1)[0].split("@")[0]


def chat_profile(update: Update) -> ChatProfile | None:
    chat = update.effective_chat
    if chat is None:
        return None
    user = update.effective_user
    return ChatProfile(
        chat_id=chat.id,
        username=user.username if user else None,
        first_name=user.first_name if user else None,
    )


async def _safe_query_answer(query, *, text: str | None = None, show_alert: bool = False) -> None:
    try:
        await query.answer(text=text, show_alert=show_alert)
    except BadRequest as exc:
        lowered = str(exc).lower()
        if "query is too old" in lowered or "query id is invalid" in lowered:
            logger.debug("Ignoring stale callback query answer error: %s", exc)
            return
        raise


class ChatHandler:
    def __init__(
        self,
        *,
        users_repo: UsersRepository,
        phrases_repo: PhrasesRepository,
        dispatcher: StateDispatcher,
        renderer: PhrasePageRenderer,
        keyboards: KeyboardFactory,
        localization: Localization,
        transport: TelegramTransport,
        selections: PhraseSelectionStore,
        tts: GTTSService,
        welcome_sticker_id: str | None = None,
    ) -> None:
        self._users = users_repo
        self._phrases = phrases_repo
        self._dispatcher = dispatcher
        self._renderer = renderer
        self._keyboards = keyboards
        self._localization = localization
        self._transport = transport
        self._selections = selections
        self._tts = tts
        self._welcome_sticker_id = welcome_sticker_id

    # Command flow

    async def handle_command(self, chat: ChatProfile, command: str) -> None:
        is_new_user = command == constants.START and not await self._users.exists(chat.chat_id)
        try:
            reply = await self._dispatcher.resolve(command, chat)
        except UserNotFoundError:
            logger.info("Chat %s sent %s before /start; registering it.", chat.chat_id, command)
            await self._dispatcher.register(chat)
            reply = await self._dispatcher.resolve(command, chat)
        if not reply:
            logger.debug("Ignoring unrecognized command %r from chat %s", command, chat.chat_id)
            return

        user = await self._apply_transition(chat.chat_id, command)
        if is_new_user and self._welcome_sticker_id:
            await self._transport.execute(Sticker(chat_id=chat.chat_id, sticker=self._welcome_sticker_id))
        await self.send_message(user, reply)

    async def _apply_transition(self, chat_id: int, command: str) -> UserRecord:
        user = await self._users.find(chat_id)
        state = next_state(command, user.bot_state)
        language = constants.LANGUAGE_COMMANDS.get(command, user.language)
        page = 0 if command in PAGE_RESET_COMMANDS else user.current_page
        if state is not user.bot_state:
            await self._users.set_bot_state(chat_id, state)
        if language != user.language:
            await self._users.set_language(chat_id, language)
        if page != user.current_page:
            await self._users.set_current_page(chat_id, page)
        return replace(user, bot_state=state, language=language, current_page=page)

    async def send_message(self, user: UserRecord, text: str) -> None:
        kind = select_markup_kind(user.bot_state)
        match kind:
            case MarkupKind.MAIN_MENU:
                markup = self._keyboards.main_menu(user.language)
            case MarkupKind.LANGUAGE_CHOICE:
                markup = self._keyboards.language_choice(user.language)
            case MarkupKind.RETURN_TO_MENU:
                markup = self._keyboards.return_to_menu(user.language)
            case MarkupKind.DICTIONARY_PAGE:
                markup = None
        await self._transport.execute(TextMessage(chat_id=user.id, text=text, reply_markup=markup))
        if kind is MarkupKind.DICTIONARY_PAGE:
            await self._transport.execute(await self._renderer.render(user.id))

    async def _submit_phrase(self, chat: ChatProfile, text: str) -> str | None:
        user = await self._users.get(chat.chat_id)
        if user is None or user.bot_state is not BotState.AWAITING_PHRASE:
            return None
        validation = validate_phrase(text)
        if not validation.is_valid:
            return constants.ILLEGAL_CHARACTERS
        if await self._phrases.exists(user_id=user.id, text=validation.text):
            return constants.PHRASE_ALREADY_STORED
        phrase = await self._phrases.add(user_id=user.id, text=validation.text)
        logger.info("Stored phrase %s for user %s", phrase.id, user.id)
        return constants.PHRASE_STORED

    async def _ensure_user(self, chat: ChatProfile) -> UserRecord:
        try:
            return await self._users.find(chat.chat_id)
        except UserNotFoundError:
            return await self._dispatcher.register(chat)

    # Telegram callbacks

    async def text_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.effective_message
        chat = chat_profile(update)
        if message is None or chat is None or not message.text:
            return
        text = message.text.strip()
        command = command_token(text)
        if command is None or not is_known_command(command):
            label_command = self._keyboards.command_for_label(text)
            if label_command is not None:
                command = label_command
            elif command is None:
                command = await self._submit_phrase(chat, text)
                if command is None:
                    return
        await self.handle_command(chat, command)

    async def phrase_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        chat = chat_profile(update)
        if query is None or query.data is None or chat is None:
            return
        await _safe_query_answer(query)
        phrase = extract_phrase(query.data)
        if phrase is None:
            return

        user = await self._ensure_user(chat)
        await self._selections.select(chat.chat_id, phrase)
        if user.bot_state is not BotState.VIEWING_PHRASE:
            await self._users.set_bot_state(chat.chat_id, BotState.VIEWING_PHRASE)
        title = self._localization.get("message.chosen_phrase", user.language)
        await self._transport.execute(
            TextMessage(
                chat_id=chat.chat_id,
                text=f"{title}\n*{phrase}*",
                reply_markup=self._keyboards.chosen_phrase(user.language),
            )
        )

    async def page_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        chat = chat_profile(update)
        if query is None or query.data is None or chat is None:
            return
        await _safe_query_answer(query)
        raw = query.data.removeprefix(PAGE_PREFIX)
        if not raw.isdigit():
            return

        user = await self._ensure_user(chat)
        page = min(int(raw), await self._last_page(user.id))
        await self._users.set_current_page(chat.chat_id, page)
        if user.bot_state is not BotState.READING_DICTIONARY:
            await self._users.set_bot_state(chat.chat_id, BotState.READING_DICTIONARY)
        if query.message is not None:
            await self._transport.execute(
                DeleteMessage(chat_id=chat.chat_id, message_id=query.message.message_id)
            )
        await self._transport.execute(await self._renderer.render(chat.chat_id))

    async def phrase_action_callback(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        query = update.callback_query
        chat = chat_profile(update)
        if query is None or query.data is None or chat is None:
            return
        await _safe_query_answer(query)

        if query.data == PHRASE_BACK:
            await self._selections.pop(chat.chat_id)
            await self.handle_command(chat, constants.RETURN_TO_DICTIONARY)
            return

        phrase = await self._selections.get(chat.chat_id)
        if phrase is None:
            await self.handle_command(chat, constants.SELECTION_EXPIRED)
            return

        if query.data == PHRASE_LISTEN:
            voice = await self._tts.synthesize_phrase(phrase)
            if voice is None:
                await self.handle_command(chat, constants.VOICE_UNAVAILABLE)
                return
            await self._transport.execute(VoiceNote(chat_id=chat.chat_id, voice=voice, caption=phrase))
        elif query.data == PHRASE_DELETE:
            user = await self._ensure_user(chat)
            question = self._localization.get("message.confirm_deleting", user.language)
            await self._transport.execute(
                TextMessage(
                    chat_id=chat.chat_id,
                    text=f"{question}\n*{phrase}*",
                    reply_markup=self._keyboards.delete_confirmation(user.language),
                )
            )

    async def delete_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        chat = chat_profile(update)
        if query is None or query.data is None or chat is None:
            return
        await _safe_query_answer(query)
        if query.message is not None:
            await self._transport.execute(
                DeleteMessage(chat_id=chat.chat_id, message_id=query.message.message_id)
            )

        phrase = await self._selections.pop(chat.chat_id)
        if query.data != DELETE_CONFIRM:
            await self.handle_command(chat, constants.RETURN_TO_DICTIONARY)
            return
        if phrase is None:
            await self.handle_command(chat, constants.SELECTION_EXPIRED)
            return
        await self.handle_command(chat, await self._delete_phrase(chat, phrase))

    async def _delete_phrase(self, chat: ChatProfile, phrase: str) -> str:
        user = await self._ensure_user(chat)
        record = await self._phrases.find_by_text(user_id=user.id, text=phrase)
        if record is None:
            return constants.PHRASE_NOT_FOUND
        try:
            await self._phrases.delete(record.id)
        except PhraseNotFoundError:
            logger.info("Phrase %s was already deleted for user %s", record.id, user.id)
            return constants.PHRASE_NOT_FOUND
        logger.info("Deleted phrase %s for user %s", record.id, user.id)

        last_page = await self._last_page(user.id)
        if user.current_page > last_page:
            await self._users.set_current_page(user.id, last_page)
        return constants.PHRASE_DELETED

    async def _last_page(self, user_id: int) -> int:
        total = await self._phrases.count(user_id)
        return max(0, max_page_for(total, self._renderer.page_size) - 1)

    async def error_handler(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        logger.exception("Unhandled telegram error", exc_info=context.error)
        if isinstance(update, Update) and update.effective_chat is not None:
            await self._transport.execute(
                TextMessage(
                    chat_id=update.effective_chat.id,
                    text=self._localization.get("message.error"),
                    parse_mode=None,
                )
            )
