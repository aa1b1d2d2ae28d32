from __future__ import annotations

import logging

from telegram import BotCommand
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    MessageHandler,
    filters,
)

from vocabbot.config import Settings
from vocabbot.constants import MENU_COMMANDS, SUPPORTED_LANGUAGES
from vocabbot.db.pool import DatabasePool
from vocabbot.db.repositories.phrases import PhrasesRepository
from vocabbot.db.repositories.users import UsersRepository
from vocabbot.handlers.chat import ChatHandler
from vocabbot.handlers.keyboards import (
    DELETE_PATTERN,
    PAGE_PATTERN,
    PHRASE_ACTION_PATTERN,
    PHRASE_PATTERN,
    KeyboardFactory,
)
from vocabbot.i18n import Localization
from vocabbot.services.dispatcher import StateDispatcher
from vocabbot.services.pagination import PhrasePageRenderer
from vocabbot.services.selection import PhraseSelectionStore
from vocabbot.services.transport import TelegramTransport
from vocabbot.services.tts import GTTSService

logger = logging.getLogger(__name__)


def bot_commands(localization: Localization, language: str) -> list[BotCommand]:
    return [
        BotCommand(command, localization.get(description_key, language))
        for command, description_key in MENU_COMMANDS
    ]


def register_handlers(app: Application, chat_handler: ChatHandler) -> None:
    app.add_handler(CallbackQueryHandler(chat_handler.phrase_callback, pattern=PHRASE_PATTERN))
    app.add_handler(CallbackQueryHandler(chat_handler.page_callback, pattern=PAGE_PATTERN))
    app.add_handler(
        CallbackQueryHandler(chat_handler.phrase_action_callback, pattern=PHRASE_ACTION_PATTERN)
    )
    app.add_handler(CallbackQueryHandler(chat_handler.delete_callback, pattern=DELETE_PATTERN))
    app.add_handler(MessageHandler(filters.TEXT, chat_handler.text_message))
    app.add_error_handler(chat_handler.error_handler)


def create_application(settings: Settings) -> Application:
    db_pool = DatabasePool(settings.database_url)
    users_repo = UsersRepository(db_pool.pool)
    phrases_repo = PhrasesRepository(db_pool.pool)
    localization = Localization(settings.default_language)
    keyboards = KeyboardFactory(localization)
    dispatcher = StateDispatcher(users_repo, localization)
    renderer = PhrasePageRenderer(
        users_repo,
        phrases_repo,
        keyboards,
        localization,
        page_size=settings.page_size,
    )
    selections = PhraseSelectionStore(settings.selection_ttl_seconds)
    tts_service = GTTSService(enabled=settings.tts_enabled, language=settings.tts_language)

    async def post_init(app: Application) -> None:
        await db_pool.open()
        await app.bot.set_my_commands(bot_commands(localization, settings.default_language))
        for language in SUPPORTED_LANGUAGES:
            await app.bot.set_my_commands(
                bot_commands(localization, language), language_code=language
            )
        logger.info("Telegram command menu registered.")

    async def post_shutdown(app: Application) -> None:
        await db_pool.close()

    app = (
        Application.builder()
        .token(settings.telegram_bot_token)
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )

    chat_handler = ChatHandler(
        users_repo=users_repo,
        phrases_repo=phrases_repo,
        dispatcher=dispatcher,
        renderer=renderer,
        keyboards=keyboards,
        localization=localization,
        transport=TelegramTransport(app.bot),
        selections=selections,
        tts=tts_service,
        welcome_sticker_id=settings.welcome_sticker_id,
    )
    register_handlers(app, chat_handler)
    return app
