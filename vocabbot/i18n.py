from __future__ import annotations

import logging

from vocabbot.constants import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "chat.hello": "👋 Hello",
        "chat.page_number": " Page",
        "message.bot_started": "The bot is already running. Use the menu below 👇",
        "message.helping": (
            "📚 I keep your personal vocabulary.\n\n"
            "/write - add new phrases\n"
            "/dictionary - browse your phrases page by page\n"
            "/language - change the interface language\n"
            "/help - show this message\n\n"
            "Tap a phrase in the dictionary to listen to it or delete it."
        ),
        "message.writing": "✍️ Send me a phrase and I will store it.",
        "message.phrase_stored": "✅ Phrase stored. Send another one or return to the menu.",
        "message.dictionary": "📖 Your dictionary:",
        "message.choose_language": "🌐 Choose the interface language:",
        "message.lang_chosen": "🇬🇧 English is set as the interface language.",
        "message.illegal_chars": (
            "⛔ The phrase contains illegal characters or is too long. "
            "Avoid asterisks, underscores, backticks and brackets, and keep it short."
        ),
        "message.phrase_already_stored": "☑️ This phrase is already in your dictionary.",
        "message.phrase_deleted": "🗑 Phrase deleted.",
        "message.phrase_not_found": "🤷 This phrase is no longer in your dictionary.",
        "message.selection_expired": "⌛ The selection has expired. Choose the phrase again.",
        "message.voice_unavailable": "🔇 Voice is not available right now.",
        "message.moving_back.main_menu": "🏠 Back to the main menu.",
        "message.moving_back.dict": "📖 Back to the dictionary.",
        "message.chosen_phrase": "🔎 Chosen phrase:",
        "message.confirm_deleting": "❓ Delete this phrase?",
        "message.error": "Something went wrong. Please try again later.",
        "button.write": "✍️ Add phrase",
        "button.dictionary": "📖 Dictionary",
        "button.language": "🌐 Language",
        "button.help": "❔ Help",
        "button.main_menu": "🏠 Main menu",
        "button.russian": "🇷🇺 Русский",
        "button.english": "🇬🇧 English",
        "button.previous": "⬅️",
        "button.next": "➡️",
        "button.listen": "🔊 Listen",
        "button.delete": "🗑 Delete",
        "button.back": "↩️ Back",
        "button.confirm": "✅ Yes",
        "button.cancel": "❌ No",
        "command.start": "Start the bot",
        "command.write": "Add new phrases",
        "command.dictionary": "Browse your phrases",
        "command.language": "Change the language",
        "command.help": "Show help",
    },
    "ru": {
        "chat.hello": "👋 Привет",
        "chat.page_number": " Страница",
        "message.bot_started": "Бот уже запущен. Пользуйтесь меню ниже 👇",
        "message.helping": (
            "📚 Я храню ваш личный словарь.\n\n"
            "/write - добавить новые фразы\n"
            "/dictionary - просмотреть фразы по страницам\n"
            "/language - сменить язык интерфейса\n"
            "/help - показать это сообщение\n\n"
            "Нажмите на фразу в словаре, чтобы прослушать или удалить её."
        ),
        "message.writing": "✍️ Отправьте фразу, и я сохраню её.",
        "message.phrase_stored": "✅ Фраза сохранена. Отправьте ещё одну или вернитесь в меню.",
        "message.dictionary": "📖 Ваш словарь:",
        "message.choose_language": "🌐 Выберите язык интерфейса:",
        "message.lang_chosen": "🇷🇺 Установлен русский язык интерфейса.",
        "message.illegal_chars": (
            "⛔ Фраза содержит недопустимые символы или слишком длинная. "
            "Не используйте звёздочки, подчёркивания, обратные кавычки и скобки, "
            "и сократите фразу."
        ),
        "message.phrase_already_stored": "☑️ Эта фраза уже есть в вашем словаре.",
        "message.phrase_deleted": "🗑 Фраза удалена.",
        "message.phrase_not_found": "🤷 Этой фразы больше нет в словаре.",
        "message.selection_expired": "⌛ Выбор устарел. Выберите фразу ещё раз.",
        "message.voice_unavailable": "🔇 Озвучка сейчас недоступна.",
        "message.moving_back.main_menu": "🏠 Возвращаемся в главное меню.",
        "message.moving_back.dict": "📖 Возвращаемся к словарю.",
        "message.chosen_phrase": "🔎 Выбранная фраза:",
        "message.confirm_deleting": "❓ Удалить эту фразу?",
        "message.error": "Произошла ошибка. Попробуйте позже.",
        "button.write": "✍️ Добавить фразу",
        "button.dictionary": "📖 Словарь",
        "button.language": "🌐 Язык",
        "button.help": "❔ Помощь",
        "button.main_menu": "🏠 Главное меню",
        "button.russian": "🇷🇺 Русский",
        "button.english": "🇬🇧 English",
        "button.previous": "⬅️",
        "button.next": "➡️",
        "button.listen": "🔊 Прослушать",
        "button.delete": "🗑 Удалить",
        "button.back": "↩️ Назад",
        "button.confirm": "✅ Да",
        "button.cancel": "❌ Нет",
        "command.start": "Запустить бота",
        "command.write": "Добавить фразы",
        "command.dictionary": "Просмотреть словарь",
        "command.language": "Сменить язык",
        "command.help": "Помощь",
    },
}


class Localization:
    def __init__(
        self,
        default_language: str = DEFAULT_LANGUAGE,
        messages: dict[str, dict[str, str]] | None = None,
    ) -> None:
        self._messages = messages or MESSAGES
        self._default_language = default_language

    @property
    def default_language(self) -> str:
        return self._default_language

    def resolve_language(self, language: str | None) -> str:
        if language and language in SUPPORTED_LANGUAGES:
            return language
        return self._default_language

    def get(self, key: str, language: str | None = None) -> str:
        effective = self.resolve_language(language)
        text = self._messages.get(effective, {}).get(key)
        if text is None:
            text = self._messages.get(self._default_language, {}).get(key)
        if text is None:
            logger.warning("Localization key %r not found (language=%s)", key, effective)
            return f"[{key}]"
        return text

    def variants(self, key: str) -> dict[str, str]:
        """Return the text of ``key`` for every supported language."""
        return {language: self.get(key, language) for language in SUPPORTED_LANGUAGES}
