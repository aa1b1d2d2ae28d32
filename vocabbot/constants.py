from __future__ import annotations

SUPPORTED_LANGUAGES: dict[str, str] = {
    "en": "English",
    "ru": "Русский",
}

DEFAULT_LANGUAGE = "en"
DEFAULT_PAGE_SIZE = 10
DEFAULT_SELECTION_TTL_SECONDS = 900

# Telegram rejects callback_data longer than 64 bytes.
CALLBACK_DATA_MAX_BYTES = 64

START = "/start"
HELP = "/help"
WRITE = "/write"
PHRASE_STORED = "/phrase"
DICTIONARY = "/dictionary"
LANGUAGE = "/language"
RUS_LANG = "/rus_lang"
ENG_LANG = "/eng_lang"
ILLEGAL_CHARACTERS = "/illegal_characters"
PHRASE_ALREADY_STORED = "/phrase_already_stored"
PHRASE_DELETED = "/phrase_deleted"
PHRASE_NOT_FOUND = "/phrase_not_found"
SELECTION_EXPIRED = "/selection_expired"
VOICE_UNAVAILABLE = "/voice_unavailable"
RETURN_TO_MAIN_MENU = "/return_to_main_menu"
RETURN_TO_DICTIONARY = "/return_to_dictionary"

LANGUAGE_COMMANDS: dict[str, str] = {
    RUS_LANG: "ru",
    ENG_LANG: "en",
}

# Commands shown in the Telegram command menu, with their description keys.
MENU_COMMANDS: tuple[tuple[str, str], ...] = (
    ("start", "command.start"),
    ("write", "command.write"),
    ("dictionary", "command.dictionary"),
    ("language", "command.language"),
    ("help", "command.help"),
)
