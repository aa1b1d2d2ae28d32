from __future__ import annotations

from telegram import (
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
)

from vocabbot import constants
from vocabbot.domain.pagination import PhrasePage
from vocabbot.domain.validation import phrase_callback_data
from vocabbot.i18n import Localization

PAGE_PREFIX = "page:"
PAGE_PATTERN = r"^page:\d+$"
PHRASE_PATTERN = r"^phrase: .+"
PHRASE_LISTEN = "phrase_action:listen"
PHRASE_DELETE = "phrase_action:delete"
PHRASE_BACK = "phrase_action:back"
DELETE_CONFIRM = "delete:confirm"
DELETE_CANCEL = "delete:cancel"
PHRASE_ACTION_PATTERN = rf"^({PHRASE_LISTEN}|{PHRASE_DELETE}|{PHRASE_BACK})$"
DELETE_PATTERN = rf"^({DELETE_CONFIRM}|{DELETE_CANCEL})$"

# Reply keyboard label key -> command the label stands for.
BUTTON_COMMANDS: dict[str, str] = {
    "button.write": constants.WRITE,
    "button.dictionary": constants.DICTIONARY,
    "button.language": constants.LANGUAGE,
    "button.help": constants.HELP,
    "button.main_menu": constants.RETURN_TO_MAIN_MENU,
    "button.russian": constants.RUS_LANG,
    "button.english": constants.ENG_LANG,
}


class KeyboardFactory:
    def __init__(self, localization: Localization) -> None:
        self._localization = localization
        self._label_commands: dict[str, str] = {}
        for key, command in BUTTON_COMMANDS.items():
            for label in localization.variants(key).values():
                self._label_commands[label] = command

    def command_for_label(self, text: str) -> str | None:
        return self._label_commands.get(text.strip())

    def _button(self, key: str, language: str) -> KeyboardButton:
        return KeyboardButton(self._localization.get(key, language))

    def main_menu(self, language: str) -> ReplyKeyboardMarkup:
        return ReplyKeyboardMarkup(
            [
                [self._button("button.write", language), self._button("button.dictionary", language)],
                [self._button("button.language", language), self._button("button.help", language)],
            ],
            resize_keyboard=True,
        )

    def language_choice(self, language: str) -> ReplyKeyboardMarkup:
        return ReplyKeyboardMarkup(
            [
                [self._button("button.russian", language), self._button("button.english", language)],
                [self._button("button.main_menu", language)],
            ],
            resize_keyboard=True,
            one_time_keyboard=True,
        )

    def return_to_menu(self, language: str) -> ReplyKeyboardMarkup:
        return ReplyKeyboardMarkup(
            [[self._button("button.main_menu", language)]],
            resize_keyboard=True,
        )

    def phrase_page(self, page: PhrasePage, language: str) -> InlineKeyboardMarkup:
        rows = [
            [InlineKeyboardButton(f"{number}. {text}", callback_data=phrase_callback_data(text))]
            for number, text in page.numbered_items
        ]
        navigation: list[InlineKeyboardButton] = []
        if page.has_previous:
            navigation.append(
                InlineKeyboardButton(
                    self._localization.get("button.previous", language),
                    callback_data=f"{PAGE_PREFIX}{page.previous_page}",
                )
            )
        if page.has_next:
            navigation.append(
                InlineKeyboardButton(
                    self._localization.get("button.next", language),
                    callback_data=f"{PAGE_PREFIX}{page.page + 1}",
                )
            )
        if navigation:
            rows.append(navigation)
        return InlineKeyboardMarkup(rows)

    def chosen_phrase(self, language: str) -> InlineKeyboardMarkup:
        return InlineKeyboardMarkup(
            [
                [
                    InlineKeyboardButton(
                        self._localization.get("button.listen", language),
                        callback_data=PHRASE_LISTEN,
                    ),
                    InlineKeyboardButton(
                        self._localization.get("button.delete", language),
                        callback_data=PHRASE_DELETE,
                    ),
                ],
                [
                    InlineKeyboardButton(
                        self._localization.get("button.back", language),
                        callback_data=PHRASE_BACK,
                    )
                ],
            ]
        )

    def delete_confirmation(self, language: str) -> InlineKeyboardMarkup:
        return InlineKeyboardMarkup(
            [
                [
                    InlineKeyboardButton(
                        self._localization.get("button.confirm", language),
                        callback_data=DELETE_CONFIRM,
                    ),
                    InlineKeyboardButton(
                        self._localization.get("button.cancel", language),
                        callback_data=DELETE_CANCEL,
                    ),
                ]
            ]
        )
