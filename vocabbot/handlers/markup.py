from __future__ import annotations

from enum import StrEnum
from typing import assert_never

from vocabbot.domain.models import BotState


class MarkupKind(StrEnum):
    MAIN_MENU = "main_menu"
    DICTIONARY_PAGE = "dictionary_page"
    LANGUAGE_CHOICE = "language_choice"
    RETURN_TO_MENU = "return_to_menu"


def select_markup_kind(state: BotState) -> MarkupKind:
    match state:
        case BotState.DEFAULT:
            return MarkupKind.MAIN_MENU
        case BotState.READING_DICTIONARY:
            return MarkupKind.DICTIONARY_PAGE
        case BotState.LANGUAGE_CHANGE:
            return MarkupKind.LANGUAGE_CHOICE
        case BotState.AWAITING_PHRASE | BotState.VIEWING_PHRASE:
            return MarkupKind.RETURN_TO_MENU
        case _:
            assert_never(state)
