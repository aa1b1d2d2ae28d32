from __future__ import annotations

from vocabbot import constants
from vocabbot.domain.models import BotState

COMMAND_TRANSITIONS: dict[str, BotState] = {
    constants.START: BotState.DEFAULT,
    constants.RUS_LANG: BotState.DEFAULT,
    constants.ENG_LANG: BotState.DEFAULT,
    constants.RETURN_TO_MAIN_MENU: BotState.DEFAULT,
    constants.WRITE: BotState.AWAITING_PHRASE,
    constants.PHRASE_STORED: BotState.AWAITING_PHRASE,
    constants.ILLEGAL_CHARACTERS: BotState.AWAITING_PHRASE,
    constants.PHRASE_ALREADY_STORED: BotState.AWAITING_PHRASE,
    constants.LANGUAGE: BotState.LANGUAGE_CHANGE,
    constants.DICTIONARY: BotState.READING_DICTIONARY,
    constants.RETURN_TO_DICTIONARY: BotState.READING_DICTIONARY,
    constants.PHRASE_DELETED: BotState.READING_DICTIONARY,
    constants.PHRASE_NOT_FOUND: BotState.READING_DICTIONARY,
    constants.SELECTION_EXPIRED: BotState.READING_DICTIONARY,
}

# Commands that open the dictionary from its first page.
PAGE_RESET_COMMANDS: frozenset[str] = frozenset({constants.DICTIONARY})


def next_state(command: str, current: BotState) -> BotState:
    return COMMAND_TRANSITIONS.get(command, current)
