from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

from vocabbot import constants

PHRASE_CALLBACK_LABEL = "phrase"
PHRASE_CALLBACK_SEPARATOR = ": "
MAX_PHRASE_BYTES = constants.CALLBACK_DATA_MAX_BYTES - len(
    (PHRASE_CALLBACK_LABEL + PHRASE_CALLBACK_SEPARATOR).encode("utf-8")
)

_WHITESPACE_RE = re.compile(r"\s+")
# Markdown control characters would break the rendered dictionary page.
_ILLEGAL_CHARACTERS = frozenset("*_`[]\\")


@dataclass(frozen=True, slots=True)
class PhraseValidation:
    text: str
    is_valid: bool


def normalize_phrase(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def has_illegal_characters(text: str) -> bool:
    if not text or text.startswith("/"):
        return True
    for char in text:
        if char in _ILLEGAL_CHARACTERS:
            return True
        if unicodedata.category(char) == "Cc":
            return True
    return False


def validate_phrase(text: str) -> PhraseValidation:
    normalized = normalize_phrase(text)
    if has_illegal_characters(normalized):
        return PhraseValidation(text=normalized, is_valid=False)
    if len(normalized.encode("utf-8")) > MAX_PHRASE_BYTES:
        return PhraseValidation(text=normalized, is_valid=False)
    return PhraseValidation(text=normalized, is_valid=True)


def phrase_callback_data(text: str) -> str:
    return f"{PHRASE_CALLBACK_LABEL}{PHRASE_CALLBACK_SEPARATOR}{text}"


def extract_phrase(callback_data: str) -> str | None:
    _, separator, phrase = callback_data.partition(PHRASE_CALLBACK_SEPARATOR)
    if not separator or not phrase:
        return None
    return phrase
