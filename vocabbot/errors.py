from __future__ import annotations


class VocabBotError(Exception):
    """Base error for the vocabulary bot."""


class RepositoryError(VocabBotError):
    """Raised when a storage operation cannot complete."""


class UserNotFoundError(VocabBotError):
    def __init__(self, chat_id: int) -> None:
        super().__init__(f"user {chat_id} is not registered")
        self.chat_id = chat_id


class PhraseNotFoundError(VocabBotError):
    def __init__(self, phrase_id: int) -> None:
        super().__init__(f"phrase {phrase_id} does not exist")
        self.phrase_id = phrase_id
