"""Repository implementations."""

from vocabbot.db.repositories.phrases import PhrasesRepository
from vocabbot.db.repositories.users import UsersRepository

__all__ = ["PhrasesRepository", "UsersRepository"]
