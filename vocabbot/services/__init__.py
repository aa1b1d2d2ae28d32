"""Service layer exports."""

from vocabbot.services.dispatcher import StateDispatcher
from vocabbot.services.pagination import PhrasePageRenderer
from vocabbot.services.selection import PhraseSelectionStore
from vocabbot.services.transport import TelegramTransport
from vocabbot.services.tts import GTTSService

__all__ = [
    "GTTSService",
    "PhrasePageRenderer",
    "PhraseSelectionStore",
    "StateDispatcher",
    "TelegramTransport",
]
