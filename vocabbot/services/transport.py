"""Best-effort delivery of outbound messages to the Telegram Bot API.

Every send is attempted once. Telegram errors are logged and dropped so the
calling flow carries on as if the send had succeeded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from telegram import Bot, InlineKeyboardMarkup, ReplyKeyboardMarkup
from telegram.constants import ParseMode
from telegram.error import TelegramError

logger = logging.getLogger(__name__)

ReplyMarkup = InlineKeyboardMarkup | ReplyKeyboardMarkup


@dataclass(frozen=True, slots=True)
class TextMessage:
    chat_id: int
    text: str
    reply_markup: ReplyMarkup | None = None
    parse_mode: str | None = ParseMode.MARKDOWN


@dataclass(frozen=True, slots=True)
class VoiceNote:
    chat_id: int
    voice: bytes | str
    caption: str | None = None
    filename: str = "phrase.mp3"


@dataclass(frozen=True, slots=True)
class Sticker:
    chat_id: int
    sticker: str


@dataclass(frozen=True, slots=True)
class DeleteMessage:
    chat_id: int
    message_id: int


OutboundMessage = TextMessage | VoiceNote | Sticker | DeleteMessage


class TelegramTransport:
    def __init__(self, bot: Bot) -> None:
        self._bot = bot

    async def execute(self, message: OutboundMessage | Any) -> Any | None:
        try:
            match message:
                case TextMessage():
                    return await self._bot.send_message(
                        chat_id=message.chat_id,
                        text=message.text,
                        reply_markup=message.reply_markup,
                        parse_mode=message.parse_mode,
                    )
                case VoiceNote():
                    return await self._bot.send_voice(
                        chat_id=message.chat_id,
                        voice=message.voice,
                        caption=message.caption,
                        filename=message.filename,
                    )
                case Sticker():
                    return await self._bot.send_sticker(
                        chat_id=message.chat_id,
                        sticker=message.sticker,
                    )
                case DeleteMessage():
                    return await self._bot.delete_message(
                        chat_id=message.chat_id,
                        message_id=message.message_id,
                    )
                case _:
                    logger.warning(
                        "Unsupported message type: %s", type(message).__name__
                    )
                    return None
        except TelegramError:
            logger.warning(
                "Error occurred while trying to send %s to chat %s",
                type(message).__name__,
                getattr(message, "chat_id", None),
                exc_info=True,
            )
            return None
