from __future__ import annotations

import asyncio
import io
import logging
from dataclasses import dataclass

from gtts import gTTS
from gtts.lang import tts_langs

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GTTSService:
    enabled: bool = True
    language: str = "en"

    async def synthesize_phrase(self, text: str) -> bytes | None:
        if not self.enabled or not text:
            return None
        return await asyncio.to_thread(self._synthesize_sync, text)

    def _synthesize_sync(self, text: str) -> bytes | None:
        if self.language not in tts_langs():
            logger.warning("gTTS does not support language %r. Voice disabled.", self.language)
            return None
        try:
            buf = io.BytesIO()
            tts = gTTS(text=text, lang=self.language)
            tts.write_to_fp(buf)
            return buf.getvalue()
        except Exception:
            logger.exception("gTTS generation failed")
            return None
