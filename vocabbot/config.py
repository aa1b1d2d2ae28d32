from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from vocabbot.constants import (
    DEFAULT_LANGUAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SELECTION_TTL_SECONDS,
    SUPPORTED_LANGUAGES,
)


class ConfigError(ValueError):
    """Raised when required environment configuration is missing."""


def _mask_secret(value: str) -> str:
    return "[redacted]" if value else ""


@dataclass(frozen=True)
class Settings:
    telegram_bot_token: str
    database_url: str
    log_level: str = "INFO"
    default_language: str = DEFAULT_LANGUAGE
    page_size: int = DEFAULT_PAGE_SIZE
    selection_ttl_seconds: int = DEFAULT_SELECTION_TTL_SECONDS
    tts_enabled: bool = True
    tts_language: str = "en"
    welcome_sticker_id: str | None = None

    def safe_log_values(self) -> dict[str, str]:
        return {
            "telegram_bot_token": _mask_secret(self.telegram_bot_token),
            "database_url": _mask_secret(self.database_url),
            "log_level": self.log_level,
            "default_language": self.default_language,
            "page_size": str(self.page_size),
            "selection_ttl_seconds": str(self.selection_ttl_seconds),
            "tts_enabled": str(self.tts_enabled).lower(),
            "tts_language": self.tts_language,
            "welcome_sticker_id": self.welcome_sticker_id or "",
        }


def _require(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ConfigError(f"Missing required environment variable: {name}")
    return value


def _int_env(name: str, default: int, *, minimum: int, maximum: int | None = None) -> int:
    raw = os.getenv(name, str(default)).strip()
    try:
        value = int(raw)
    except ValueError:
        return default
    value = max(minimum, value)
    if maximum is not None:
        value = min(maximum, value)
    return value


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def _parse_language(raw: str) -> str:
    language = raw.strip().lower() or DEFAULT_LANGUAGE
    if language not in SUPPORTED_LANGUAGES:
        raise ConfigError(
            f"Unsupported DEFAULT_LANGUAGE: {raw!r} "
            f"(expected one of {', '.join(SUPPORTED_LANGUAGES)})"
        )
    return language


def load_settings() -> Settings:
    load_dotenv(override=False)
    return Settings(
        telegram_bot_token=_require("TELEGRAM_BOT_TOKEN"),
        database_url=_require("DATABASE_URL"),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        default_language=_parse_language(os.getenv("DEFAULT_LANGUAGE", DEFAULT_LANGUAGE)),
        page_size=_int_env("PAGE_SIZE", DEFAULT_PAGE_SIZE, minimum=1, maximum=20),
        selection_ttl_seconds=_int_env(
            "SELECTION_TTL_SECONDS", DEFAULT_SELECTION_TTL_SECONDS, minimum=60
        ),
        tts_enabled=_bool_env("TTS_ENABLED", True),
        tts_language=os.getenv("TTS_LANGUAGE", "en").strip().lower() or "en",
        welcome_sticker_id=os.getenv("WELCOME_STICKER_ID", "").strip() or None,
    )
