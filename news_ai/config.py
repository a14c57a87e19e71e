from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    perplexity_api_key: Optional[str] = None
    news_api_key: Optional[str] = None
    perplexity_model: str = "sonar-pro"
    discord_bot_token: Optional[str] = None
    default_limit: int = 5
    request_timeout_sec: float = 30.0
    log_level: str = "INFO"

    def require_provider(self) -> None:
        if not (self.perplexity_api_key or self.news_api_key):
            raise ConfigurationError(
                "Neither PERPLEXITY_API_KEY nor NEWS_API_KEY is set. Configure at least one in .env."
            )

    def require_bot_token(self) -> str:
        if not self.discord_bot_token:
            raise ConfigurationError("DISCORD_BOT_TOKEN is not set. Check your .env file.")
        return self.discord_bot_token


def load_settings(*, dotenv: bool = True) -> Settings:
    """Read settings from the environment, loading a .env file first unless told not to."""
    if dotenv:
        load_dotenv()
    limit = _int_env("NEWS_DEFAULT_LIMIT", 5)
    if limit < 1:
        raise ConfigurationError(f"NEWS_DEFAULT_LIMIT must be positive, got {limit}")
    return Settings(
        perplexity_api_key=os.getenv("PERPLEXITY_API_KEY") or None,
        news_api_key=os.getenv("NEWS_API_KEY") or None,
        perplexity_model=os.getenv("PERPLEXITY_MODEL") or "sonar-pro",
        discord_bot_token=os.getenv("DISCORD_BOT_TOKEN") or None,
        default_limit=limit,
        request_timeout_sec=_float_env("NEWS_REQUEST_TIMEOUT", 30.0),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
