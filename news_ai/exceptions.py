from __future__ import annotations

from typing import Optional


class NewsAIError(Exception):
    """Base class for all news_ai errors."""


class ConfigurationError(NewsAIError):
    """Raised at startup when required settings (credentials, bot token) are missing."""


class ProviderError(NewsAIError):
    """Raised when a news provider cannot produce items."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class ProviderUnavailable(ProviderError):
    """Raised when a provider has no credential and was not attempted."""


class ProviderRequestFailed(ProviderError):
    """Raised when an attempted provider call fails (network, HTTP status or malformed payload)."""

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        status: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(provider, message)
        self.status = status
        self.body = body


class AllProvidersFailed(NewsAIError):
    """Raised internally when every provider in the chain has failed."""

    def __init__(self, errors) -> None:
        super().__init__("; ".join(str(e) for e in errors) or "no providers configured")
        self.errors = list(errors)


class ParseError(NewsAIError):
    """Raised when a provider record cannot be mapped into a NewsItem."""
