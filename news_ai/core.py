from __future__ import annotations

import logging
from datetime import datetime
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Sequence

import httpx

from .exceptions import (
    AllProvidersFailed,
    ProviderError,
    ProviderRequestFailed,
    ProviderUnavailable,
)
from .models import NewsItem, NewsResult, to_iso, utc_now
from .providers import (
    DEFAULT_TIMEOUT_SEC,
    NewsAPIProvider,
    NewsProvider,
    PerplexityProvider,
)


logger = logging.getLogger(__name__)

DEFAULT_QUERY = "latest news today"

CATEGORY_QUERIES: Mapping[str, str] = MappingProxyType({
    "technology": "latest technology news today",
    "business": "latest business and finance news today",
    "sports": "latest sports news today",
    "health": "latest health and medical news today",
    "science": "latest science and research news today",
    "politics": "latest political news today",
    "world": "latest world news today",
    "entertainment": "latest entertainment news today",
})

PLACEHOLDER_LIMIT = 2


def category_query(category: str) -> str:
    """Map a category label to its canned query; unknown labels get a generic one."""
    return CATEGORY_QUERIES.get(category.strip().lower(), f"latest {category} news today")


class NewsAggregator:
    """
    High-level API: look up news for a free-text query and return a NewsResult.

    Providers are tried in order (Perplexity, then NewsAPI) and the first one that
    answers wins. When every provider fails the result holds placeholder notices, so
    `fetch` does not raise for provider failures.
    """

    def __init__(
        self,
        perplexity_api_key: Optional[str] = None,
        news_api_key: Optional[str] = None,
        *,
        perplexity_model: Optional[str] = None,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        http_client: Optional[httpx.AsyncClient] = None,
        providers: Optional[Sequence[NewsProvider]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        if providers is None:
            providers = [
                PerplexityProvider(
                    api_key=perplexity_api_key,
                    model=perplexity_model,
                    timeout_sec=timeout_sec,
                    http_client=http_client,
                ),
                NewsAPIProvider(
                    api_key=news_api_key,
                    timeout_sec=timeout_sec,
                    http_client=http_client,
                ),
            ]
        self.providers = tuple(providers)
        self._clock = clock or utc_now

    async def fetch(self, query: str, limit: int) -> NewsResult:
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")

        try:
            items = await self._resolve(query, limit)
        except AllProvidersFailed as e:
            logger.error("All news providers failed for %r: %s", query, e)
            items = self._placeholder_items(query, limit)

        return NewsResult(
            query=query,
            items=items[:limit],
            retrieved_at=to_iso(self._clock()),
        )

    async def fetch_by_category(self, category: str, limit: int) -> NewsResult:
        return await self.fetch(category_query(category), limit)

    async def _resolve(self, query: str, limit: int) -> List[NewsItem]:
        errors: List[ProviderError] = []
        for provider in self.providers:
            try:
                items = await provider.fetch(query, limit)
            except ProviderUnavailable as e:
                logger.info("Skipping %s: %s", provider.name, e)
                errors.append(e)
                continue
            except ProviderRequestFailed as e:
                logger.warning(
                    "%s request failed (status=%s, body=%r): %s",
                    provider.name, e.status, e.body, e,
                )
                errors.append(e)
                continue
            except Exception as e:
                # fetch never raises for provider failures.
                logger.exception("%s failed unexpectedly", provider.name)
                errors.append(ProviderRequestFailed(provider.name, f"unexpected error: {e!r}"))
                continue
            logger.info("%s returned %d items for %r", provider.name, len(items), query)
            return items
        raise AllProvidersFailed(errors)

    def _placeholder_items(self, query: str, limit: int) -> List[NewsItem]:
        stamp = to_iso(self._clock())
        notices = [
            NewsItem(
                title=f"Latest Updates on {query}",
                summary=(
                    "We are currently experiencing technical difficulties with our news sources. "
                    "Please try again later for the most recent updates."
                ),
                source="News AI Bot",
                published_at=stamp,
            ),
            NewsItem(
                title="Service Notice",
                summary=(
                    "Our news service is temporarily unavailable. "
                    "We are working to restore full functionality as soon as possible."
                ),
                source="System",
                published_at=stamp,
            ),
        ]
        return notices[: min(limit, PLACEHOLDER_LIMIT)]
