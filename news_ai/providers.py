from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

import httpx
from openai import APIStatusError, AsyncOpenAI, OpenAIError

from .exceptions import ParseError, ProviderRequestFailed, ProviderUnavailable
from .models import NewsItem
from .normalizer import to_news_items
from .parser import parse_news_text


PERPLEXITY_BASE_URL = "https://api.perplexity.ai"
PERPLEXITY_DEFAULT_MODEL = "sonar-pro"
NEWS_API_BASE_URL = "https://newsapi.org/v2"
NEWS_API_MAX_PAGE_SIZE = 100
DEFAULT_TIMEOUT_SEC = 30.0


class NewsProvider(Protocol):
    name: str

    async def fetch(self, query: str, limit: int) -> List[NewsItem]:  # pragma: no cover - interface
        ...


def build_prompt(query: str, limit: int) -> str:
    return (
        f'Find the {limit} most recent and important news stories about "{query}".\n\n'
        "For each story, provide:\n"
        "- Title\n"
        "- Brief summary (2-3 sentences)\n"
        "- Source name if available\n\n"
        "Format as a numbered list. Focus on current, factual news from reliable sources."
    )


class PerplexityProvider:
    """
    Natural-language provider: asks Perplexity's chat completions endpoint for a
    numbered list of stories and parses the free-text answer.

    Perplexity speaks the OpenAI wire format, so the `openai` client is reused with a
    different base URL. Retries are disabled: the aggregator tries each provider once.
    """

    name = "perplexity"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        model: Optional[str] = None,
        base_url: str = PERPLEXITY_BASE_URL,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._model = model or PERPLEXITY_DEFAULT_MODEL
        self._client: Optional[AsyncOpenAI] = None
        if api_key:
            self._client = AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                timeout=timeout_sec,
                max_retries=0,
                http_client=http_client,
            )

    async def fetch(self, query: str, limit: int) -> List[NewsItem]:
        if self._client is None:
            raise ProviderUnavailable(self.name, "PERPLEXITY_API_KEY not set")
        try:
            resp = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": build_prompt(query, limit)}],
                max_tokens=1000,
                temperature=0.2,
            )
        except APIStatusError as e:
            raise ProviderRequestFailed(
                self.name, e.message, status=e.status_code, body=e.response.text
            ) from e
        except OpenAIError as e:
            raise ProviderRequestFailed(self.name, str(e)) from e

        choices = getattr(resp, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content.strip():
            raise ProviderRequestFailed(self.name, "completion has no content")
        return parse_news_text(content)


class NewsAPIProvider:
    """Structured-data provider backed by NewsAPI's /everything search."""

    name = "newsapi"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        base_url: str = NEWS_API_BASE_URL,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key or None
        self._url = f"{base_url.rstrip('/')}/everything"
        self._timeout = timeout_sec
        self._http_client = http_client

    async def _get(self, params: Dict[str, Any]) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.get(self._url, params=params)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.get(self._url, params=params)

    def _decode(self, resp: httpx.Response) -> Dict[str, Any]:
        try:
            data = resp.json()
        except ValueError:
            data = None
        if resp.status_code != 200:
            message = data.get("message") if isinstance(data, dict) else None
            raise ProviderRequestFailed(
                self.name,
                message or f"HTTP {resp.status_code}",
                status=resp.status_code,
                body=resp.text,
            )
        if not isinstance(data, dict):
            raise ProviderRequestFailed(self.name, "response is not a JSON object", status=200, body=resp.text)
        if data.get("status") == "error":
            code = data.get("code", "")
            raise ProviderRequestFailed(
                self.name, f"{code}: {data.get('message', '')}", status=200, body=resp.text
            )
        return data

    async def fetch(self, query: str, limit: int) -> List[NewsItem]:
        if not self._api_key:
            raise ProviderUnavailable(self.name, "NEWS_API_KEY not set")
        params = {
            "q": query,
            "pageSize": min(limit, NEWS_API_MAX_PAGE_SIZE),
            "sortBy": "publishedAt",
            "language": "en",
            "apiKey": self._api_key,
        }
        try:
            resp = await self._get(params)
        except httpx.HTTPError as e:
            raise ProviderRequestFailed(self.name, f"request failed: {e!r}") from e

        data = self._decode(resp)
        articles = data.get("articles")
        if not isinstance(articles, list):
            raise ProviderRequestFailed(self.name, "response has no articles list", status=200, body=resp.text)
        try:
            items = to_news_items(articles)
        except ParseError as e:
            raise ProviderRequestFailed(self.name, str(e), status=200, body=resp.text) from e
        return items[:limit]
