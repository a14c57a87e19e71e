"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import httpx
import pytest

from news_ai.models import NewsItem, to_iso


FIXED_NOW = datetime(2025, 3, 14, 9, 30, 0, tzinfo=timezone.utc)
FIXED_STAMP = to_iso(FIXED_NOW)


# --- Canned API responses ---

def perplexity_completion(content):
    return {
        "id": "cmpl-123",
        "object": "chat.completion",
        "created": 1741944600,
        "model": "sonar-pro",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
    }


PERPLEXITY_TEXT = (
    "1. Storm Hits City\n"
    "Heavy rain caused flooding across downtown. - Local News\n"
    "2. Market Rally\n"
    "Stocks rose sharply today."
)

NEWS_API_ARTICLES = [
    {
        "source": {"id": "reuters", "name": "Reuters"},
        "author": "Jane Doe",
        "title": "Central Bank Holds Rates",
        "description": "The central bank left rates unchanged on Thursday.",
        "url": "https://example.com/rates",
        "urlToImage": None,
        "publishedAt": "2025-03-13T18:00:00Z",
        "content": "The central bank left rates unchanged... [+2000 chars]",
    },
    {
        "source": {"id": None, "name": "The Verge"},
        "author": None,
        "title": "New Phone Announced",
        "description": None,
        "url": "https://example.com/phone",
        "urlToImage": None,
        "publishedAt": "2025-03-13T15:30:00Z",
        "content": "A" * 250,
    },
]

NEWS_API_OK = {"status": "ok", "totalResults": 2, "articles": NEWS_API_ARTICLES}


class FakeProvider:
    """In-memory provider recording its calls."""

    def __init__(self, name, items=None, error=None):
        self.name = name
        self.items = items or []
        self.error = error
        self.calls = []

    async def fetch(self, query, limit):
        self.calls.append((query, limit))
        if self.error is not None:
            raise self.error
        return list(self.items)


def make_items(count, source="Test Wire"):
    return [
        NewsItem(title=f"Story {i}", summary=f"Summary of story {i}.", source=source)
        for i in range(1, count + 1)
    ]


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def mock_http():
    """Build an httpx.AsyncClient whose requests go to `handler`, and record them."""
    requests = []

    def build(handler):
        def recording(request):
            requests.append(request)
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(recording))

    build.requests = requests
    return build
