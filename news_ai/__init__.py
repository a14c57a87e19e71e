"""
news_ai

Looks up current news for a chat bot and returns normalized news items.

Core ideas:
- Input: a free-text query (or a category label) and a result limit
- Process: Perplexity answer → parse free text; on failure NewsAPI search → map
  records; on failure of both → placeholder notices
- Output: NewsResult (items, query, retrieved_at)

Example
-------
import asyncio

from news_ai import NewsAggregator

aggregator = NewsAggregator(
    perplexity_api_key="pplx-...",
    news_api_key="...",
)

result = asyncio.run(aggregator.fetch("renewable energy", 3))

for item in result.items:
    print(item.published_at, item.source, item.title)
"""
from .models import NewsItem, NewsResult
from .core import NewsAggregator
from .config import Settings, load_settings
from .parser import parse_news_text

__all__ = [
    "NewsItem",
    "NewsResult",
    "NewsAggregator",
    "Settings",
    "load_settings",
    "parse_news_text",
]
