from __future__ import annotations

from typing import Any, Dict, List, Optional

from .classifier import DEFAULT_TITLE
from .exceptions import ParseError
from .models import NewsItem


CONTENT_PREVIEW_CHARS = 200


def _text(record: Dict[str, Any], key: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ParseError(f"article field {key!r} is not a string: {value!r}")
    return value.strip()


def _summary_of(article: Dict[str, Any]) -> str:
    description = _text(article, "description")
    if description:
        return description
    content = _text(article, "content")
    if len(content) > CONTENT_PREVIEW_CHARS:
        return content[:CONTENT_PREVIEW_CHARS] + "..."
    return content


def _source_name(article: Dict[str, Any]) -> Optional[str]:
    source = article.get("source")
    if source is None:
        return None
    if not isinstance(source, dict):
        raise ParseError(f"article field 'source' is not an object: {source!r}")
    return _text(source, "name") or None


def to_news_item(article: Dict[str, Any]) -> NewsItem:
    """
    Convert one NewsAPI article record into a NewsItem.

    Fields map 1:1 (title, description, url, source.name, publishedAt). When the
    description is missing the start of the full content is used instead.
    Raises ParseError when a field has the wrong type.
    """
    return NewsItem(
        title=_text(article, "title") or DEFAULT_TITLE,
        summary=_summary_of(article),
        url=_text(article, "url") or None,
        source=_source_name(article),
        published_at=_text(article, "publishedAt") or None,
    )


def to_news_items(articles: List[Dict[str, Any]]) -> List[NewsItem]:
    return [to_news_item(a) for a in articles if isinstance(a, dict)]
