from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


def to_iso(dt: datetime) -> str:
    """Render a datetime as a UTC ISO-8601 string with millisecond precision."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class NewsItem:
    """
    One retrieved news entry, whichever provider produced it.

    `published_at` is an ISO-8601 string and stays None unless the provider
    or the source text supplies a time.
    """
    title: str
    summary: str
    url: Optional[str] = None
    source: Optional[str] = None
    published_at: Optional[str] = None


@dataclass(frozen=True)
class NewsResult:
    """Response envelope for a single aggregation call."""
    query: str
    retrieved_at: str
    items: List[NewsItem] = field(default_factory=list)
