from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .classifier import (
    clean_title,
    looks_like_title,
    mentions_recent_date,
    source_line,
    split_attribution,
    strip_marker,
)
from .models import NewsItem, to_iso, utc_now


MAX_PARSED_ITEMS = 5
MIN_CONTENT_CHARS = 20
FALLBACK_TITLE = "Latest News Summary"
FALLBACK_SUMMARY_CHARS = 500


class _State(Enum):
    AWAITING_TITLE = "awaiting_title"
    ACCUMULATING_SUMMARY = "accumulating_summary"


@dataclass
class _Draft:
    title: str
    summary_parts: List[str] = field(default_factory=list)
    source: Optional[str] = None
    published_at: Optional[str] = None

    def note(self, text: str, stamp: str) -> str:
        """Pick up source and date hints from `text`; return it without its attribution."""
        remainder, source = split_attribution(text)
        if source and not self.source:
            self.source = source
        if self.published_at is None and mentions_recent_date(text):
            self.published_at = stamp
        return remainder

    def finalize(self) -> Optional[NewsItem]:
        summary = " ".join(self.summary_parts).strip()
        if not self.title or not summary:
            return None
        return NewsItem(
            title=self.title,
            summary=summary,
            source=self.source,
            published_at=self.published_at,
        )


def parse_news_text(text: str, *, now: Optional[datetime] = None) -> List[NewsItem]:
    """
    Convert a numbered/bulleted natural-language answer into NewsItem records.

    Lines are fed through a two-state machine: a title line finalizes the open draft
    and starts a new one; longer continuation lines are appended to the draft's
    summary. Drafts without a summary are discarded. If nothing could be parsed from
    non-empty text, a single "Latest News Summary" item carries the raw text instead.

    At most MAX_PARSED_ITEMS items are returned, whatever limit the caller asked for.
    """
    stamp = to_iso(now or utc_now())
    items: List[NewsItem] = []
    state = _State.AWAITING_TITLE
    draft: Optional[_Draft] = None

    def flush() -> None:
        if draft is not None:
            item = draft.finalize()
            if item is not None:
                items.append(item)

    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue

        attributed = source_line(line)
        if attributed is not None:
            if state is _State.ACCUMULATING_SUMMARY and not draft.source:
                draft.source = attributed
            continue

        if looks_like_title(line):
            flush()
            draft = _Draft(title=clean_title(line))
            draft.note(strip_marker(line), stamp)
            state = _State.ACCUMULATING_SUMMARY
            continue

        if state is _State.ACCUMULATING_SUMMARY and len(line) > MIN_CONTENT_CHARS:
            content = draft.note(line, stamp)
            if content:
                draft.summary_parts.append(content)

    flush()

    stripped = text.strip()
    if not items and stripped:
        summary = stripped[:FALLBACK_SUMMARY_CHARS]
        if len(stripped) > FALLBACK_SUMMARY_CHARS:
            summary += "..."
        items.append(NewsItem(title=FALLBACK_TITLE, summary=summary, published_at=stamp))

    return items[:MAX_PARSED_ITEMS]
