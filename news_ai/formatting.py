from __future__ import annotations

from datetime import datetime
from typing import Optional

from .models import NewsResult


# Discord rejects messages longer than this.
MAX_MESSAGE_CHARS = 2000


def _format_date(published_at: Optional[str]) -> Optional[str]:
    if not published_at:
        return None
    try:
        dt = datetime.fromisoformat(published_at.replace("Z", "+00:00"))
    except ValueError:
        return published_at
    return dt.strftime("%Y-%m-%d %H:%M")


def truncate_message(text: str, limit: int = MAX_MESSAGE_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def format_news_result(result: NewsResult, header: Optional[str] = None) -> str:
    """
    Render a NewsResult as a chat message.

    Items are numbered; source, date and link lines are only emitted when the
    item has them.
    """
    if not result.items:
        return f'No news found for "{result.query}".'

    lines = [header or f"📰 Latest news: {result.query}", ""]
    for i, item in enumerate(result.items, start=1):
        lines.append(f"**{i}. {item.title}**")
        if item.summary:
            lines.append(item.summary)
        meta = [part for part in (item.source, _format_date(item.published_at)) if part]
        if meta:
            lines.append(f"*{' - '.join(meta)}*")
        if item.url:
            lines.append(f"<{item.url}>")
        lines.append("")

    return truncate_message("\n".join(lines).rstrip())
