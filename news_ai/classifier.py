from __future__ import annotations

import re
from typing import Optional, Tuple


_ORDINAL_RE = re.compile(r"^\d+\.")
_BULLET_RE = re.compile(r"^[•\-\*]")
_LABEL_RE = re.compile(r"^(?!(?i:source):)[A-Z][^.]*:")
_CAPITALIZED_RE = re.compile(r"^[A-Z]")

_LEADING_MARKER_RE = re.compile(r"^(?:\d+\.\s*|[•\-\*]\s*)")
_EMPHASIS_RE = re.compile(r"\*\*|__")
_CITATION_RE = re.compile(r"\[\d+\]")

# A source name is short: up to four words, no sentence punctuation.
_SOURCE_NAME = r"[A-Za-z][\w&']*(?:\s+[\w&']+){0,3}"
_SOURCE_LINE_RE = re.compile(r"^[(\[]?source:\s*(?P<source>" + _SOURCE_NAME + r")[)\].*\s]*$", re.IGNORECASE)
_LABELLED_SOURCE_RE = re.compile(r"\s*[(\[]?\bsource:\s*(?P<source>" + _SOURCE_NAME + r")[)\].*\s]*$", re.IGNORECASE)
_DASH_SOURCE_RE = re.compile(r"(?:^|\s+)[-–—]\s*(?P<source>[A-Z][\w&']*(?:\s+[A-Z][\w&']*)*)\s*$")
_VIA_SOURCE_RE = re.compile(r"\b(?:via|from)\s+(?P<source>[A-Za-z][A-Za-z ]*?)\s*$", re.IGNORECASE)

_RELATIVE_DATE_RE = re.compile(
    r"\b(?:today|yesterday|this morning|this afternoon|earlier today)\b", re.IGNORECASE
)

_WEAK_TITLE_MAX_LEN = 100

DEFAULT_TITLE = "Untitled"


def strip_marker(line: str) -> str:
    """Drop a leading ordinal ("1.") or bullet glyph."""
    return _LEADING_MARKER_RE.sub("", line, count=1).strip()


def split_attribution(text: str) -> Tuple[str, Optional[str]]:
    """
    Find a trailing source attribution in `text`.

    Returns (text_without_attribution, source). "Source: X" and "- Capitalized Words"
    suffixes are removed from the text; "via X" / "from X" are part of the prose and
    are left in place.
    """
    for pattern in (_LABELLED_SOURCE_RE, _DASH_SOURCE_RE):
        m = pattern.search(text)
        if m:
            return text[: m.start()].rstrip(), m.group("source").strip()
    m = _VIA_SOURCE_RE.search(text)
    if m:
        return text, m.group("source").strip()
    return text, None


def source_line(line: str) -> Optional[str]:
    """Return the source name if the whole line is an attribution like "Source: Reuters"."""
    m = _SOURCE_LINE_RE.match(strip_marker(_EMPHASIS_RE.sub("", line)))
    if not m:
        return None
    source = m.group("source").strip()
    return source or None


def looks_like_title(line: str) -> bool:
    """
    Heuristic deciding whether a line starts a new story.

    Checked in order: leading ordinal, leading bullet, capitalized label followed by a
    colon ("Source:" excepted), and finally a weak rule for short capitalized lines that do not end in a
    period. The weak rule ignores a trailing source attribution, so a sentence such as
    "Heavy rain fell. - Local News" is still content.
    """
    if _ORDINAL_RE.match(line) or _BULLET_RE.match(line) or _LABEL_RE.match(line):
        return True
    text, _ = split_attribution(line)
    return (
        len(text) < _WEAK_TITLE_MAX_LEN
        and bool(_CAPITALIZED_RE.match(text))
        and not text.endswith(".")
    )


def clean_title(line: str) -> str:
    title = _EMPHASIS_RE.sub("", line)
    title = strip_marker(title)
    title = _CITATION_RE.sub("", title)
    m = _DASH_SOURCE_RE.search(title)
    if m:
        title = title[: m.start()]
    title = title.strip().rstrip(":").strip()
    return title or DEFAULT_TITLE


def mentions_recent_date(text: str) -> bool:
    # Only relative words are recognised; absolute dates are not parsed.
    return bool(_RELATIVE_DATE_RE.search(text))
