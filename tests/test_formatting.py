"""Tests for chat reply formatting."""

from news_ai.formatting import MAX_MESSAGE_CHARS, format_news_result, truncate_message
from news_ai.models import NewsItem, NewsResult


STAMP = "2025-03-14T09:30:00.000Z"


def test_full_item():
    item = NewsItem(
        title="Central Bank Holds Rates",
        summary="Rates unchanged.",
        url="https://example.com/rates",
        source="Reuters",
        published_at="2025-03-13T18:00:00Z",
    )
    text = format_news_result(NewsResult(query="rates", retrieved_at=STAMP, items=[item]))

    assert text.splitlines() == [
        "📰 Latest news: rates",
        "",
        "**1. Central Bank Holds Rates**",
        "Rates unchanged.",
        "*Reuters - 2025-03-13 18:00*",
        "<https://example.com/rates>",
    ]


def test_optional_fields_omitted():
    item = NewsItem(title="Market Rally", summary="Stocks rose.")
    text = format_news_result(NewsResult(query="markets", retrieved_at=STAMP, items=[item]), header="Top")

    assert text == "Top\n\n**1. Market Rally**\nStocks rose."


def test_unparseable_date_is_shown_as_is():
    item = NewsItem(title="T", summary="S", published_at="yesterday-ish")
    text = format_news_result(NewsResult(query="q", retrieved_at=STAMP, items=[item]))

    assert "*yesterday-ish*" in text


def test_no_items():
    text = format_news_result(NewsResult(query="nothing", retrieved_at=STAMP))
    assert text == 'No news found for "nothing".'


def test_long_reply_is_truncated():
    items = [NewsItem(title=f"Story {i}", summary="x" * 500) for i in range(10)]
    text = format_news_result(NewsResult(query="q", retrieved_at=STAMP, items=items))

    assert len(text) == MAX_MESSAGE_CHARS
    assert text.endswith("...")


def test_truncate_message_leaves_short_text():
    assert truncate_message("short") == "short"
