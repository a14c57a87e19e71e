"""Tests for line classification heuristics."""

import pytest

from news_ai.classifier import (
    DEFAULT_TITLE,
    clean_title,
    looks_like_title,
    mentions_recent_date,
    source_line,
    split_attribution,
)


class TestLooksLikeTitle:

    @pytest.mark.parametrize("line", [
        "1. Storm Hits City",
        "12. Storm hits city.",
        "• Storm hits city.",
        "- storm hits city",
        "* storm hits city",
        "Breaking: storm hits city.",
        "Short Capitalized Headline",
    ])
    def test_titles(self, line):
        assert looks_like_title(line)

    @pytest.mark.parametrize("line", [
        "A full sentence that ends with a period.",
        "lowercase start without a period",
        "Heavy rain caused flooding across downtown. - Local News",
        "A" * 120,
    ])
    def test_content(self, line):
        assert not looks_like_title(line)


class TestCleanTitle:

    def test_strips_ordinal(self):
        assert clean_title("1. Storm Hits City") == "Storm Hits City"

    def test_strips_bullet_and_emphasis(self):
        assert clean_title("• **Bold Headline**") == "Bold Headline"

    def test_strips_source_suffix(self):
        assert clean_title("2. Market Rally - Reuters") == "Market Rally"

    def test_keeps_hyphenated_words(self):
        assert clean_title("Covid-19 Cases Rise") == "Covid-19 Cases Rise"

    def test_strips_citations(self):
        assert clean_title("3. Rates Cut[1]") == "Rates Cut"

    def test_empty_falls_back(self):
        assert clean_title("1.") == DEFAULT_TITLE


class TestAttribution:

    def test_labelled_source(self):
        assert split_attribution("Rain fell. Source: Reuters") == ("Rain fell.", "Reuters")

    def test_dash_source(self):
        assert split_attribution("Rain fell. - Local News") == ("Rain fell.", "Local News")

    def test_via_source_keeps_text(self):
        text = "Figures were released via Bloomberg"
        assert split_attribution(text) == (text, "Bloomberg")

    def test_no_source(self):
        assert split_attribution("Nothing to see here.") == ("Nothing to see here.", None)

    @pytest.mark.parametrize("line, expected", [
        ("Source: Reuters", "Reuters"),
        ("*Source: AP News*", "AP News"),
        ("(Source: BBC)", "BBC"),
        ("Sources say the deal is close", None),
        ("Source: Reuters reported that officials closed schools.", None),
    ])
    def test_source_line(self, line, expected):
        assert source_line(line) == expected

    def test_labelled_prose_is_not_a_source(self):
        text = "Source: Reuters reported that officials closed schools."
        assert split_attribution(text) == (text, None)
        assert not looks_like_title(text)


class TestRecentDate:

    @pytest.mark.parametrize("text", [
        "Stocks rose today.",
        "Earlier today the council voted.",
        "Officials met yesterday",
        "It happened this afternoon",
    ])
    def test_matches(self, text):
        assert mentions_recent_date(text)

    def test_no_match(self):
        assert not mentions_recent_date("Todays markets on 2025-03-01")
