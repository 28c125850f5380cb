"""
Tests for btu/dialects.py

URL dialect detection and per-dialect time rewriting.
"""
import logging

import pytest

from btu.dialects import detect_url_type, rewrite_arkime_url, rewrite_kibana_url, rewrite_url
from btu.timeutils import DateParseError

START = "2024-01-01T00:00"
END = "2024-01-02T00:00"


class TestDetectUrlType:
    """Test detect_url_type."""

    def test_arkime(self, arkime_url):
        assert detect_url_type(arkime_url) == "arkime"

    def test_kibana(self, kibana_url):
        assert detect_url_type(kibana_url) == "kibana"

    def test_plain_url_is_unknown(self):
        assert detect_url_type("https://example.com/?q=1") == "unknown"

    def test_empty_string_is_unknown(self):
        assert detect_url_type("") == "unknown"

    def test_needs_both_arkime_params(self):
        assert detect_url_type("https://arkime.example/?startTime=1") == "unknown"
        assert detect_url_type("https://arkime.example/?stopTime=1") == "unknown"

    def test_kibana_needs_quotes(self):
        """Unquoted from/to values are not the Kibana dialect."""
        assert detect_url_type("https://kibana.example/#?_g=(time:(from:now-1d,to:now))") == "unknown"

    def test_arkime_wins_when_both_match(self):
        url = "https://x.example/?startTime=1&stopTime=2#(from:'a',to:'b')"
        assert detect_url_type(url) == "arkime"

    def test_deterministic(self, arkime_url, kibana_url):
        for url in (arkime_url, kibana_url, "https://example.com"):
            assert detect_url_type(url) == detect_url_type(url)


class TestRewriteArkimeUrl:
    """Test rewrite_arkime_url."""

    def test_replaces_times(self):
        url = "https://arkime.example/sessions?startTime=1000&stopTime=2000"
        assert rewrite_arkime_url(url, START, END, "UTC") == \
            "https://arkime.example/sessions?startTime=1704067200&stopTime=1704153600"

    def test_other_characters_unchanged(self, arkime_url):
        result = rewrite_arkime_url(arkime_url, START, END, "UTC")
        assert result == arkime_url.replace("startTime=1000", "startTime=1704067200") \
                                   .replace("stopTime=2000", "stopTime=1704153600")

    def test_replaces_every_occurrence(self):
        url = "https://a.example/?startTime=1&stopTime=2&next=%3FstartTime=3&stopTime=4"
        result = rewrite_arkime_url(url, START, END, "UTC")
        assert result.count("startTime=1704067200") == 2
        assert result.count("stopTime=1704153600") == 2

    def test_kibana_url_unchanged(self, kibana_url):
        assert rewrite_arkime_url(kibana_url, START, END, "UTC") == kibana_url

    def test_input_not_mutated(self, arkime_url):
        original = str(arkime_url)
        rewrite_arkime_url(arkime_url, START, END, "UTC")
        assert arkime_url == original

    def test_bad_time_raises(self, arkime_url):
        with pytest.raises(DateParseError):
            rewrite_arkime_url(arkime_url, "garbage", END, "UTC")
        with pytest.raises(DateParseError):
            rewrite_arkime_url(arkime_url, START, "", "UTC")

    def test_inverted_range_rewritten_as_given(self, arkime_url, caplog):
        """Order is checked once per slot by the document rewriter, not per URL."""
        with caplog.at_level(logging.WARNING):
            result = rewrite_arkime_url(arkime_url, END, START, "UTC")
        assert "startTime=1704153600&stopTime=1704067200" in result
        assert "starts after it ends" not in caplog.text


class TestRewriteKibanaUrl:
    """Test rewrite_kibana_url."""

    def test_replaces_times(self, kibana_url):
        result = rewrite_kibana_url(kibana_url, START, END, "UTC")
        assert "from:'2024-01-01T00:00:00.000Z'" in result
        assert "to:'2024-01-02T00:00:00.000Z'" in result
        assert "2023-01-01" not in result

    def test_other_characters_unchanged(self, kibana_url):
        result = rewrite_kibana_url(kibana_url, START, END, "UTC")
        assert result == kibana_url.replace("2023-01-01T00:00:00.000Z", "2024-01-01T00:00:00.000Z") \
                                   .replace("2023-01-02T00:00:00.000Z", "2024-01-02T00:00:00.000Z")

    def test_relative_times_replaced(self):
        url = "https://kibana.example/app/dashboards#/view/abc?_g=(time:(from:'now-15m',to:'now'))"
        result = rewrite_kibana_url(url, START, END, "UTC")
        assert result == ("https://kibana.example/app/dashboards#/view/abc?_g="
                          "(time:(from:'2024-01-01T00:00:00.000Z',to:'2024-01-02T00:00:00.000Z'))")

    def test_arkime_url_unchanged(self, arkime_url):
        assert rewrite_kibana_url(arkime_url, START, END, "UTC") == arkime_url

    def test_bad_time_raises(self, kibana_url):
        with pytest.raises(DateParseError):
            rewrite_kibana_url(kibana_url, START, "Invalid Date", "UTC")


class TestRewriteUrl:
    """Test dialect dispatch."""

    def test_dispatches_arkime(self, arkime_url):
        assert rewrite_url(arkime_url, START, END, "UTC") == rewrite_arkime_url(arkime_url, START, END, "UTC")

    def test_dispatches_kibana(self, kibana_url):
        assert rewrite_url(kibana_url, START, END, "UTC") == rewrite_kibana_url(kibana_url, START, END, "UTC")

    def test_unknown_passes_through(self):
        assert rewrite_url("https://example.com", START, END, "UTC") == "https://example.com"
