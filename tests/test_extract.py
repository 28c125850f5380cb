"""
Tests for btu/extract.py
"""
from btu.extract import extract_urls
from btu.models import ExtractedUrl


class TestExtractUrls:
    """Test extract_urls."""

    def test_mixed_links(self, arkime_url, kibana_url):
        """One Arkime, one Kibana and one plain link yield two records."""
        content = (
            f'<DT><A HREF="{arkime_url}">Sessions</A>\n'
            f'<DT><A HREF="{kibana_url}">Discover</A>\n'
            '<DT><A HREF="https://example.com/">Example</A>\n'
        )
        urls = extract_urls(content)
        assert urls == [
            ExtractedUrl(title="Sessions", url=arkime_url, type="arkime"),
            ExtractedUrl(title="Discover", url=kibana_url, type="kibana"),
        ]

    def test_document_order(self, bookmarks_html):
        titles = [u.title for u in extract_urls(bookmarks_html)]
        assert titles == ["Beacon sessions", "Session", "Discover"]

    def test_case_insensitive_tags(self, arkime_url):
        urls = extract_urls(f'<a add_date="1" href="{arkime_url}" icon="x">lower</a>')
        assert len(urls) == 1
        assert urls[0].title == "lower"

    def test_empty_title(self, arkime_url):
        urls = extract_urls(f'<A HREF="{arkime_url}"></A>')
        assert urls[0].title == ""

    def test_empty_document(self):
        assert extract_urls("") == []

    def test_recomputed_each_call(self, bookmarks_html):
        assert extract_urls(bookmarks_html) == extract_urls(bookmarks_html)

    def test_to_dict(self, arkime_url):
        item = extract_urls(f'<A HREF="{arkime_url}">S</A>')[0]
        assert item.to_dict() == {"title": "S", "url": arkime_url, "type": "arkime"}
