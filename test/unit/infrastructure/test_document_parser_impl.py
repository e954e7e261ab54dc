"""
SoupDocumentParser / SoupDocumentIndex 测试
"""

import pytest
from unittest.mock import patch

from metascrape.scrape.infrastructure.document_parser_impl import SoupDocumentParser, SoupDocumentIndex


@pytest.fixture
def parser():
    return SoupDocumentParser()


class TestHtml:

    def test_select_returns_matched_elements(self, parser):
        index = parser.parse_html('<meta name="description" content="Hello"><title> Page </title>')

        meta = index.select("meta[name='description']")
        assert len(meta) == 1
        assert meta[0].name == "meta"
        assert meta[0].attr("content") == "Hello"
        assert meta[0].attr("missing") is None

        title = index.select("title")
        assert title[0].text == "Page"

    def test_multi_valued_attributes_are_joined(self, parser):
        index = parser.parse_html('<link rel="shortcut icon" href="/f.ico">')
        assert index.select("link")[0].attr("rel") == "shortcut icon"

    def test_selector_group_keeps_document_order(self, parser):
        index = parser.parse_html('<b>1</b><i>2</i><b>3</b>')
        assert [el.text for el in index.select("i, b")] == ["1", "2", "3"]

    def test_invalid_selector_returns_empty(self, parser):
        index = parser.parse_html('<p>x</p>')
        with patch('metascrape.scrape.infrastructure.document_parser_impl.error_logger') as mock_logger:
            assert index.select("p[") == []
        mock_logger.error.assert_called_once()

    def test_raw_markup_is_original_text(self, parser):
        html = "<p>Hi</p>"
        assert parser.parse_html(html).raw_markup() == html

    def test_none_markup(self, parser):
        index = parser.parse_html(None)
        assert index.select("title") == []
        assert index.raw_markup() == ""


class TestXml:

    FEED = (
        '<rss xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd">'
        '<channel><itunes:image href="https://a.test/c.jpg"/><pubDate>x</pubDate>'
        '<item><title>One</title></item><item><title>Two</title></item>'
        '</channel></rss>'
    )

    def test_namespaced_selector(self, parser):
        index = parser.parse_xml(self.FEED)
        images = index.select("channel > itunes|image")
        assert [el.attr("href") for el in images] == ["https://a.test/c.jpg"]
        assert images[0].name == "image"

    def test_element_names_are_case_sensitive(self, parser):
        index = parser.parse_xml(self.FEED)
        assert len(index.select("pubDate")) == 1
        assert index.select("pubdate") == []

    def test_undeclared_prefix_matches_nothing(self, parser):
        index = parser.parse_xml(self.FEED)
        assert index.select("dc|creator") == []

    def test_documents_are_scoped_to_each_element(self, parser):
        index = parser.parse_xml(self.FEED)
        items = index.documents("item")

        assert len(items) == 2
        assert all(isinstance(item, SoupDocumentIndex) for item in items)
        assert [item.select("title")[0].text for item in items] == ["One", "Two"]
        assert "<title>Two</title>" in items[1].raw_markup()
