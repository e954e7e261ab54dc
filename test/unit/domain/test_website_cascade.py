import pytest

from metascrape.scrape.domain.domain_service.website_cascade import WebsiteCascade
from metascrape.scrape.domain.value_objects.tag import Tag
from metascrape.scrape.domain.value_objects.url_validity import UrlValidity
from metascrape.scrape.infrastructure.document_parser_impl import SoupDocumentParser

FULL_PAGE = """
<!DOCTYPE html>
<html>
<head>
    <title>Foo Bar | My Site</title>
    <link rel="canonical" href="https://www.example.com/articles/foo">
    <meta property="og:type" content="article">
    <meta name="twitter:type" content="card">
    <meta name="description" content="Short">
    <meta property="og:description" content="A Much Longer Description">
    <meta property="og:image" content="/images/cover.jpg">
    <meta name="twitter:image" content="https://cdn.example.com/tw.jpg">
    <link rel="icon" href="/favicon.ico">
    <link rel="apple-touch-icon" href="/apple-touch-icon-180.png">
    <link rel="alternate" type="application/rss+xml" href="/feed.xml">
    <link rel="alternate" hreflang="de" href="/de/">
    <meta name="twitter:site" content="@example">
    <meta name="keywords" content="Tech, News|daily; Breaking">
</head>
<body><p>Hello</p></body>
</html>
"""


@pytest.fixture
def cascade():
    return WebsiteCascade(SoupDocumentParser())


@pytest.fixture
def parser():
    return SoupDocumentParser()


class TestExtract:
    """完整页面的字段解析"""

    def test_full_page(self, cascade):
        website = cascade.extract(FULL_PAGE, "example.com/articles/foo?utm=1", UrlValidity.VALID)

        assert website.valid == UrlValidity.VALID
        assert website.url == "https://www.example.com/articles/foo"
        assert website.type == "article"
        assert website.title == "Foo Bar"
        assert website.description == "A Much Longer Description"
        assert website.image == "https://www.example.com/images/cover.jpg"
        assert website.favicon == "https://www.example.com/apple-touch-icon-180.png"
        # hreflang 备用链接同样作为 feed 候选，只要地址形态满足过滤条件
        assert website.feeds == ["https://www.example.com/feed.xml", "https://www.example.com/de/"]
        assert website.twitter_accounts == ["@example"]
        assert [t.name for t in website.tags] == ["tech", "news", "daily", "breaking"]
        assert all(t.accuracy == 0.6 for t in website.tags)

    def test_empty_document(self, cascade):
        website = cascade.extract("", "example.com")

        assert website.valid == UrlValidity.INVALID
        assert website.url == "http://example.com"
        assert website.title == ""
        assert website.type == ""
        assert website.description == ""
        assert website.image == ""
        assert website.favicon == ""
        assert website.feeds == []
        assert website.tags == []
        assert website.twitter_accounts == []


class TestTitle:

    @pytest.mark.parametrize("title,expected", [
        ("Foo Bar | My Site", "Foo Bar"),
        ("Foo Bar - My Site", "Foo Bar"),
        ("Just A Title", "Just A Title"),
        ("Well-Known Facts - Example.com", "Well-Known Facts"),
        ("A - B - C", "A"),
    ])
    def test_site_suffix_is_stripped(self, cascade, parser, title, expected):
        index = parser.parse_html(f"<title>{title}</title>")
        assert cascade.find_title(index) == expected


class TestFavicon:

    def test_falls_back_to_tile_image(self, cascade, parser):
        index = parser.parse_html('<meta name="msapplication-TileImage" content="/tile.png">')
        assert cascade.find_favicon(index) == "/tile.png"

    def test_shortcut_icon(self, cascade, parser):
        index = parser.parse_html('<link rel="shortcut icon" href="/favicon.ico">')
        assert cascade.find_favicon(index) == "/favicon.ico"


class TestFeeds:

    def test_regex_fallback_filters_candidates(self, cascade):
        html = """
        <html><body>
            <a href="/blog/rss.xml">RSS</a>
            <a href="http://example.com/comments/feed">Comments</a>
            <a href="/feed-icon.png">icon</a>
            <a href="/about">About</a>
        </body></html>
        """
        website = cascade.extract(html, "http://example.com/blog/")
        assert website.feeds == ["http://example.com/blog/rss.xml"]

    def test_structured_links_are_used_first(self, cascade, parser):
        html = '<link type="application/atom+xml" href="/atom"><a href="/rss">x</a>'
        index = parser.parse_html(html)
        assert cascade.find_feeds(index, html) == ["/atom"]


class TestTwitterAccounts:

    def test_regex_fallback_deduplicates(self, cascade, parser):
        html = """
        <a href="https://twitter.com/example">t</a>
        <a href="https://twitter.com/example">t again</a>
        <a href='http://twitter.com/other_acc'>o</a>
        """
        index = parser.parse_html(html)
        assert cascade.find_twitter_accounts(index, html) == ["@example", "@other_acc"]

    def test_meta_tags_keep_duplicates(self, cascade, parser):
        html = '<meta property="twitter:site" content="@a"><meta name="twitter:site" content="@a">'
        index = parser.parse_html(html)
        assert cascade.find_twitter_accounts(index, html) == ["@a", "@a"]


class TestTags:

    def test_duplicates_are_kept(self, cascade, parser):
        index = parser.parse_html('<meta name="keywords" content="a, A ,b"><meta name="keywords" content="a">')
        assert cascade.find_tags(index) == [
            Tag("a", 0.6), Tag("a", 0.6), Tag("b", 0.6), Tag("a", 0.6)
        ]

    def test_empty_phrases_are_dropped(self, cascade, parser):
        index = parser.parse_html('<meta name="keywords" content="one,, ;two">')
        assert [t.name for t in cascade.find_tags(index)] == ["one", "two"]


class TestCanonical:

    def test_canonical_is_used_verbatim(self, cascade, parser):
        index = parser.parse_html('<link rel="canonical" href="www.example.com/page">')
        assert cascade.find_canonical(index, "http://other.com") == "www.example.com/page"

    @pytest.mark.parametrize("html", ['', '<link rel="canonical" href="/">', '<link rel="canonical" href="ab">'])
    def test_short_or_missing_canonical_uses_input_url(self, cascade, parser, html):
        index = parser.parse_html(html)
        assert cascade.find_canonical(index, "example.com/page") == "http://example.com/page"

    def test_relative_links_resolve_against_final_url(self, cascade):
        html = '<link rel="canonical" href="https://canonical.example.com/a/"><meta property="og:image" content="img.png">'
        website = cascade.extract(html, "http://example.com/x/y")
        assert website.image == "https://canonical.example.com/a/img.png"

    def test_empty_url_without_canonical(self, cascade):
        """没有 canonical 且输入地址为空时，url 为空，相对链接被丢弃"""
        html = (
            '<meta property="og:image" content="/a.png">'
            '<link rel="icon" href="https://cdn.example.com/f.ico">'
        )
        website = cascade.extract(html, "")

        assert website.url == ""
        assert website.image == ""
        assert website.favicon == "https://cdn.example.com/f.ico"
