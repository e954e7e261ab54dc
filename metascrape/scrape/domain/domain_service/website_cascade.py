"""
模块职责（领域服务）
- 从一份HTML中解析网站元信息，组装 Website 值对象；
- 每个字段对应一条静态的选择器规则（见 WEBSITE_RULES），规则之外只有少量兜底逻辑：
  标题去掉站点名后缀、favicon 回退到 msapplication-TileImage、
  feed / twitter 账号在结构化标签缺失时退回到正则扫描原始HTML；
- 最终以 url 字段为基准，将 image / favicon / feeds 绝对化，并用 feed 规则过滤候选地址。

设计要点
- 追求速度与"大致正确"，不追求对畸形HTML的完全正确；
- 所有方法无状态，可在多个线程中共享同一个实例。
"""

import logging
import re
from typing import Dict, List, Optional

from ..demand_interface.i_document_index import IDocumentIndex, IDocumentParser
from ..value_objects.selector_rule import ResolutionMode, SelectorRule, SelectorTarget
from ..value_objects.tag import KEYWORD_ACCURACY, Tag
from ..value_objects.url_validity import UrlValidity
from ..value_objects.website import Website
from .selector_resolver import SelectorResolver
from .url_resolver import UrlResolver

logger = logging.getLogger('domain.scrape_process')

_CONTENT = SelectorTarget.attr('content')
_HREF = SelectorTarget.attr('href')

WEBSITE_RULES: Dict[str, SelectorRule] = {
    'type': SelectorRule(
        ("meta[property='og:type']", "meta[name='twitter:type']", "meta[name='type']"),
        _CONTENT, ResolutionMode.LONGEST
    ),
    'title': SelectorRule(("title",), SelectorTarget.text(), ResolutionMode.LONGEST),
    'description': SelectorRule(
        ("meta[property='og:description']", "meta[name='twitter:description']", "meta[name='description']"),
        _CONTENT, ResolutionMode.LONGEST
    ),
    'image': SelectorRule(
        ("meta[property='og:image']", "meta[name='twitter:image']"),
        _CONTENT, ResolutionMode.FIRST
    ),
    'favicon': SelectorRule(
        ("link[rel='apple-touch-icon']", "link[rel='apple-touch-icon-precomposed']",
         "link[rel='shortcut icon']", "link[rel='icon']"),
        _HREF, ResolutionMode.LONGEST
    ),
    'feeds': SelectorRule(
        ("link[type='application/rss+xml']", "link[type='application/atom+xml']", "link[rel='alternate']"),
        _HREF, ResolutionMode.ALL
    ),
    'twitter_accounts': SelectorRule(
        ('meta[property="twitter:site"]', 'meta[name="twitter:site"]'),
        _CONTENT, ResolutionMode.ALL
    ),
    'tags': SelectorRule(("meta[name=keywords]",), _CONTENT, ResolutionMode.ALL),
    'canonical': SelectorRule(("link[rel=canonical]",), _HREF, ResolutionMode.FIRST),
}

FAVICON_FALLBACK_RULE = SelectorRule(
    ("meta[name='msapplication-TileImage']",), _CONTENT, ResolutionMode.FIRST
)

# 去掉 " | Example.com" / " - Example.com" 这类站点名后缀
_TITLE_SUFFIX_RE = re.compile(r'\s[|-].{1}.+$')
_FEED_HREF_RE = re.compile(r'''href=['"]([^'"]*(rss|atom|feed|xml)[^'"]*)['"]''')
_TWITTER_HREF_RE = re.compile(r'''href=['"]([^'"]*(twitter\.com/[A-Za-z0-9_]+)["'])''')
_KEYWORD_SEPARATOR_RE = re.compile(r'[;,|]')


class WebsiteCascade:

    def __init__(
        self,
        document_parser: IDocumentParser,
        selector_resolver: Optional[SelectorResolver] = None,
        url_resolver: Optional[UrlResolver] = None
    ):
        # 依赖注入：文档解析由基础设施层实现，这里只使用抽象
        self._parser = document_parser
        self._selectors = selector_resolver or SelectorResolver()
        self._urls = url_resolver or UrlResolver()

    def extract(self, html: str, url: str, valid: UrlValidity = UrlValidity.INVALID) -> Website:
        """
        参数:
            html: 原始HTML
            url: 页面地址（canonical 缺失时作为最终地址）
            valid: 可达性检查结果，由应用层提供

        返回:
            Website 值对象
        """
        html = html or ""
        index = self._parser.parse_html(html)

        final_url = self.find_canonical(index, url)

        return Website(
            valid=valid,
            url=final_url,
            type=self.find_type(index),
            title=self.find_title(index),
            description=self.find_description(index),
            image=self._expand(self.find_image(index), final_url),
            favicon=self._expand(self.find_favicon(index), final_url),
            feeds=self._normalize_feeds(self.find_feeds(index, html), final_url),
            tags=self.find_tags(index),
            twitter_accounts=self.find_twitter_accounts(index, html),
        )

    def find_type(self, index: IDocumentIndex) -> str:
        return self._resolve(index, 'type') or ""

    def find_title(self, index: IDocumentIndex) -> str:
        title = self._resolve(index, 'title')
        if not title:
            return ""
        return _TITLE_SUFFIX_RE.split(title, maxsplit=1)[0]

    def find_description(self, index: IDocumentIndex) -> str:
        return self._resolve(index, 'description') or ""

    def find_image(self, index: IDocumentIndex) -> str:
        return self._resolve(index, 'image') or ""

    def find_favicon(self, index: IDocumentIndex) -> str:
        favicon = self._resolve(index, 'favicon')
        if favicon:
            return favicon
        return self._selectors.resolve_rule(index, FAVICON_FALLBACK_RULE) or ""

    def find_feeds(self, index: IDocumentIndex, html: str) -> List[str]:
        feeds = self._resolve(index, 'feeds')
        if feeds:
            return feeds

        logger.debug("未找到feed link标签，回退到正则扫描")
        return [match.group(1) for match in _FEED_HREF_RE.finditer(html)]

    def find_twitter_accounts(self, index: IDocumentIndex, html: str) -> List[str]:
        accounts = self._resolve(index, 'twitter_accounts')
        if accounts:
            return accounts

        handles = []
        for match in _TWITTER_HREF_RE.finditer(html):
            handle = match.group(2).replace('twitter.com/', '@')
            if handle not in handles:
                handles.append(handle)
        return handles

    def find_tags(self, index: IDocumentIndex) -> List[Tag]:
        """关键词按 ; , | 拆分，保留重复项"""
        phrases = []
        for keywords in self._resolve(index, 'tags'):
            phrases.extend(_KEYWORD_SEPARATOR_RE.split(keywords))

        return [
            Tag(name=phrase, accuracy=KEYWORD_ACCURACY)
            for phrase in phrases
            if phrase.strip()
        ]

    def find_canonical(self, index: IDocumentIndex, url: str) -> str:
        """canonical 存在时原样使用，否则使用补全协议后的输入地址（输入为空时返回空字符串）"""
        canonical = self._resolve(index, 'canonical')
        if not canonical or len(canonical) < 3:
            return self._urls.add_scheme_if_missing(url) if url else ""
        return canonical

    def _normalize_feeds(self, feeds: List[str], base: str) -> List[str]:
        expanded = [self._urls.absolutize(feed, base) for feed in feeds]
        return [feed for feed in expanded if self._urls.is_likely_feed(feed)]

    def _expand(self, link: str, base: str) -> str:
        if not link:
            return ""
        expanded = self._urls.absolutize(link, base)
        # 没有可用的基准地址时，相对链接无法绝对化，直接丢弃
        return expanded if self._urls.has_scheme(expanded) else ""

    def _resolve(self, index: IDocumentIndex, field: str):
        return self._selectors.resolve_rule(index, WEBSITE_RULES[field])
