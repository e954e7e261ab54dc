"""
模块职责（领域服务）
- 解析 RSS / Atom 文档：频道级字段组装为 Feed，每个 <item>/<entry> 组装为 FeedItem；
- 频道字段都是单条选择器规则（CHANNEL_RULES），logo 不从文档中提取，而是用网站域名拼装；
- item 之间互不依赖，使用线程池并行解析，结果按文档顺序收集。

设计要点
- enclosure 缺少 type/length 属性时只影响当前 item 的 media 字段，不会中断整个 feed；
- 日期无法解析时使用当前时间，同时将 pubdate_known 标记为 False。
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Tuple

from ..demand_interface.i_document_index import IDocumentIndex, IDocumentParser
from ..exceptions import MediaAttributeMissingError
from ..value_objects.feed import Feed, FeedItem
from ..value_objects.scrape_config import DEFAULT_LOGO_ENDPOINT
from ..value_objects.selector_rule import ResolutionMode, SelectorRule, SelectorTarget
from ..value_objects.tag import CATEGORY_ACCURACY, Tag
from .date_resolver import DateResolver
from .selector_resolver import SelectorResolver
from .text_normalizer import TextNormalizer
from .url_resolver import UrlResolver

logger = logging.getLogger('domain.scrape_process')

_TEXT = SelectorTarget.text()
_HREF = SelectorTarget.attr('href')

ITEM_SELECTOR = "item, entry"
ENCLOSURE_SELECTOR = 'enclosure, link[rel="enclosure"]'

CHANNEL_RULES: Dict[str, SelectorRule] = {
    'title': SelectorRule(("channel > title", "feed > title"), _TEXT, ResolutionMode.FIRST),
    'subtitle': SelectorRule(("channel > itunes|subtitle", "feed > subtitle"), _TEXT, ResolutionMode.FIRST),
    # RSS 频道里常见空的 <atom:link rel="self"/>，用 longest 跳过空值
    'website': SelectorRule(("channel > link",), _TEXT, ResolutionMode.LONGEST),
    'pubdate': SelectorRule(
        ("channel > updated", "channel > pubDate", "channel > pubdate", "feed > updated"),
        _TEXT, ResolutionMode.FIRST
    ),
    'image': SelectorRule(("channel > itunes|image",), _HREF, ResolutionMode.FIRST),
    'content_encoded': SelectorRule(("channel > content|encoded",), _TEXT, ResolutionMode.FIRST),
    'language': SelectorRule(("channel > language",), _TEXT, ResolutionMode.FIRST),
}

ITEM_RULES: Dict[str, SelectorRule] = {
    'title': SelectorRule(("title",), _TEXT),
    'description': SelectorRule(("description",), _TEXT),
    'summary': SelectorRule(("summary",), _TEXT),
    'content': SelectorRule(("content",), _TEXT),
    'content_encoded': SelectorRule(("content|encoded",), _TEXT),
    'link_href': SelectorRule(("link",), _HREF),
    'link_text': SelectorRule(("link",), _TEXT),
    'image': SelectorRule(("itunes|image",), _HREF),
    'author': SelectorRule(("dc|creator", "author > name", "author"), _TEXT),
    'categories': SelectorRule(("category",), _TEXT, ResolutionMode.ALL),
    'category_terms': SelectorRule(("category",), SelectorTarget.attr('term'), ResolutionMode.ALL),
    'pubdate': SelectorRule(("updated", "pubDate", "pubdate", "published"), _TEXT),
}

_ITEM_IMAGE_RE = re.compile(r'''\ssrc=["']*([^'"\s]+\.(?:jpe?g|png))["'\s]''', re.IGNORECASE)


class FeedCascade:

    def __init__(
        self,
        document_parser: IDocumentParser,
        selector_resolver: Optional[SelectorResolver] = None,
        text_normalizer: Optional[TextNormalizer] = None,
        date_resolver: Optional[DateResolver] = None,
        url_resolver: Optional[UrlResolver] = None,
        max_workers: int = 8,
        logo_endpoint: str = DEFAULT_LOGO_ENDPOINT,
        logo_size: Optional[int] = None
    ):
        self._parser = document_parser
        self._selectors = selector_resolver or SelectorResolver()
        self._text = text_normalizer or TextNormalizer()
        self._dates = date_resolver or DateResolver()
        self._urls = url_resolver or UrlResolver()
        self._max_workers = max(1, max_workers)
        self._logo_endpoint = logo_endpoint
        self._logo_size = logo_size

    def extract(self, xml: str, url: str = "") -> Feed:
        """
        参数:
            xml: RSS / Atom 原始文本
            url: feed 地址（目前仅用于日志）

        返回:
            Feed 值对象，items 与文档中的顺序一致
        """
        index = self._parser.parse_xml(xml)
        items = self.transform_items(index.documents(ITEM_SELECTOR))

        website = self._channel(index, 'website') or ""
        pubdate = self._dates.try_resolve(self._channel(index, 'pubdate'))

        feed = Feed(
            title=self._channel(index, 'title') or "",
            subtitle=self._channel(index, 'subtitle') or "",
            website=website,
            pubdate=pubdate if pubdate is not None else self._dates.resolve(None),
            pubdate_known=pubdate is not None,
            logo=self._urls.build_logo_url(website, self._logo_endpoint, self._logo_size),
            image=self._channel(index, 'image') or "",
            content_encoded=self._channel(index, 'content_encoded') or "",
            language=self._channel(index, 'language') or "en",
            items=items,
        )
        logger.info("feed解析完成", extra={'url': url, 'item_count': len(items)})
        return feed

    def extract_urls(self, xml: str) -> List[str]:
        """只提取每个 item 的链接，跳过完整的 item 解析"""
        index = self._parser.parse_xml(xml)
        urls = [self.find_url(item) for item in index.documents(ITEM_SELECTOR)]
        return [u for u in urls if u]

    def transform_items(self, items: List[IDocumentIndex]) -> List[FeedItem]:
        if not items:
            return []
        if self._max_workers == 1 or len(items) == 1:
            return [self.transform_item(item) for item in items]

        # executor.map 按提交顺序返回结果，与完成先后无关
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(items))) as executor:
            return list(executor.map(self.transform_item, items))

    def transform_item(self, item: IDocumentIndex) -> FeedItem:
        media, media_type = self.find_media(item)
        pubdate = self._dates.try_resolve(self._text.clean(self._item(item, 'pubdate')))

        return FeedItem(
            title=self._clean(self._item(item, 'title')),
            description=self.find_description(item),
            content_encoded=self._item(item, 'content_encoded') or "",
            url=self.find_url(item),
            author=self._clean(self._item(item, 'author')),
            tags=self.find_tags(item),
            image=self.find_image(item),
            pubdate=pubdate if pubdate is not None else self._dates.resolve(None),
            pubdate_known=pubdate is not None,
            media=media,
            media_type=media_type,
        )

    def find_description(self, item: IDocumentIndex) -> str:
        for field in ('description', 'summary', 'content'):
            value = self._item(item, field)
            if value is not None:
                return self._clean(value)
        return ""

    def find_url(self, item: IDocumentIndex) -> str:
        href = self._item(item, 'link_href')
        url = href if href else self._item(item, 'link_text')
        return self._clean(url)

    def find_media(self, item: IDocumentIndex) -> Tuple[str, str]:
        """
        返回 (media, media_type)
        enclosure 缺失或属性不完整时返回空值，不影响同一 feed 中的其他 item
        """
        try:
            return self._media_of(item)
        except MediaAttributeMissingError as e:
            logger.warning("enclosure属性缺失，media字段置空", extra={'attribute': e.attribute})
            return "", ""

    def find_tags(self, item: IDocumentIndex) -> List[Tag]:
        # Atom 的 <category term="..."/> 没有文本内容
        names = self._item(item, 'categories') or self._item(item, 'category_terms')
        return [Tag(name=name, accuracy=CATEGORY_ACCURACY) for name in names if name.strip()]

    def find_image(self, item: IDocumentIndex) -> str:
        image = self._item(item, 'image')
        if image:
            return self._clean(image)

        match = _ITEM_IMAGE_RE.search(item.raw_markup())
        return self._clean(match.group(1)) if match else ""

    def _media_of(self, item: IDocumentIndex) -> Tuple[str, str]:
        enclosures = item.select(ENCLOSURE_SELECTOR)
        if not enclosures:
            return "", ""

        enclosure = enclosures[0]
        media_type = enclosure.attr('type')
        if media_type is None:
            raise MediaAttributeMissingError('type')
        if enclosure.attr('length') is None:
            raise MediaAttributeMissingError('length')

        link_attribute = 'url' if enclosure.name == 'enclosure' else 'href'
        return enclosure.attr(link_attribute) or "", media_type

    def _clean(self, value: Optional[str]) -> str:
        return self._text.clean(value) or ""

    def _channel(self, index: IDocumentIndex, field: str):
        return self._selectors.resolve_rule(index, CHANNEL_RULES[field])

    def _item(self, item: IDocumentIndex, field: str):
        return self._selectors.resolve_rule(item, ITEM_RULES[field])
