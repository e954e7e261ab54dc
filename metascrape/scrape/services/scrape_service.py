"""
模块职责（应用层）
- 对外提供三个入口：parse_website / parse_feed / parse_feed_urls_only；
- 组装领域服务（WebsiteCascade / FeedCascade）与基础设施（文档解析器、HTTP客户端）；
- 负责唯一的一次网络请求：检查页面地址是否可达，结果写入 Website.valid；
- 记录解析过程日志与耗时。

设计要点
- 应用层只做编排，字段解析规则都在领域服务中；
- 可达性检查只看传输层是否成功，HTTP 状态码（包括4xx/5xx）不影响结果。
"""

import logging
import threading
import time
from typing import List, Optional

from ..domain.demand_interface.i_document_index import IDocumentParser
from ..domain.demand_interface.i_http_client import IHttpClient
from ..domain.domain_service.feed_cascade import FeedCascade
from ..domain.domain_service.url_resolver import UrlResolver
from ..domain.domain_service.website_cascade import WebsiteCascade
from ..domain.value_objects.feed import Feed
from ..domain.value_objects.scrape_config import ScrapeConfig
from ..domain.value_objects.url_validity import UrlValidity
from ..domain.value_objects.website import Website

logger = logging.getLogger('domain.scrape_process')
perf_logger = logging.getLogger('infrastructure.perf')


class ScrapeService:
    """
    应用服务 - 元数据解析编排
    所有方法对输入字符串是纯函数（除可达性检查外），可在多线程中共享同一实例。
    """

    def __init__(
        self,
        document_parser: IDocumentParser,
        http_client: IHttpClient,
        config: Optional[ScrapeConfig] = None
    ):
        """
        构造函数注入依赖

        参数:
            document_parser: HTML/XML 文档解析器
            http_client: HTTP客户端（仅用于可达性检查）
            config: 解析配置，默认使用 ScrapeConfig()
        """
        self._config = config or ScrapeConfig()
        self._http = http_client
        self._urls = UrlResolver()
        self._website = WebsiteCascade(document_parser, url_resolver=self._urls)
        self._feed = FeedCascade(
            document_parser,
            url_resolver=self._urls,
            max_workers=self._config.max_workers,
            logo_endpoint=self._config.logo_endpoint,
            logo_size=self._config.logo_size
        )

    @property
    def config(self) -> ScrapeConfig:
        return self._config

    def validate_url(self, url: str) -> UrlValidity:
        """
        返回 URL 是否可达（VALID / INVALID）
        超时、DNS失败、TLS失败等传输错误统一视为 INVALID
        """
        if not url:
            return UrlValidity.INVALID

        response = self._http.get(self._urls.add_scheme_if_missing(url))
        return UrlValidity.VALID if response.is_reachable else UrlValidity.INVALID

    def parse_website(self, html: str, url: str) -> Website:
        started = time.perf_counter()

        valid = self.validate_url(url)
        website = self._website.extract(html, url, valid)

        logger.info("网页元信息解析完成", extra={
            'url': website.url,
            'valid': website.valid.value,
            'feed_count': len(website.feeds),
            'tag_count': len(website.tags)
        })
        self._log_duration('parse_website', url, started)
        return website

    def parse_feed(self, xml: str, url: str = "") -> Feed:
        started = time.perf_counter()
        feed = self._feed.extract(xml, url)
        self._log_duration('parse_feed', url, started)
        return feed

    def parse_feed_urls_only(self, xml: str) -> List[str]:
        started = time.perf_counter()
        urls = self._feed.extract_urls(xml)
        self._log_duration('parse_feed_urls_only', '', started)
        return urls

    def _log_duration(self, operation: str, url: str, started: float) -> None:
        perf_logger.info(operation, extra={
            'url': url,
            'duration_ms': round((time.perf_counter() - started) * 1000, 2)
        })


# ==================== 默认实例（模块级组合根） ====================

_default_service: Optional[ScrapeService] = None
_default_lock = threading.Lock()


def get_default_service() -> ScrapeService:
    """按环境配置懒加载一个共享的 ScrapeService"""
    global _default_service
    with _default_lock:
        if _default_service is None:
            from ...shared.config import load_config
            from ..infrastructure.document_parser_impl import SoupDocumentParser
            from ..infrastructure.http_client_impl import HttpClientImpl

            config = load_config()
            _default_service = ScrapeService(
                SoupDocumentParser(config.html_parser),
                HttpClientImpl(user_agent=config.user_agent, timeout=config.http_timeout),
                config
            )
        return _default_service
