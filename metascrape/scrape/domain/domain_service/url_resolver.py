"""
URL 处理（领域服务）
- 判断/补全协议头；
- 相对地址按页面地址绝对化；
- 判断一个 URL 是否像真实的 feed 地址；
- 拼装频道 logo 地址（只拼字符串，不发请求）。
"""

from typing import Optional
from urllib.parse import quote_plus, urljoin, urlparse

from ..value_objects.scrape_config import DEFAULT_LOGO_ENDPOINT

_NON_FEED_SUFFIXES = ('.html', '.png', '.jpg', '.gif')
_NON_FEED_MARKERS = ('comment', 'comments', 'target=')


class UrlResolver:

    def has_scheme(self, url: str) -> bool:
        """解析结果中 scheme 或 host 任一非空即视为带协议"""
        try:
            parsed = urlparse(url)
        except ValueError:
            # 形如 "http://[abc" 的非法地址：已经写了协议，只是 host 无法解析
            return '://' in url or url.startswith('//')
        return bool(parsed.scheme or parsed.netloc)

    def add_scheme_if_missing(self, url: str) -> str:
        if self.has_scheme(url):
            return url
        return f"http://{url}"

    def absolutize(self, url: str, base: str) -> str:
        if not url:
            return url
        try:
            return urljoin(base, url)
        except ValueError:
            return url

    def is_likely_feed(self, url: str) -> bool:
        try:
            parsed = urlparse(url)
        except ValueError:
            return False

        # 各项检查区分大小写
        return (
            ('http://' in url or 'https://' in url)
            and not url.endswith(_NON_FEED_SUFFIXES)
            and (parsed.path != '/' or bool(parsed.query))
            and parsed.path != ''
            and not any(marker in url for marker in _NON_FEED_MARKERS)
            and 'android-app:' not in url
        )

    def build_logo_url(
        self,
        website: Optional[str],
        endpoint: str = DEFAULT_LOGO_ENDPOINT,
        size: Optional[int] = None
    ) -> str:
        """
        以频道网站的域名拼装 logo 地址，例如 //logo.clearbit.com/example.com
        没有网站地址时返回空字符串
        """
        if not website:
            return ""

        try:
            domain = urlparse(self.add_scheme_if_missing(website)).netloc
        except ValueError:
            domain = ""
        logo = f"{endpoint}{domain or quote_plus(website)}"

        if size is not None:
            logo += f"?size={size}"
        return logo
