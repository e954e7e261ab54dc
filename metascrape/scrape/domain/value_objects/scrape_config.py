from dataclasses import dataclass
from typing import Optional

DEFAULT_LOGO_ENDPOINT = "//logo.clearbit.com/"


@dataclass
class ScrapeConfig:
    http_timeout: float = 10.0  # 可达性检查的超时时间(秒)，只请求一次
    max_workers: int = 8  # 并行解析 feed item 的线程数上限
    user_agent: str = "MetaScrape/1.0"
    logo_endpoint: str = DEFAULT_LOGO_ENDPOINT
    logo_size: Optional[int] = None  # 非空时拼接 ?size=<n>
    html_parser: str = "html.parser"

    def __post_init__(self):
        """
        数据清洗与验证
        """
        if self.http_timeout is None or self.http_timeout <= 0:
            raise ValueError(f"http_timeout必须为正数: {self.http_timeout}")

        if self.max_workers < 1:
            self.max_workers = 1

        self.user_agent = (self.user_agent or "").strip() or "MetaScrape/1.0"

        # logo 端点统一以 "/" 结尾，方便直接拼接域名
        endpoint = (self.logo_endpoint or "").strip() or DEFAULT_LOGO_ENDPOINT
        if not endpoint.endswith('/'):
            endpoint += '/'
        self.logo_endpoint = endpoint
