"""
配置加载
从环境变量（以及项目根目录下可选的 .env 文件）读取 METASCRAPE_* 配置，组装 ScrapeConfig。
"""

import os
from typing import Optional
from dotenv import load_dotenv

from ..scrape.domain.value_objects.scrape_config import ScrapeConfig, DEFAULT_LOGO_ENDPOINT

# 默认的 .env 位置：项目根目录（metascrape 包的上一级）
project_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
default_env_path = os.path.join(project_dir, '.env')


def load_config(env_file: Optional[str] = None) -> ScrapeConfig:
    """
    读取配置，未设置的项使用 ScrapeConfig 的默认值

    支持的环境变量:
        METASCRAPE_HTTP_TIMEOUT: 可达性检查超时(秒)
        METASCRAPE_MAX_WORKERS: 并行解析 feed item 的线程数
        METASCRAPE_USER_AGENT: 请求使用的 User-Agent
        METASCRAPE_LOGO_ENDPOINT: logo 服务地址前缀
        METASCRAPE_LOGO_SIZE: logo 尺寸(像素)，可选
        METASCRAPE_HTML_PARSER: BeautifulSoup 使用的HTML解析器
    """
    # 已存在的环境变量优先于 .env 文件
    load_dotenv(env_file or default_env_path, override=False)
    logo_size = os.getenv("METASCRAPE_LOGO_SIZE")

    return ScrapeConfig(
        http_timeout=float(os.getenv("METASCRAPE_HTTP_TIMEOUT", "10")),
        max_workers=int(os.getenv("METASCRAPE_MAX_WORKERS", "8")),
        user_agent=os.getenv("METASCRAPE_USER_AGENT", "MetaScrape/1.0"),
        logo_endpoint=os.getenv("METASCRAPE_LOGO_ENDPOINT", DEFAULT_LOGO_ENDPOINT),
        html_parser=os.getenv("METASCRAPE_HTML_PARSER", "html.parser"),
        logo_size=int(logo_size) if logo_size else None,
    )
