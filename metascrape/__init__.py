from typing import List
from flask import Flask
from flask_cors import CORS
from .scrape.view.scrape_view import bp as scrape_bp
from .scrape.services.scrape_service import get_default_service
from .scrape.domain.value_objects.website import Website
from .scrape.domain.value_objects.feed import Feed


def create_app():
    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes
    app.register_blueprint(scrape_bp)
    return app


def parse_website(html: str, url: str) -> Website:
    """解析网页元信息（会对 url 发起一次可达性检查）"""
    return get_default_service().parse_website(html, url)


def parse_feed(xml: str, url: str = "") -> Feed:
    """解析 RSS / Atom 文档"""
    return get_default_service().parse_feed(xml, url)


def parse_feed_urls_only(xml: str) -> List[str]:
    """只提取 feed 中每个 item 的链接"""
    return get_default_service().parse_feed_urls_only(xml)


__all__ = ['create_app', 'parse_website', 'parse_feed', 'parse_feed_urls_only', 'Website', 'Feed']
