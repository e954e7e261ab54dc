"""
模块职责
- 提供 RESTful API：健康检查 / 解析网页元信息 / 解析 feed / 只提取 feed 中的链接；
- 使用 Flask Blueprint 将接口统一挂载在 `/api/scrape` 前缀下。

设计说明
- 此模块属于接口层，只做输入校验与 JSON 序列化，不承载解析规则；
- 默认使用 get_default_service() 提供的共享实例，测试时可通过 inject_service() 替换。
"""

from dataclasses import asdict
from datetime import datetime
from enum import Enum
import logging

from flask import Blueprint, jsonify, request

from ..services.scrape_service import ScrapeService, get_default_service

bp = Blueprint("scrape", __name__, url_prefix="/api/scrape")

error_logger = logging.getLogger('infrastructure.error')

_service = None


def inject_service(service: ScrapeService):
    """依赖注入：替换接口层使用的应用服务"""
    global _service
    _service = service


def _get_service() -> ScrapeService:
    return _service or get_default_service()


def to_json(record) -> dict:
    """将值对象转换为可 JSON 序列化的字典（datetime -> ISO 字符串，枚举 -> 值）"""
    def convert(value):
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, dict):
            return {k: convert(v) for k, v in value.items()}
        if isinstance(value, list):
            return [convert(v) for v in value]
        return value

    return convert(asdict(record))


def _json_payload() -> dict:
    """请求体不是 JSON 对象（数组、标量或无法解析）时按空对象处理"""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _require(payload: dict, *fields):
    missing = [f for f in fields if not isinstance(payload.get(f), str)]
    if missing:
        return jsonify({"error": f"缺少字段: {', '.join(missing)}"}), 400
    return None


@bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})


@bp.route("/website", methods=["POST"])
def parse_website():
    """请求体: {"html": "...", "url": "..."}"""
    payload = _json_payload()
    error = _require(payload, "html", "url")
    if error:
        return error

    try:
        website = _get_service().parse_website(payload["html"], payload["url"])
        return jsonify(to_json(website))
    except Exception as e:
        error_logger.exception("网页元信息解析失败", extra={'url': payload["url"]})
        return jsonify({"error": str(e)}), 500


@bp.route("/feed", methods=["POST"])
def parse_feed():
    """请求体: {"xml": "...", "url": "..."}，url 可省略"""
    payload = _json_payload()
    error = _require(payload, "xml")
    if error:
        return error

    url = payload.get("url") or ""
    try:
        feed = _get_service().parse_feed(payload["xml"], url)
        return jsonify(to_json(feed))
    except Exception as e:
        error_logger.exception("feed解析失败", extra={'url': url})
        return jsonify({"error": str(e)}), 500


@bp.route("/feed/urls", methods=["POST"])
def parse_feed_urls():
    """请求体: {"xml": "..."}"""
    payload = _json_payload()
    error = _require(payload, "xml")
    if error:
        return error

    try:
        return jsonify({"urls": _get_service().parse_feed_urls_only(payload["xml"])})
    except Exception as e:
        error_logger.exception("feed链接提取失败")
        return jsonify({"error": str(e)}), 500
