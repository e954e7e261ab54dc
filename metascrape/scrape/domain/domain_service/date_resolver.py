"""
日期解析（领域服务）
- 按固定顺序尝试常见的 feed 日期格式，返回第一个解析成功的结果；
- 所有结果统一为带时区的 datetime（无时区信息时按 UTC 处理）；
- resolve() 在输入为空或无法解析时返回当前时间，try_resolve() 则返回 None，
  调用方可以据此区分"真实日期"与"兜底的当前时间"。
"""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Callable, Optional, Tuple

# (格式名, strptime 格式)，顺序即优先级
DATETIME_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("ISO", "%Y-%m-%dT%H:%M:%S%z"),
    ("ISO", "%Y-%m-%dT%H:%M:%S.%f%z"),
    ("ISO", "%Y-%m-%dT%H:%M:%S"),
    ("ISO", "%Y-%m-%dT%H:%M:%S.%f"),
    ("ISO", "%Y-%m-%d"),
    ("RFC3339", "%Y-%m-%d %H:%M:%S%z"),
    ("RFC3339", "%Y-%m-%d %H:%M:%S.%f%z"),
    ("RFC3339", "%Y-%m-%d %H:%M:%S"),
    ("RFC1123z", "%a, %d %b %Y %H:%M:%S %z"),
    ("RFC1123", "%a, %d %b %Y %H:%M:%S GMT"),
    ("RFC822z", "%a, %d %b %y %H:%M:%S %z"),
    ("RFC822", "%a, %d %b %y %H:%M:%S GMT"),
    ("ANSIC", "%a %b %d %H:%M:%S %Y"),
    ("UNIX", "%a %b %d %H:%M:%S UTC %Y"),
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DateResolver:

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """
        参数:
            clock: 返回"当前时间"的函数，测试时可替换
        """
        self._clock = clock or _utc_now

    def resolve(self, text: Optional[str]) -> datetime:
        parsed = self.try_resolve(text)
        return parsed if parsed is not None else self._clock()

    def try_resolve(self, text: Optional[str]) -> Optional[datetime]:
        if not text or not text.strip():
            return None
        text = text.strip()

        for _name, fmt in DATETIME_PATTERNS:
            try:
                return self._as_aware(datetime.strptime(text, fmt))
            except ValueError:
                continue

        # Unix 时间戳（秒）
        if text.isdigit():
            try:
                return datetime.fromtimestamp(int(text), tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                return None

        # 其余 RFC 2822 写法（EST/PDT 等时区缩写、省略星期）
        try:
            return self._as_aware(parsedate_to_datetime(text))
        except (TypeError, ValueError, IndexError):
            return None

    @staticmethod
    def _as_aware(value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
