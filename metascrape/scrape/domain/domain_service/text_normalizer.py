import re
from typing import Optional

_SCRIPT_STYLE_RE = re.compile(r'<(script|style)\b[^>]*>.*?</\1\s*>', re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r'<[^>]*>')
_WHITESPACE_RE = re.compile(r'\s+')


class TextNormalizer:
    """
    文本清洗：
    1. 去除内嵌的 <script>/<style> 片段
    2. 去除剩余的标签
    3. 连续空白合并为一个空格，并去掉首尾空白
    """

    def clean(self, text: Optional[str]) -> Optional[str]:
        if text is None:
            return None

        text = _SCRIPT_STYLE_RE.sub(' ', text)
        text = _TAG_RE.sub(' ', text)
        return _WHITESPACE_RE.sub(' ', text).strip()
