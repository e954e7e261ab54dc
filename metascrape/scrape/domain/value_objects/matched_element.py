from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class MatchedElement:
    """选择器命中的单个元素（只保留解析结果，不暴露底层解析树）"""
    name: str
    text: str
    attributes: Dict[str, str] = field(default_factory=dict)

    def attr(self, name: str) -> Optional[str]:
        return self.attributes.get(name)
