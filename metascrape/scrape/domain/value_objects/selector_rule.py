from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ResolutionMode(str, Enum):
    """多个命中结果如何折叠为一个字段值"""
    FIRST = "first"
    LONGEST = "longest"
    ALL = "all"


@dataclass(frozen=True)
class SelectorTarget:
    """取元素文本，或取某个属性的值"""
    attribute: Optional[str] = None

    @classmethod
    def text(cls) -> "SelectorTarget":
        return cls()

    @classmethod
    def attr(cls, name: str) -> "SelectorTarget":
        return cls(attribute=name)

    @property
    def is_text(self) -> bool:
        return self.attribute is None


@dataclass(frozen=True)
class SelectorRule:
    """
    单个字段的选择器规则

    selectors 中的各组选择器会合并为一次查询（逗号连接），
    命中结果按文档顺序返回，而不是按选择器顺序逐个回退。
    """
    selectors: Tuple[str, ...]
    target: SelectorTarget
    mode: ResolutionMode = ResolutionMode.FIRST

    @property
    def query(self) -> str:
        return ", ".join(self.selectors)
