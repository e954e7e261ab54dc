from typing import List
from abc import ABC, abstractmethod
from ..value_objects.matched_element import MatchedElement


class IDocumentIndex(ABC):
    """已解析的文档（或其中的一个片段），只负责选择器查询，不包含业务判断"""

    @abstractmethod
    def select(self, selector: str) -> List[MatchedElement]:
        """
        执行CSS选择器查询
        返回: 命中元素列表，按文档顺序排列（逗号分隔的多个子选择器合并返回）
        """
        pass

    @abstractmethod
    def documents(self, selector: str) -> List["IDocumentIndex"]:
        """
        以命中的每个元素为根，返回可以继续查询的子文档
        用途: feed 中每个 <item>/<entry> 独立解析
        """
        pass

    @abstractmethod
    def raw_markup(self) -> str:
        """返回当前文档(片段)的原始标记文本，供正则兜底扫描使用"""
        pass


class IDocumentParser(ABC):
    """将标记文本解析为可查询的文档"""

    @abstractmethod
    def parse_html(self, markup: str) -> IDocumentIndex:
        """按HTML规则解析"""
        pass

    @abstractmethod
    def parse_xml(self, markup: str) -> IDocumentIndex:
        """按XML规则解析（保留命名空间前缀与标签大小写）"""
        pass
