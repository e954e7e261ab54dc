# infrastructure/document/document_parser_impl.py
from typing import Dict, List, Optional
from bs4 import BeautifulSoup
from bs4.element import Tag
from soupsieve import SelectorSyntaxError
import logging

from ..domain.demand_interface.i_document_index import IDocumentIndex, IDocumentParser
from ..domain.value_objects.matched_element import MatchedElement

error_logger = logging.getLogger('infrastructure.error')


class SoupDocumentIndex(IDocumentIndex):
    """基于BeautifulSoup + soupsieve 的选择器查询实现"""

    def __init__(self, root: Tag, namespaces: Optional[Dict[str, str]] = None, markup: Optional[str] = None):
        """
        参数:
            root: 查询的根节点（整个文档或其中一个元素）
            namespaces: XML命名空间前缀映射，用于 itunes|image 这类选择器
            markup: 原始标记文本；为空时按需从 root 序列化
        """
        self._root = root
        self._namespaces = namespaces or {}
        self._markup = markup

    def select(self, selector: str) -> List[MatchedElement]:
        return [self._to_matched(el) for el in self._select_tags(selector)]

    def documents(self, selector: str) -> List[IDocumentIndex]:
        return [SoupDocumentIndex(el, self._namespaces) for el in self._select_tags(selector)]

    def raw_markup(self) -> str:
        if self._markup is None:
            self._markup = str(self._root)
        return self._markup

    def _select_tags(self, selector: str) -> List[Tag]:
        try:
            # soupsieve 对逗号分隔的选择器列表按文档顺序返回命中结果
            return self._root.select(selector, namespaces=self._namespaces)
        except SelectorSyntaxError as e:
            error_logger.error("选择器语法错误", extra={'selector': selector, 'error': str(e)})
            return []

    @staticmethod
    def _to_matched(el: Tag) -> MatchedElement:
        attributes = {}
        for key, value in el.attrs.items():
            # HTML模式下 rel/class 等属性会被拆成列表，这里还原为空格连接的字符串
            if isinstance(value, (list, tuple)):
                value = " ".join(value)
            attributes[key] = value

        return MatchedElement(
            name=el.name,
            text=el.get_text().strip(),
            attributes=attributes
        )


class SoupDocumentParser(IDocumentParser):
    """基于BeautifulSoup的文档解析器实现"""

    def __init__(self, parser: str = 'html.parser'):
        """
        初始化文档解析器

        参数:
            parser: HTML解析器类型，可选值:
                   'html.parser' (Python内置，默认)
                   'lxml' (更快)
                   'html5lib' (最宽容，需安装html5lib)
                   XML 文档固定使用 lxml 的 'xml' 解析器
        """
        self._parser = parser

    def parse_html(self, markup: str) -> IDocumentIndex:
        markup = markup or ""
        soup = BeautifulSoup(markup, self._parser)
        return SoupDocumentIndex(soup, markup=markup)

    def parse_xml(self, markup: str) -> IDocumentIndex:
        markup = markup or ""
        soup = BeautifulSoup(markup, 'xml')
        # lxml 在解析时登记了文档中声明的命名空间前缀
        namespaces = dict(getattr(soup, '_namespaces', None) or {})
        return SoupDocumentIndex(soup, namespaces=namespaces, markup=markup)
