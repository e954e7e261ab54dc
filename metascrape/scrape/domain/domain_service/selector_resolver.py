"""
选择器解析（领域服务）
- 对一组选择器的命中结果应用折叠规则：first / longest / all；
- 空字符串与缺失属性都视为"无值"，不参与 longest / all 的收集；
- first 模式下空字符串是合法结果（区别于"没有命中"）。
"""

from typing import List, Optional, Sequence, Union

from ..demand_interface.i_document_index import IDocumentIndex
from ..value_objects.matched_element import MatchedElement
from ..value_objects.selector_rule import ResolutionMode, SelectorRule, SelectorTarget


class SelectorResolver:
    """无状态，可在多个线程间共享"""

    def resolve(
        self,
        index: IDocumentIndex,
        selectors: Sequence[str],
        target: SelectorTarget,
        mode: ResolutionMode = ResolutionMode.FIRST
    ) -> Union[Optional[str], List[str]]:
        """
        参数:
            index: 已解析的文档
            selectors: 按优先级排列的选择器组，合并为一次查询
            target: 取文本或取某个属性
            mode: 折叠规则

        返回:
            FIRST / LONGEST: 字符串，未命中时为 None
            ALL: 字符串列表，未命中时为空列表
        """
        return self.resolve_rule(index, SelectorRule(tuple(selectors), target, mode))

    def resolve_rule(self, index: IDocumentIndex, rule: SelectorRule) -> Union[Optional[str], List[str]]:
        matches = index.select(rule.query)
        values = [self._value_of(el, rule.target) for el in matches]
        return self.collapse(values, rule.mode)

    @staticmethod
    def collapse(values: Sequence[Optional[str]], mode: ResolutionMode) -> Union[Optional[str], List[str]]:
        if mode == ResolutionMode.FIRST:
            for value in values:
                if value is not None:
                    return value
            return None

        present = [v for v in values if v]

        if mode == ResolutionMode.LONGEST:
            if not present:
                return None
            # max 在长度相同时保留最先出现的值
            return max(present, key=len)

        return present

    @staticmethod
    def _value_of(el: MatchedElement, target: SelectorTarget) -> Optional[str]:
        if target.is_text:
            return el.text
        return el.attr(target.attribute)
