"""
元数据提取异常类模块

提取过程对缺失的可选字段一律宽容处理，这里只定义少数需要显式处理的异常。
"""


class ScrapeError(Exception):
    """
    元数据提取异常基类

    Attributes:
        message: 错误描述信息
    """

    def __init__(self, message: str = "Failed to extract metadata"):
        self.message = message
        super().__init__(self.message)


class MediaAttributeMissingError(ScrapeError):
    """
    feed item 的 enclosure 缺少必需属性

    enclosure / link[rel=enclosure] 元素必须同时带有 type 和 length 属性。
    该异常只在单个 item 内部抛出并捕获，不会中断整个 feed 的解析。

    Attributes:
        attribute: 缺失的属性名
    """

    def __init__(self, attribute: str):
        self.attribute = attribute
        super().__init__(f"enclosure is missing required attribute '{attribute}'")
