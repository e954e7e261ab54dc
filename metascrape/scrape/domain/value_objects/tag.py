from dataclasses import dataclass

# 关键词 meta 标签拆分得到的标签（机器生成，噪声较大）
KEYWORD_ACCURACY = 0.6
# <category> 元素得到的标签（大多由人工标注）
CATEGORY_ACCURACY = 0.9


@dataclass(frozen=True)
class Tag:
    name: str
    accuracy: float

    def __post_init__(self):
        """
        标签名统一做 trim + 小写处理，accuracy 限定在 [0, 1]
        """
        object.__setattr__(self, 'name', (self.name or '').strip().lower())
        if not 0.0 <= self.accuracy <= 1.0:
            raise ValueError(f"accuracy必须在[0, 1]之间: {self.accuracy}")
