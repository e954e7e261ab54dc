from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from .tag import Tag


@dataclass(frozen=True)
class FeedItem:
    pubdate: datetime
    pubdate_known: bool = False  # False 表示 pubdate 是兜底的"当前时间"
    title: str = ""
    description: str = ""
    content_encoded: str = ""
    url: str = ""
    author: str = ""
    tags: List[Tag] = field(default_factory=list)
    image: str = ""
    media: str = ""
    media_type: str = ""


@dataclass(frozen=True)
class Feed:
    pubdate: datetime
    pubdate_known: bool = False
    title: str = ""
    subtitle: str = ""
    website: str = ""
    logo: str = ""
    image: str = ""
    content_encoded: str = ""
    language: str = "en"
    items: List[FeedItem] = field(default_factory=list)
