from dataclasses import dataclass, field
from typing import List
from .tag import Tag
from .url_validity import UrlValidity

@dataclass(frozen=True)
class Website:
    valid: UrlValidity
    url: str
    type: str = ""
    title: str = ""
    description: str = ""
    image: str = ""
    favicon: str = ""
    feeds: List[str] = field(default_factory=list)
    tags: List[Tag] = field(default_factory=list)
    twitter_accounts: List[str] = field(default_factory=list)
