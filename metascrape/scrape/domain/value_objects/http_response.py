from dataclasses import dataclass
from typing import Optional, Dict

@dataclass
class HttpResponse:
    url: str
    status_code: int
    headers: Dict[str, str]
    content: str
    content_type: str
    is_success: bool
    error_message: Optional[str] = None

    @property
    def is_reachable(self) -> bool:
        """传输层是否成功（拿到了任意HTTP状态码，包括4xx/5xx）"""
        return self.status_code > 0
