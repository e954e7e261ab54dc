from abc import ABC, abstractmethod
from ..value_objects.http_response import HttpResponse

class IHttpClient(ABC):
    @abstractmethod
    def get(self, url: str) -> HttpResponse:
        """
        执行HTTP GET请求
        返回: HttpResponse(status_code, headers, content, content_type)
        处理: 网络异常、超时（不抛出异常，统一转换为失败的 HttpResponse）
        """
        pass
