import logging
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from typing import Optional
from ..domain.demand_interface.i_http_client import IHttpClient
from ..domain.value_objects.http_response import HttpResponse

error_logger = logging.getLogger('infrastructure.error')


class HttpClientImpl(IHttpClient):
    """基于requests库的HTTP客户端实现"""

    def __init__(
        self,
        user_agent: str = "MetaScrape/1.0",
        timeout: float = 10,
        max_retries: int = 0
    ):
        """
        初始化HTTP客户端

        参数:
            user_agent: User-Agent标识
            timeout: 请求超时时间(秒)
            max_retries: 最大重试次数，默认只请求一次
        """
        self._timeout = timeout
        self._session = requests.Session()
        self._max_retries = max_retries

        # 设置请求头
        self._session.headers.update({
            'User-Agent': user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Encoding': 'gzip, deflate',
            'Connection': 'keep-alive'
        })

        # 配置重试策略（状态码不触发重试，只关心传输是否成功）
        retry_strategy = Retry(
            total=max_retries,
            connect=max_retries,
            read=max_retries,
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

    def get(self, url: str, headers: Optional[dict] = None) -> HttpResponse:
        """
        执行HTTP GET请求

        参数:
            url: 目标URL
            headers: 自定义请求头(可选)

        返回:
            HttpResponse对象，包含响应信息或错误信息
        """
        try:
            response = self._session.get(
                url,
                headers=headers,
                timeout=self._timeout,
                allow_redirects=True
            )

            # header 里没写编码时 requests 默认按 ISO-8859-1 解码
            if response.encoding == 'ISO-8859-1':
                response.encoding = response.apparent_encoding
            if not response.encoding:
                response.encoding = 'utf-8'

            return HttpResponse(
                url=response.url,
                status_code=response.status_code,
                headers=dict(response.headers),
                content=response.text,
                content_type=response.headers.get('Content-Type', ''),
                is_success=response.ok,
                error_message=None if response.ok else f"HTTP {response.status_code}"
            )

        except requests.exceptions.Timeout:
            return self._create_error_response(
                url, "请求超时", f"请求超过{self._timeout}秒未响应"
            )

        except requests.exceptions.ConnectionError as e:
            return self._create_error_response(
                url, "连接失败", f"无法连接到服务器: {str(e)}"
            )

        except requests.exceptions.TooManyRedirects:
            return self._create_error_response(
                url, "重定向过多", "重定向次数超过限制"
            )

        except requests.exceptions.RequestException as e:
            # 包括 MissingSchema / InvalidURL 等
            return self._create_error_response(
                url, "请求异常", f"请求失败: {str(e)}"
            )

        except ValueError as e:
            return self._create_error_response(
                url, "非法URL", f"无法解析的URL: {str(e)}"
            )

    def _create_error_response(
        self,
        url: str,
        error_type: str,
        error_detail: str
    ) -> HttpResponse:
        """
        创建错误响应对象

        参数:
            url: 请求URL
            error_type: 错误类型
            error_detail: 错误详情

        返回:
            表示错误的HttpResponse对象
        """
        error_logger.error(f"{error_type}: {url}", extra={'url': url, 'detail': error_detail})
        return HttpResponse(
            url=url,
            status_code=0,
            headers={},
            content='',
            content_type='',
            is_success=False,
            error_message=f"{error_type}: {error_detail}"
        )

    def close(self):
        """关闭会话，释放连接"""
        self._session.close()

    def __enter__(self):
        """支持上下文管理器"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """退出时自动关闭会话"""
        self.close()
