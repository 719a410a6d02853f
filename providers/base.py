"""
Base Provider Adapter
所有供应商适配器的抽象基类
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import logging

import httpx

from config import Settings, get_settings
from models import FailureKind, Platform, RequestOutcome


logger = logging.getLogger(__name__)

# 失败日志中错误详情的最大长度
ERROR_DETAIL_LIMIT = 200


def truncate(text: Any, limit: int = ERROR_DETAIL_LIMIT) -> str:
    value = str(text or "")
    if len(value) <= limit:
        return value
    return value[:limit] + "..."


class BaseAdapter(ABC):
    """
    供应商适配器抽象基类

    每个适配器只知道一个供应商的端点、鉴权头和请求参数；
    fetch() 发起一次 HTTP 调用并总是返回带标签的 RequestOutcome，从不向外抛出
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._provider_settings = self.settings.scrapecreators
        self._transport = transport

    @property
    @abstractmethod
    def platform(self) -> Platform:
        """返回平台标识"""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """返回适配器名称"""
        pass

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """返回相对于 base_url 的搜索端点"""
        pass

    @property
    def url(self) -> str:
        return f"{self._provider_settings.base_url.rstrip('/')}{self.endpoint}"

    @property
    def timeout(self) -> float:
        return float(self._provider_settings.timeout)

    def is_configured(self) -> bool:
        return bool(self._provider_settings.api_key)

    def _headers(self) -> Dict[str, str]:
        return {"x-api-key": self._provider_settings.api_key or ""}

    def _build_params(self, query: str, max_results: int, **options) -> Dict[str, Any]:
        """
        构建查询参数
        子类可以覆盖此方法以转发平台特有的过滤参数
        """
        return {"query": query, "limit": max_results}

    async def fetch(self, query: str, max_results: int, **options) -> RequestOutcome:
        """
        调用供应商搜索端点

        Args:
            query: 搜索关键词
            max_results: 请求的最大条目数 (供应商可能返回更少)
            **options: 平台特有参数 (如 time_filter)

        Returns:
            RequestOutcome: 成功时携带原始载荷，失败时携带失败类型
        """
        params = self._build_params(query, max_results, **options)
        logger.debug(f"[{self.name}] GET {self.url} params={params}")

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(self.url, headers=self._headers(), params=params)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            outcome = RequestOutcome.failure(
                self.name,
                FailureKind.PROVIDER_ERROR,
                truncate(exc.response.text) or exc.response.reason_phrase,
                status=exc.response.status_code,
            )
        except httpx.TransportError as exc:
            # 超时与连接失败同等处理
            outcome = RequestOutcome.failure(
                self.name,
                FailureKind.UNAVAILABLE,
                truncate(f"{type(exc).__name__}: {exc}"),
            )
        except (httpx.HTTPError, ValueError) as exc:
            outcome = RequestOutcome.failure(
                self.name,
                FailureKind.PROTOCOL_ERROR,
                truncate(f"{type(exc).__name__}: {exc}"),
            )
        else:
            logger.debug(f"[{self.name}] response preview: {truncate(payload, 500)}")
            return RequestOutcome.success(self.name, payload)

        self._log_failure(outcome)
        return outcome

    def _log_failure(self, outcome: RequestOutcome):
        """记录失败日志"""
        logger.error(f"[{self.name}] API call failed: {outcome.describe()}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(platform={self.platform.value})"


class ContentAdapter(BaseAdapter):
    """内容平台 (帖子/视频) 适配器基类"""
    pass


class AdLibraryAdapter(BaseAdapter):
    """广告库适配器基类"""
    pass
