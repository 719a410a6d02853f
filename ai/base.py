"""
Base AI Client
AI 生成供应商抽象基类
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional
import logging

from utils.exceptions import ProviderError


logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """单次生成尝试的结果"""
    provider: str
    text: str = ""
    model: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.text.strip())

    @classmethod
    def success(cls, provider: str, text: str, model: Optional[str] = None) -> "GenerationResult":
        return cls(provider=provider, text=text, model=model)

    @classmethod
    def failure(cls, provider: str, error: str, model: Optional[str] = None) -> "GenerationResult":
        return cls(provider=provider, error=error, model=model)


class BaseAIClient(ABC):
    """
    AI 客户端抽象基类

    子类负责一个生成 API 的请求/响应约定；
    generate() 从不抛出异常，总是返回 GenerationResult
    """

    def __init__(
        self,
        model: str,
        temperature: float = 0.3,
        max_tokens: int = 2000,
        timeout: float = 120.0,
        **kwargs,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.extra_config = kwargs

    @property
    @abstractmethod
    def provider(self) -> str:
        """返回供应商名称"""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        纯前置条件检查 (凭证/地址是否配置)
        不发起网络请求
        """
        pass

    @property
    def unavailable_reason(self) -> str:
        return f"{self.provider} not configured"

    @abstractmethod
    async def _request(self, prompt: str, temperature: float, max_tokens: int) -> Any:
        """
        发起一次生成请求，返回原始响应

        Raises:
            ProviderUnavailable: 连接失败 / 超时
            ProviderProtocolError: HTTP 错误状态或无法解析的响应
        """
        pass

    @abstractmethod
    def _extract_text(self, raw: Any) -> str:
        """
        从原始响应中取出生成文本

        Raises:
            ResponseValidationError: 文本缺失或为空
        """
        pass

    async def generate(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> GenerationResult:
        """
        生成文本

        Args:
            prompt: 提示词
            temperature: 生成温度 (不传则使用默认)
            max_tokens: 最大生成 token 数 (不传则使用默认)

        Returns:
            GenerationResult
        """
        if not self.is_available():
            return GenerationResult.failure(self.provider, self.unavailable_reason, self.model)

        temperature = self.temperature if temperature is None else temperature
        max_tokens = self.max_tokens if max_tokens is None else max_tokens

        try:
            raw = await self._request(prompt, temperature, max_tokens)
            text = self._extract_text(raw)
        except ProviderError as exc:
            logger.error(f"[{self.provider}] call failed: {exc.message}")
            return GenerationResult.failure(self.provider, exc.message, self.model)
        except Exception as exc:
            logger.error(f"[{self.provider}] call failed unexpectedly: {type(exc).__name__}: {exc}")
            return GenerationResult.failure(self.provider, f"{type(exc).__name__}: {exc}", self.model)

        logger.info(f"[{self.provider}] call successful ({len(text)} chars)")
        return GenerationResult.success(self.provider, text, self.model)

    async def aclose(self) -> None:
        """关闭底层客户端资源 (默认 no-op)"""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.model}, provider={self.provider})"
