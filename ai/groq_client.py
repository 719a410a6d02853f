"""
Groq Client
主 AI 供应商，OpenAI 兼容接口 (Llama 70B)
"""
from typing import Any, Optional
import logging

import openai

from .base import BaseAIClient
from utils.exceptions import (
    ProviderProtocolError,
    ProviderUnavailable,
    ResponseValidationError,
)


logger = logging.getLogger(__name__)


class GroqClient(BaseAIClient):
    """
    Groq 客户端

    使用 OpenAI SDK 调用 Groq 的 chat completions 接口，
    Bearer Token 鉴权；SDK 自带重试关闭，失败直接交给降级逻辑
    """

    DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"

    def __init__(
        self,
        model: str = "llama-3.3-70b-versatile",
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: float = 0.3,
        max_tokens: int = 2000,
        timeout: float = 120.0,
        **kwargs,
    ):
        super().__init__(model, temperature, max_tokens, timeout, **kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.DEFAULT_BASE_URL
        self._async_client = None

    @property
    def provider(self) -> str:
        return "groq"

    def is_available(self) -> bool:
        return bool(self.api_key)

    @property
    def unavailable_reason(self) -> str:
        return "GROQ_API_KEY not configured"

    def _get_async_client(self):
        """获取异步客户端 (使用 OpenAI SDK)"""
        if self._async_client is None:
            self._async_client = openai.AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._async_client

    async def _request(self, prompt: str, temperature: float, max_tokens: int) -> Any:
        client = self._get_async_client()
        logger.info(f"Calling Groq API with {self.model}")

        try:
            return await client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
                stream=False,
            )
        except openai.APITimeoutError as exc:
            raise ProviderUnavailable(f"Groq API timeout: {exc}", provider=self.provider) from exc
        except openai.APIConnectionError as exc:
            raise ProviderUnavailable(f"Groq API connection error: {exc}", provider=self.provider) from exc
        except openai.APIStatusError as exc:
            raise ProviderProtocolError(
                f"Groq API error: {exc.status_code} - {self._error_message(exc)}",
                provider=self.provider,
                status=exc.status_code,
            ) from exc

    @staticmethod
    def _error_message(exc: "openai.APIStatusError") -> str:
        body = exc.body
        if isinstance(body, dict):
            error = body.get("error", body)
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
        return exc.message or "Unknown error"

    def _extract_text(self, raw: Any) -> str:
        choices = getattr(raw, "choices", None)
        if not choices:
            raise ResponseValidationError("Invalid response from Groq API: no choices", provider=self.provider)

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content.strip():
            raise ResponseValidationError("Invalid response from Groq API: empty content", provider=self.provider)
        return content

    async def aclose(self) -> None:
        client = self._async_client
        if client is None:
            return
        self._async_client = None
        await client.close()
