"""
Ollama Client
自托管备用 AI 供应商 (Llama 8B)
"""
from typing import Any, Optional
import logging

import httpx

from .base import BaseAIClient
from providers.base import truncate
from utils.exceptions import (
    ProviderProtocolError,
    ProviderUnavailable,
    ResponseValidationError,
)


logger = logging.getLogger(__name__)


class OllamaClient(BaseAIClient):
    """
    Ollama 客户端

    POST {base_url}/api/generate，无鉴权；只要配置了 base_url 就视为可用
    """

    DEFAULT_BASE_URL = "http://localhost:11434"

    def __init__(
        self,
        model: str = "llama3.1:8b",
        base_url: Optional[str] = DEFAULT_BASE_URL,
        temperature: float = 0.3,
        max_tokens: int = 2000,
        timeout: float = 120.0,
        num_ctx: int = 8192,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs,
    ):
        super().__init__(model, temperature, max_tokens, timeout, **kwargs)
        self.base_url = (base_url or "").rstrip("/")
        self.num_ctx = num_ctx
        self._transport = transport

    @property
    def provider(self) -> str:
        return "ollama"

    def is_available(self) -> bool:
        return bool(self.base_url)

    @property
    def unavailable_reason(self) -> str:
        return "OLLAMA_BASE_URL not configured"

    async def _request(self, prompt: str, temperature: float, max_tokens: int) -> Any:
        logger.info(f"Calling Ollama (backup) at {self.base_url} with model: {self.model}")

        body = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": temperature,
                "num_predict": max_tokens,
                "num_ctx": self.num_ctx,
            },
        }

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            ) as client:
                response = await client.post(f"{self.base_url}/api/generate", json=body)
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException as exc:
            raise ProviderUnavailable(
                f"Ollama request timed out after {self.timeout:g}s. The model may be overloaded or not loaded.",
                provider=self.provider,
            ) from exc
        except httpx.TransportError as exc:
            raise ProviderUnavailable(
                f"Ollama service unavailable at {self.base_url}. Please check if Ollama is running.",
                provider=self.provider,
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise ProviderProtocolError(
                f"Ollama API error: {exc.response.status_code} - {self._error_message(exc.response)}",
                provider=self.provider,
                status=exc.response.status_code,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise ProviderProtocolError(f"Ollama API returned unparsable response: {exc}", provider=self.provider) from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return truncate(response.text) or "Unknown error"
        if isinstance(data, dict) and data.get("error"):
            return truncate(data["error"])
        return "Unknown error"

    def _extract_text(self, raw: Any) -> str:
        text = raw.get("response") if isinstance(raw, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise ResponseValidationError("Invalid response from Ollama API: empty response", provider=self.provider)
        return text
