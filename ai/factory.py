"""
AI Client Factory
工厂函数 - 根据配置创建 AI 客户端实例
"""
from typing import Optional
import logging

from config import Settings, get_settings
from .base import BaseAIClient
from .groq_client import GroqClient
from .ollama_client import OllamaClient


logger = logging.getLogger(__name__)


def get_ai_client(
    provider: str,
    settings: Optional[Settings] = None,
    **kwargs,
) -> BaseAIClient:
    """
    获取 AI 客户端实例

    从显式传入的配置 (或进程级配置) 读取凭证和地址，也可通过 kwargs 覆盖

    Args:
        provider: AI 供应商 (groq, ollama)
        settings: 配置对象
        **kwargs: 覆盖参数 (model, temperature, max_tokens 等)

    Returns:
        BaseAIClient 实例

    Example:
        primary = get_ai_client("groq")
        backup = get_ai_client("ollama", base_url="http://ollama:11434")
    """
    settings = settings or get_settings()

    if provider == "groq":
        groq = settings.groq
        params = {
            "model": groq.model,
            "api_key": groq.api_key,
            "base_url": groq.base_url,
            "temperature": groq.temperature,
            "max_tokens": groq.max_tokens,
            "timeout": groq.timeout,
        }
        params.update(kwargs)
        return GroqClient(**params)
    elif provider == "ollama":
        ollama = settings.ollama
        params = {
            "model": ollama.model,
            "base_url": ollama.base_url,
            "temperature": settings.groq.temperature,
            "max_tokens": settings.groq.max_tokens,
            "timeout": ollama.timeout,
            "num_ctx": ollama.num_ctx,
        }
        params.update(kwargs)
        return OllamaClient(**params)
    else:
        raise ValueError(f"Unsupported AI provider: {provider}")
