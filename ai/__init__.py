"""
AI Module
主备 AI 供应商与自动降级
"""
from .base import BaseAIClient, GenerationResult
from .groq_client import GroqClient
from .ollama_client import OllamaClient
from .factory import get_ai_client
from .fallback import AIFallbackClient, FallbackResult, FallbackState, ai_call

__all__ = [
    "BaseAIClient",
    "GenerationResult",
    "GroqClient",
    "OllamaClient",
    "get_ai_client",
    "AIFallbackClient",
    "FallbackResult",
    "FallbackState",
    "ai_call",
]
