"""
AI Fallback Client
主供应商 (Groq) 失败时自动切换到备用供应商 (Ollama)
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple
import logging

from config import Settings
from .base import BaseAIClient, GenerationResult
from .factory import get_ai_client
from utils.exceptions import AIProvidersExhaustedError


logger = logging.getLogger(__name__)


class FallbackState(str, Enum):
    """单次调用的状态"""
    TRY_PRIMARY = "try_primary"
    TRY_BACKUP = "try_backup"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class FallbackResult:
    """一次成功调用的结果: 文本、作答的供应商以及经过的状态"""
    text: str
    provider: str
    path: Tuple[FallbackState, ...]

    @property
    def used_backup(self) -> bool:
        return FallbackState.TRY_BACKUP in self.path


class AIFallbackClient:
    """
    统一 AI 客户端

    TRY_PRIMARY -> SUCCEEDED | TRY_BACKUP
    TRY_BACKUP  -> SUCCEEDED | FAILED
    force_backup 是跳过 TRY_PRIMARY 的唯一方式
    """

    def __init__(
        self,
        primary: Optional[BaseAIClient] = None,
        backup: Optional[BaseAIClient] = None,
        settings: Optional[Settings] = None,
    ):
        self.primary = primary or get_ai_client("groq", settings=settings)
        self.backup = backup or get_ai_client("ollama", settings=settings)

    async def call(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        force_backup: bool = False,
    ) -> str:
        """
        调用 AI 服务 (带自动降级)

        Args:
            prompt: 提示词
            temperature: 生成温度
            max_tokens: 最大生成 token 数
            force_backup: 跳过主供应商，直接使用备用供应商

        Returns:
            生成的文本

        Raises:
            AIProvidersExhaustedError: 主备供应商均失败
        """
        result = await self.run(prompt, temperature, max_tokens, force_backup)
        return result.text

    async def run(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        force_backup: bool = False,
    ) -> FallbackResult:
        """
        执行一次降级调用，返回文本以及本次调用经过的状态

        状态只存在于本次调用的局部变量中，同一客户端可被并发调用
        """
        state = FallbackState.TRY_BACKUP if force_backup else FallbackState.TRY_PRIMARY
        path = [state]
        primary_reason: Optional[str] = None

        if state is FallbackState.TRY_PRIMARY:
            result = await self._try_primary(prompt, temperature, max_tokens)
            if result.ok:
                path.append(FallbackState.SUCCEEDED)
                return FallbackResult(result.text, result.provider, tuple(path))
            primary_reason = result.error or "empty response"
            state = FallbackState.TRY_BACKUP
            path.append(state)
        else:
            logger.info(f"Using {self.backup.provider} (forced)")
            primary_reason = f"{self.primary.provider} skipped (backup forced)"

        result = await self.backup.generate(prompt, temperature, max_tokens)
        if result.ok:
            path.append(FallbackState.SUCCEEDED)
            return FallbackResult(result.text, result.provider, tuple(path))

        path.append(FallbackState.FAILED)
        backup_reason = result.error or "empty response"
        logger.error(
            f"Both {self.primary.provider} and {self.backup.provider} failed "
            f"({' -> '.join(state.value for state in path)}). "
            f"{self.primary.provider} error: {primary_reason}, {self.backup.provider} error: {backup_reason}"
        )
        raise AIProvidersExhaustedError(primary_reason=primary_reason, backup_reason=backup_reason)

    async def _try_primary(
        self,
        prompt: str,
        temperature: Optional[float],
        max_tokens: Optional[int],
    ) -> GenerationResult:
        if not self.primary.is_available():
            reason = self.primary.unavailable_reason
            logger.warning(f"{self.primary.provider} not available ({reason}), using {self.backup.provider}")
            return GenerationResult.failure(self.primary.provider, reason, self.primary.model)

        result = await self.primary.generate(prompt, temperature, max_tokens)
        if not result.ok:
            logger.warning(
                f"{self.primary.provider} API failed, falling back to {self.backup.provider}: {result.error}"
            )
        return result

    def status(self) -> Dict[str, Any]:
        """获取主备供应商状态 (不发起网络请求)"""
        return {
            self.primary.provider: {
                "available": self.primary.is_available(),
                "model": self.primary.model,
                "role": "primary",
            },
            self.backup.provider: {
                "available": self.backup.is_available(),
                "model": self.backup.model,
                "role": "backup",
            },
        }

    async def aclose(self) -> None:
        await self.primary.aclose()
        await self.backup.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


# 便捷函数
async def ai_call(
    prompt: str,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    force_backup: bool = False,
    settings: Optional[Settings] = None,
) -> str:
    """
    便捷函数：带降级的 AI 调用

    Usage:
        summary = await ai_call("Summarize these posts: ...", temperature=0.2)
    """
    async with AIFallbackClient(settings=settings) as client:
        return await client.call(
            prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            force_backup=force_backup,
        )
