"""
Custom Exceptions
自定义异常类
"""


class PulseSearchError(Exception):
    """聚合服务基础异常类"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(PulseSearchError):
    """配置错误 (缺少必要凭证，不可重试)"""
    pass


class ProviderError(PulseSearchError):
    """供应商调用错误"""

    def __init__(self, message: str, provider: str = None, **kwargs):
        super().__init__(message, kwargs)
        self.provider = provider


class ProviderUnavailable(ProviderError):
    """网络错误 / 超时"""
    pass


class ProviderProtocolError(ProviderError):
    """非预期的 HTTP 状态或无法解析的响应"""
    pass


class ResponseValidationError(ProviderError):
    """调用成功但响应缺少必要字段 (如生成文本为空)"""
    pass


class LLMError(PulseSearchError):
    """LLM 调用错误"""

    def __init__(self, message: str, provider: str = None, **kwargs):
        super().__init__(message, kwargs)
        self.provider = provider


class AIProvidersExhaustedError(LLMError):
    """主备 AI 供应商均失败"""

    def __init__(self, primary_reason: str = None, backup_reason: str = None):
        self.primary_reason = primary_reason
        self.backup_reason = backup_reason
        message = (
            "All AI services unavailable. "
            f"Primary error: {primary_reason or 'N/A'}; "
            f"Backup error: {backup_reason or 'N/A'}"
        )
        super().__init__(message, provider=None)
