"""
Utils Module
通用工具函数
"""
from .logger import setup_logger, get_logger, configure_logging
from .exceptions import (
    PulseSearchError,
    ConfigurationError,
    ProviderError,
    ProviderUnavailable,
    ProviderProtocolError,
    ResponseValidationError,
    LLMError,
    AIProvidersExhaustedError,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "configure_logging",
    "PulseSearchError",
    "ConfigurationError",
    "ProviderError",
    "ProviderUnavailable",
    "ProviderProtocolError",
    "ResponseValidationError",
    "LLMError",
    "AIProvidersExhaustedError",
]
