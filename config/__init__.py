"""
Configuration Management Module
统一配置管理，凭证在进程启动时读取一次并显式注入
"""
from .settings import (
    Settings,
    ScrapeCreatorsSettings,
    GroqSettings,
    OllamaSettings,
    get_settings,
)

__all__ = [
    "Settings",
    "ScrapeCreatorsSettings",
    "GroqSettings",
    "OllamaSettings",
    "get_settings",
]
