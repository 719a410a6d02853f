"""
Logger Configuration
统一日志配置
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler
from rich.console import Console


# 全局 Console 实例 (stderr, 避免污染 CLI 的 JSON 输出)
console = Console(stderr=True)

# 日志格式
LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_FORMAT_SIMPLE = "%(message)s"

# 默认日志目录
LOG_DIR = Path(__file__).parent.parent / "logs"

# 各模块使用 logging.getLogger(__name__)，这些顶层包共用同一套 handler
PACKAGE_LOGGERS = ("aggregator", "ai", "processing", "providers", "pulse_search")


def setup_logger(
    name: str = "pulse_search",
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    use_rich: bool = True,
) -> logging.Logger:
    """
    设置日志记录器

    Args:
        name: 日志记录器名称
        level: 日志级别
        log_file: 日志文件路径 (可选)
        use_rich: 是否使用 Rich 美化输出

    Returns:
        配置好的 Logger 实例
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 避免重复添加 handler
    if logger.handlers:
        return logger

    # Console Handler
    if use_rich:
        console_handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    # File Handler (可选)
    if log_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_path = LOG_DIR / log_file

        file_handler = logging.FileHandler(file_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    return logger


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    use_rich: bool = True,
) -> None:
    """为项目内所有顶层包配置日志输出"""
    for name in PACKAGE_LOGGERS:
        setup_logger(name, level=level, log_file=log_file, use_rich=use_rich)


def get_logger(name: str = "pulse_search") -> logging.Logger:
    """
    获取日志记录器

    Args:
        name: 日志记录器名称

    Returns:
        Logger 实例
    """
    logger = logging.getLogger(name)

    # 如果没有配置过，进行默认配置
    if not logger.handlers:
        return setup_logger(name)

    return logger
