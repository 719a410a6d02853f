"""
Processing Module
响应归一化 - 载荷形状识别与平台字段映射
"""
from .normalizer import (
    SHAPE_MATCHERS,
    extract_items,
    format_record,
    normalize_payload,
    engagement_score,
)

__all__ = [
    "SHAPE_MATCHERS",
    "extract_items",
    "format_record",
    "normalize_payload",
    "engagement_score",
]
