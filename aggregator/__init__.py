"""
Aggregator Module
多平台搜索编排
"""
from .search_orchestrator import (
    BaseOrchestrator,
    SearchOrchestrator,
    AdOrchestrator,
    DEFAULT_CONTENT_PLATFORMS,
    DEFAULT_AD_PLATFORMS,
    rank_records,
    search_posts,
    search_ads,
)

__all__ = [
    "BaseOrchestrator",
    "SearchOrchestrator",
    "AdOrchestrator",
    "DEFAULT_CONTENT_PLATFORMS",
    "DEFAULT_AD_PLATFORMS",
    "rank_records",
    "search_posts",
    "search_ads",
]
