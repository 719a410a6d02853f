"""
Provider Adapters Module
"""
from .base import BaseAdapter, ContentAdapter, AdLibraryAdapter
from .content import (
    RedditAdapter,
    YouTubeAdapter,
    ThreadsAdapter,
    TikTokAdapter,
)
from .ads import (
    FacebookAdsAdapter,
    LinkedInAdsAdapter,
    GoogleAdsAdapter,
)

# 平台标识 -> 适配器类
CONTENT_ADAPTERS = {
    "reddit": RedditAdapter,
    "youtube": YouTubeAdapter,
    "threads": ThreadsAdapter,
    "tiktok": TikTokAdapter,
}

AD_ADAPTERS = {
    "facebook": FacebookAdsAdapter,
    "linkedin": LinkedInAdsAdapter,
    "google": GoogleAdsAdapter,
}

# 已知平台但供应商不提供关键词搜索端点
UNSUPPORTED_CONTENT_PLATFORMS = {
    "x": "Twitter/X search endpoint not available in ScrapeCreators API",
    "twitter": "Twitter/X search endpoint not available in ScrapeCreators API",
    "linkedin": "LinkedIn search endpoint not available in ScrapeCreators API",
}

__all__ = [
    # Base
    "BaseAdapter",
    "ContentAdapter",
    "AdLibraryAdapter",
    # Content
    "RedditAdapter",
    "YouTubeAdapter",
    "ThreadsAdapter",
    "TikTokAdapter",
    # Ads
    "FacebookAdsAdapter",
    "LinkedInAdsAdapter",
    "GoogleAdsAdapter",
    # Registries
    "CONTENT_ADAPTERS",
    "AD_ADAPTERS",
    "UNSUPPORTED_CONTENT_PLATFORMS",
]
