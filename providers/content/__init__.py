"""
Content Platform Adapters
"""
from .reddit_adapter import RedditAdapter
from .youtube_adapter import YouTubeAdapter
from .threads_adapter import ThreadsAdapter
from .tiktok_adapter import TikTokAdapter

__all__ = [
    "RedditAdapter",
    "YouTubeAdapter",
    "ThreadsAdapter",
    "TikTokAdapter",
]
