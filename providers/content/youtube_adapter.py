"""
YouTube Adapter
通过 ScrapeCreators 搜索 YouTube 视频
"""
from models import Platform
from providers.base import ContentAdapter


class YouTubeAdapter(ContentAdapter):
    """
    YouTube 适配器
    Endpoint: GET /v1/youtube/search?query=...
    """

    @property
    def platform(self) -> Platform:
        return Platform.YOUTUBE

    @property
    def name(self) -> str:
        return "YouTube"

    @property
    def endpoint(self) -> str:
        return "/youtube/search"
