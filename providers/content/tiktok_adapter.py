"""
TikTok Adapter
通过 ScrapeCreators 关键词搜索 TikTok 视频
"""
from models import Platform
from providers.base import ContentAdapter


class TikTokAdapter(ContentAdapter):
    """
    TikTok 适配器
    Endpoint: GET /v1/tiktok/search/keyword?query=...
    没有专用格式化器，使用通用互动分公式
    """

    @property
    def platform(self) -> Platform:
        return Platform.TIKTOK

    @property
    def name(self) -> str:
        return "TikTok"

    @property
    def endpoint(self) -> str:
        return "/tiktok/search/keyword"
