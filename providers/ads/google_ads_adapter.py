"""
Google Ads Transparency Adapter
通过 ScrapeCreators 搜索 Google 广告透明度中心
"""
from models import Platform
from providers.base import AdLibraryAdapter


class GoogleAdsAdapter(AdLibraryAdapter):
    """
    Google 广告库适配器
    Endpoint: GET /v1/google/adLibrary/search/ads?query=...
    """

    @property
    def platform(self) -> Platform:
        return Platform.GOOGLE

    @property
    def name(self) -> str:
        return "Google Ads"

    @property
    def endpoint(self) -> str:
        return "/google/adLibrary/search/ads"
