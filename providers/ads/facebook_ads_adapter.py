"""
Facebook Ad Library Adapter
通过 ScrapeCreators 搜索 Meta 广告库
"""
from models import Platform
from providers.base import AdLibraryAdapter


class FacebookAdsAdapter(AdLibraryAdapter):
    """
    Meta 广告库适配器
    Endpoint: GET /v1/facebook/adLibrary/search/ads?query=...
    """

    @property
    def platform(self) -> Platform:
        return Platform.FACEBOOK

    @property
    def name(self) -> str:
        return "Facebook Ads"

    @property
    def endpoint(self) -> str:
        return "/facebook/adLibrary/search/ads"
