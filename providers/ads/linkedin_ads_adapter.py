"""
LinkedIn Ad Library Adapter
通过 ScrapeCreators 搜索 LinkedIn 广告库
"""
from typing import Any, Dict

from models import Platform
from providers.base import AdLibraryAdapter


class LinkedInAdsAdapter(AdLibraryAdapter):
    """
    LinkedIn 广告库适配器
    Endpoint: GET /v1/linkedin/ads/search?keyword=...
    """

    @property
    def platform(self) -> Platform:
        return Platform.LINKEDIN

    @property
    def name(self) -> str:
        return "LinkedIn Ads"

    @property
    def endpoint(self) -> str:
        return "/linkedin/ads/search"

    def _build_params(self, query: str, max_results: int, **options) -> Dict[str, Any]:
        # 该端点使用 keyword 而非 query
        return {"keyword": query, "limit": max_results}
