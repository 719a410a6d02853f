"""
Reddit Adapter
通过 ScrapeCreators 搜索 Reddit 帖子
"""
from typing import Any, Dict, Optional

from models import Platform
from providers.base import ContentAdapter


class RedditAdapter(ContentAdapter):
    """
    Reddit 适配器
    Endpoint: GET /v1/reddit/search?query=...
    """

    # 供应商接受的时间过滤值
    TIME_FILTERS = {"hour", "day", "week", "month", "year", "all"}

    @property
    def platform(self) -> Platform:
        return Platform.REDDIT

    @property
    def name(self) -> str:
        return "Reddit"

    @property
    def endpoint(self) -> str:
        return "/reddit/search"

    def _build_params(
        self,
        query: str,
        max_results: int,
        time_filter: Optional[str] = None,
        **options,
    ) -> Dict[str, Any]:
        params = super()._build_params(query, max_results)
        if time_filter and time_filter in self.TIME_FILTERS:
            params["timeframe"] = time_filter
        return params
