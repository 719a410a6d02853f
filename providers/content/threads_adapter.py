"""
Threads Adapter
通过 ScrapeCreators 搜索 Threads 帖子
"""
from models import Platform
from providers.base import ContentAdapter


class ThreadsAdapter(ContentAdapter):
    """
    Threads 适配器
    Endpoint: GET /v1/threads/search?query=...
    """

    @property
    def platform(self) -> Platform:
        return Platform.THREADS

    @property
    def name(self) -> str:
        return "Threads"

    @property
    def endpoint(self) -> str:
        return "/threads/search"
