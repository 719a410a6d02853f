"""
Search Orchestrator
将一个查询并发分发到多个内容/广告平台，归一化并按互动分排序
"""
import asyncio
from typing import Awaitable, Dict, Iterable, List, Mapping, Optional, Type
import logging
import time

from rich.table import Table

from config import Settings, get_settings
from models import CanonicalRecord
from processing import normalize_payload
from providers import (
    AD_ADAPTERS,
    CONTENT_ADAPTERS,
    UNSUPPORTED_CONTENT_PLATFORMS,
    BaseAdapter,
)
from utils.exceptions import ConfigurationError
from utils.logger import console


logger = logging.getLogger(__name__)

DEFAULT_CONTENT_PLATFORMS = ("reddit", "youtube", "threads")
DEFAULT_AD_PLATFORMS = ("facebook", "linkedin", "google")


def rank_records(records: Iterable[CanonicalRecord]) -> List[CanonicalRecord]:
    """按互动分降序排序；sorted 是稳定的，同分保持插入顺序"""
    return sorted(records, key=lambda record: record.engagement, reverse=True)


def normalize_platforms(platforms: Iterable[str]) -> List[str]:
    """小写化并去重，保持请求顺序；单个字符串视为单个平台"""
    if isinstance(platforms, str):
        platforms = [platforms]
    ordered: List[str] = []
    seen = set()
    for platform in platforms or []:
        key = str(getattr(platform, "value", platform) or "").strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        ordered.append(key)
    return ordered


class BaseOrchestrator:
    """
    多平台编排器基类

    每个平台任务独立包装结果，通过一次 gather 汇合；
    任一平台失败只贡献空列表，不影响其他平台
    """

    kind = "records"
    as_ads = False
    adapter_classes: Mapping[str, Type[BaseAdapter]] = {}
    unsupported_platforms: Mapping[str, str] = {}

    def __init__(
        self,
        settings: Optional[Settings] = None,
        adapters: Optional[Mapping[str, BaseAdapter]] = None,
    ):
        """
        初始化编排器

        Args:
            settings: 配置 (默认使用进程级配置)
            adapters: 平台标识 -> 适配器实例 (默认按注册表构建)
        """
        self.settings = settings or get_settings()
        if adapters is None:
            adapters = {
                name: adapter_cls(settings=self.settings)
                for name, adapter_cls in self.adapter_classes.items()
            }
        self._adapters: Dict[str, BaseAdapter] = dict(adapters)

    @property
    def platforms(self) -> List[str]:
        return list(self._adapters)

    def _ensure_configured(self):
        if not self.settings.scrapecreators.api_key:
            logger.error(
                "ScrapeCreators API key not configured! "
                "Please set SCRAPECREATORS_API_KEY environment variable."
            )
            raise ConfigurationError(
                "ScrapeCreators API key not configured",
                {"env": "SCRAPECREATORS_API_KEY"},
            )

    async def _run_source_task(self, platform: str, task_coro: Awaitable[List[CanonicalRecord]]):
        try:
            return await task_coro
        except Exception as exc:
            logger.error(f"Error searching {platform}: {exc}")
            return []

    async def _search_platform(
        self,
        platform: str,
        query: str,
        max_results: int,
        **options,
    ) -> List[CanonicalRecord]:
        adapter = self._adapters.get(platform)
        if adapter is None:
            reason = self.unsupported_platforms.get(platform)
            if reason:
                logger.warning(f"{reason} - skipping")
            else:
                logger.warning(f"Unknown platform: {platform}")
            return []

        outcome = await adapter.fetch(query, max_results, **options)
        if not outcome.ok:
            return []

        records = normalize_payload(outcome.payload, platform, as_ad=self.as_ads)
        if not records:
            logger.warning(f"No {self.kind} found from {adapter.name}")
        else:
            logger.info(f"Found {len(records)} {self.kind} from {adapter.name}")
        return records

    async def _aggregate(
        self,
        query: str,
        platforms: Iterable[str],
        max_results_per_platform: Optional[int],
        show_progress: bool = False,
        **options,
    ) -> List[CanonicalRecord]:
        self._ensure_configured()

        query = str(query or "").strip()
        if not query:
            raise ValueError("query must be a non-empty string")

        if max_results_per_platform is None:
            max_results_per_platform = self.settings.scrapecreators.max_results
        max_results = max(1, int(max_results_per_platform))

        names = normalize_platforms(platforms)
        started = time.perf_counter()
        logger.info(f"Search ({self.kind}) for: '{query}' on platforms: {', '.join(names)}")

        tasks = [
            self._run_source_task(name, self._search_platform(name, query, max_results, **options))
            for name in names
        ]
        # 单一汇合点；每个任务已自行兜底，不会向兄弟任务传播异常
        per_platform = await asyncio.gather(*tasks)

        merged: List[CanonicalRecord] = []
        for records in per_platform:
            merged.extend(records)
        ranked = rank_records(merged)

        duration_ms = int((time.perf_counter() - started) * 1000)
        logger.info(f"Search ({self.kind}) completed: {len(ranked)} {self.kind} in {duration_ms}ms")

        if show_progress:
            self._print_summary(query, dict(zip(names, per_platform)), len(ranked))

        return ranked

    def _print_summary(self, query: str, per_platform: Dict[str, List[CanonicalRecord]], total: int):
        """打印结果摘要"""
        console.print()

        table = Table(title=f"Aggregation Summary: {query}", show_header=True)
        table.add_column("Platform", style="cyan")
        table.add_column("Type", style="magenta")
        table.add_column("Count", justify="right", style="green")
        table.add_column("Top engagement", justify="right")

        for platform, records in per_platform.items():
            top = str(max((r.engagement for r in records), default=0))
            table.add_row(platform, self.kind, str(len(records)), top)

        table.add_row("", "", "", "")
        table.add_row("[bold]Total[/bold]", "", f"[bold]{total}[/bold]", "")

        console.print(table)
        console.print()

    async def close(self):
        """适配器按调用持有 HTTP 客户端，这里没有需要释放的资源"""
        return None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class SearchOrchestrator(BaseOrchestrator):
    """内容平台搜索编排器"""

    kind = "posts"
    adapter_classes = CONTENT_ADAPTERS
    unsupported_platforms = UNSUPPORTED_CONTENT_PLATFORMS

    async def search(
        self,
        query: str,
        platforms: Iterable[str] = DEFAULT_CONTENT_PLATFORMS,
        max_results_per_platform: Optional[int] = None,
        language: str = "en",
        time_filter: str = "week",
        show_progress: bool = False,
    ) -> List[CanonicalRecord]:
        """
        搜索多个内容平台

        Args:
            query: 搜索关键词
            platforms: 平台列表 (reddit, youtube, threads, tiktok)
            max_results_per_platform: 每个平台最大结果数
            language: 语言代码 (供应商不支持语言过滤，仅记录)
            time_filter: 时间过滤 (hour, day, week, month, year, all)
            show_progress: 是否打印摘要表格

        Returns:
            按互动分降序排列的记录列表
        """
        logger.debug(f"Search language={language} time_filter={time_filter}")
        return await self._aggregate(
            query,
            platforms,
            max_results_per_platform,
            show_progress=show_progress,
            time_filter=time_filter,
        )


class AdOrchestrator(BaseOrchestrator):
    """广告库搜索编排器，所有记录 type='ad' 且 engagement=0"""

    kind = "ads"
    as_ads = True
    adapter_classes = AD_ADAPTERS

    async def search(
        self,
        query: str,
        platforms: Iterable[str] = DEFAULT_AD_PLATFORMS,
        max_results_per_platform: Optional[int] = None,
        show_progress: bool = False,
    ) -> List[CanonicalRecord]:
        """
        搜索多个广告库

        Args:
            query: 搜索关键词
            platforms: 广告平台列表 (facebook, linkedin, google)
            max_results_per_platform: 每个平台最大结果数
            show_progress: 是否打印摘要表格

        Returns:
            广告记录列表
        """
        return await self._aggregate(
            query,
            platforms,
            max_results_per_platform,
            show_progress=show_progress,
        )


# 便捷函数
async def search_posts(
    query: str,
    platforms: Iterable[str] = DEFAULT_CONTENT_PLATFORMS,
    language: str = "en",
    time_filter: str = "week",
    max_results: int = 50,
    settings: Optional[Settings] = None,
) -> List[CanonicalRecord]:
    """
    便捷函数：跨平台搜索帖子

    Usage:
        posts = await search_posts("electric bikes", ["reddit", "youtube"])
    """
    async with SearchOrchestrator(settings=settings) as orchestrator:
        return await orchestrator.search(
            query,
            platforms,
            max_results,
            language=language,
            time_filter=time_filter,
        )


async def search_ads(
    query: str,
    platforms: Iterable[str] = DEFAULT_AD_PLATFORMS,
    max_results: int = 20,
    settings: Optional[Settings] = None,
) -> List[CanonicalRecord]:
    """便捷函数：跨广告库搜索广告"""
    async with AdOrchestrator(settings=settings) as orchestrator:
        return await orchestrator.search(query, platforms, max_results)
