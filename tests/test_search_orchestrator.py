"""Unit tests for aggregator.search_orchestrator."""

from __future__ import annotations

import asyncio
import logging

import httpx
import pytest

from aggregator import AdOrchestrator, SearchOrchestrator, search_posts
from aggregator import search_orchestrator as orchestrator_module
from aggregator.search_orchestrator import normalize_platforms
from config import GroqSettings, OllamaSettings, ScrapeCreatorsSettings, Settings
from models import FailureKind, Platform, RequestOutcome
from providers import RedditAdapter, YouTubeAdapter
from utils.exceptions import ConfigurationError


def _settings(api_key="test-key") -> Settings:
    return Settings(
        scrapecreators=ScrapeCreatorsSettings(api_key=api_key, base_url="https://api.test/v1"),
        groq=GroqSettings(api_key=None),
        ollama=OllamaSettings(),
    )


class _FakeAdapter:
    def __init__(self, name, payload=None, outcome=None, delay=0.0, error=None):
        self.name = name
        self._payload = payload
        self._outcome = outcome
        self._delay = delay
        self._error = error
        self.calls = 0
        self.options = None

    async def fetch(self, query, max_results, **options):
        self.calls += 1
        self.options = options
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        if self._outcome is not None:
            return self._outcome
        return RequestOutcome.success(self.name, self._payload)


def _reddit_payload():
    return {"data": [{"id": "r_high", "score": 10, "num_comments": 5}, {"id": "r_low", "score": 1}]}


def _youtube_payload():
    return {"videos": [{"id": "yt", "views": 10000, "likes": 50, "comments": 10}]}


@pytest.mark.asyncio
async def test_search_merges_platforms_and_sorts_by_engagement():
    adapters = {
        "reddit": _FakeAdapter("Reddit", payload=_reddit_payload()),
        "youtube": _FakeAdapter("YouTube", payload=_youtube_payload()),
    }
    orchestrator = SearchOrchestrator(settings=_settings(), adapters=adapters)

    records = await orchestrator.search("e-bikes", ["reddit", "youtube"], 10)

    assert [r.id for r in records] == ["yt", "r_high", "r_low"]
    assert [r.engagement for r in records] == [160, 15, 1]
    assert {r.platform for r in records} == {"reddit", "youtube"}
    engagements = [r.engagement for r in records]
    assert engagements == sorted(engagements, reverse=True)


@pytest.mark.asyncio
async def test_one_failed_platform_does_not_fail_the_request():
    adapters = {
        "reddit": _FakeAdapter("Reddit", payload=_reddit_payload()),
        "youtube": _FakeAdapter(
            "YouTube",
            outcome=RequestOutcome.failure("YouTube", FailureKind.UNAVAILABLE, "ReadTimeout: timed out"),
        ),
        "threads": _FakeAdapter("Threads", error=RuntimeError("adapter blew up")),
    }
    orchestrator = SearchOrchestrator(settings=_settings(), adapters=adapters)

    records = await orchestrator.search("e-bikes", ["reddit", "youtube", "threads"], 10)

    assert [r.id for r in records] == ["r_high", "r_low"]
    assert all(adapter.calls == 1 for adapter in adapters.values())


@pytest.mark.asyncio
async def test_missing_credential_raises_before_any_call():
    adapters = {
        "reddit": _FakeAdapter("Reddit", payload=_reddit_payload()),
        "youtube": _FakeAdapter("YouTube", payload=_youtube_payload()),
    }
    orchestrator = SearchOrchestrator(settings=_settings(api_key=None), adapters=adapters)

    with pytest.raises(ConfigurationError):
        await orchestrator.search("e-bikes", ["reddit", "youtube"], 10)

    assert adapters["reddit"].calls == 0
    assert adapters["youtube"].calls == 0


@pytest.mark.asyncio
async def test_unknown_and_unsupported_platforms_contribute_nothing(caplog):
    caplog.set_level(logging.WARNING)
    adapters = {"reddit": _FakeAdapter("Reddit", payload=_reddit_payload())}
    orchestrator = SearchOrchestrator(settings=_settings(), adapters=adapters)

    records = await orchestrator.search("e-bikes", ["myspace", "twitter", "reddit"], 10)

    assert len(records) == 2
    assert "Unknown platform: myspace" in caplog.text
    assert "Twitter/X search endpoint not available" in caplog.text


@pytest.mark.asyncio
async def test_equal_scores_keep_requested_platform_order_regardless_of_completion():
    adapters = {
        # reddit finishes last but was requested first
        "reddit": _FakeAdapter("Reddit", payload=[{"id": "r1", "score": 5}], delay=0.05),
        "threads": _FakeAdapter("Threads", payload=[{"id": "t1", "likes": 5}]),
    }
    orchestrator = SearchOrchestrator(settings=_settings(), adapters=adapters)

    records = await orchestrator.search("e-bikes", ["reddit", "threads"], 10)

    assert [r.id for r in records] == ["r1", "t1"]


@pytest.mark.asyncio
async def test_platforms_are_normalized_and_deduplicated():
    reddit = _FakeAdapter("Reddit", payload=_reddit_payload())
    orchestrator = SearchOrchestrator(settings=_settings(), adapters={"reddit": reddit})

    await orchestrator.search("e-bikes", ["Reddit", " reddit "], 10, time_filter="day")

    assert reddit.calls == 1
    assert reddit.options == {"time_filter": "day"}


@pytest.mark.asyncio
async def test_empty_query_is_rejected():
    orchestrator = SearchOrchestrator(settings=_settings(), adapters={})

    with pytest.raises(ValueError):
        await orchestrator.search("   ", ["reddit"], 10)


@pytest.mark.asyncio
async def test_ad_records_are_tagged_with_zero_engagement():
    adapters = {
        "facebook": _FakeAdapter(
            "Facebook Ads",
            payload={"searchResults": [{"ad_archive_id": "1", "page_name": "Acme", "likes": 500}]},
        ),
        "linkedin": _FakeAdapter(
            "LinkedIn Ads",
            payload={"ads": [{"id": "2", "advertiser": "Globex", "views": 90000}]},
        ),
    }
    orchestrator = AdOrchestrator(settings=_settings(), adapters=adapters)

    records = await orchestrator.search("crm", ["facebook", "linkedin"], 5)

    assert [r.id for r in records] == ["1", "2"]
    assert all(r.type == "ad" for r in records)
    assert all(r.engagement == 0 for r in records)


@pytest.mark.asyncio
async def test_ad_orchestrator_requires_credential():
    facebook = _FakeAdapter("Facebook Ads", payload=[])
    orchestrator = AdOrchestrator(settings=_settings(api_key=""), adapters={"facebook": facebook})

    with pytest.raises(ConfigurationError):
        await orchestrator.search("crm", ["facebook"], 5)
    assert facebook.calls == 0


@pytest.mark.asyncio
async def test_search_end_to_end_with_real_adapters():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/reddit/search"):
            return httpx.Response(200, json={"data": {"posts": [{"id": "r", "score": 3, "num_comments": 1}]}})
        if request.url.path.endswith("/youtube/search"):
            return httpx.Response(503, json={"error": "busy"})
        raise AssertionError(f"unexpected url: {request.url}")

    settings = _settings()
    transport = httpx.MockTransport(handler)
    adapters = {
        "reddit": RedditAdapter(settings=settings, transport=transport),
        "youtube": YouTubeAdapter(settings=settings, transport=transport),
    }

    async with SearchOrchestrator(settings=settings, adapters=adapters) as orchestrator:
        records = await orchestrator.search("e-bikes", ["reddit", "youtube"], 5)

    assert [(r.id, r.engagement) for r in records] == [("r", 4)]


@pytest.mark.asyncio
async def test_search_posts_convenience_builds_orchestrator(monkeypatch):
    captured = {}

    class _StubOrchestrator:
        def __init__(self, settings=None):
            captured["settings"] = settings

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def search(self, query, platforms, max_results, language="en", time_filter="week"):
            captured["call"] = (query, list(platforms), max_results, language, time_filter)
            return []

    monkeypatch.setattr(orchestrator_module, "SearchOrchestrator", _StubOrchestrator)
    settings = _settings()

    assert await search_posts("e-bikes", ["reddit"], "de", "month", 7, settings=settings) == []
    assert captured["settings"] is settings
    assert captured["call"] == ("e-bikes", ["reddit"], 7, "de", "month")


@pytest.mark.asyncio
async def test_single_platform_string_is_not_split_into_characters(caplog):
    caplog.set_level(logging.WARNING)
    reddit = _FakeAdapter("Reddit", payload=_reddit_payload())
    orchestrator = SearchOrchestrator(settings=_settings(), adapters={"reddit": reddit})

    records = await orchestrator.search("e-bikes", "reddit", 5)

    assert reddit.calls == 1
    assert len(records) == 2
    assert "Unknown platform" not in caplog.text


def test_normalize_platforms_accepts_enum_member():
    assert normalize_platforms(Platform.YOUTUBE) == ["youtube"]
    assert normalize_platforms(["YouTube", Platform.YOUTUBE, "reddit"]) == ["youtube", "reddit"]
