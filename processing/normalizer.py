"""
Response Normalizer
供应商载荷归一化 - 形状识别、平台字段映射与互动分计算
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import math
import time
import uuid
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from models import (
    AD_RECORD_TYPE,
    PLACEHOLDER_URL,
    UNKNOWN_AUTHOR,
    CanonicalRecord,
    Platform,
    utc_now_iso,
)


logger = logging.getLogger(__name__)

ShapeMatcher = Callable[[Any], Optional[List[Any]]]

_LIST_KEYS = ("posts", "results", "videos", "items")
_AD_LIST_KEYS = ("ads", "searchResults")
_TEXT_KEYS_IN_OBJECT = ("title", "name", "username", "unique_id", "uniqueId", "nickname", "text")

_PLATFORM_LABELS = {
    "reddit": "Reddit",
    "youtube": "YouTube",
    "threads": "Threads",
    "tiktok": "TikTok",
    "facebook": "Facebook",
    "linkedin": "LinkedIn",
    "google": "Google",
}


# ---------------------------------------------------------------------------
# Shape matchers
# ---------------------------------------------------------------------------


def _match_bare_list(payload: Any) -> Optional[List[Any]]:
    return payload if isinstance(payload, list) else None


def _match_key(key: str) -> ShapeMatcher:
    def matcher(payload: Any) -> Optional[List[Any]]:
        if isinstance(payload, dict) and isinstance(payload.get(key), list):
            return payload[key]
        return None

    matcher.__name__ = f"match_{key}"
    return matcher


def _match_nested_key(key: str) -> ShapeMatcher:
    def matcher(payload: Any) -> Optional[List[Any]]:
        if not isinstance(payload, dict):
            return None
        return _match_key(key)(payload.get("data"))

    matcher.__name__ = f"match_data_{key}"
    return matcher


# First match wins.
SHAPE_MATCHERS: Tuple[ShapeMatcher, ...] = (
    _match_bare_list,
    _match_key("data"),
    *(_match_key(key) for key in _LIST_KEYS),
    *(_match_nested_key(key) for key in _LIST_KEYS),
    *(_match_key(key) for key in _AD_LIST_KEYS),
)


def extract_items(payload: Any, platform: Union[str, Platform] = "") -> List[Any]:
    """Return the record list embedded in ``payload`` or ``[]`` when no known shape matches."""
    if not payload:
        return []
    for matcher in SHAPE_MATCHERS:
        items = matcher(payload)
        if items is not None:
            return list(items)

    keys = sorted(payload.keys()) if isinstance(payload, dict) else type(payload).__name__
    logger.warning(f"Could not extract items from {_platform_key(platform)} response. Structure: {keys}")
    return []


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _platform_key(platform: Union[str, Platform]) -> str:
    if isinstance(platform, Platform):
        return platform.value
    return str(platform or "").strip().lower()


def _platform_label(platform: str) -> str:
    return _PLATFORM_LABELS.get(platform, platform.title() or "Unknown")


def _dig(item: Any, path: str) -> Any:
    current = item
    for part in path.split("."):
        if isinstance(current, dict):
            current = current.get(part)
        elif isinstance(current, list) and part.isdigit():
            index = int(part)
            current = current[index] if index < len(current) else None
        else:
            return None
        if current is None:
            return None
    return current


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, dict):
        for key in _TEXT_KEYS_IN_OBJECT:
            text = _as_text(value.get(key))
            if text:
                return text
        return ""
    if isinstance(value, (list, tuple)):
        return ""
    return str(value).strip()


def _first_text(item: Dict[str, Any], *paths: str) -> str:
    for path in paths:
        text = _as_text(_dig(item, path))
        if text:
            return text
    return ""


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        token = value.replace(",", "").replace("_", "").strip()
        if not token:
            return None
        try:
            number = float(token)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def _metric(item: Dict[str, Any], *paths: str) -> float:
    """First non-zero alias wins; a zero count falls through to the next alias."""
    for path in paths:
        number = _as_number(_dig(item, path))
        if number:
            return number
    return 0.0


def _first_url(item: Dict[str, Any], *paths: str) -> str:
    for path in paths:
        value = _dig(item, path)
        if isinstance(value, dict):
            value = value.get("url")
        text = _as_text(value)
        if text.startswith(("http://", "https://")):
            return text
    return ""


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def engagement_score(value: float) -> int:
    if not math.isfinite(value):
        raise ValueError(f"engagement is not finite: {value}")
    return max(0, round_half_up(value))


def epoch_to_iso(seconds: float) -> str:
    # Some providers send milliseconds.
    if seconds > 1e11:
        seconds = seconds / 1000.0
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _timestamp(
    item: Dict[str, Any],
    *,
    epoch_paths: Sequence[str] = (),
    text_paths: Sequence[str] = (),
) -> str:
    for path in epoch_paths:
        number = _as_number(_dig(item, path))
        if number is not None and number > 0:
            try:
                return epoch_to_iso(number)
            except (OverflowError, OSError, ValueError):
                continue
    for path in text_paths:
        value = _dig(item, path)
        if isinstance(value, str) and value.strip():
            return value.strip()
        number = _as_number(value)
        if number is not None and number > 0:
            try:
                return epoch_to_iso(number)
            except (OverflowError, OSError, ValueError):
                continue
    return utc_now_iso()


def fallback_id(platform: str) -> str:
    return f"{platform}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def _handle(value: str) -> str:
    value = value.strip()
    if not value:
        return ""
    return value if value.startswith("@") else f"@{value}"


# ---------------------------------------------------------------------------
# Platform formatters
# ---------------------------------------------------------------------------


def format_reddit_post(item: Dict[str, Any], platform: str = "reddit") -> CanonicalRecord:
    engagement = _metric(item, "score", "ups") + _metric(item, "num_comments", "comments")

    post_id = _first_text(item, "id", "name")
    subreddit = _first_text(item, "subreddit")
    source = f"r/{subreddit}" if subreddit else (_first_text(item, "subreddit_name_prefixed") or "Reddit")

    url = _first_text(item, "url", "permalink")
    if url.startswith("/"):
        url = f"https://reddit.com{url}"
    if not url and post_id:
        url = f"https://reddit.com/comments/{post_id}"

    return CanonicalRecord(
        id=post_id or fallback_id(platform),
        content=_first_text(item, "title", "text", "selftext", "body"),
        source=source,
        engagement=engagement_score(engagement),
        timestamp=_timestamp(item, epoch_paths=("created_utc",), text_paths=("created", "timestamp")),
        url=url or PLACEHOLDER_URL,
        author=_first_text(item, "author", "author_name") or UNKNOWN_AUTHOR,
        platform=platform,
        thumbnail=_first_url(item, "thumbnail", "preview.images.0.source.url"),
    )


def format_youtube_video(item: Dict[str, Any], platform: str = "youtube") -> CanonicalRecord:
    views = _metric(item, "viewCount", "views", "view_count")
    likes = _metric(item, "likeCount", "likes", "like_count")
    comments = _metric(item, "commentCount", "comments", "comment_count")
    # Views are down-weighted so view-farmed videos don't dominate.
    engagement = views * 0.01 + likes + comments

    video_id = _first_text(item, "id", "videoId", "video_id")
    channel = _first_text(item, "channelTitle", "channel", "channel_title", "author")

    return CanonicalRecord(
        id=video_id or fallback_id(platform),
        content=_first_text(item, "title", "snippet.title", "description"),
        source=channel or "YouTube",
        engagement=engagement_score(engagement),
        timestamp=_timestamp(
            item,
            text_paths=("publishedAt", "published_at", "upload_date", "publishedTime"),
        ),
        url=_first_text(item, "url") or (f"https://youtube.com/watch?v={video_id}" if video_id else PLACEHOLDER_URL),
        author=channel or UNKNOWN_AUTHOR,
        platform=platform,
        thumbnail=_first_url(
            item,
            "thumbnail",
            "thumbnails.0.url",
            "snippet.thumbnails.high.url",
            "snippet.thumbnails.default.url",
        ),
    )


def format_threads_post(item: Dict[str, Any], platform: str = "threads") -> CanonicalRecord:
    engagement = (
        _metric(item, "likes", "like_count")
        + _metric(item, "replies", "comments", "reply_count")
        + _metric(item, "reposts", "repost_count", "shares")
    )

    username = _first_text(item, "username", "user.username")
    author_name = _first_text(item, "author")

    return CanonicalRecord(
        id=_first_text(item, "id", "post_id", "pk", "code") or fallback_id(platform),
        content=_first_text(item, "text", "content", "caption", "body"),
        source=_handle(username) if username else (author_name or "Threads"),
        engagement=engagement_score(engagement),
        timestamp=_timestamp(
            item,
            epoch_paths=("taken_at",),
            text_paths=("created_at", "timestamp", "posted_at"),
        ),
        url=_first_text(item, "url", "permalink", "post_url") or PLACEHOLDER_URL,
        author=username or author_name or _first_text(item, "user") or UNKNOWN_AUTHOR,
        platform=platform,
        thumbnail=_first_url(item, "image_url", "thumbnail_url", "image_versions2.candidates.0.url"),
    )


def format_generic_post(item: Dict[str, Any], platform: str) -> CanonicalRecord:
    likes = _metric(item, "likes", "like_count", "digg_count", "statistics.digg_count", "stats.diggCount")
    comments = _metric(item, "comments", "comment_count", "statistics.comment_count", "stats.commentCount")
    shares = _metric(item, "shares", "share_count", "repost_count", "statistics.share_count", "stats.shareCount")
    views = _metric(item, "views", "view_count", "play_count", "statistics.play_count", "stats.playCount")
    engagement = likes + comments + shares + 0.01 * views

    handle = _first_text(item, "username", "handle", "author.unique_id", "author.uniqueId")
    author = handle or _first_text(item, "author", "channel", "user")

    return CanonicalRecord(
        id=_first_text(item, "id", "aweme_id", "post_id") or fallback_id(platform),
        content=_first_text(item, "text", "desc", "title", "caption", "content", "description"),
        source=_handle(handle) if handle else (author or _platform_label(platform)),
        engagement=engagement_score(engagement),
        timestamp=_timestamp(
            item,
            epoch_paths=("create_time", "createTime"),
            text_paths=("created_at", "timestamp", "published_at", "posted_at"),
        ),
        url=_first_text(item, "url", "share_url", "permalink") or PLACEHOLDER_URL,
        author=author or UNKNOWN_AUTHOR,
        platform=platform,
        thumbnail=_first_url(item, "thumbnail", "cover", "video.cover.url_list.0", "image_url"),
    )


def format_ad(item: Dict[str, Any], platform: str) -> CanonicalRecord:
    """Ad libraries expose no public interaction counts, so engagement is always 0."""
    advertiser = _first_text(
        item,
        "page_name",
        "snapshot.page_name",
        "advertiser_name",
        "advertiserName",
        "advertiser",
        "company",
    )

    return CanonicalRecord(
        id=_first_text(item, "ad_archive_id", "adArchiveID", "adArchiveId", "ad_id", "adId", "creativeId", "id")
        or fallback_id(platform),
        content=_first_text(
            item,
            "snapshot.body",
            "body",
            "ad_creative_body",
            "ad_creative_bodies.0",
            "headline",
            "title",
            "snapshot.title",
            "description",
            "commentary",
        ),
        source=advertiser or _platform_label(platform),
        engagement=0,
        timestamp=_timestamp(
            item,
            epoch_paths=("start_date", "startDate"),
            text_paths=("start_date_string", "first_shown", "firstShown", "created_at"),
        ),
        url=_first_text(item, "ad_library_url", "adLibraryURL", "ad_snapshot_url", "url", "link_url", "snapshot.link_url")
        or PLACEHOLDER_URL,
        author=advertiser or UNKNOWN_AUTHOR,
        platform=platform,
        type=AD_RECORD_TYPE,
        thumbnail=_first_url(
            item,
            "snapshot.images.0.original_image_url",
            "snapshot.images.0.resized_image_url",
            "snapshot.videos.0.video_preview_image_url",
            "image_url",
            "imageUrl",
            "thumbnail",
        ),
    )


_CONTENT_FORMATTERS: Dict[str, Callable[[Dict[str, Any], str], CanonicalRecord]] = {
    "reddit": format_reddit_post,
    "youtube": format_youtube_video,
    "threads": format_threads_post,
}


def format_record(
    item: Any,
    platform: Union[str, Platform],
    *,
    as_ad: bool = False,
) -> CanonicalRecord:
    """Map one raw provider item onto the canonical schema."""
    key = _platform_key(platform)
    if not isinstance(item, dict):
        raise ValueError(f"{key} item is not an object: {type(item).__name__}")
    if as_ad:
        return format_ad(item, key)
    formatter = _CONTENT_FORMATTERS.get(key)
    if formatter is None:
        return format_generic_post(item, key)
    return formatter(item, key)


def normalize_payload(
    payload: Any,
    platform: Union[str, Platform],
    *,
    as_ad: bool = False,
) -> List[CanonicalRecord]:
    """Extract and format every item; a malformed item is skipped without dropping its siblings."""
    key = _platform_key(platform)
    records: List[CanonicalRecord] = []
    for item in extract_items(payload, key):
        try:
            records.append(format_record(item, key, as_ad=as_ad))
        except (TypeError, ValueError, OverflowError) as exc:
            logger.warning(f"Skipping malformed {key} item: {exc}")
    return records
