"""
Data Models / Schemas
定义统一的数据结构
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class Platform(str, Enum):
    """平台标识"""
    # 内容平台
    REDDIT = "reddit"
    YOUTUBE = "youtube"
    THREADS = "threads"
    TIKTOK = "tiktok"
    X = "x"
    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    # 广告库
    FACEBOOK = "facebook"
    GOOGLE = "google"


AD_RECORD_TYPE = "ad"
PLACEHOLDER_URL = "#"
UNKNOWN_AUTHOR = "Unknown"


def utc_now_iso() -> str:
    """当前 UTC 时间 (ISO-8601, Z 结尾)"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CanonicalRecord(BaseModel):
    """
    统一记录模型
    所有平台的帖子/视频/广告都映射到该结构，除 type 外所有字段均非空
    """
    id: str = Field(..., min_length=1, description="平台原生ID或生成的回退ID")
    content: str = Field(default="", description="标题/正文/配文")
    source: str = Field(..., description="来源标签 (subreddit, 频道, @handle, 广告主)")
    engagement: int = Field(default=0, ge=0, description="加权互动分")
    timestamp: str = Field(default_factory=utc_now_iso, description="ISO-8601 时间")
    url: str = Field(default=PLACEHOLDER_URL, description="链接")
    author: str = Field(default=UNKNOWN_AUTHOR, description="作者")
    platform: str = Field(..., description="平台标识")
    type: Optional[str] = Field(None, description="广告记录为 'ad'")
    thumbnail: str = Field(default="", description="缩略图URL")

    @property
    def is_ad(self) -> bool:
        return self.type == AD_RECORD_TYPE

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典 (内容记录不输出 type 字段)"""
        return self.model_dump(exclude_none=True)


class FailureKind(str, Enum):
    """供应商调用失败类型"""
    UNAVAILABLE = "unavailable"          # 连接失败 / 超时
    PROVIDER_ERROR = "provider_error"    # HTTP 4xx/5xx
    PROTOCOL_ERROR = "protocol_error"    # 响应无法解析
    INVALID_RESPONSE = "invalid_response"  # 响应结构合法但缺少必要字段


@dataclass(frozen=True)
class RequestOutcome:
    """单次供应商调用的结果: 成功 (原始载荷) 或 失败 (原因)"""
    ok: bool
    provider: str
    payload: Any = None
    kind: Optional[FailureKind] = None
    reason: str = ""
    status: Optional[int] = None

    @classmethod
    def success(cls, provider: str, payload: Any) -> "RequestOutcome":
        return cls(ok=True, provider=provider, payload=payload)

    @classmethod
    def failure(
        cls,
        provider: str,
        kind: FailureKind,
        reason: str,
        status: Optional[int] = None,
    ) -> "RequestOutcome":
        return cls(ok=False, provider=provider, kind=kind, reason=reason, status=status)

    def describe(self) -> str:
        if self.ok:
            return f"{self.provider}: ok"
        status = f" (HTTP {self.status})" if self.status is not None else ""
        return f"{self.provider}: {self.kind.value}{status} - {self.reason}"
