"""
Data Models
"""
from .schemas import (
    Platform,
    CanonicalRecord,
    FailureKind,
    RequestOutcome,
    AD_RECORD_TYPE,
    PLACEHOLDER_URL,
    UNKNOWN_AUTHOR,
    utc_now_iso,
)

__all__ = [
    "Platform",
    "CanonicalRecord",
    "FailureKind",
    "RequestOutcome",
    "AD_RECORD_TYPE",
    "PLACEHOLDER_URL",
    "UNKNOWN_AUTHOR",
    "utc_now_iso",
]
