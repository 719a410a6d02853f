"""
Ad Library Adapters
"""
from .facebook_ads_adapter import FacebookAdsAdapter
from .linkedin_ads_adapter import LinkedInAdsAdapter
from .google_ads_adapter import GoogleAdsAdapter

__all__ = [
    "FacebookAdsAdapter",
    "LinkedInAdsAdapter",
    "GoogleAdsAdapter",
]
