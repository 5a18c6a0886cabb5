"""
Config helpers for the sellers.json crawl pipeline.
"""

from app.sellers.config.loader import (
    DEFAULT_SOURCE_URLS,
    get_sellers_pipeline_settings,
    load_source_urls,
)
from app.sellers.config.models import SellersPipelineSettings

__all__ = [
    "DEFAULT_SOURCE_URLS",
    "SellersPipelineSettings",
    "get_sellers_pipeline_settings",
    "load_source_urls",
]
