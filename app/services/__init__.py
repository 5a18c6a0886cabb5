"""
app/services package marker.
"""

from app.services.sellers_pipeline_service import (
    SellersPipelineService,
    get_sellers_pipeline_service,
)

__all__ = [
    "SellersPipelineService",
    "get_sellers_pipeline_service",
]
