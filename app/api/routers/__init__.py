"""
app/api/routers package marker.
"""

from app.api.routers.sellers_pipeline import router as sellers_pipeline_router

__all__ = [
    "sellers_pipeline_router",
]
