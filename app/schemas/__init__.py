"""
app/schemas package marker.
"""

from app.schemas.sellers_pipeline import (
    ConsolidatedReportResponse,
    PipelineRunSummaryResponse,
    StageOutcomeResponse,
)

__all__ = [
    "ConsolidatedReportResponse",
    "PipelineRunSummaryResponse",
    "StageOutcomeResponse",
]
