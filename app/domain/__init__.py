"""
app/domain package marker.
"""

from app.domain.sellers_pipeline import PipelineRunSummary, StageOutcome

__all__ = [
    "PipelineRunSummary",
    "StageOutcome",
]
