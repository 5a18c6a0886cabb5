"""
app/schemas/sellers_pipeline.py

Response schemas for sellers pipeline operations.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StageOutcomeResponse(BaseModel):
    """
    API response model for one pipeline stage outcome.
    """

    stage: str
    status: str
    output_path: str | None = None
    error: str | None = None


class PipelineRunSummaryResponse(BaseModel):
    """
    API response model for one sellers pipeline run.
    """

    status: str
    stages: list[StageOutcomeResponse] = Field(default_factory=list)
    sources_attempted: int = Field(..., ge=0)
    sources_fetched: int = Field(..., ge=0)
    failed_sources: list[str] = Field(default_factory=list)
    labels: int | None = Field(default=None, ge=0)
    unique_url_count: int | None = Field(default=None, ge=0)
    crawl_date: str | None = None
    errors: list[str] = Field(default_factory=list)


class ConsolidatedReportResponse(BaseModel):
    """
    The consolidated domain frequency report, in its on-disk field names.
    """

    model_config = ConfigDict(populate_by_name=True)

    crawl_date: str = Field(..., alias="crawlDate", pattern=r"^\d{2}-\d{2}-\d{4}$")
    unique_url_count: int = Field(..., alias="uniqueUrlCount", ge=0)
    domains: dict[str, int] = Field(default_factory=dict)
