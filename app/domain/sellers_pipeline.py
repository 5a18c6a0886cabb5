"""
app/domain/sellers_pipeline.py

Domain models for sellers.json crawl pipeline runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StageOutcome:
    """
    Result of one pipeline stage.
    """

    stage: str
    status: str
    output_path: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class PipelineRunSummary:
    """
    Summary for one sellers pipeline run.
    """

    status: str
    stages: list[StageOutcome]
    sources_attempted: int = 0
    sources_fetched: int = 0
    failed_sources: list[str] = field(default_factory=list)
    labels: int | None = None
    unique_url_count: int | None = None
    crawl_date: str | None = None
    errors: list[str] = field(default_factory=list)
