"""
app/api/routers/sellers_pipeline.py

Sellers.json crawl pipeline endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from app.schemas.sellers_pipeline import (
    ConsolidatedReportResponse,
    PipelineRunSummaryResponse,
    StageOutcomeResponse,
)
from app.sellers.errors import SellersPipelineError
from app.services.sellers_pipeline_service import (
    SellersPipelineService,
    get_sellers_pipeline_service,
)

router = APIRouter(prefix="/sellers-pipeline", tags=["sellers-pipeline"])


@router.post("/run", response_model=PipelineRunSummaryResponse)
def run_sellers_pipeline(
    stage: list[str] | None = Query(default=None, description="Optional subset of stages to run"),
    pipeline_service: SellersPipelineService = Depends(get_sellers_pipeline_service),
) -> PipelineRunSummaryResponse:
    """
    Run the fetch -> extract -> consolidate pipeline, or a selected subset of it.
    """

    try:
        summary = pipeline_service.run(stages=stage)
    except (ValueError, FileNotFoundError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return PipelineRunSummaryResponse(
        status=summary.status,
        stages=[
            StageOutcomeResponse(
                stage=outcome.stage,
                status=outcome.status,
                output_path=outcome.output_path,
                error=outcome.error,
            )
            for outcome in summary.stages
        ],
        sources_attempted=summary.sources_attempted,
        sources_fetched=summary.sources_fetched,
        failed_sources=summary.failed_sources,
        labels=summary.labels,
        unique_url_count=summary.unique_url_count,
        crawl_date=summary.crawl_date,
        errors=summary.errors,
    )


@router.get("/report", response_model=ConsolidatedReportResponse)
def get_consolidated_report(
    pipeline_service: SellersPipelineService = Depends(get_sellers_pipeline_service),
) -> ConsolidatedReportResponse:
    """
    Return the latest consolidated domain frequency report.
    """

    try:
        payload = pipeline_service.latest_report()
    except SellersPipelineError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No consolidated report has been written yet.",
        )
    try:
        return ConsolidatedReportResponse.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Consolidated report has an unexpected shape: {exc.error_count()} validation error(s)",
        ) from exc
