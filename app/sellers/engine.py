"""
Sellers pipeline driver.

Runs Fetcher -> Domain Extractor -> Consolidator strictly in sequence. Each
stage reads the previous stage's output file; a fatal error in one stage
stops every later stage.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date
from pathlib import Path

import requests

from app.domain.sellers_pipeline import PipelineRunSummary, StageOutcome
from app.sellers.config.models import SellersPipelineSettings
from app.sellers.consolidator import consolidate
from app.sellers.errors import SellersPipelineError
from app.sellers.extractor import extract_domains
from app.sellers.fetcher import SellersFetcher
from app.sellers.logging_utils import log_event
from app.sellers.types import ConsolidatedReport, DomainRecord, FetchReport

logger = logging.getLogger(__name__)

STAGE_FETCH = "fetch"
STAGE_EXTRACT = "extract"
STAGE_CONSOLIDATE = "consolidate"
PIPELINE_STAGES = (STAGE_FETCH, STAGE_EXTRACT, STAGE_CONSOLIDATE)


class SellersPipelineEngine:
    """
    Orchestrates one sellers.json crawl over injected settings.
    """

    def __init__(
        self,
        *,
        settings: SellersPipelineSettings,
        session: requests.Session | None = None,
        fetcher: SellersFetcher | None = None,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self._settings = settings
        self._fetcher = fetcher or SellersFetcher(
            timeout_seconds=settings.timeout_seconds,
            user_agent=settings.user_agent,
            session=session,
        )
        self._clock = clock or date.today

    def run(self, *, stages: Sequence[str] | None = None) -> PipelineRunSummary:
        selected = self._select_stages(stages)

        outcomes: list[StageOutcome] = []
        errors: list[str] = []
        fetch_report: FetchReport | None = None
        records: dict[str, DomainRecord] | None = None
        report: ConsolidatedReport | None = None
        failed_stage: str | None = None

        for stage in PIPELINE_STAGES:
            if stage not in selected:
                continue
            output_path = self._output_path(stage)
            if failed_stage is not None:
                outcomes.append(StageOutcome(stage=stage, status="skipped", output_path=str(output_path)))
                continue

            try:
                if stage == STAGE_FETCH:
                    fetch_report = self._fetcher.fetch_and_save(self._settings.sources, output_path)
                elif stage == STAGE_EXTRACT:
                    records = extract_domains(
                        self._settings.combined_output_path,
                        output_path,
                        keep_missing_domains=self._settings.keep_missing_domains,
                    )
                else:
                    report = consolidate(
                        self._settings.domain_output_path,
                        output_path,
                        today=self._clock(),
                    )
            except SellersPipelineError as exc:
                failed_stage = stage
                errors.append(f"stage={stage} error={exc}")
                outcomes.append(
                    StageOutcome(
                        stage=stage,
                        status="failed",
                        output_path=str(output_path),
                        error=str(exc),
                    )
                )
                log_event(
                    logger,
                    logging.ERROR,
                    "pipeline_stage_failed",
                    stage=stage,
                    output_path=str(output_path),
                    error=str(exc),
                )
                continue

            outcomes.append(StageOutcome(stage=stage, status="success", output_path=str(output_path)))

        summary = PipelineRunSummary(
            status=self._status(failed_stage=failed_stage, fetch_report=fetch_report),
            stages=outcomes,
            sources_attempted=fetch_report.sources_attempted if fetch_report else 0,
            sources_fetched=fetch_report.sources_fetched if fetch_report else 0,
            failed_sources=[
                f"{failed.url}: {failed.error}" for failed in fetch_report.failed_sources
            ]
            if fetch_report
            else [],
            labels=len(records) if records is not None else None,
            unique_url_count=report.unique_url_count if report else None,
            crawl_date=report.crawl_date if report else None,
            errors=errors,
        )
        log_event(
            logger,
            logging.INFO if summary.status != "failed" else logging.ERROR,
            "pipeline_completed",
            status=summary.status,
            stages=[outcome.stage for outcome in outcomes],
            sources_fetched=summary.sources_fetched,
            sources_failed=len(summary.failed_sources),
            unique_url_count=summary.unique_url_count,
        )
        return summary

    def _output_path(self, stage: str) -> Path:
        if stage == STAGE_FETCH:
            return self._settings.combined_output_path
        if stage == STAGE_EXTRACT:
            return self._settings.domain_output_path
        return self._settings.consolidated_output_path

    @staticmethod
    def _select_stages(stages: Sequence[str] | None) -> set[str]:
        if not stages:
            return set(PIPELINE_STAGES)

        normalized = {item.strip().lower() for item in stages if item.strip()}
        unknown = normalized - set(PIPELINE_STAGES)
        if unknown:
            raise ValueError(
                f"Unknown pipeline stage(s): {sorted(unknown)}. Allowed: {list(PIPELINE_STAGES)}."
            )
        return normalized or set(PIPELINE_STAGES)

    @staticmethod
    def _status(*, failed_stage: str | None, fetch_report: FetchReport | None) -> str:
        if failed_stage is not None:
            return "failed"
        if fetch_report is None or not fetch_report.failed_sources:
            return "success"
        return "partial_success" if fetch_report.sources_fetched > 0 else "failed"


def run_pipeline(
    settings: SellersPipelineSettings,
    *,
    session: requests.Session | None = None,
    stages: Sequence[str] | None = None,
    clock: Callable[[], date] | None = None,
) -> PipelineRunSummary:
    """
    Run the sellers pipeline once with the given settings.
    """

    engine = SellersPipelineEngine(settings=settings, session=session, clock=clock)
    return engine.run(stages=stages)
