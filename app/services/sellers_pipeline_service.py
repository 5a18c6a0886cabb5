"""
app/services/sellers_pipeline_service.py

Service orchestration for the sellers.json crawl pipeline.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
from typing import Any

import requests

from app.domain.sellers_pipeline import PipelineRunSummary
from app.sellers.config import SellersPipelineSettings, get_sellers_pipeline_settings
from app.sellers.engine import SellersPipelineEngine
from app.sellers.json_files import read_json_file


class SellersPipelineService:
    """
    Runs the sellers pipeline and serves its latest consolidated report.
    """

    def __init__(
        self,
        *,
        settings: SellersPipelineSettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._settings = settings or get_sellers_pipeline_settings()
        self._session = session

    @property
    def settings(self) -> SellersPipelineSettings:
        return self._settings

    def run(self, *, stages: Sequence[str] | None = None) -> PipelineRunSummary:
        engine = SellersPipelineEngine(settings=self._settings, session=self._session)
        return engine.run(stages=stages)

    def latest_report(self) -> dict[str, Any] | None:
        """
        Return the last written consolidated report, or None before the first run.
        """

        path = self._settings.consolidated_output_path
        if not path.exists():
            return None
        return read_json_file(path)


@lru_cache(maxsize=1)
def get_sellers_pipeline_service() -> SellersPipelineService:
    """
    Build and cache the sellers pipeline service.
    """

    return SellersPipelineService()
