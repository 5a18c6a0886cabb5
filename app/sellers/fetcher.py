"""
Fetcher stage: download sellers.json documents and merge them under labels.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import requests

from app.sellers.errors import JsonParseError, NetworkOrHttpError
from app.sellers.json_files import write_json_file
from app.sellers.labels import assign_label, sanitize_label
from app.sellers.logging_utils import log_event
from app.sellers.types import FailedSource, FetchReport

logger = logging.getLogger(__name__)


class SellersFetcher:
    """
    Fetches source URLs one at a time with a single attempt per URL.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float | None = 30.0,
        user_agent: str = "SellersDomainCrawler/1.0",
        session: requests.Session | None = None,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout_seconds = timeout_seconds
        self._headers = {"User-Agent": user_agent, "Accept": "application/json"}

    def fetch(self, sources: Sequence[str]) -> FetchReport:
        """
        Fetch every source in order; failed sources are logged and skipped.
        """

        report = FetchReport()
        for url in sources:
            try:
                document = self.request_json(url)
            except (NetworkOrHttpError, JsonParseError) as exc:
                report.failed_sources.append(FailedSource(url=url, error=str(exc)))
                log_event(
                    logger,
                    logging.ERROR,
                    "source_fetch_failed",
                    url=url,
                    error=str(exc),
                )
                continue

            label = assign_label(url, report.documents)
            if label != sanitize_label(url):
                log_event(
                    logger,
                    logging.WARNING,
                    "label_collision",
                    url=url,
                    label=label,
                    existing_url=report.urls_by_label.get(sanitize_label(url)),
                )
            report.documents[label] = document
            report.urls_by_label[label] = url
            log_event(logger, logging.INFO, "source_fetched", url=url, label=label)

        return report

    def fetch_and_save(self, sources: Sequence[str], output_path: str | Path) -> FetchReport:
        """
        Fetch every source and write the ``{label: document}`` mapping to ``output_path``.
        """

        report = self.fetch(sources)
        write_json_file(output_path, report.documents)
        log_event(
            logger,
            logging.INFO,
            "combined_output_written",
            path=str(output_path),
            sources_fetched=report.sources_fetched,
            sources_failed=len(report.failed_sources),
        )
        return report

    def request_json(self, url: str) -> Any:
        """
        GET one URL and return its parsed JSON body.
        """

        try:
            response = self._session.get(
                url,
                headers=self._headers,
                timeout=self._timeout_seconds,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            raise NetworkOrHttpError(
                f"HTTP status={status_code} url={url}",
                url=url,
                status_code=status_code,
            ) from exc
        except requests.RequestException as exc:
            raise NetworkOrHttpError(f"Request failed url={url} error={exc}", url=url) from exc

        # raise_for_status lets unfollowed 3xx responses through.
        if not 200 <= response.status_code < 300:
            raise NetworkOrHttpError(
                f"HTTP status={response.status_code} url={url}",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise JsonParseError(f"Response body was not valid JSON url={url}") from exc


def fetch_and_save(
    sources: Sequence[str],
    output_path: str | Path,
    *,
    fetcher: SellersFetcher | None = None,
) -> FetchReport:
    """
    Fetch ``sources`` and write the combined output file.
    """

    return (fetcher or SellersFetcher()).fetch_and_save(sources, output_path)
