"""
Consolidator stage: global domain frequency table across labels.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from pathlib import Path
from typing import Any

from app.sellers.errors import MalformedInputError
from app.sellers.json_files import read_json_file, write_json_file
from app.sellers.logging_utils import log_event
from app.sellers.types import UNIQUE_DOMAINS_KEY, ConsolidatedReport

logger = logging.getLogger(__name__)

MISSING_DOMAIN_KEY = "null"


def format_crawl_date(day: date) -> str:
    return day.strftime("%d-%m-%Y")


def tally_domains(domain_data: Mapping[str, Any]) -> tuple[dict[str, int], int]:
    """
    Count in how many labels each domain appears and sum the per-label counts.

    Returns ``(counts, unique_url_count)``; ``counts`` keeps first-seen order.
    """

    counts: dict[str, int] = {}
    unique_url_count = 0

    for label, record in domain_data.items():
        if not isinstance(record, Mapping):
            raise MalformedInputError(f"Domain record for label={label} is not an object.")

        count = record.get("count")
        unique_domains = record.get(UNIQUE_DOMAINS_KEY)
        if isinstance(count, bool) or not isinstance(count, int):
            raise MalformedInputError(f"Domain record for label={label} has no integer 'count'.")
        if not isinstance(unique_domains, list):
            raise MalformedInputError(
                f"Domain record for label={label} has no '{UNIQUE_DOMAINS_KEY}' list."
            )

        unique_url_count += count
        for domain in unique_domains:
            if domain is None:
                key = MISSING_DOMAIN_KEY
            elif isinstance(domain, str):
                key = domain
            else:
                raise MalformedInputError(
                    f"Domain record for label={label} contains a non-string domain: {domain!r}"
                )
            counts[key] = counts.get(key, 0) + 1

    return counts, unique_url_count


def rank_domains(counts: Mapping[str, int]) -> dict[str, int]:
    """
    Order domains by count, highest first; ties keep their existing order.
    """

    return dict(sorted(counts.items(), key=lambda item: item[1], reverse=True))


def consolidate(
    input_path: str | Path,
    output_path: str | Path,
    *,
    today: date | None = None,
) -> ConsolidatedReport:
    """
    Read per-label domain records and write the consolidated frequency report.
    """

    domain_data = read_json_file(input_path)
    if not isinstance(domain_data, dict):
        raise MalformedInputError(f"Expected a JSON object of label -> domain record in {input_path}")

    counts, unique_url_count = tally_domains(domain_data)
    report = ConsolidatedReport(
        crawl_date=format_crawl_date(today or date.today()),
        unique_url_count=unique_url_count,
        domains=rank_domains(counts),
    )

    write_json_file(output_path, report.to_dict())
    log_event(
        logger,
        logging.INFO,
        "consolidated_output_written",
        path=str(output_path),
        crawl_date=report.crawl_date,
        unique_url_count=report.unique_url_count,
        domains=len(report.domains),
    )
    return report
