"""
Domain Extractor stage: per-label unique seller domains.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Mapping
from pathlib import Path
from typing import Any, TypeVar

from app.sellers.errors import MalformedInputError
from app.sellers.json_files import read_json_file, write_json_file
from app.sellers.logging_utils import log_event
from app.sellers.types import DomainRecord

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


def unique_in_order(values: Iterable[T]) -> list[T]:
    """
    Drop repeated values, keeping the first occurrence of each.
    """

    return list(dict.fromkeys(values))


def seller_domain(seller: Any) -> str | None:
    """
    Return a seller's ``domain`` string, or ``None`` when it has no usable one.
    """

    if not isinstance(seller, Mapping):
        return None
    domain = seller.get("domain")
    if not isinstance(domain, str) or not domain:
        return None
    return domain


def build_domain_record(
    label: str,
    entry: Any,
    *,
    keep_missing_domains: bool = False,
) -> DomainRecord:
    """
    Build the deduplicated domain record for one raw sellers.json entry.
    """

    sellers = entry.get("sellers") if isinstance(entry, Mapping) else None
    if sellers is None:
        sellers = []
    elif not isinstance(sellers, list):
        log_event(
            logger,
            logging.WARNING,
            "sellers_field_invalid",
            label=label,
            sellers_type=type(sellers).__name__,
        )
        sellers = []

    domains = [seller_domain(seller) for seller in sellers]
    missing = sum(1 for domain in domains if domain is None)
    if missing:
        log_event(
            logger,
            logging.WARNING,
            "seller_missing_domain",
            label=label,
            missing=missing,
            kept=keep_missing_domains,
        )
        if not keep_missing_domains:
            domains = [domain for domain in domains if domain is not None]

    return DomainRecord(unique_domains=tuple(unique_in_order(domains)))


def extract_domains(
    input_path: str | Path,
    output_path: str | Path,
    *,
    keep_missing_domains: bool = False,
) -> dict[str, DomainRecord]:
    """
    Read the combined output file and write per-label unique domain records.
    """

    combined = read_json_file(input_path)
    if not isinstance(combined, dict):
        raise MalformedInputError(
            f"Expected a JSON object of label -> sellers.json document in {input_path}"
        )

    records = {
        label: build_domain_record(label, entry, keep_missing_domains=keep_missing_domains)
        for label, entry in combined.items()
    }

    write_json_file(output_path, {label: record.to_dict() for label, record in records.items()})
    log_event(
        logger,
        logging.INFO,
        "domain_data_written",
        path=str(output_path),
        labels=len(records),
    )
    return records
