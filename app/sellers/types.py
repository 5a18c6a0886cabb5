"""
Shared sellers pipeline runtime data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

UNIQUE_DOMAINS_KEY = "Unique domains"


@dataclass(frozen=True)
class FailedSource:
    """
    One source URL that was skipped during a fetch.
    """

    url: str
    error: str


@dataclass
class FetchReport:
    """
    Outcome of one Fetcher run.
    """

    documents: dict[str, Any] = field(default_factory=dict)
    urls_by_label: dict[str, str] = field(default_factory=dict)
    failed_sources: list[FailedSource] = field(default_factory=list)

    @property
    def sources_attempted(self) -> int:
        return len(self.urls_by_label) + len(self.failed_sources)

    @property
    def sources_fetched(self) -> int:
        return len(self.documents)


@dataclass(frozen=True)
class DomainRecord:
    """
    Deduplicated seller domains for one label.

    ``None`` stands for sellers without a usable ``domain`` and is only
    present when missing domains are kept.
    """

    unique_domains: tuple[str | None, ...]

    @property
    def count(self) -> int:
        return len(self.unique_domains)

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            UNIQUE_DOMAINS_KEY: list(self.unique_domains),
        }


@dataclass(frozen=True)
class ConsolidatedReport:
    """
    Global domain frequency table across all labels.
    """

    crawl_date: str
    unique_url_count: int
    domains: dict[str, int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "crawlDate": self.crawl_date,
            "uniqueUrlCount": self.unique_url_count,
            "domains": dict(self.domains),
        }
