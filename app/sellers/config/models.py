"""
Sellers pipeline configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_COMBINED_OUTPUT_FILE = "combinedOutput.json"
DEFAULT_DOMAIN_OUTPUT_FILE = "domainData.json"
DEFAULT_CONSOLIDATED_OUTPUT_FILE = "consolidatedDomainData.json"


@dataclass(frozen=True)
class SellersPipelineSettings:
    """
    Runtime settings for one sellers.json crawl pipeline run.
    """

    sources: tuple[str, ...]
    output_dir: str = "."
    combined_output_file: str = DEFAULT_COMBINED_OUTPUT_FILE
    domain_output_file: str = DEFAULT_DOMAIN_OUTPUT_FILE
    consolidated_output_file: str = DEFAULT_CONSOLIDATED_OUTPUT_FILE
    timeout_seconds: float | None = 30.0
    user_agent: str = "SellersDomainCrawler/1.0"
    keep_missing_domains: bool = False
    schedule_hour: int = 4
    schedule_minute: int = 0

    @property
    def combined_output_path(self) -> Path:
        return Path(self.output_dir) / self.combined_output_file

    @property
    def domain_output_path(self) -> Path:
        return Path(self.output_dir) / self.domain_output_file

    @property
    def consolidated_output_path(self) -> Path:
        return Path(self.output_dir) / self.consolidated_output_file
