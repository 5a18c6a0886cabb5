"""
Environment + JSON config loader for the sellers.json crawl pipeline.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

from app.config import (
    get_bool_env,
    get_float_env,
    get_int_env,
    get_optional_str_env,
    get_str_env,
    project_root,
)
from app.sellers.config.models import (
    DEFAULT_COMBINED_OUTPUT_FILE,
    DEFAULT_CONSOLIDATED_OUTPUT_FILE,
    DEFAULT_DOMAIN_OUTPUT_FILE,
    SellersPipelineSettings,
)

DEFAULT_SOURCE_URLS: tuple[str, ...] = (
    "https://awg.la/sellers.json",
    "https://revry.tv/sellers.json",
    "https://www.philo.com/sellers.json",
    "https://www.freewheel.com/sellers.json",
    "https://pubmatic.com/sellers.json",
)


def _resolve_config_path(raw_path: str) -> Path:
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return candidate
    return (project_root() / candidate).resolve()


@lru_cache(maxsize=1)
def get_sellers_pipeline_settings() -> SellersPipelineSettings:
    """
    Return cached pipeline settings from environment variables.
    """

    sources_path = get_optional_str_env("SELLERS_SOURCES_PATH")
    sources = load_source_urls(sources_path=sources_path) if sources_path else DEFAULT_SOURCE_URLS

    timeout_seconds: float | None = max(0.0, get_float_env("SELLERS_HTTP_TIMEOUT_SECONDS", 30.0))
    if not timeout_seconds:
        timeout_seconds = None

    return SellersPipelineSettings(
        sources=sources,
        output_dir=get_str_env("SELLERS_OUTPUT_DIR", "."),
        combined_output_file=get_str_env("SELLERS_COMBINED_OUTPUT_FILE", DEFAULT_COMBINED_OUTPUT_FILE),
        domain_output_file=get_str_env("SELLERS_DOMAIN_OUTPUT_FILE", DEFAULT_DOMAIN_OUTPUT_FILE),
        consolidated_output_file=get_str_env(
            "SELLERS_CONSOLIDATED_OUTPUT_FILE",
            DEFAULT_CONSOLIDATED_OUTPUT_FILE,
        ),
        timeout_seconds=timeout_seconds,
        user_agent=get_str_env("SELLERS_USER_AGENT", "SellersDomainCrawler/1.0"),
        keep_missing_domains=get_bool_env("SELLERS_KEEP_MISSING_DOMAINS", False),
        schedule_hour=min(23, max(0, get_int_env("SELLERS_SCHEDULE_HOUR", 4))),
        schedule_minute=min(59, max(0, get_int_env("SELLERS_SCHEDULE_MINUTE", 0))),
    )


def load_source_urls(*, sources_path: str) -> tuple[str, ...]:
    """
    Load the sellers.json source URL list from a JSON file.

    Accepts either plain URL strings or ``{"url": ..., "enabled": ...}``
    objects under a top-level ``sources`` list. Malformed entries are skipped
    and duplicate URLs keep their first position.
    """

    path = _resolve_config_path(sources_path)
    if not path.exists():
        raise FileNotFoundError(f"Sellers sources file not found: {path}")

    raw_data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw_data, dict):
        raise ValueError("Invalid sellers sources file: top level must be an object.")
    sources = raw_data.get("sources", [])
    if not isinstance(sources, list):
        raise ValueError("Invalid sellers sources file: 'sources' must be a list.")

    urls: list[str] = []
    for entry in sources:
        if isinstance(entry, str):
            url = entry.strip()
            enabled = True
        elif isinstance(entry, dict):
            url = str(entry.get("url", "")).strip()
            enabled = _optional_bool(entry.get("enabled"), True)
        else:
            continue

        if not url or not enabled:
            continue
        if not url.startswith(("http://", "https://")):
            continue
        if url not in urls:
            urls.append(url)

    return tuple(urls)


def _optional_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    return default
