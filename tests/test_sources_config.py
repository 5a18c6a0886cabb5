from __future__ import annotations

import json

import pytest

from app.sellers.config import (
    DEFAULT_SOURCE_URLS,
    SellersPipelineSettings,
    get_sellers_pipeline_settings,
    load_source_urls,
)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_sellers_pipeline_settings.cache_clear()
    yield
    get_sellers_pipeline_settings.cache_clear()


def test_loads_strings_and_objects_skipping_invalid_entries(tmp_path) -> None:
    path = tmp_path / "sources.json"
    path.write_text(
        json.dumps(
            {
                "sources": [
                    "https://awg.la/sellers.json",
                    {"url": "https://revry.tv/sellers.json"},
                    {"url": "https://disabled.example/sellers.json", "enabled": "false"},
                    {"url": ""},
                    "not a url",
                    42,
                    "https://awg.la/sellers.json",
                ]
            }
        ),
        encoding="utf-8",
    )

    assert load_source_urls(sources_path=str(path)) == (
        "https://awg.la/sellers.json",
        "https://revry.tv/sellers.json",
    )


def test_missing_sources_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_source_urls(sources_path=str(tmp_path / "absent.json"))


def test_sources_must_be_a_list(tmp_path) -> None:
    path = tmp_path / "sources.json"
    path.write_text(json.dumps({"sources": "https://awg.la/sellers.json"}), encoding="utf-8")

    with pytest.raises(ValueError):
        load_source_urls(sources_path=str(path))


def test_defaults_when_environment_is_empty(monkeypatch) -> None:
    for name in (
        "SELLERS_SOURCES_PATH",
        "SELLERS_OUTPUT_DIR",
        "SELLERS_HTTP_TIMEOUT_SECONDS",
        "SELLERS_KEEP_MISSING_DOMAINS",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_sellers_pipeline_settings()

    assert settings.sources == DEFAULT_SOURCE_URLS
    assert len(settings.sources) == 5
    assert settings.timeout_seconds == 30.0
    assert settings.keep_missing_domains is False
    assert settings.combined_output_path.name == "combinedOutput.json"
    assert settings.domain_output_path.name == "domainData.json"
    assert settings.consolidated_output_path.name == "consolidatedDomainData.json"


def test_environment_overrides(monkeypatch, tmp_path) -> None:
    sources = tmp_path / "sources.json"
    sources.write_text(json.dumps({"sources": ["https://pubmatic.com/sellers.json"]}), encoding="utf-8")
    monkeypatch.setenv("SELLERS_SOURCES_PATH", str(sources))
    monkeypatch.setenv("SELLERS_OUTPUT_DIR", str(tmp_path / "out"))
    monkeypatch.setenv("SELLERS_HTTP_TIMEOUT_SECONDS", "0")
    monkeypatch.setenv("SELLERS_KEEP_MISSING_DOMAINS", "yes")
    monkeypatch.setenv("SELLERS_SCHEDULE_HOUR", "99")

    settings = get_sellers_pipeline_settings()

    assert settings.sources == ("https://pubmatic.com/sellers.json",)
    assert settings.timeout_seconds is None
    assert settings.keep_missing_domains is True
    assert settings.schedule_hour == 23
    assert settings.consolidated_output_path == tmp_path / "out" / "consolidatedDomainData.json"


def test_settings_are_immutable() -> None:
    settings = SellersPipelineSettings(sources=())

    with pytest.raises(AttributeError):
        settings.output_dir = "/tmp"  # type: ignore[misc]
