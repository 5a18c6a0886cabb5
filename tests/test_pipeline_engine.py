"""
tests/test_pipeline_engine.py

End-to-end pipeline driver tests over temporary files and stubbed HTTP.

Coverage
--------
- Fetch -> extract -> consolidate round trip
- One failing source does not stop later stages
- Fatal stage failure skips every later stage
- Single-stage runs read the previous stage's file
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest
import requests

from app.sellers.config import SellersPipelineSettings
from app.sellers.engine import SellersPipelineEngine, run_pipeline

X_URL = "https://x.example/sellers.json"
Y_URL = "https://www.y.example/sellers.json"
DOWN_URL = "https://down.example/sellers.json"


def _fixed_clock() -> date:
    return date(2024, 3, 5)


def _settings(tmp_path: Path, *sources: str) -> SellersPipelineSettings:
    return SellersPipelineSettings(sources=tuple(sources), output_dir=str(tmp_path))


def _read(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def test_round_trip_produces_ranked_report(tmp_path, stub_session, json_response) -> None:
    session = stub_session(
        {
            X_URL: json_response({"sellers": [{"domain": "x.io"}]}),
            Y_URL: json_response({"sellers": [{"domain": "x.io"}, {"domain": "y.io"}]}),
        }
    )
    settings = _settings(tmp_path, X_URL, Y_URL)

    summary = run_pipeline(settings, session=session, clock=_fixed_clock)

    assert summary.status == "success"
    assert [outcome.status for outcome in summary.stages] == ["success", "success", "success"]
    assert _read(settings.domain_output_path) == {
        "x_example_sellers_json": {"count": 1, "Unique domains": ["x.io"]},
        "y_example_sellers_json": {"count": 2, "Unique domains": ["x.io", "y.io"]},
    }
    assert _read(settings.consolidated_output_path) == {
        "crawlDate": "05-03-2024",
        "uniqueUrlCount": 3,
        "domains": {"x.io": 2, "y.io": 1},
    }
    assert summary.unique_url_count == 3
    assert summary.crawl_date == "05-03-2024"
    assert summary.labels == 2


def test_failing_source_yields_partial_success(tmp_path, stub_session, json_response) -> None:
    session = stub_session(
        {
            DOWN_URL: json_response(status_code=500),
            X_URL: json_response({"sellers": [{"domain": "x.io"}]}),
        }
    )
    settings = _settings(tmp_path, DOWN_URL, X_URL)

    summary = run_pipeline(settings, session=session, clock=_fixed_clock)

    assert summary.status == "partial_success"
    assert summary.sources_attempted == 2
    assert summary.sources_fetched == 1
    assert len(summary.failed_sources) == 1
    assert summary.failed_sources[0].startswith(DOWN_URL)
    assert list(_read(settings.combined_output_path)) == ["x_example_sellers_json"]
    assert _read(settings.consolidated_output_path)["domains"] == {"x.io": 1}


def test_no_source_fetched_is_reported_as_failed_run(tmp_path, stub_session) -> None:
    session = stub_session({DOWN_URL: requests.ConnectionError("refused")})
    settings = _settings(tmp_path, DOWN_URL)

    summary = run_pipeline(settings, session=session, clock=_fixed_clock)

    assert summary.status == "failed"
    assert [outcome.status for outcome in summary.stages] == ["success", "success", "success"]
    assert _read(settings.consolidated_output_path) == {
        "crawlDate": "05-03-2024",
        "uniqueUrlCount": 0,
        "domains": {},
    }


def test_fatal_stage_failure_skips_later_stages(tmp_path, stub_session) -> None:
    settings = _settings(tmp_path)
    settings.combined_output_path.write_text("{truncated", encoding="utf-8")
    engine = SellersPipelineEngine(settings=settings, session=stub_session({}), clock=_fixed_clock)

    summary = engine.run(stages=["extract", "consolidate"])

    assert summary.status == "failed"
    assert [(o.stage, o.status) for o in summary.stages] == [("extract", "failed"), ("consolidate", "skipped")]
    assert summary.errors and summary.errors[0].startswith("stage=extract")
    assert not settings.domain_output_path.exists()
    assert not settings.consolidated_output_path.exists()


def test_single_stage_reads_previous_stage_file(tmp_path, stub_session) -> None:
    settings = _settings(tmp_path)
    settings.domain_output_path.write_text(
        json.dumps(
            {
                "a": {"count": 3, "Unique domains": ["p.com", "q.com", "r.com"]},
                "b": {"count": 5, "Unique domains": ["q.com", "s.com", "t.com", "u.com", "v.com"]},
            }
        ),
        encoding="utf-8",
    )
    engine = SellersPipelineEngine(settings=settings, session=stub_session({}), clock=_fixed_clock)

    summary = engine.run(stages=["consolidate"])

    assert summary.status == "success"
    assert summary.unique_url_count == 8
    assert next(iter(_read(settings.consolidated_output_path)["domains"].items())) == ("q.com", 2)
    assert not settings.combined_output_path.exists()


def test_keep_missing_domains_setting_flows_to_extractor(tmp_path, stub_session, json_response) -> None:
    session = stub_session({X_URL: json_response({"sellers": [{"seller_id": "1"}, {"domain": "x.io"}]})})
    settings = SellersPipelineSettings(sources=(X_URL,), output_dir=str(tmp_path), keep_missing_domains=True)

    run_pipeline(settings, session=session, clock=_fixed_clock)

    assert _read(settings.consolidated_output_path)["domains"] == {"null": 1, "x.io": 1}


def test_unknown_stage_is_rejected(tmp_path, stub_session) -> None:
    engine = SellersPipelineEngine(settings=_settings(tmp_path), session=stub_session({}))

    with pytest.raises(ValueError):
        engine.run(stages=["publish"])
