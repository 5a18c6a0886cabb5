"""
Run the sellers.json crawl pipeline from CLI.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict, replace

from app.config import get_app_settings
from app.sellers.config import get_sellers_pipeline_settings, load_source_urls
from app.sellers.engine import PIPELINE_STAGES, run_pipeline
from app.sellers.logging_utils import configure_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the sellers.json domain crawl pipeline.")
    parser.add_argument(
        "--stage",
        dest="stage",
        choices=["all", *PIPELINE_STAGES],
        default="all",
        help="Run every stage (default) or a single one.",
    )
    parser.add_argument(
        "--sources-file",
        dest="sources_file",
        default=None,
        help="JSON file with a 'sources' list, overriding SELLERS_SOURCES_PATH.",
    )
    parser.add_argument(
        "--source",
        dest="sources",
        action="append",
        default=None,
        help="Source URL to fetch. Repeat to pass several; overrides the configured list.",
    )
    parser.add_argument(
        "--output-dir",
        dest="output_dir",
        default=None,
        help="Directory for the three output files, overriding SELLERS_OUTPUT_DIR.",
    )
    args = parser.parse_args(argv)

    configure_logging(get_app_settings().log_level)

    settings = get_sellers_pipeline_settings()
    if args.sources_file:
        settings = replace(settings, sources=load_source_urls(sources_path=args.sources_file))
    if args.sources:
        settings = replace(settings, sources=tuple(dict.fromkeys(args.sources)))
    if args.output_dir:
        settings = replace(settings, output_dir=args.output_dir)

    stages = None if args.stage == "all" else [args.stage]
    summary = run_pipeline(settings, stages=stages)

    print(json.dumps(asdict(summary), indent=2))
    return 1 if summary.status == "failed" else 0


if __name__ == "__main__":
    raise SystemExit(main())
