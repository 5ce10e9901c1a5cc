#!/usr/bin/env python3
"""Run the full storm report pipeline: fetch -> clean -> report."""

from __future__ import annotations

import argparse

from storm_report.clean import clean_storm_data
from storm_report.config_paths import ensure_directories
from storm_report.fetch import fetch_storm_data
from storm_report.logging_config import setup_logger
from storm_report.report import build_report

logger = setup_logger("pipeline.run")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Health and economic impact report for NOAA storm events",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                      # Full pipeline with download
  %(prog)s --skip-fetch         # Use the archive already in data/raw/
  %(prog)s --top-n 5 --since-year 1996
        """,
    )
    parser.add_argument("--skip-fetch", action="store_true",
                        help="Skip downloading; use existing data in data/raw/")
    parser.add_argument("--force-download", action="store_true",
                        help="Re-download even if the archive is cached")
    parser.add_argument("--top-n", type=int, default=None,
                        help="Number of categories in ranked tables (default: settings)")
    parser.add_argument("--since-year", type=int, default=None,
                        help="Only analyse events from this year onward")
    parser.add_argument("--png", action="store_true",
                        help="Also export charts as PNG")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    ensure_directories()

    if args.skip_fetch:
        logger.info("Skipping fetch step")
    else:
        logger.info("Running fetch step...")
        if fetch_storm_data.main(force=args.force_download) is None:
            raise SystemExit(1)

    logger.info("Running clean step...")
    if clean_storm_data.main() is None:
        raise SystemExit(1)

    logger.info("Running report step...")
    formats = ("html", "png") if args.png else None
    if build_report.main(n=args.top_n, since_year=args.since_year, chart_formats=formats) is None:
        raise SystemExit(1)

    logger.info("Pipeline complete.")


if __name__ == "__main__":
    main()
