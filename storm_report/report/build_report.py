"""
Build Storm Impact Report
=========================

Loads the cleaned storm records and produces:
1. Top-N health and economic impact tables (console + results/tables/*.csv)
2. Yearly trend charts for the top categories (results/figures/)
3. The Markdown write-up (results/reports/storm_report.md)
"""

from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd

from storm_report.analysis.aggregate import (
    CATEGORY_COL,
    ECONOMIC_IMPACT,
    HEALTH_IMPACT,
    YEAR_COL,
    aggregate_by_category,
    aggregate_by_category_and_year,
    count_missing_years,
    filter_years,
    top_n,
)
from storm_report.analysis.event_types import unmapped_labels
from storm_report.clean.clean_storm_data import CLEAN_FILENAME, load_clean_storm_data
from storm_report.config_paths import PROCESSED_DATA_DIR
from storm_report.logging_config import setup_logger
from storm_report.report.charts import build_trend_chart, save_chart
from storm_report.report.narrative import ReportContext, render_report, write_report
from storm_report.report.tables import print_ranked_table, save_table
from storm_report.settings import load_settings

logger = setup_logger("report.build")

HEALTH_COLUMNS = [CATEGORY_COL, "fatalities", "injuries", HEALTH_IMPACT]
ECONOMIC_COLUMNS = [CATEGORY_COL, ECONOMIC_IMPACT]


def analyze(records: pd.DataFrame, n: int, since_year: int | None = None) -> dict:
    """Run the aggregations the report needs; returns a dict of frames and counts."""
    records = filter_years(records, since_year)

    by_category = aggregate_by_category(records)
    health_top = top_n(by_category, n, HEALTH_IMPACT)
    economic_top = top_n(by_category, n, ECONOMIC_IMPACT)

    years = records[YEAR_COL].dropna()
    return {
        "records": records,
        "by_category": by_category,
        "health_top": health_top,
        "economic_top": economic_top,
        "health_yearly": aggregate_by_category_and_year(records, health_top[CATEGORY_COL]),
        "economic_yearly": aggregate_by_category_and_year(records, economic_top[CATEGORY_COL]),
        "n_missing_year": count_missing_years(records),
        "year_range": (int(years.min()), int(years.max())) if len(years) else None,
    }


def build_report(records: pd.DataFrame, n: int = 10, since_year: int | None = None,
                 chart_formats: tuple[str, ...] = ("html",)) -> Path:
    """Write tables, charts and narrative for *records*; returns the report path."""
    results = analyze(records, n, since_year)

    logger.info("[1/3] Ranked tables (top %d)...", n)
    print_ranked_table(results["health_top"], HEALTH_COLUMNS,
                       f"Top {n} event categories by health impact")
    print_ranked_table(results["economic_top"], ECONOMIC_COLUMNS,
                       f"Top {n} event categories by economic impact")
    save_table(results["by_category"], "impact_by_category")
    save_table(results["health_top"], "top_health_impact")
    save_table(results["economic_top"], "top_economic_impact")

    logger.info("[2/3] Trend charts...")
    chart_files: dict[str, Path] = {}
    trends = [
        ("health_trend", "Health impact by year", results["health_yearly"],
         HEALTH_IMPACT, results["health_top"]),
        ("economic_trend", "Economic impact by year", results["economic_yearly"],
         ECONOMIC_IMPACT, results["economic_top"]),
    ]
    for name, title, yearly, metric, ranked in trends:
        fig = build_trend_chart(yearly, metric, title,
                                categories=ranked[CATEGORY_COL].tolist())
        written = save_chart(fig, name, formats=chart_formats)
        if written:
            chart_files[title] = written[0]

    logger.info("[3/3] Narrative...")
    ctx = ReportContext(
        health_top=results["health_top"],
        economic_top=results["economic_top"],
        n_records=len(results["records"]),
        n_categories=len(results["by_category"]),
        n_missing_year=results["n_missing_year"],
        unmapped=unmapped_labels(results["records"]["event_type_raw"].unique()),
        since_year=since_year,
        year_range=results["year_range"],
        chart_files=chart_files,
    )
    return write_report(render_report(ctx))


def main(source: Path | None = None, n: int | None = None,
         since_year: int | None = None, chart_formats: tuple[str, ...] | None = None) -> Path | None:
    logger.info("=" * 60)
    logger.info("BUILD STORM IMPACT REPORT")
    logger.info("=" * 60)

    settings = load_settings()
    n = n if n is not None else int(settings["top_n"])
    since_year = since_year if since_year is not None else settings["since_year"]
    since_year = int(since_year) if since_year is not None else None
    chart_formats = chart_formats or tuple(settings["chart_formats"])

    source = source or PROCESSED_DATA_DIR / CLEAN_FILENAME
    if not source.exists():
        logger.error("Clean storm data not found at %s — run the clean step first", source)
        return None

    records = load_clean_storm_data(source)
    logger.info("Loaded %d clean records from %s", len(records), source.name)

    path = build_report(records, n=n, since_year=since_year, chart_formats=chart_formats)
    logger.info("REPORT COMPLETE: %s", path)
    return path


if __name__ == "__main__":
    if main() is None:
        sys.exit(1)
