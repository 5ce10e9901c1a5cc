"""
Impact Aggregation
==================

Grouped sums of health impact (fatalities + injuries) and economic impact
(property + crop damage, in billions of dollars) over cleaned storm records,
plus top-N ranking.

Expected record columns (as produced by clean_storm_data):
    event_category, year, fatalities, injuries, property_damage, crop_damage

Every function returns a fresh DataFrame and leaves its input untouched.
Groups keep the order in which their key first appears in the input, which
is what breaks ties when ranking.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from storm_report.logging_config import setup_logger

logger = setup_logger("analysis.aggregate")

CATEGORY_COL = "event_category"
YEAR_COL = "year"

BILLION = 1e9

HEALTH_IMPACT = "health_impact"
ECONOMIC_IMPACT = "economic_impact_billions"

CATEGORY_COLUMNS = [CATEGORY_COL, "fatalities", "injuries", HEALTH_IMPACT, ECONOMIC_IMPACT]
YEARLY_COLUMNS = [CATEGORY_COL, YEAR_COL, HEALTH_IMPACT, ECONOMIC_IMPACT]


def _with_impacts(records: pd.DataFrame) -> pd.DataFrame:
    """Per-record health and economic impact columns."""
    return records.assign(**{
        HEALTH_IMPACT: records["fatalities"] + records["injuries"],
        ECONOMIC_IMPACT: (records["property_damage"] + records["crop_damage"]) / BILLION,
    })


def aggregate_by_category(records: pd.DataFrame) -> pd.DataFrame:
    """Total fatalities, injuries, health and economic impact per category."""
    if records.empty:
        return pd.DataFrame(columns=CATEGORY_COLUMNS)

    totals = (
        _with_impacts(records)
        .groupby(CATEGORY_COL, sort=False)[["fatalities", "injuries", HEALTH_IMPACT, ECONOMIC_IMPACT]]
        .sum()
        .reset_index()
    )
    logger.debug("Aggregated %d records into %d categories", len(records), len(totals))
    return totals[CATEGORY_COLUMNS]


def top_n(aggregates: pd.DataFrame, n: int, sort_key: str) -> pd.DataFrame:
    """The *n* rows with the largest *sort_key*, descending.

    Ties keep their order in *aggregates*.  Asking for more rows than exist
    returns all of them; ``n <= 0`` returns none.
    """
    if sort_key not in aggregates.columns:
        raise ValueError(
            f"Unknown sort key {sort_key!r}; expected one of {list(aggregates.columns)}"
        )
    ranked = aggregates.sort_values(sort_key, ascending=False, kind="stable")
    return ranked.head(max(n, 0)).reset_index(drop=True)


def aggregate_by_category_and_year(
    records: pd.DataFrame,
    restrict_to_categories: Iterable[str] | None = None,
) -> pd.DataFrame:
    """Health and economic impact per (category, year).

    When *restrict_to_categories* is given, only those categories are
    grouped.  Records without a year are left out.
    """
    if restrict_to_categories is not None:
        records = records[records[CATEGORY_COL].isin(list(restrict_to_categories))]

    missing_year = records[YEAR_COL].isna()
    if missing_year.any():
        logger.debug("Excluding %d records without a year", int(missing_year.sum()))
    records = records[~missing_year]

    if records.empty:
        return pd.DataFrame(columns=YEARLY_COLUMNS)

    yearly = (
        _with_impacts(records)
        .astype({YEAR_COL: "int64"})
        .groupby([CATEGORY_COL, YEAR_COL], sort=False)[[HEALTH_IMPACT, ECONOMIC_IMPACT]]
        .sum()
        .reset_index()
        .sort_values(YEAR_COL, kind="stable")
        .reset_index(drop=True)
    )
    return yearly[YEARLY_COLUMNS]


def count_missing_years(records: pd.DataFrame) -> int:
    """Number of records that year-keyed aggregation leaves out."""
    return int(records[YEAR_COL].isna().sum())


def filter_years(records: pd.DataFrame, since_year: int | None = None) -> pd.DataFrame:
    """Records from *since_year* onward; all records when *since_year* is None."""
    if since_year is None:
        return records.copy()
    kept = records[records[YEAR_COL].notna() & (records[YEAR_COL] >= since_year)]
    logger.info("Kept %d of %d records from %d onward", len(kept), len(records), since_year)
    return kept.copy()
