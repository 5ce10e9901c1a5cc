"""
Clean Storm Event Data
======================

Reads the compressed NOAA storm database from RAW_DATA_DIR, keeps the eight
columns the report needs, and writes one clean record per event to
PROCESSED_DATA_DIR/storm_events_clean.csv:

    event_type_raw, event_category, begin_date, year,
    fatalities, injuries, property_damage, crop_damage

Damage amounts are in dollars (amount x decoded magnitude suffix).
"""

from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd

from storm_report.analysis.event_types import multiplier_series, normalize_series
from storm_report.clean.clean_utils import (
    coerce_non_negative,
    generate_cleaning_report,
    standardize_column_names,
)
from storm_report.config_paths import PROCESSED_DATA_DIR, RAW_DATA_DIR
from storm_report.logging_config import setup_logger

logger = setup_logger("clean.storm_data")

RAW_FILENAME = "StormData.csv.bz2"
CLEAN_FILENAME = "storm_events_clean.csv"

RAW_COLUMNS = [
    "BGN_DATE",
    "EVTYPE",
    "FATALITIES",
    "INJURIES",
    "PROPDMG",
    "PROPDMGEXP",
    "CROPDMG",
    "CROPDMGEXP",
]

RAW_NUMERIC_COLUMNS = ["FATALITIES", "INJURIES", "PROPDMG", "CROPDMG"]

CLEAN_COLUMNS = [
    "event_type_raw",
    "event_category",
    "begin_date",
    "year",
    "fatalities",
    "injuries",
    "property_damage",
    "crop_damage",
]

BGN_DATE_FORMAT = "%m/%d/%Y %H:%M:%S"


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_raw_storm_data(path: Path) -> pd.DataFrame:
    """Read the required columns of the raw CSV (compression inferred from suffix)."""
    header = pd.read_csv(path, nrows=0)
    present = {str(c).strip().upper() for c in header.columns}
    missing = [c for c in RAW_COLUMNS if c not in present]
    if missing:
        raise ValueError(f"{path.name} is missing required columns: {', '.join(missing)}")

    logger.info("Reading %s ...", path.name)
    # Only empty fields are missing; labels such as "NA" or "None" stay strings
    df = pd.read_csv(
        path,
        usecols=lambda c: str(c).strip().upper() in RAW_COLUMNS,
        dtype={"EVTYPE": str, "PROPDMGEXP": str, "CROPDMGEXP": str, "BGN_DATE": str},
        keep_default_na=False,
        na_values={col: [""] for col in RAW_NUMERIC_COLUMNS + ["BGN_DATE"]},
        low_memory=False,
    )
    logger.info("  %d rows x %d cols", len(df), len(df.columns))
    return df


def load_clean_storm_data(path: Path | None = None) -> pd.DataFrame:
    """Read a CSV written by this module back into clean records."""
    path = path or PROCESSED_DATA_DIR / CLEAN_FILENAME
    # Pass-through labels such as "NA" or "NONE" must stay strings
    df = pd.read_csv(
        path,
        keep_default_na=False,
        na_values={"year": [""], "begin_date": [""]},
        dtype={"event_type_raw": str, "event_category": str},
        low_memory=False,
    )
    df["begin_date"] = pd.to_datetime(df["begin_date"], errors="coerce")
    df["year"] = df["year"].astype("Int64")
    return df


# ---------------------------------------------------------------------------
# Cleaning
# ---------------------------------------------------------------------------

def parse_begin_dates(values: pd.Series) -> pd.Series:
    """Parse BGN_DATE strings; unparseable or missing values become NaT."""
    dates = pd.to_datetime(values, format=BGN_DATE_FORMAT, errors="coerce")
    retry = dates.isna() & values.notna()
    if retry.any():
        dates[retry] = pd.to_datetime(values[retry], format="mixed", errors="coerce")
    return dates


def clean_storm_data(raw: pd.DataFrame) -> pd.DataFrame:
    """Turn raw storm rows into clean, annotated records."""
    df = standardize_column_names(raw)

    begin_date = parse_begin_dates(df["bgn_date"])
    prop_multiplier = multiplier_series(df["propdmgexp"])
    crop_multiplier = multiplier_series(df["cropdmgexp"])

    clean = pd.DataFrame({
        "event_type_raw": df["evtype"].fillna("").astype(str),
        "event_category": normalize_series(df["evtype"]),
        "begin_date": begin_date,
        "year": begin_date.dt.year.astype("Int64"),
        "fatalities": coerce_non_negative(df["fatalities"]).astype("int64"),
        "injuries": coerce_non_negative(df["injuries"]).astype("int64"),
        "property_damage": coerce_non_negative(df["propdmg"]) * prop_multiplier,
        "crop_damage": coerce_non_negative(df["cropdmg"]) * crop_multiplier,
    }, index=df.index)

    n_categories = clean["event_category"].nunique()
    n_labels = clean["event_type_raw"].str.strip().str.upper().nunique()
    logger.info("  %d distinct labels -> %d categories", n_labels, n_categories)

    undated = int(clean["year"].isna().sum())
    if undated:
        logger.warning("  %d records have no parseable begin date", undated)

    return clean[CLEAN_COLUMNS]


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(source: Path | None = None) -> Path | None:
    logger.info("=" * 60)
    logger.info("CLEAN STORM DATA")
    logger.info("=" * 60)

    source = source or RAW_DATA_DIR / RAW_FILENAME
    if not source.exists():
        logger.error("Raw storm data not found at %s", source)
        return None

    df_raw = load_raw_storm_data(source)
    df = clean_storm_data(df_raw)

    report = generate_cleaning_report(df_raw, df, source.name)
    logger.info(
        "  %s — rows: %d→%d (-%d)",
        source.name,
        report["rows_before"],
        report["rows_after"],
        report["rows_dropped"],
    )
    for col, info in report["null_summary"].items():
        logger.info("  nulls in %s: %d (%.2f%%)", col, info["count"], info["pct"])

    PROCESSED_DATA_DIR.mkdir(parents=True, exist_ok=True)
    out_path = PROCESSED_DATA_DIR / CLEAN_FILENAME
    df.to_csv(out_path, index=False)
    logger.info("  Saved → %s", out_path.name)
    return out_path


if __name__ == "__main__":
    if main() is None:
        sys.exit(1)
