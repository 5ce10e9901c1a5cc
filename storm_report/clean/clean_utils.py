"""
Shared Cleaning Utilities
=========================

Column-name, numeric-coercion and reporting helpers used by the cleaning step.
"""

from __future__ import annotations

import pandas as pd

from storm_report.logging_config import setup_logger

logger = setup_logger("clean.utils")


# ---------------------------------------------------------------------------
# check_missing_values
# ---------------------------------------------------------------------------

def check_missing_values(df: pd.DataFrame) -> dict:
    """Return a dict {col_name: {count, pct}} for columns with any nulls."""
    missing: dict = {}
    for col in df.columns:
        n_null = int(df[col].isna().sum())
        if n_null > 0:
            missing[col] = {
                "count": n_null,
                "pct": round(n_null / len(df) * 100, 2) if len(df) > 0 else 0.0,
            }
    return missing


# ---------------------------------------------------------------------------
# standardize_column_names
# ---------------------------------------------------------------------------

def standardize_column_names(df: pd.DataFrame) -> pd.DataFrame:
    """Lowercase, strip whitespace, replace spaces with underscores."""
    df = df.copy()
    df.columns = [
        str(c).strip().lower().replace(" ", "_") for c in df.columns
    ]
    return df


# ---------------------------------------------------------------------------
# coerce_non_negative
# ---------------------------------------------------------------------------

def coerce_non_negative(values: pd.Series) -> pd.Series:
    """Numeric conversion where unparseable, missing or negative values become 0."""
    numeric = pd.to_numeric(values, errors="coerce").fillna(0)
    bad = int((numeric < 0).sum())
    if bad:
        logger.warning("  %s: %d negative values set to 0", values.name, bad)
    return numeric.clip(lower=0)


# ---------------------------------------------------------------------------
# generate_cleaning_report
# ---------------------------------------------------------------------------

def generate_cleaning_report(
    df_before: pd.DataFrame,
    df_after: pd.DataFrame,
    dataset_name: str,
) -> dict:
    """Return a summary dict describing what changed during cleaning."""
    return {
        "dataset_name": dataset_name,
        "rows_before": len(df_before),
        "rows_after": len(df_after),
        "rows_dropped": len(df_before) - len(df_after),
        "columns_cleaned": list(df_after.columns),
        "null_summary": check_missing_values(df_after),
    }
