"""Ranked impact tables: rich console rendering and CSV export."""
from __future__ import annotations

from pathlib import Path

import pandas as pd
from rich.console import Console
from rich.table import Table

from storm_report.config_paths import TABLES_DIR
from storm_report.logging_config import setup_logger

logger = setup_logger("report.tables")

# column -> (header, format)
COLUMN_FORMATS = {
    "event_category": ("Event category", "{}"),
    "fatalities": ("Fatalities", "{:,.0f}"),
    "injuries": ("Injuries", "{:,.0f}"),
    "health_impact": ("Health impact", "{:,.0f}"),
    "economic_impact_billions": ("Economic impact (B USD)", "{:,.3f}"),
}


def format_cell(column: str, value) -> str:
    _, fmt = COLUMN_FORMATS.get(column, (column, "{}"))
    return fmt.format(value)


def format_ranked_table(df: pd.DataFrame, columns: list[str], title: str) -> Table:
    """Build a rich Table with a rank column followed by *columns*."""
    table = Table(title=title, show_header=True)
    table.add_column("#", justify="right", style="dim")
    for col in columns:
        header, _ = COLUMN_FORMATS.get(col, (col, "{}"))
        justify = "left" if col == "event_category" else "right"
        table.add_column(header, justify=justify, style="cyan" if justify == "left" else None)

    for rank, row in enumerate(df[columns].itertuples(index=False), start=1):
        table.add_row(str(rank), *(format_cell(col, val) for col, val in zip(columns, row)))
    return table


def print_ranked_table(df: pd.DataFrame, columns: list[str], title: str,
                       console: Console | None = None) -> None:
    (console or Console()).print(format_ranked_table(df, columns, title))


def save_table(df: pd.DataFrame, name: str, out_dir: Path | None = None) -> Path:
    """Write *df* to results/tables/<name>.csv."""
    out_dir = out_dir or TABLES_DIR
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{name}.csv"
    df.to_csv(path, index=False)
    logger.info("  Saved table → %s", path.name)
    return path
