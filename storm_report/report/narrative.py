"""Markdown write-up of the storm impact analysis."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from storm_report.config_paths import REPORTS_DIR
from storm_report.logging_config import setup_logger
from storm_report.report.tables import COLUMN_FORMATS, format_cell

logger = setup_logger("report.narrative")

REPORT_FILENAME = "storm_report.md"


@dataclass
class ReportContext:
    """Everything the narrative refers to."""
    health_top: pd.DataFrame
    economic_top: pd.DataFrame
    n_records: int
    n_categories: int
    n_missing_year: int = 0
    unmapped: list[str] = field(default_factory=list)
    since_year: int | None = None
    year_range: tuple[int, int] | None = None
    chart_files: dict[str, Path] = field(default_factory=dict)


def markdown_table(df: pd.DataFrame, columns: list[str]) -> str:
    """Ranked pipe table of *columns*, cells formatted as in the console tables."""
    display = pd.DataFrame({"#": range(1, len(df) + 1)})
    for col in columns:
        header, _ = COLUMN_FORMATS.get(col, (col, "{}"))
        display[header] = [format_cell(col, value) for value in df[col]]
    align = ["right"] + ["left" if c == "event_category" else "right" for c in columns]
    return display.to_markdown(index=False, colalign=align, disable_numparse=True)


def _lead(df: pd.DataFrame, metric: str) -> str:
    if df.empty:
        return "No events were recorded."
    top = df.iloc[0]
    unit = " billion USD" if metric == "economic_impact_billions" else ""
    return (f"**{top['event_category']}** ranks first with "
            f"{format_cell(metric, top[metric])}{unit}.")


def render_report(ctx: ReportContext) -> str:
    """Return the report as a Markdown string."""
    period = ""
    if ctx.year_range:
        period = f" covering {ctx.year_range[0]}–{ctx.year_range[1]}"
    if ctx.since_year is not None:
        period += f" (restricted to events from {ctx.since_year} onward)"

    sections = [
        "# Health and economic impact of U.S. storm events",
        "",
        "## Synopsis",
        "",
        f"This report summarises {ctx.n_records:,} storm events{period} from the NOAA "
        f"storm database. Free-text event types were collapsed into "
        f"{ctx.n_categories} categories by ordered keyword rules; damage amounts were "
        "scaled by their magnitude suffix (H, K, M, B or a power of ten).",
        "",
        "## Data processing",
        "",
        f"- {len(ctx.unmapped)} distinct event labels matched no rule and were kept as-is.",
        f"- {ctx.n_missing_year:,} events without a parseable begin date are excluded "
        "from the yearly trends but counted in the totals.",
        "",
        "## Results",
        "",
        "### Events most harmful to population health",
        "",
        _lead(ctx.health_top, "health_impact"),
        "",
        markdown_table(ctx.health_top, ["event_category", "fatalities", "injuries", "health_impact"]),
        "",
        "### Events with the greatest economic consequences",
        "",
        _lead(ctx.economic_top, "economic_impact_billions"),
        "",
        markdown_table(ctx.economic_top, ["event_category", "economic_impact_billions"]),
        "",
    ]

    if ctx.chart_files:
        sections += ["### Trends", ""]
        for label, path in ctx.chart_files.items():
            sections.append(f"- [{label}](../figures/{path.name})")
        sections.append("")

    if ctx.unmapped:
        preview = ", ".join(f"`{label}`" for label in ctx.unmapped[:20])
        more = f" and {len(ctx.unmapped) - 20} more" if len(ctx.unmapped) > 20 else ""
        sections += ["## Appendix: unmapped labels", "", preview + more, ""]

    return "\n".join(sections)


def write_report(text: str, out_dir: Path | None = None) -> Path:
    out_dir = out_dir or REPORTS_DIR
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / REPORT_FILENAME
    path.write_text(text, encoding="utf-8")
    logger.info("  Saved report → %s", path.name)
    return path
