"""Chart Builder — yearly impact trend lines with Plotly."""
from __future__ import annotations

from pathlib import Path

import pandas as pd
import plotly.graph_objects as go

from storm_report.analysis.aggregate import CATEGORY_COL, YEAR_COL
from storm_report.config_paths import FIGURES_DIR
from storm_report.logging_config import setup_logger

logger = setup_logger("report.charts")

METRIC_LABELS = {
    "health_impact": "Fatalities + injuries",
    "economic_impact_billions": "Property + crop damage (billion USD)",
}


def build_trend_chart(yearly: pd.DataFrame, metric: str, title: str = "",
                      categories: list[str] | None = None) -> go.Figure:
    """One line per category of *metric* against year.

    *categories* fixes the legend order (e.g. the top-N ranking); by default
    categories appear in the order they occur in *yearly*.
    """
    if metric not in yearly.columns:
        raise ValueError(f"Unknown metric {metric!r}")

    if categories is None:
        categories = list(dict.fromkeys(yearly[CATEGORY_COL]))

    fig = go.Figure()
    for category in categories:
        series = yearly[yearly[CATEGORY_COL] == category].sort_values(YEAR_COL)
        fig.add_trace(go.Scatter(
            x=series[YEAR_COL].tolist(),
            y=series[metric].tolist(),
            name=category,
            mode="lines",
        ))

    fig.update_layout(
        title=title or f"{METRIC_LABELS.get(metric, metric)} by year",
        xaxis_title="Year",
        yaxis_title=METRIC_LABELS.get(metric, metric),
        template="plotly_white",
        legend_title_text="Event category",
        font=dict(family="Inter, sans-serif"),
        margin=dict(t=60, b=40, l=60, r=30),
    )
    return fig


def save_chart(fig: go.Figure, name: str, formats: tuple[str, ...] = ("html",),
               out_dir: Path | None = None) -> list[Path]:
    """Write *fig* to results/figures/<name>.<fmt> for each format.

    HTML is written by plotly directly; image formats go through plotly's
    static export and are skipped (with an error logged) when it fails.
    """
    out_dir = out_dir or FIGURES_DIR
    out_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for fmt in formats:
        path = out_dir / f"{name}.{fmt}"
        if fmt == "html":
            fig.write_html(path, include_plotlyjs="cdn")
        else:
            try:
                fig.write_image(path, format=fmt, width=1200, height=600, scale=2)
            except Exception as exc:
                logger.error("Plotly %s export failed for %s: %s", fmt, name, exc)
                continue
        logger.info("  Saved chart → %s", path.name)
        written.append(path)
    return written
