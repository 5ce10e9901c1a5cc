"""
Settings — read project configuration files.
"""
from __future__ import annotations

import json
import re

from storm_report.config_paths import CONFIG_DIR
from storm_report.logging_config import setup_logger

logger = setup_logger("general.settings")

SOURCES_FILE = CONFIG_DIR / "dataset_sources.txt"
SETTINGS_FILE = CONFIG_DIR / "report_settings.json"

DEFAULT_SETTINGS = {
    "top_n": 10,
    "since_year": None,
    "chart_formats": ["html"],
}

# Auto-labeling patterns for data source URLs
LABEL_PATTERNS = [
    (r"StormData\.csv", "NOAA Storm Database (1950-2011)", "noaa"),
    (r"ncei\.noaa\.gov.*stormevents", "NOAA Storm Events (NCEI)", "noaa"),
]


def _auto_label(url: str) -> tuple[str, str]:
    """Return (label, type_badge) for a URL."""
    for pattern, label, badge in LABEL_PATTERNS:
        if re.search(pattern, url, re.IGNORECASE):
            return label, badge
    return "Unknown Source", "other"


# ── data sources ─────────────────────────────────────────────────

def get_sources() -> list[dict]:
    """Read data sources and return an annotated list."""
    if not SOURCES_FILE.exists():
        return []
    urls = []
    for line in SOURCES_FILE.read_text(encoding="utf-8").splitlines():
        cleaned = line.strip()
        if not cleaned or cleaned.startswith("#"):
            continue
        label, badge = _auto_label(cleaned)
        urls.append({"url": cleaned, "label": label, "type": badge})
    return urls


# ── report settings ──────────────────────────────────────────────

def load_settings() -> dict:
    """Return report settings, file values layered over DEFAULT_SETTINGS."""
    settings = dict(DEFAULT_SETTINGS)
    if not SETTINGS_FILE.exists():
        return settings
    try:
        stored = json.loads(SETTINGS_FILE.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read %s (%s); using defaults", SETTINGS_FILE.name, exc)
        return settings
    if not isinstance(stored, dict):
        logger.warning("%s is not a JSON object; using defaults", SETTINGS_FILE.name)
        return settings
    settings.update({k: v for k, v in stored.items() if k in DEFAULT_SETTINGS})
    return settings

