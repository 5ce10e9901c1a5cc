"""
Event Type Normalization
========================

Collapses the free-text EVTYPE labels of the storm database (close to a
thousand spellings, abbreviations and combinations) into a small set of
canonical categories, and decodes the PROPDMGEXP / CROPDMGEXP magnitude
suffixes into numeric multipliers.

Both lookups are ordered substring rules evaluated first-match-wins, so
the position of a rule in its table decides which category a label such
as "FLOOD/STRONG WIND" lands in.  Labels matching no rule pass through
trimmed and upper-cased.
"""

from __future__ import annotations

import pandas as pd

# ---------------------------------------------------------------------------
# Event type rules: (substring, category), evaluated top to bottom
# ---------------------------------------------------------------------------

EVENT_TYPE_RULES: tuple[tuple[str, str], ...] = (
    # Water
    ("FLOOD", "FLOOD"),
    ("FLD", "FLOOD"),
    ("RISING WATER", "FLOOD"),
    ("HIGH WATER", "FLOOD"),
    ("DAM BREAK", "FLOOD"),
    # Rotating storms
    ("TORNADO", "TORNADO"),
    ("TORNDAO", "TORNADO"),
    ("SPOUT", "TORNADO"),
    ("TYPHOON", "TORNADO"),
    ("FUNNEL", "TORNADO"),
    ("GUSTNADO", "TORNADO"),
    ("HURRICANE", "HURRICANE"),
    ("TROPICAL", "HURRICANE"),
    ("SURGE", "STORM SURGE"),
    ("HIGH TIDE", "STORM SURGE"),
    # Convective
    ("TSTM", "STORM"),
    ("THUNDER", "STORM"),
    ("LIGHTNING", "LIGHTNING"),
    ("LIGNTNING", "LIGHTNING"),
    ("HAIL", "HAIL"),
    # Winter
    ("SNOW", "COLD"),
    ("BLIZZARD", "COLD"),
    ("COLD", "COLD"),
    ("FREEZ", "COLD"),
    ("FROST", "COLD"),
    ("WINTER", "COLD"),
    ("WINTRY", "COLD"),
    ("HYPOTHERMIA", "COLD"),
    ("ICE", "ICE"),
    ("ICY", "ICE"),
    ("GLAZE", "ICE"),
    ("SLEET", "ICE"),
    # Heat and dryness
    ("HEAT", "HEAT"),
    ("HOT", "HEAT"),
    ("WARM", "HEAT"),
    ("HYPERTHERMIA", "HEAT"),
    ("RECORD HIGH", "HEAT"),
    ("MICROBURST", "WIND"),
    ("DOWNBURST", "WIND"),
    ("DROUGHT", "DROUGHT"),
    ("DRY", "DROUGHT"),
    ("FIRE", "FIRE"),
    ("SMOKE", "FIRE"),
    # Coast and sea
    ("RIP CURRENT", "RIP CURRENT"),
    ("SURF", "SURF"),
    ("SWELL", "SURF"),
    ("WAVE", "SURF"),
    ("HIGH SEAS", "SURF"),
    ("ROUGH SEAS", "SURF"),
    ("MARINE", "MARINE"),
    # Terrain
    ("AVALANC", "AVALANCHE"),
    ("SLIDE", "LANDSLIDE"),
    ("MUD", "LANDSLIDE"),
    ("EROSION", "EROSION"),
    # Atmosphere
    ("FOG", "FOG"),
    ("DUST", "DUST"),
    ("RAIN", "RAIN"),
    ("PRECIP", "RAIN"),
    ("SHOWER", "RAIN"),
    ("WET", "RAIN"),
    ("WIND", "WIND"),
    ("WND", "WIND"),
    ("TURBULENCE", "WIND"),
    ("STORM", "STORM"),
    # Rare
    ("TSUNAMI", "TSUNAMI"),
    ("VOLCAN", "VOLCANO"),
    ("SEICHE", "SEICHE"),
    ("SUMMARY", "SUMMARY"),
)

RULE_CATEGORIES: frozenset[str] = frozenset(category for _, category in EVENT_TYPE_RULES)

# ---------------------------------------------------------------------------
# Magnitude suffix rules: (substring, multiplier), evaluated top to bottom.
# Matching is by containment, so "2K" resolves through "2" before "K".
# ---------------------------------------------------------------------------

MAGNITUDE_RULES: tuple[tuple[str, float], ...] = (
    ("-", 1.0),
    ("?", 1.0),
    ("+", 1.0),
    ("0", 1.0),
    *((str(digit), 10.0 ** digit) for digit in range(1, 9)),
    ("H", 1e2),
    ("K", 1e3),
    ("M", 1e6),
    ("B", 1e9),
)

DEFAULT_MULTIPLIER = 1.0


def preprocess_label(raw_label: str) -> str:
    """Trim and upper-case a raw label."""
    return raw_label.strip().upper()


def normalize_event_type(raw_label: str) -> str:
    """Return the canonical category for *raw_label*.

    The first rule whose pattern occurs in the trimmed, upper-cased label
    wins.  Without a match the trimmed, upper-cased label is returned.

    >>> normalize_event_type(" Tstm Wind ")
    'STORM'
    >>> normalize_event_type("APACHE COUNTY")
    'APACHE COUNTY'
    """
    label = preprocess_label(raw_label)
    for pattern, category in EVENT_TYPE_RULES:
        if pattern in label:
            return category
    return label


def magnitude_multiplier(suffix: str) -> float:
    """Return the damage multiplier encoded by a magnitude suffix.

    >>> magnitude_multiplier("k")
    1000.0
    >>> magnitude_multiplier("")
    1.0
    """
    suffix = suffix.upper()
    for pattern, multiplier in MAGNITUDE_RULES:
        if pattern in suffix:
            return multiplier
    return DEFAULT_MULTIPLIER


# ---------------------------------------------------------------------------
# Column-wise helpers
# ---------------------------------------------------------------------------

def _as_strings(values: pd.Series) -> pd.Series:
    return values.fillna("").astype(str)


def normalize_series(labels: pd.Series) -> pd.Series:
    """Normalize a column of raw labels, evaluating each distinct label once."""
    labels = _as_strings(labels)
    lookup = {label: normalize_event_type(label) for label in labels.unique()}
    return labels.map(lookup)


def multiplier_series(suffixes: pd.Series) -> pd.Series:
    """Decode a column of magnitude suffixes into float multipliers."""
    suffixes = _as_strings(suffixes)
    lookup = {suffix: magnitude_multiplier(suffix) for suffix in suffixes.unique()}
    return suffixes.map(lookup).astype("float64")


def unmapped_labels(labels) -> list[str]:
    """Distinct preprocessed labels that matched no rule, sorted."""
    passed_through = set()
    for label in labels:
        label = "" if pd.isna(label) else str(label)
        if normalize_event_type(label) not in RULE_CATEGORIES:
            passed_through.add(preprocess_label(label))
    return sorted(passed_through)
