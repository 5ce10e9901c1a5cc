from storm_report.analysis.aggregate import (
    ECONOMIC_IMPACT,
    HEALTH_IMPACT,
    aggregate_by_category,
    aggregate_by_category_and_year,
    filter_years,
    top_n,
)
from storm_report.analysis.event_types import (
    magnitude_multiplier,
    normalize_event_type,
)

__all__ = [
    "ECONOMIC_IMPACT",
    "HEALTH_IMPACT",
    "aggregate_by_category",
    "aggregate_by_category_and_year",
    "filter_years",
    "magnitude_multiplier",
    "normalize_event_type",
    "top_n",
]
