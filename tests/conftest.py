"""
Shared pytest fixtures for the storm report test suite.

Provides factories for raw storm rows (as read from StormData.csv) and for
clean records (as produced by clean_storm_data).
"""

import pandas as pd
import pytest

from storm_report.analysis.event_types import normalize_event_type


@pytest.fixture
def make_raw():
    """
    Return a function that builds a raw storm DataFrame from partial rows.

    Example:
        raw = make_raw({"EVTYPE": "TSTM WIND", "FATALITIES": 1})
    """

    def _make_raw(*rows: dict) -> pd.DataFrame:
        defaults = {
            "BGN_DATE": "4/18/1950 0:00:00",
            "EVTYPE": "TORNADO",
            "FATALITIES": 0,
            "INJURIES": 0,
            "PROPDMG": 0.0,
            "PROPDMGEXP": "",
            "CROPDMG": 0.0,
            "CROPDMGEXP": "",
        }
        return pd.DataFrame([{**defaults, **row} for row in rows])

    return _make_raw


@pytest.fixture
def make_records():
    """
    Return a function that builds clean records from partial rows.

    Each row needs at least ``event_type_raw``; the category is derived
    with normalize_event_type unless given.
    """

    def _make_records(*rows: dict) -> pd.DataFrame:
        records = []
        for row in rows:
            record = {
                "fatalities": 0,
                "injuries": 0,
                "property_damage": 0.0,
                "crop_damage": 0.0,
                "year": 2000,
                **row,
            }
            record.setdefault("event_category", normalize_event_type(record["event_type_raw"]))
            records.append(record)
        df = pd.DataFrame(records)
        df["year"] = df["year"].astype("Int64")
        return df

    return _make_records


@pytest.fixture
def scenario_raw(make_raw):
    """Two spellings of thunderstorm wind and one flash flood."""
    return make_raw(
        {"EVTYPE": "TSTM WIND", "FATALITIES": 1, "INJURIES": 2},
        {"EVTYPE": "Tstm Wind ", "FATALITIES": 0, "INJURIES": 1},
        {"EVTYPE": "FLASH FLOOD", "FATALITIES": 5, "INJURIES": 0},
    )
