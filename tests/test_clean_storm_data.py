"""
Tests for loading and cleaning the raw storm database.
"""

import pandas as pd
import pytest

from storm_report.clean import clean_storm_data as module
from storm_report.clean.clean_storm_data import (
    CLEAN_COLUMNS,
    RAW_COLUMNS,
    clean_storm_data,
    load_clean_storm_data,
    load_raw_storm_data,
    parse_begin_dates,
)
from storm_report.clean.clean_utils import (
    check_missing_values,
    coerce_non_negative,
    generate_cleaning_report,
    standardize_column_names,
)


class TestCleanStormData:

    def test_columns(self, scenario_raw):
        assert list(clean_storm_data(scenario_raw).columns) == CLEAN_COLUMNS

    def test_categories_and_raw_labels(self, scenario_raw):
        clean = clean_storm_data(scenario_raw)
        assert clean["event_type_raw"].tolist() == ["TSTM WIND", "Tstm Wind ", "FLASH FLOOD"]
        assert clean["event_category"].tolist() == ["STORM", "STORM", "FLOOD"]

    def test_year_from_begin_date(self, make_raw):
        raw = make_raw(
            {"BGN_DATE": "4/18/1950 0:00:00"},
            {"BGN_DATE": "11/30/2011 0:00:00"},
            {"BGN_DATE": "not a date"},
            {"BGN_DATE": None},
        )
        clean = clean_storm_data(raw)
        assert clean["year"].dtype == "Int64"
        assert clean["year"].iloc[0] == 1950
        assert clean["year"].iloc[1] == 2011
        assert clean["year"].iloc[2:].isna().all()

    def test_damage_is_scaled_by_magnitude(self, make_raw):
        raw = make_raw(
            {"PROPDMG": 25.0, "PROPDMGEXP": "K", "CROPDMG": 1.5, "CROPDMGEXP": "m"},
            {"PROPDMG": 2.0, "PROPDMGEXP": "B", "CROPDMG": 3.0, "CROPDMGEXP": None},
            {"PROPDMG": 7.0, "PROPDMGEXP": "5", "CROPDMG": 0.0, "CROPDMGEXP": "?"},
        )
        clean = clean_storm_data(raw)
        assert clean["property_damage"].tolist() == pytest.approx([25_000.0, 2e9, 7e5])
        assert clean["crop_damage"].tolist() == pytest.approx([1.5e6, 3.0, 0.0])

    def test_bad_counts_become_zero(self, make_raw):
        raw = make_raw(
            {"FATALITIES": "x", "INJURIES": None},
            {"FATALITIES": -2, "INJURIES": "4"},
        )
        clean = clean_storm_data(raw)
        assert clean["fatalities"].tolist() == [0, 0]
        assert clean["injuries"].tolist() == [0, 4]
        assert clean["fatalities"].dtype == "int64"

    def test_missing_event_type(self, make_raw):
        clean = clean_storm_data(make_raw({"EVTYPE": None}))
        assert clean["event_type_raw"].tolist() == [""]
        assert clean["event_category"].tolist() == [""]

    def test_raw_frame_is_not_mutated(self, scenario_raw):
        before = scenario_raw.copy()
        clean_storm_data(scenario_raw)
        pd.testing.assert_frame_equal(scenario_raw, before)


class TestParseBeginDates:

    def test_falls_back_to_other_formats(self):
        dates = parse_begin_dates(pd.Series(["1/3/1996 0:00:00", "1996-01-04"]))
        assert dates.dt.year.tolist() == [1996, 1996]
        assert dates.dt.day.tolist() == [3, 4]


class TestLoadRawStormData:

    def test_reads_only_required_columns_from_bz2(self, tmp_path, make_raw):
        path = tmp_path / "StormData.csv.bz2"
        raw = make_raw({"EVTYPE": "HAIL"}, {"EVTYPE": "NA"}).assign(STATE="AL", REFNUM=[1, 2])
        raw.to_csv(path, index=False)

        loaded = load_raw_storm_data(path)
        assert sorted(loaded.columns) == sorted(RAW_COLUMNS)
        assert len(loaded) == 2
        assert clean_storm_data(loaded)["event_category"].tolist() == ["HAIL", "NA"]

    def test_null_like_labels_stay_literal(self, tmp_path, make_raw):
        path = tmp_path / "StormData.csv.bz2"
        make_raw(
            {"EVTYPE": "NA", "PROPDMGEXP": "NA"},
            {"EVTYPE": "None"},
            {"EVTYPE": "NULL"},
            {"EVTYPE": "n/a"},
            {"EVTYPE": "nan", "BGN_DATE": "", "FATALITIES": ""},
        ).to_csv(path, index=False)

        clean = clean_storm_data(load_raw_storm_data(path))
        assert clean["event_category"].tolist() == ["NA", "NONE", "NULL", "N/A", "NAN"]
        assert clean["year"].iloc[:4].tolist() == [1950] * 4
        assert pd.isna(clean["year"].iloc[4])
        assert clean["fatalities"].tolist() == [0] * 5

    def test_missing_columns(self, tmp_path, make_raw):
        path = tmp_path / "partial.csv"
        make_raw({"EVTYPE": "HAIL"}).drop(columns=["CROPDMG", "CROPDMGEXP"]).to_csv(path, index=False)

        with pytest.raises(ValueError, match="CROPDMG, CROPDMGEXP"):
            load_raw_storm_data(path)


class TestMain:

    def test_writes_and_reloads_clean_csv(self, tmp_path, monkeypatch, make_raw):
        monkeypatch.setattr(module, "PROCESSED_DATA_DIR", tmp_path / "processed")
        source = tmp_path / "StormData.csv.bz2"
        make_raw(
            {"EVTYPE": "TSTM WIND", "INJURIES": 3, "PROPDMG": 5, "PROPDMGEXP": "K"},
            {"EVTYPE": "NONE", "BGN_DATE": ""},
        ).to_csv(source, index=False)

        out_path = module.main(source)
        assert out_path == tmp_path / "processed" / "storm_events_clean.csv"

        reloaded = load_clean_storm_data(out_path)
        assert reloaded["event_category"].tolist() == ["STORM", "NONE"]
        assert reloaded["year"].dtype == "Int64"
        assert reloaded["year"].iloc[0] == 1950
        assert pd.isna(reloaded["year"].iloc[1])
        assert reloaded["property_damage"].tolist() == [5000.0, 0.0]

    def test_missing_source(self, tmp_path):
        assert module.main(tmp_path / "absent.csv.bz2") is None


class TestCleanUtils:

    def test_standardize_column_names(self):
        df = pd.DataFrame(columns=[" BGN_DATE", "State Name"])
        assert list(standardize_column_names(df).columns) == ["bgn_date", "state_name"]

    def test_coerce_non_negative(self):
        result = coerce_non_negative(pd.Series(["1.5", "abc", None, -3], name="propdmg"))
        assert result.tolist() == [1.5, 0.0, 0.0, 0.0]

    def test_cleaning_report(self):
        before = pd.DataFrame({"a": [1, 2, 3]})
        after = pd.DataFrame({"a": [1.0, None]})
        report = generate_cleaning_report(before, after, "storm")
        assert report["rows_dropped"] == 1
        assert report["null_summary"] == {"a": {"count": 1, "pct": 50.0}}
        assert check_missing_values(before) == {}
