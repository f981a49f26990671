from datetime import date, datetime, timedelta, timezone

import pandas as pd
import pytest

from library_portal.utils.helpers import format_timestamp, normalize_text, parse_timestamp, read_csv_or_empty


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        (float("nan"), ""),
        ("  Main  ", "Main"),
        (15, "15"),
        (date(2026, 10, 1), "2026-10-01"),
    ],
)
def test_normalize_text(value, expected):
    assert normalize_text(value) == expected


def test_parse_timestamp_handles_iso_strings():
    assert parse_timestamp("2026-10-17T08:02:00Z") == datetime(2026, 10, 17, 8, 2, tzinfo=timezone.utc)


def test_parse_timestamp_converts_offsets_to_utc():
    parsed = parse_timestamp(datetime(2026, 10, 17, 16, 0, tzinfo=timezone(timedelta(hours=8))))

    assert parsed == datetime(2026, 10, 17, 8, 0, tzinfo=timezone.utc)
    assert parsed.utcoffset() == timedelta(0)


def test_parse_timestamp_treats_naive_values_as_utc():
    assert parse_timestamp(datetime(2026, 10, 17, 8, 0)).tzinfo == timezone.utc
    assert parse_timestamp(date(2026, 10, 17)) == datetime(2026, 10, 17, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [None, "", "   ", "not a date", pd.NaT, float("nan")])
def test_parse_timestamp_returns_none_for_missing_values(value):
    assert parse_timestamp(value) is None


def test_format_timestamp():
    assert format_timestamp("2026-10-17T08:02:00Z") == "2026-10-17 08:02"
    assert format_timestamp(None) == ""


def test_read_csv_or_empty(tmp_path):
    missing = read_csv_or_empty(tmp_path / "missing.csv", ["id", "name"])
    assert list(missing.columns) == ["id", "name"]
    assert missing.empty

    csv_path = tmp_path / "rows.csv"
    csv_path.write_text("name,extra\nAna,x\n", encoding="utf-8")
    loaded = read_csv_or_empty(csv_path, ["id", "name"])

    assert loaded.to_dict(orient="records") == [{"id": "", "name": "Ana"}]
