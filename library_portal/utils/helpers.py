"""Helper utilities for text normalization, timestamps, and CSV IO."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Optional

import pandas as pd

DISPLAY_FORMAT = "%Y-%m-%d %H:%M"


def normalize_text(value: object) -> str:
    """Normalize a value into a stripped string, or empty string for nulls."""
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value).strip()


def parse_timestamp(value: object) -> Optional[datetime]:
    """Parse date-like values into timezone-aware UTC datetimes."""
    if value is None:
        return None
    if isinstance(value, (datetime, pd.Timestamp)) and pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    raw_value = normalize_text(value)
    if not raw_value:
        return None

    parsed = pd.to_datetime(raw_value, errors="coerce", utc=True)
    if pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def format_timestamp(value: object) -> str:
    """Render a timestamp for table display, or empty string when missing."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return ""
    return parsed.strftime(DISPLAY_FORMAT)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def read_csv_or_empty(file_path: Path, columns: list[str]) -> pd.DataFrame:
    """Read a CSV if it exists; otherwise return an empty dataframe with columns."""
    if not file_path.exists():
        return pd.DataFrame(columns=columns)

    dataframe = pd.read_csv(file_path, dtype=str).fillna("")
    for column in columns:
        if column not in dataframe.columns:
            dataframe[column] = ""
    return dataframe[columns]
