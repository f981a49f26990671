"""Data loading services for the borrowing and attendance views."""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd
from loguru import logger

from library_portal.config import (
    LOAN_COLUMNS,
    LOAN_DATE_FIELDS,
    REQUEST_COLUMNS,
    REQUEST_DATE_FIELDS,
    VISIT_COLUMNS,
    VISIT_DATE_FIELDS,
)
from library_portal.services import status_service
from library_portal.utils.helpers import format_timestamp, normalize_text, parse_timestamp, read_csv_or_empty

HISTORY_REQUEST_STATUSES = {"rejected", "cancelled", "cancelled_by_admin", "cancelled_by_student"}
HISTORY_LOAN_STATUSES = {"returned", "overdue"}

STATUS_KEYS_BY_LABEL = {
    "Returned": "returned",
    "Overdue": "overdue",
    "Rejected": "rejected",
    "Cancelled": "cancelled",
}


def _load_records(file_path: Path, columns: List[str], date_fields: List[str]) -> List[dict]:
    """Read a CSV into records with parsed timestamps."""
    if not file_path.exists():
        logger.warning("Data file not found: {}", file_path)
        return []

    dataframe = read_csv_or_empty(file_path, columns)
    records = dataframe.to_dict(orient="records")
    for record in records:
        for field in date_fields:
            record[field] = parse_timestamp(record.get(field))
    logger.debug("Loaded {} rows from {}", len(records), file_path.name)
    return records


def load_requests(file_path: Path) -> List[dict]:
    return _load_records(file_path, REQUEST_COLUMNS, REQUEST_DATE_FIELDS)


def load_loans(file_path: Path) -> List[dict]:
    return _load_records(file_path, LOAN_COLUMNS, LOAN_DATE_FIELDS)


def load_visits(file_path: Path) -> List[dict]:
    return _load_records(file_path, VISIT_COLUMNS, VISIT_DATE_FIELDS)


def _title_status(raw_status: str) -> str:
    if raw_status.lower() == "on time":
        return "On Time"
    return " ".join(part[:1].upper() + part[1:] for part in re.split(r"\s+", raw_status) if part)


def normalize_loan_entry(raw: Optional[Mapping] = None, status_fallback: str = "Active") -> dict:
    """Normalize a loan-like record into the shape the tables render."""
    raw = dict(raw or {})
    book = raw.get("book") or {}
    user = raw.get("user") or {}

    source = raw.get("statusLabel") or raw.get("status") or raw.get("statusKey") or ""
    status = _title_status(source.strip() if isinstance(source, str) else "") or status_fallback

    normalized = dict(raw)
    normalized.update(
        {
            "id": raw.get("id") or raw.get("_id") or raw.get("loanId") or raw.get("requestId"),
            "bookId": raw.get("bookId") or book.get("id") or book.get("_id"),
            "title": raw.get("title") or book.get("title") or "",
            "bookCode": raw.get("bookCode") or book.get("bookCode") or book.get("code") or "",
            "borrowerId": raw.get("borrowerId") or user.get("id") or user.get("_id") or raw.get("userId"),
            "borrowerName": (
                raw.get("borrowerName") or user.get("fullName") or user.get("name") or raw.get("student") or ""
            ),
            "borrowerStudentId": raw.get("borrowerStudentId") or user.get("studentId") or "",
            "borrowedAt": parse_timestamp(raw.get("borrowedAt")),
            "dueAt": parse_timestamp(raw.get("dueAt")),
            "returnedAt": parse_timestamp(raw.get("returnedAt")),
            "statusKey": raw.get("statusKey") or STATUS_KEYS_BY_LABEL.get(status),
            "status": status,
            "statusLabel": status,
        }
    )
    return normalized


def normalize_request_history_entry(request: Optional[Mapping]) -> Optional[dict]:
    """Turn a rejected or cancelled request into a history row."""
    if not request:
        return None

    request_id = request.get("id") or request.get("_id")
    normalized = normalize_loan_entry(
        {
            "id": f"request:{request_id}" if request_id else None,
            "book": request.get("book"),
            "bookCode": request.get("bookCode"),
            "title": request.get("title"),
            "user": request.get("user"),
            "borrowerName": request.get("borrowerName"),
            "borrowerStudentId": request.get("borrowerStudentId"),
            "borrowedAt": request.get("requestedAt"),
            "dueAt": request.get("dueAt"),
            "returnedAt": request.get("processedAt"),
            "status": request.get("status"),
            "statusKey": request.get("status"),
            "statusLabel": request.get("statusLabel") or status_service.status_label(request.get("status")),
        },
        status_fallback="Rejected",
    )
    normalized["source"] = "request"
    normalized["processedAt"] = parse_timestamp(request.get("processedAt"))
    return normalized


def history_sort_value(entry: Optional[Mapping]) -> float:
    """Return the latest known timestamp of an entry, or 0 when none."""
    if not entry:
        return 0
    timestamps = [
        parsed.timestamp()
        for parsed in (
            parse_timestamp(entry.get(field))
            for field in ("returnedAt", "dueAt", "borrowedAt", "processedAt")
        )
        if parsed is not None
    ]
    return max(timestamps) if timestamps else 0


def build_loan_history(
    loans: Iterable[Mapping],
    requests: Iterable[Mapping],
    now: Optional[datetime] = None,
) -> List[dict]:
    """Merge closed loans with rejected/cancelled requests, newest first."""
    history: List[dict] = []
    for loan in loans:
        entry = normalize_loan_entry(loan)
        if status_service.canonical_history_status(entry, now=now) in HISTORY_LOAN_STATUSES:
            history.append(entry)

    for request in requests:
        if normalize_text(request.get("status")).lower() not in HISTORY_REQUEST_STATUSES:
            continue
        entry = normalize_request_history_entry(request)
        if entry is not None:
            history.append(entry)

    history.sort(key=history_sort_value, reverse=True)
    return history


def active_loans(loans: Iterable[Mapping], now: Optional[datetime] = None) -> List[dict]:
    """Return loans that are still out, annotated with their due state."""
    active: List[dict] = []
    for loan in loans:
        entry = normalize_loan_entry(loan)
        if status_service.canonical_history_status(entry, now=now) not in {"active", "overdue"}:
            continue
        if entry["returnedAt"] is not None:
            continue
        due_state = status_service.loan_due_state(entry["dueAt"], now=now)
        entry["statusKey"] = due_state
        entry["status"] = status_service.status_label(due_state)
        active.append(entry)
    return active


def map_visit_row(row: Mapping, index: int) -> Dict[str, str]:
    """Shape a raw visit or attendance record for the attendance log."""
    entered = format_timestamp(row.get("enteredAt") or row.get("borrowedAt"))
    exited_source = row.get("exitedAt") or row.get("returnedAt")
    exited = format_timestamp(exited_source) if exited_source else ""
    visitor = (
        normalize_text(row.get("name"))
        or normalize_text(row.get("user"))
        or normalize_text(row.get("studentId"))
        or normalize_text(row.get("barcode"))
        or f"Visitor {index + 1}"
    )

    return {
        "id": normalize_text(row.get("visitId") or row.get("id") or row.get("studentId")) or f"log-{index}",
        "status": status_service.visit_status(row),
        "entered": entered,
        "exited": f"Exited {exited}" if exited else "Still inside",
        "branch": normalize_text(row.get("branch") or row.get("material")) or "Main",
        "visitor": visitor,
    }


def to_frame(records: Iterable[Mapping], columns: List[str]) -> pd.DataFrame:
    """Build a display dataframe, formatting timestamps and filling gaps."""
    dataframe = pd.DataFrame(list(records))
    for column in columns:
        if column not in dataframe.columns:
            dataframe[column] = ""
    dataframe = dataframe[columns].copy()
    for column in columns:
        dataframe[column] = dataframe[column].apply(
            lambda value: format_timestamp(value) if isinstance(value, datetime) else normalize_text(value)
        )
    return dataframe
