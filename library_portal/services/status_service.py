"""Canonical status derivation for borrow requests, loans, and visits."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, Iterable, Mapping, Optional

from dateutil.relativedelta import relativedelta

from library_portal.config import DUE_SOON_DAYS, STATUS_LABELS
from library_portal.utils.helpers import normalize_text, parse_timestamp, utc_now

REQUEST_STATUSES = {"pending", "approved", "rejected", "cancelled"}
CANCELLED_ALIASES = {"cancelled_by_admin", "cancelled_by_student"}


def _field(record: object, name: str) -> object:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _first_text(record: object, names: Iterable[str]) -> str:
    """Return the first non-empty field among ``names``, lower-cased."""
    for name in names:
        text = normalize_text(_field(record, name))
        if text:
            return text.lower()
    return ""


def _first_present_text(record: object, names: Iterable[str]) -> str:
    """Return the first field among ``names`` that is not None, lower-cased.

    An explicit empty value stops the lookup.
    """
    for name in names:
        value = _field(record, name)
        if value is not None:
            return normalize_text(value).lower()
    return ""


def canonical_request_status(request: object) -> str:
    """Map a borrow request onto pending/approved/rejected/cancelled."""
    status = _first_present_text(request, ("status", "outcome", "statusLabel", "statusKey"))

    if status in CANCELLED_ALIASES:
        return "cancelled"
    if status in REQUEST_STATUSES:
        return status

    if not status:
        if parse_timestamp(_field(request, "processedAt")) is None:
            return "pending"
        if parse_timestamp(_field(request, "dueAt")) is not None:
            return "approved"
        return "rejected"
    return status


def canonical_history_status(loan: object, now: Optional[datetime] = None) -> str:
    """Map a history entry onto returned/overdue/rejected/active."""
    raw = _first_text(loan, ("statusKey", "status", "statusLabel"))

    if "reject" in raw or "cancel" in raw:
        return "rejected"
    if "return" in raw:
        return "returned"
    if "overdue" in raw:
        return "overdue"
    if "active" in raw:
        return "active"

    if parse_timestamp(_field(loan, "returnedAt")) is not None:
        return "returned"
    due_at = parse_timestamp(_field(loan, "dueAt"))
    if due_at is not None and due_at < (now or utc_now()):
        return "overdue"
    return "active"


def visit_status(row: object) -> str:
    """Return ``Exited`` once a visit has an exit time, otherwise ``Active``."""
    if normalize_text(_field(row, "exitedAt")) or normalize_text(_field(row, "returnedAt")):
        return "Exited"
    if normalize_text(_field(row, "status")) == "Returned":
        return "Exited"
    return "Active"


def loan_due_state(
    due_at: object,
    now: Optional[datetime] = None,
    due_soon_days: int = DUE_SOON_DAYS,
) -> str:
    """Classify an active loan as overdue, due_soon, or active."""
    parsed_due = parse_timestamp(due_at)
    if parsed_due is None:
        return "active"

    current = now or utc_now()
    if parsed_due < current:
        return "overdue"
    if parsed_due <= current + relativedelta(days=due_soon_days):
        return "due_soon"
    return "active"


def status_label(key: str) -> str:
    """Return the display label for a canonical status key."""
    normalized = normalize_text(key)
    if normalized.lower() in STATUS_LABELS:
        return STATUS_LABELS[normalized.lower()]
    return " ".join(part.capitalize() for part in normalized.replace("_", " ").split())


def count_by_status(
    records: Iterable[object],
    derive: Callable[[object], str],
    keys: Iterable[str],
) -> Dict[str, int]:
    """Count records per derived status, seeding every key with zero."""
    counts: Dict[str, int] = {key: 0 for key in keys}
    for record in records:
        key = derive(record)
        counts[key] = counts.get(key, 0) + 1
    return counts
