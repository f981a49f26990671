"""Shared fixtures for service and pager tests."""

from datetime import datetime, timezone

import pytest


@pytest.fixture
def now():
    return datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_loans():
    return [
        {
            "id": "l1",
            "title": "The Grapes of Wrath",
            "status": "Returned",
            "borrowedAt": "2026-09-01T00:00:00Z",
            "dueAt": "2026-09-15T00:00:00Z",
            "returnedAt": "2026-09-10T00:00:00Z",
        },
        {
            "id": "l2",
            "title": "Hamlet",
            "status": "Active",
            "borrowedAt": "2026-10-10T00:00:00Z",
            "dueAt": "2026-10-24T00:00:00Z",
            "returnedAt": "",
        },
        {
            "id": "l3",
            "title": "The Library Book",
            "status": "Overdue",
            "borrowedAt": "2026-09-20T00:00:00Z",
            "dueAt": "2026-10-04T00:00:00Z",
            "returnedAt": "",
        },
    ]


@pytest.fixture
def sample_requests():
    return [
        {
            "id": "r1",
            "title": "Mrs Dalloway",
            "status": "rejected",
            "requestedAt": "2026-10-06T00:00:00Z",
            "processedAt": "2026-10-07T00:00:00Z",
        },
        {
            "id": "r2",
            "title": "Clean Code",
            "status": "pending",
            "requestedAt": "2026-10-12T00:00:00Z",
        },
        {
            "id": "r3",
            "title": "Godel Escher Bach",
            "status": "cancelled_by_admin",
            "requestedAt": "2026-08-01T00:00:00Z",
            "processedAt": "2026-08-02T00:00:00Z",
        },
    ]
