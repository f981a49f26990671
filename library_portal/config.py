"""Application configuration constants."""

import os
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
DATA_DIR = Path(os.getenv("LIBRARY_PORTAL_DATA_DIR", ROOT_DIR / "data"))
ASSETS_DIR = ROOT_DIR / "assets"

REQUESTS_FILE = DATA_DIR / "borrow_requests.csv"
LOANS_FILE = DATA_DIR / "loans.csv"
VISITS_FILE = DATA_DIR / "visits.csv"

LOG_LEVEL = os.getenv("LIBRARY_PORTAL_LOG_LEVEL", "INFO").upper()

DEFAULT_PAGE_SIZE = 10
ATTENDANCE_PAGE_SIZE_DEFAULT = 15
PAGE_SIZE_OPTIONS = [10, 15, 25, 50]
DUE_SOON_DAYS = 3

REQUEST_STATUS_OPTIONS = [
    ("pending", "Pending"),
    ("approved", "Approved"),
    ("rejected", "Rejected"),
    ("all", "All"),
]

# "rejected" also covers cancelled requests.
HISTORY_STATUS_OPTIONS = [
    ("all", "All"),
    ("returned", "Returned"),
    ("overdue", "Overdue"),
    ("rejected", "Rejected"),
]

VISIT_STATUS_OPTIONS = [
    ("all", "All"),
    ("Active", "Active"),
    ("Exited", "Exited"),
]

STATUS_LABELS = {
    "pending": "Pending",
    "approved": "Approved",
    "rejected": "Rejected",
    "cancelled": "Cancelled",
    "cancelled_by_admin": "Cancelled",
    "cancelled_by_student": "Cancelled",
    "returned": "Returned",
    "overdue": "Overdue",
    "active": "Active",
    "due_soon": "Due Soon",
}

REQUEST_COLUMNS = [
    "id",
    "bookCode",
    "title",
    "borrowerName",
    "borrowerStudentId",
    "status",
    "requestedAt",
    "processedAt",
    "dueAt",
]

LOAN_COLUMNS = [
    "id",
    "bookCode",
    "title",
    "borrowerName",
    "borrowerStudentId",
    "status",
    "borrowedAt",
    "dueAt",
    "returnedAt",
]

VISIT_COLUMNS = [
    "visitId",
    "studentId",
    "name",
    "branch",
    "status",
    "enteredAt",
    "exitedAt",
]

REQUEST_DATE_FIELDS = ["requestedAt", "processedAt", "dueAt"]
LOAN_DATE_FIELDS = ["borrowedAt", "dueAt", "returnedAt"]
VISIT_DATE_FIELDS = ["enteredAt", "exitedAt"]

VISIT_SEARCH_FIELDS = ["visitor", "branch", "entered", "exited"]

REQUEST_TABLE_COLUMNS = ["status", "bookCode", "title", "borrowerName", "requestedAt", "dueAt"]
LOAN_TABLE_COLUMNS = ["status", "bookCode", "title", "borrowerName", "borrowedAt", "dueAt"]
HISTORY_TABLE_COLUMNS = ["status", "bookCode", "title", "borrowerName", "borrowedAt", "returnedAt"]
VISIT_TABLE_COLUMNS = ["status", "visitor", "branch", "entered", "exited"]
