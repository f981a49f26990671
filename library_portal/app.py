"""Streamlit app entrypoint for the library borrowing and attendance views."""

from __future__ import annotations

from pathlib import Path
from typing import List

import streamlit as st
from loguru import logger

from library_portal.components.filters import render_search, render_status_filter
from library_portal.components.pagination import get_pager, render_page_size_selector, render_pagination
from library_portal.components.table import render_page_table
from library_portal.config import (
    ASSETS_DIR,
    ATTENDANCE_PAGE_SIZE_DEFAULT,
    DATA_DIR,
    DEFAULT_PAGE_SIZE,
    HISTORY_STATUS_OPTIONS,
    HISTORY_TABLE_COLUMNS,
    LOAN_TABLE_COLUMNS,
    LOANS_FILE,
    REQUEST_STATUS_OPTIONS,
    REQUEST_TABLE_COLUMNS,
    REQUESTS_FILE,
    VISIT_SEARCH_FIELDS,
    VISIT_STATUS_OPTIONS,
    VISIT_TABLE_COLUMNS,
    VISITS_FILE,
)
from library_portal.logging_config import config_logger
from library_portal.services import data_loader, filter_service, status_service


st.set_page_config(page_title="Library Circulation", layout="wide")


def load_css() -> None:
    """Load app-level CSS styling from the assets directory."""
    css_path = ASSETS_DIR / "styles.css"
    if css_path.exists():
        with css_path.open("r", encoding="utf-8") as css_file:
            st.markdown(f"<style>{css_file.read()}</style>", unsafe_allow_html=True)


def init_session_state() -> None:
    """Initialize required session-state variables."""
    if not st.session_state.get("logger_configured"):
        config_logger()
        st.session_state["logger_configured"] = True


def _mtime(file_path: Path) -> float:
    return file_path.stat().st_mtime if file_path.exists() else 0.0


@st.cache_data(show_spinner=False)
def get_requests(requests_path: str, file_mtime: float) -> List[dict]:
    """Load borrow requests with cache invalidation by mtime."""
    del file_mtime
    return data_loader.load_requests(Path(requests_path))


@st.cache_data(show_spinner=False)
def get_loans(loans_path: str, file_mtime: float) -> List[dict]:
    """Load loans with cache invalidation by mtime."""
    del file_mtime
    return data_loader.load_loans(Path(loans_path))


@st.cache_data(show_spinner=False)
def get_visits(visits_path: str, file_mtime: float) -> List[dict]:
    """Load visit logs with cache invalidation by mtime."""
    del file_mtime
    return data_loader.load_visits(Path(visits_path))


def render_requests_section(requests: List[dict]) -> None:
    st.markdown("### Borrow Requests")
    counts = status_service.count_by_status(
        requests,
        status_service.canonical_request_status,
        [value for value, _ in REQUEST_STATUS_OPTIONS],
    )
    counts["all"] = len(requests)
    selected = render_status_filter(REQUEST_STATUS_OPTIONS, counts, key="requests")

    filtered = filter_service.filter_by_status(requests, selected, status_service.canonical_request_status)
    rows = [
        dict(request, status=status_service.status_label(status_service.canonical_request_status(request)))
        for request in filtered
    ]

    pager = get_pager("requests", DEFAULT_PAGE_SIZE)
    view = pager.sync(rows, DEFAULT_PAGE_SIZE)
    render_page_table(view, REQUEST_TABLE_COLUMNS, empty_message="No borrow requests match this filter.")
    render_pagination(pager, noun="request", key="requests")


def render_loans_section(loans: List[dict], requests: List[dict]) -> None:
    st.markdown("### Active Loans")
    current = data_loader.active_loans(loans)
    pager = get_pager("loans", DEFAULT_PAGE_SIZE)
    view = pager.sync(current, DEFAULT_PAGE_SIZE)
    render_page_table(view, LOAN_TABLE_COLUMNS, empty_message="No active loans.")
    render_pagination(pager, noun="loan", key="loans")

    st.markdown("### Loan History")
    history = data_loader.build_loan_history(loans, requests)
    counts = status_service.count_by_status(
        history,
        status_service.canonical_history_status,
        [value for value, _ in HISTORY_STATUS_OPTIONS],
    )
    counts["all"] = len(history)
    selected = render_status_filter(HISTORY_STATUS_OPTIONS, counts, key="history")
    visible = filter_service.filter_by_status(history, selected, status_service.canonical_history_status)

    pager = get_pager("history", DEFAULT_PAGE_SIZE)
    view = pager.sync(visible, DEFAULT_PAGE_SIZE)
    render_page_table(view, HISTORY_TABLE_COLUMNS, empty_message="No history entries match this filter.")
    render_pagination(pager, noun="record", key="history")


def render_attendance_section(visits: List[dict], data_version: float) -> None:
    st.markdown("### Attendance Logs")
    logs = [data_loader.map_visit_row(row, index) for index, row in enumerate(visits)]

    counts = status_service.count_by_status(
        logs,
        lambda log: log["status"],
        [value for value, _ in VISIT_STATUS_OPTIONS],
    )
    counts["all"] = len(logs)

    filter_col, search_col, size_col = st.columns([3, 3, 1])
    with filter_col:
        selected = render_status_filter(VISIT_STATUS_OPTIONS, counts, key="attendance")
    with search_col:
        term = render_search("attendance", placeholder="Search visitor or branch")
    with size_col:
        page_size = render_page_size_selector("attendance", default=ATTENDANCE_PAGE_SIZE_DEFAULT)

    filtered = filter_service.filter_by_status(logs, selected, lambda log: log["status"])
    filtered = filter_service.search_records(filtered, term, VISIT_SEARCH_FIELDS)

    pager = get_pager("attendance", ATTENDANCE_PAGE_SIZE_DEFAULT)
    view = pager.sync(
        filtered,
        page_size,
        source_key=filter_service.filters_signature(selected, term, data_version),
    )
    render_page_table(view, VISIT_TABLE_COLUMNS, empty_message="No attendance recorded for this filter.")
    render_pagination(pager, noun="visit", key="attendance")


def main() -> None:
    """Render and run the library circulation views."""
    load_css()
    init_session_state()

    try:
        if not DATA_DIR.exists():
            st.error(f"Data directory not found: {DATA_DIR}")
            st.stop()

        requests = get_requests(str(REQUESTS_FILE), _mtime(REQUESTS_FILE))
        loans = get_loans(str(LOANS_FILE), _mtime(LOANS_FILE))
        visits = get_visits(str(VISITS_FILE), _mtime(VISITS_FILE))
    except Exception as exc:  # pragma: no cover - streamlit runtime guard
        logger.exception("Failed to load circulation data")
        st.error(f"Application initialization failed: {exc}")
        st.stop()

    st.title("Library Circulation")
    st.caption(f"{len(requests)} requests | {len(loans)} loans | {len(visits)} visits")

    borrowing_tab, attendance_tab = st.tabs(["Borrowing", "Attendance"])
    with borrowing_tab:
        render_requests_section(requests)
        st.markdown("---")
        render_loans_section(loans, requests)
    with attendance_tab:
        render_attendance_section(visits, _mtime(VISITS_FILE))


if __name__ == "__main__":
    main()
