"""Pagination footer and rows-per-page selector."""

from __future__ import annotations

import streamlit as st

from library_portal.config import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS
from library_portal.utils.pagination import PageView, Pager


def describe_range(view: PageView, noun: str, loading: bool = False) -> str:
    """Return the "Showing a-b of n items" caption."""
    if loading:
        return "Loading..."
    suffix = "" if view.total_items == 1 else "s"
    return f"Showing {view.showing_start}-{view.showing_end} of {view.total_items} {noun}{suffix}"


def describe_page(view: PageView) -> str:
    return f"Page {view.page} of {view.page_count}"


def get_pager(key: str, page_size: int = DEFAULT_PAGE_SIZE) -> Pager:
    """Return the pager stored for a view, creating it on first use."""
    state_key = f"pager_{key}"
    if state_key not in st.session_state:
        st.session_state[state_key] = Pager(page_size=page_size)
    return st.session_state[state_key]


def render_page_size_selector(key: str, default: int = DEFAULT_PAGE_SIZE) -> int:
    """Render the rows-per-page dropdown and return the chosen size."""
    options = sorted(set(PAGE_SIZE_OPTIONS) | {default})
    return st.selectbox(
        "Rows per page",
        options=options,
        index=options.index(default),
        key=f"page_size_{key}",
    )


def render_pagination(pager: Pager, noun: str, key: str) -> None:
    """Render Prev/Next controls with range and page captions."""
    view = pager.view
    if not view.total_items:
        return

    caption_col, prev_col, page_col, next_col = st.columns([4, 1, 2, 1])
    with caption_col:
        st.caption(describe_range(view, noun))
    with prev_col:
        st.button(
            "Prev",
            key=f"{key}_prev",
            disabled=view.is_first_page,
            on_click=pager.prev_page,
        )
    with page_col:
        st.caption(describe_page(view))
    with next_col:
        st.button(
            "Next",
            key=f"{key}_next",
            disabled=view.is_last_page,
            on_click=pager.next_page,
        )
