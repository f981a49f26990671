"""Status tabs and search box for the list views."""

from __future__ import annotations

from typing import Dict, List, Tuple

import streamlit as st


def render_status_filter(
    options: List[Tuple[str, str]],
    counts: Dict[str, int],
    key: str,
) -> str:
    """Render status tabs with counts and return the selected status key."""
    labels = {value: f"{label} ({counts.get(value, 0)})" for value, label in options}
    return st.radio(
        "Status",
        options=[value for value, _ in options],
        format_func=lambda value: labels[value],
        horizontal=True,
        key=f"status_filter_{key}",
        label_visibility="collapsed",
    )


def render_search(key: str, placeholder: str) -> str:
    return st.text_input(
        "Search",
        key=f"search_{key}",
        placeholder=placeholder,
        label_visibility="collapsed",
    )
