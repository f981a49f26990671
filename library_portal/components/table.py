"""Read-only table component for one page of records."""

from __future__ import annotations

from typing import List, Mapping, Sequence

import streamlit as st

from library_portal.services.data_loader import to_frame
from library_portal.utils.pagination import PageView


def render_page_table(view: PageView, columns: List[str], empty_message: str = "No rows available.") -> None:
    """Render the visible page of records as a dataframe."""
    if not view.total_items:
        st.info(empty_message)
        return

    items: Sequence[Mapping] = view.page_items
    st.dataframe(
        to_frame(items, columns),
        hide_index=True,
        width="stretch",
        column_order=columns,
    )
