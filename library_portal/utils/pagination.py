"""Pagination helpers for windowed list views.

A ``Pager`` owns the page cursor of one view. Every read is recomputed from
the current source, page size and cursor, so the visible slice and the page
count can never disagree. Invalid input is absorbed into safe defaults
(empty source, page size 1, page 1) instead of raising, because the callers
are list views that must always render something.
"""

from __future__ import annotations

import itertools
import math
import numbers
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Optional, Tuple, Union

import pandas as pd
from loguru import logger

from library_portal.config import DEFAULT_PAGE_SIZE

PageItems = Union[list, pd.DataFrame]
PageTarget = Union[int, float, Callable[[int], Any]]


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def normalize_page_size(value: object) -> int:
    """Return the effective page size, substituting 1 for invalid values."""
    if value is None:
        return 1
    try:
        numeric = float(value)
    except (TypeError, ValueError, OverflowError):
        return 1
    if not math.isfinite(numeric) or numeric <= 0:
        return 1
    # Sizes in (0, 1) floor to 0, which is still invalid.
    return max(1, math.floor(numeric))


def validate_page_size(value: object) -> Tuple[bool, str, int]:
    """Validate a page size and return the normalized value either way."""
    normalized = normalize_page_size(value)
    try:
        numeric = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return False, "page_size must be a number.", normalized

    if not math.isfinite(numeric):
        return False, "page_size must be a finite number.", normalized
    if numeric < 1:
        return False, "page_size must be at least 1.", normalized
    return True, "", normalized


def normalize_items(source: object) -> Union[Sequence, pd.DataFrame]:
    """Return the source if it is list-like, otherwise an empty list."""
    if isinstance(source, pd.DataFrame):
        return source
    if isinstance(source, (str, bytes, bytearray)):
        return []
    if isinstance(source, Sequence):
        return source
    return []


def compute_total_pages(total_rows: int, page_size: int) -> int:
    """Compute the total number of pages for the provided page size."""
    if page_size <= 0:
        return 1
    return max(1, math.ceil(total_rows / page_size))


def clamp_page_number(page_number: int, total_pages: int) -> int:
    """Clamp page number to valid bounds."""
    return min(max(page_number, 1), max(total_pages, 1))


def page_slice(page_number: int, page_size: int) -> Tuple[int, int]:
    """Return start/end row offsets for the selected page."""
    start = (page_number - 1) * page_size
    end = start + page_size
    return start, end


def source_snapshot(items: Union[Sequence, pd.DataFrame]) -> Any:
    """Capture a source so a later sync can tell whether it changed.

    Sequences are copied shallowly into a tuple. DataFrames are copied, so an
    in-place edit of the caller's frame still counts as a change.
    """
    try:
        if isinstance(items, pd.DataFrame):
            return items.copy()
        return tuple(items)
    except Exception as exc:
        logger.debug("Source could not be captured ({}), treating it as new", type(exc).__name__)
        return object()


def _values_match(left: object, right: object) -> bool:
    if left is right:
        return True
    try:
        return bool(left == right)
    except Exception:
        # Ambiguous or failing comparisons (arrays, broken __eq__) count as different.
        return False


def same_source(previous: Any, current: Any) -> bool:
    """Return True only when two snapshots certainly hold the same rows in order."""
    if isinstance(previous, pd.DataFrame) or isinstance(current, pd.DataFrame):
        if not (isinstance(previous, pd.DataFrame) and isinstance(current, pd.DataFrame)):
            return False
        try:
            return bool(previous.equals(current))
        except Exception:
            return False
    if not (isinstance(previous, tuple) and isinstance(current, tuple)):
        return False
    if len(previous) != len(current):
        return False
    return all(_values_match(left, right) for left, right in zip(previous, current))


def _take(items: Union[Sequence, pd.DataFrame], start: int, end: int) -> PageItems:
    if isinstance(items, pd.DataFrame):
        return items.iloc[start:end]
    try:
        return list(items[start:end])
    except TypeError:
        # Sequences without slice support, e.g. deque.
        return list(itertools.islice(items, start, end))


@dataclass(frozen=True, eq=False)
class PageView:
    """Read-only window over the current page.

    Views compare equal when their counters match and their page items hold
    the same rows, so DataFrame slices compare by content.
    """

    page: int
    page_count: int
    page_size: int
    total_items: int
    page_items: PageItems
    showing_start: int
    showing_end: int
    is_first_page: bool
    is_last_page: bool

    def _counters(self) -> Tuple:
        return (
            self.page,
            self.page_count,
            self.page_size,
            self.total_items,
            self.showing_start,
            self.showing_end,
            self.is_first_page,
            self.is_last_page,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PageView):
            return NotImplemented
        if self._counters() != other._counters():
            return False
        left, right = self.page_items, other.page_items
        if not isinstance(left, pd.DataFrame):
            left = tuple(left)
        if not isinstance(right, pd.DataFrame):
            right = tuple(right)
        return same_source(left, right)


class Pager:
    """Session-scoped page cursor for one list view.

    The cursor starts at 1 and resets to 1 whenever the source identity or
    the effective page size changes. Source identity is the caller-supplied
    ``source_key`` when one is given, otherwise a snapshot of the items
    compared row by row. Any doubt about the comparison counts as a change.
    Navigation re-clamps into ``[1, page_count]``.
    """

    def __init__(
        self,
        source_items: object = None,
        page_size: object = DEFAULT_PAGE_SIZE,
        source_key: Optional[Hashable] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._items: Union[Sequence, pd.DataFrame] = []
        self._page_size = 1
        self._synced = False
        self._source_key: Optional[Hashable] = None
        self._snapshot: Any = None
        self._page = 1
        self.sync(source_items, page_size, source_key=source_key)

    def sync(
        self,
        source_items: object,
        page_size: object = None,
        source_key: Optional[Hashable] = None,
    ) -> PageView:
        """Point the pager at the latest source and return the current view.

        ``page_size=None`` keeps the current size.
        """
        items = normalize_items(source_items)
        with self._lock:
            size = self._page_size if page_size is None else normalize_page_size(page_size)
            first_sync = not self._synced
            if source_key is not None:
                snapshot = None
                source_changed = self._snapshot is not None or not _values_match(source_key, self._source_key)
            else:
                snapshot = source_snapshot(items)
                source_changed = self._snapshot is None or not same_source(self._snapshot, snapshot)
            source_changed = first_sync or source_changed
            size_changed = size != self._page_size

            self._items = items
            self._page_size = size
            self._source_key = source_key
            self._snapshot = snapshot
            self._synced = True

            if source_changed or size_changed:
                if not first_sync and self._page != 1:
                    logger.debug(
                        "Resetting pager from page {} (source_changed={}, size_changed={})",
                        self._page,
                        source_changed,
                        size_changed,
                    )
                self._page = 1
            else:
                self._page = clamp_page_number(self._page, self.page_count)
            return self._build_view()

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total_items(self) -> int:
        return len(self._items)

    @property
    def page_count(self) -> int:
        return compute_total_pages(len(self._items), self._page_size)

    @property
    def page(self) -> int:
        with self._lock:
            return clamp_page_number(self._page, self.page_count)

    @property
    def view(self) -> PageView:
        with self._lock:
            return self._build_view()

    def go_to_page(self, target: PageTarget) -> PageView:
        """Move to a literal page or to ``target(current_page)``.

        Non-finite and non-numeric results leave the cursor unchanged.
        """
        with self._lock:
            previous = self._page
            if isinstance(target, numbers.Real) and not isinstance(target, bool):
                candidate = target
            elif callable(target):
                candidate = target(previous)
            else:
                logger.debug("Ignoring page target of type {}", type(target).__name__)
                return self._build_view()

            if not _is_finite_number(candidate):
                logger.debug("Ignoring non-finite page target of type {}", type(candidate).__name__)
                return self._build_view()

            page_count = self.page_count
            if candidate <= 1:
                self._page = 1
            elif candidate >= page_count:
                self._page = page_count
            else:
                self._page = math.floor(candidate + 0.5)
            return self._build_view()

    set_page = go_to_page

    def next_page(self) -> PageView:
        return self.go_to_page(lambda prev: prev + 1)

    def prev_page(self) -> PageView:
        return self.go_to_page(lambda prev: prev - 1)

    def reset(self) -> PageView:
        """Return to the first page without touching the source."""
        with self._lock:
            self._page = 1
            return self._build_view()

    def _build_view(self) -> PageView:
        items = self._items
        size = self._page_size
        total = len(items)
        page_count = compute_total_pages(total, size)
        page = clamp_page_number(self._page, page_count)

        if total:
            start, end = page_slice(page, size)
            page_items = _take(items, start, end)
        else:
            start = 0
            page_items = _take(items, 0, 0)

        return PageView(
            page=page,
            page_count=page_count,
            page_size=size,
            total_items=total,
            page_items=page_items,
            showing_start=start + 1 if total else 0,
            showing_end=min(total, start + len(page_items)) if total else 0,
            is_first_page=page <= 1,
            is_last_page=page >= page_count,
        )


def create(source_items: object, page_size: object = DEFAULT_PAGE_SIZE) -> Pager:
    """Create a pager synced to ``source_items``."""
    return Pager(source_items, page_size)
