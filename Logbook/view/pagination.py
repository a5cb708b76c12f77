"""
Pagination of the sorted view.

Besides slicing, this builds the page-number bar shown under the table: at most
five numbered slots, with gaps collapsed into an ellipsis marker once there
are more than five pages. Navigation helpers mutate ``ViewState.current_page``
and report whether the page actually changed.
"""
import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, TypeVar, Union

from ..models import ViewState

T = TypeVar("T")

WINDOW_SIZE = 5
ELLIPSIS = "..." # Non-interactive gap marker in the page window

WindowItem = Union[int, str]


def total_pages(item_count: int, items_per_page: int) -> int:
    if items_per_page <= 0:
        raise ValueError("items_per_page must be positive")
    return math.ceil(item_count / items_per_page) if item_count else 0


def clamp_page(current_page: int, pages: int) -> int:
    """Falls back to page 1 whenever the current page no longer exists."""
    if current_page < 1 or current_page > pages:
        return 1
    return current_page


def page_bounds(current_page: int, items_per_page: int, item_count: int) -> Tuple[int, int]:
    """Zero-based ``[first, last)`` offsets of the current page."""
    first = (current_page - 1) * items_per_page
    last = min(first + items_per_page, item_count)
    return first, max(first, last)


def page_slice(items: Sequence[T], current_page: int, items_per_page: int) -> List[T]:
    first, last = page_bounds(current_page, items_per_page, len(items))
    return list(items[first:last])


def page_window(pages: int, current_page: int) -> List[WindowItem]:
    if pages <= WINDOW_SIZE:
        return list(range(1, pages + 1))
    if current_page <= 3:
        return [1, 2, 3, 4, ELLIPSIS, pages]
    if current_page >= pages - 2:
        return [1, ELLIPSIS, pages - 3, pages - 2, pages - 1, pages]
    return [1, ELLIPSIS, current_page - 1, current_page, current_page + 1, ELLIPSIS, pages]


# ----------------------------------------------------------------------
# Navigation
# ----------------------------------------------------------------------
def previous_page(state: ViewState) -> bool:
    if state.current_page > 1:
        state.current_page -= 1
        return True
    return False


def next_page(state: ViewState, pages: int) -> bool:
    if state.current_page < pages:
        state.current_page += 1
        return True
    return False


def go_to_page(state: ViewState, page: int, pages: int) -> bool:
    if 1 <= page <= pages and page != state.current_page:
        state.current_page = page
        return True
    return False


def select_window_item(state: ViewState, item: WindowItem, pages: int) -> bool:
    """Handles a click on the page bar. Ellipsis markers do nothing."""
    if not isinstance(item, int) or isinstance(item, bool):
        return False
    return go_to_page(state, item, pages)


@dataclass
class Page:
    items: List = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 0
    total_items: int = 0
    first_index: int = 0 # zero-based, inclusive
    last_index: int = 0 # zero-based, exclusive
    window: List[WindowItem] = field(default_factory=list)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def showing(self) -> str:
        if not self.total_items:
            return "Showing 0 of 0"
        return f"Showing {self.first_index + 1}-{self.last_index} of {self.total_items}"


def paginate(items: Sequence[T], state: ViewState) -> Page:
    """
    Slices ``items`` for the state's current page.

    The page number is re-validated first: when filtering or a reload shrank
    the page count below it, ``state.current_page`` is reset to 1.
    """
    count = len(items)
    pages = total_pages(count, state.items_per_page)
    clamped = clamp_page(state.current_page, pages)
    if clamped != state.current_page:
        state.current_page = clamped

    first, last = page_bounds(state.current_page, state.items_per_page, count)
    return Page(
        items=list(items[first:last]),
        current_page=state.current_page,
        total_pages=pages,
        total_items=count,
        first_index=first,
        last_index=last,
        window=page_window(pages, state.current_page),
    )
