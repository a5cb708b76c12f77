from .filtering import distinct_statuses, filter_entries
from .pagination import ELLIPSIS, Page, paginate, page_window, total_pages
from .sorting import sort_by_date_desc

__all__ = [
    "ELLIPSIS",
    "Page",
    "distinct_statuses",
    "filter_entries",
    "page_window",
    "paginate",
    "sort_by_date_desc",
    "total_pages",
]
