"""
Client-side search and status filtering.
The remote store filters too, but its results are re-checked here with the
same predicate; the two are not assumed to agree.
"""
from typing import Iterable, List

from ..models import STATUS_ALL, Entry

# Fields the free-text search looks at
SEARCH_FIELDS = ("module_or_feature", "activity", "person_in_charge", "technical_detail")


def matches_search(entry: Entry, search_term: str) -> bool:
    term = search_term.casefold()
    if not term:
        return True
    return any(term in getattr(entry, name).casefold() for name in SEARCH_FIELDS)


def matches_status(entry: Entry, status_filter: str) -> bool:
    return status_filter == STATUS_ALL or entry.status == status_filter


def filter_entries(entries: Iterable[Entry], search_term: str = "", status_filter: str = STATUS_ALL) -> List[Entry]:
    """Keeps the entries matching both the search term and the status filter, in input order."""
    return [e for e in entries if matches_search(e, search_term) and matches_status(e, status_filter)]


def distinct_statuses(entries: Iterable[Entry]) -> List[str]:
    """Non-empty status values of the unfiltered collection, in first-seen order."""
    seen = {}
    for entry in entries:
        if entry.status:
            seen.setdefault(entry.status, None)
    return list(seen)
