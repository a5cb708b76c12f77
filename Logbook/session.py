"""
A logbook browsing session: the ViewState plus everything derived from it.

Every accessor recomputes its view from the SyncManager's current snapshot,
so callers never hold on to stale rows.
"""
import logging
from datetime import date
from typing import List, Optional

from .config import Settings
from .export import ExportArtifact, build_export
from .models import Entry, EntryDraft, ViewState
from .notifications import Notifier
from .remote.sync import SyncManager
from .remote.transport import LogbookApiClient
from .view.filtering import distinct_statuses, filter_entries
from .view.pagination import (
    Page,
    WindowItem,
    go_to_page,
    next_page,
    paginate,
    previous_page,
    select_window_item,
    total_pages,
)
from .view.sorting import sort_by_date_desc

log = logging.getLogger(__name__)


class LogbookSession:
    def __init__(self, sync: SyncManager, items_per_page: int = 10):
        self.sync = sync
        self.state = ViewState(items_per_page=items_per_page)

    @classmethod
    def from_settings(cls, settings: Settings, notifier: Optional[Notifier] = None) -> "LogbookSession":
        sync = SyncManager(
            LogbookApiClient.from_settings(settings),
            notifier=notifier,
            tz=settings.tzinfo,
            fetch_limit=settings.remote_fetch_limit,
        )
        return cls(sync, items_per_page=settings.items_per_page)

    @property
    def notifier(self) -> Notifier:
        return self.sync.notifier

    @property
    def is_loading(self) -> bool:
        return self.sync.is_loading

    # --- Remote ---
    def load(self) -> bool:
        return self.sync.refresh(self.state.search_term, self.state.status_filter)

    def _sync_query(self):
        # The refresh after a mutation must fetch with the current filters
        self.sync.set_query(self.state.search_term, self.state.status_filter)

    def create_entry(self, draft: EntryDraft) -> bool:
        self._sync_query()
        return self.sync.create(draft)

    def update_entry(self, sequence_number: int, draft: EntryDraft) -> bool:
        self._sync_query()
        return self.sync.update(sequence_number, draft)

    def delete_entry(self, sequence_number: int) -> bool:
        self._sync_query()
        return self.sync.delete(sequence_number)

    def find_entry(self, sequence_number: int) -> Optional[Entry]:
        return self.sync.find(sequence_number)

    # --- View state ---
    def set_search_term(self, term: str):
        self.state.search_term = term

    def set_status_filter(self, status: str):
        self.state.status_filter = status

    # --- Derived views ---
    def filtered_entries(self) -> List[Entry]:
        return filter_entries(self.sync.entries, self.state.search_term, self.state.status_filter)

    def sorted_entries(self) -> List[Entry]:
        return sort_by_date_desc(self.filtered_entries())

    def current_page(self) -> Page:
        return paginate(self.sorted_entries(), self.state)

    def status_options(self) -> List[str]:
        return distinct_statuses(self.sync.entries)

    def _total_pages(self) -> int:
        return total_pages(len(self.filtered_entries()), self.state.items_per_page)

    # --- Navigation ---
    def previous_page(self) -> bool:
        return previous_page(self.state)

    def next_page(self) -> bool:
        return next_page(self.state, self._total_pages())

    def go_to_page(self, page: int) -> bool:
        return go_to_page(self.state, page, self._total_pages())

    def select_page(self, item: WindowItem) -> bool:
        return select_window_item(self.state, item, self._total_pages())

    # --- Export ---
    def export(self, today: Optional[date] = None) -> ExportArtifact:
        artifact = build_export(self.filtered_entries(), today)
        self.notifier.success("Data exported")
        return artifact
