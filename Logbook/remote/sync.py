"""
Remote synchronization for the logbook.

The SyncManager owns the authoritative local copy of the logbook. It is
replaced wholesale on every successful fetch and never patched in place:
after each successful create/update/delete the whole collection is fetched
again, so the local copy always mirrors a confirmed server read.
"""
import datetime as dt
import itertools
import logging
import threading
from typing import Optional, Tuple

from ..errors import TransportError
from ..models import STATUS_ALL, Entry, EntryDraft, normalize_entries
from ..notifications import Notifier
from .transport import LogbookApiClient, RemoteResult

log = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load logbook entries"
CREATE_FAILED = "Failed to add entry"
UPDATE_FAILED = "Failed to update entry"
DELETE_FAILED = "Failed to delete entry"

CREATED = "Entry added"
UPDATED = "Entry updated"
DELETED = "Entry deleted"


class SyncManager:
    def __init__(
        self,
        client: LogbookApiClient,
        notifier: Optional[Notifier] = None,
        tz: Optional[dt.tzinfo] = None,
        fetch_limit: int = 99999,
    ):
        self.client = client
        self.notifier = notifier or Notifier()
        self.tz = tz
        self.fetch_limit = fetch_limit

        self._entries: Tuple[Entry, ...] = ()
        self._lock = threading.Lock()
        self._tickets = itertools.count(1)
        self._latest_ticket = 0
        self._in_flight = 0
        self._query = ("", STATUS_ALL) # Used by the refresh that follows a mutation

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def entries(self) -> Tuple[Entry, ...]:
        return self._entries

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def find(self, sequence_number: int) -> Optional[Entry]:
        return next((e for e in self._entries if e.sequence_number == sequence_number), None)

    def set_query(self, search_term: str, status_filter: str):
        """Sets the query used by refresh() when it is called without arguments."""
        self._query = (search_term or "", status_filter or STATUS_ALL)

    def _enter(self):
        # Caller holds self._lock
        self._in_flight += 1

    def _begin(self) -> int:
        with self._lock:
            self._enter()
            ticket = next(self._tickets)
            self._latest_ticket = ticket
            return ticket

    def _end(self):
        with self._lock:
            self._in_flight -= 1

    def _apply(self, ticket: int, entries: Tuple[Entry, ...]) -> bool:
        with self._lock:
            if ticket != self._latest_ticket:
                log.info(f"Discarding list response #{ticket}; #{self._latest_ticket} is newer.")
                return False
            self._entries = entries
            return True

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def refresh(self, search_term: Optional[str] = None, status_filter: Optional[str] = None) -> bool:
        """
        Fetches the whole collection and replaces the local copy with it.

        Without arguments the last query is repeated. On failure the local copy
        is cleared and an error notification is raised. Returns True when the
        fetch succeeded.
        """
        if search_term is None and status_filter is None:
            search_term, status_filter = self._query
        else:
            self.set_query(search_term, status_filter)
            search_term, status_filter = self._query

        ticket = self._begin()
        try:
            try:
                result = self.client.list_entries(
                    search_term=search_term, status_filter=status_filter, page=1, limit=self.fetch_limit
                )
            except TransportError as e:
                log.error(f"Loading logbook entries failed: {e}", exc_info=True)
                return self._fail_refresh(ticket, None)

            if not result.ok:
                return self._fail_refresh(ticket, result.message)

            raws = result.data if isinstance(result.data, list) else []
            entries = tuple(normalize_entries(raws, self.tz))
            if self._apply(ticket, entries):
                log.info(f"Loaded {len(entries)} logbook entries.")
            return True
        finally:
            self._end()

    def _fail_refresh(self, ticket: int, message: Optional[str]) -> bool:
        if self._apply(ticket, ()):
            self.notifier.error(message or LOAD_FAILED)
        return False

    def create(self, draft: EntryDraft) -> bool:
        log.info(f"Creating entry '{draft.activity}' ({draft.date.isoformat()})")
        result = self._submit(lambda: self.client.create_entry(draft.to_payload()), CREATE_FAILED)
        if result is None:
            return False
        self.notifier.success(CREATED)
        self.refresh()
        return True

    def update(self, sequence_number: int, draft: EntryDraft) -> bool:
        log.info(f"Updating entry #{sequence_number}")
        result = self._submit(lambda: self.client.update_entry(sequence_number, draft.to_payload()), UPDATE_FAILED)
        if result is None:
            return False
        self.notifier.success(result.message or UPDATED)
        self.refresh()
        return True

    def delete(self, sequence_number: int) -> bool:
        log.info(f"Deleting entry #{sequence_number}")
        result = self._submit(lambda: self.client.delete_entry(sequence_number), DELETE_FAILED)
        if result is None:
            return False
        self.notifier.success(DELETED)
        self.refresh()
        return True

    def _submit(self, call, fallback: str) -> Optional[RemoteResult]:
        """Runs one mutation round trip. Returns the result only when the store accepted it."""
        with self._lock:
            self._enter()
        try:
            result = call()
        except TransportError as e:
            log.error(f"{fallback}: {e}", exc_info=True)
            self.notifier.error(fallback)
            return None
        finally:
            self._end()

        if not result.ok:
            self.notifier.error(result.message or fallback)
            return None
        return result
