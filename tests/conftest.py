"""
Shared fixtures: entry factories and an in-memory stand-in for the HTTP client.
"""
from datetime import date

import pytest

from Logbook.errors import TransportError
from Logbook.models import Entry, EntryDraft
from Logbook.notifications import Notifier
from Logbook.remote.sync import SyncManager
from Logbook.remote.transport import RemoteResult


def _raw_entry(no, day="2025-01-02", **overrides):
    raw = {
        "no": no,
        "tanggal": day,
        "modul_fitur": f"Module {no}",
        "aktivitas": f"Activity {no}",
        "detail_teknis": "",
        "kendala": "",
        "solusi": "",
        "status": "Open",
        "pic": "Rina",
    }
    raw.update(overrides)
    return raw


class FakeClient:
    """Plays the remote store: keeps raw records and answers like the HTTP client would."""

    def __init__(self, records=None):
        self.records = list(records or [])
        self.calls = []
        self.list_error = None # TransportError to raise on list
        self.list_result = None # RemoteResult to return instead of the records
        self.mutation_result = None # RemoteResult for create/update/delete
        self.mutation_error = None
        self.closed = False

    def list_entries(self, search_term="", status_filter="all", page=1, limit=99999):
        self.calls.append(("list", search_term, status_filter))
        if self.list_error:
            raise self.list_error
        if self.list_result:
            return self.list_result
        return RemoteResult(ok=True, status_code=200, data=[dict(r) for r in self.records])

    def _mutate(self, name, *args):
        self.calls.append((name,) + args)
        if self.mutation_error:
            raise self.mutation_error
        return self.mutation_result

    def create_entry(self, payload):
        result = self._mutate("create", payload)
        if result is not None:
            return result
        no = max((r["no"] for r in self.records), default=0) + 1
        self.records.append(dict(payload, no=no))
        return RemoteResult(ok=True, status_code=201, message="created")

    def update_entry(self, sequence_number, payload):
        result = self._mutate("update", sequence_number, payload)
        if result is not None:
            return result
        self.records = [dict(payload, no=r["no"]) if r["no"] == sequence_number else r for r in self.records]
        return RemoteResult(ok=True, status_code=200, message="Logbook updated")

    def delete_entry(self, sequence_number):
        result = self._mutate("delete", sequence_number)
        if result is not None:
            return result
        self.records = [r for r in self.records if r["no"] != sequence_number]
        return RemoteResult(ok=True, status_code=200)

    def close(self):
        self.closed = True


@pytest.fixture
def make_entry():
    def _make(no, day=date(2025, 1, 2), **fields):
        fields.setdefault("module_or_feature", f"Module {no}")
        fields.setdefault("activity", f"Activity {no}")
        fields.setdefault("status", "Open")
        fields.setdefault("person_in_charge", "Rina")
        return Entry(sequence_number=no, date=day, **fields)
    return _make


@pytest.fixture
def draft():
    return EntryDraft(
        date=date(2025, 1, 3),
        module_or_feature="Billing",
        activity="Fix invoice rounding",
        technical_detail="Use Decimal",
        status="Done",
        person_in_charge="Budi",
    )


@pytest.fixture
def fake_client():
    return FakeClient([_raw_entry(1, "2025-01-01"), _raw_entry(2, "2025-01-02", status="Done")])


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def sync(fake_client, notifier):
    return SyncManager(fake_client, notifier=notifier)


@pytest.fixture
def transport_error():
    return TransportError("GET http://test/logbook/list failed: connection refused", url="http://test/logbook/list")


@pytest.fixture
def raw_entry():
    return _raw_entry
