from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

log = logging.getLogger(__name__)

STATUS_ALL = "all" # ViewState sentinel: no status filtering
KNOWN_STATUSES = ("Open", "On Progress", "Done", "Canceled") # Offered by forms, never enforced

TEXT_FIELDS = (
    "module_or_feature",
    "activity",
    "technical_detail",
    "obstacle",
    "resolution",
    "status",
    "person_in_charge",
)


def parse_entry_date(value: Any, tz: Optional[dt.tzinfo] = None) -> dt.date:
    """
    Normalizes whatever the remote store sent as an entry date into a plain date.

    Accepts dates, datetimes, ``YYYY-MM-DD`` strings, ISO-8601 timestamps and
    epoch milliseconds. Aware timestamps are moved into ``tz`` (or the system
    zone when ``tz`` is None) before the time component is dropped. Missing or
    unreadable values fall back to today.
    """
    if value is None or value == "":
        return dt.date.today()

    if isinstance(value, dt.datetime):
        moment = value
    elif isinstance(value, dt.date):
        return value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        moment = dt.datetime.fromtimestamp(value / 1000, tz=dt.timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return dt.date.fromisoformat(text)
            moment = dt.datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            log.warning(f"Unreadable entry date {value!r}, using today instead.")
            return dt.date.today()
    else:
        log.warning(f"Unsupported entry date type {type(value).__name__}, using today instead.")
        return dt.date.today()

    if moment.tzinfo is not None:
        moment = moment.astimezone(tz) if tz else moment.astimezone()
    return moment.date()


class Entry(BaseModel):
    """
    One logged activity, as held in the local copy of the logbook.

    Built from raw list payloads through :meth:`from_raw`, which never fails on
    absent fields. Instances are frozen: ``sequence_number`` belongs to the
    remote store.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sequence_number: int = Field(0, alias="no")
    date: dt.date = Field(default_factory=dt.date.today, alias="tanggal")
    module_or_feature: str = Field("", alias="modul_fitur")
    activity: str = Field("", alias="aktivitas")
    technical_detail: str = Field("", alias="detail_teknis")
    obstacle: str = Field("", alias="kendala")
    resolution: str = Field("", alias="solusi")
    status: str = ""
    person_in_charge: str = Field("", alias="pic")

    @field_validator("sequence_number", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> int:
        if value is None or value == "":
            return 0
        try:
            return int(value)
        except (TypeError, ValueError):
            log.warning(f"Unreadable entry number {value!r}, using 0 instead.")
            return 0

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any, info: ValidationInfo) -> dt.date:
        tz = (info.context or {}).get("tz")
        return parse_entry_date(value, tz)

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], tz: Optional[dt.tzinfo] = None) -> "Entry":
        return cls.model_validate(raw, context={"tz": tz})

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def normalize_entries(raws: Iterable[Any], tz: Optional[dt.tzinfo] = None) -> List[Entry]:
    """Normalizes every record of a list response, skipping anything that is not a record."""
    entries = []
    for raw in raws:
        if not isinstance(raw, dict):
            log.warning(f"Skipping non-record item in list response: {raw!r}")
            continue
        entries.append(Entry.from_raw(raw, tz))
    return entries


class EntryDraft(BaseModel):
    """
    The editable part of an entry, submitted on create and update.

    Required text fields must be non-blank once trimmed, and the date may not
    lie in the future.
    """
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    date: dt.date = Field(alias="tanggal")
    module_or_feature: str = Field(alias="modul_fitur", min_length=1)
    activity: str = Field(alias="aktivitas", min_length=1)
    technical_detail: str = Field("", alias="detail_teknis")
    obstacle: str = Field("", alias="kendala")
    resolution: str = Field("", alias="solusi")
    status: str = Field(min_length=1)
    person_in_charge: str = Field(alias="pic", min_length=1)

    @field_validator("date")
    @classmethod
    def _not_in_future(cls, value: dt.date) -> dt.date:
        if value > dt.date.today():
            raise ValueError("date cannot be in the future")
        return value

    @classmethod
    def from_entry(cls, entry: Entry) -> "EntryDraft":
        return cls(**entry.model_dump(exclude={"sequence_number"}))

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ViewState(BaseModel):
    """Client-only view state. Never persisted, mutated only by user interaction."""
    model_config = ConfigDict(validate_assignment=True)

    search_term: str = ""
    status_filter: str = STATUS_ALL
    current_page: int = Field(1, ge=1)
    items_per_page: int = Field(10, gt=0)
