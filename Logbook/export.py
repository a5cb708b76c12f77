"""
CSV export of the filtered logbook view.

Exports cover every entry matching the current search and status filter,
not just the visible page. Every field is quoted and embedded quotes are
doubled, so free text containing commas, quotes or line breaks survives a
round trip through a spreadsheet.
"""
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

import polars as pl

from .models import Entry

log = logging.getLogger(__name__)

# (header label, Entry attribute) in export order
EXPORT_COLUMNS = [
    ("No", "sequence_number"),
    ("Date", "date"),
    ("Module/Feature", "module_or_feature"),
    ("Activity", "activity"),
    ("Technical Detail", "technical_detail"),
    ("Obstacle", "obstacle"),
    ("Resolution", "resolution"),
    ("Status", "status"),
    ("PIC", "person_in_charge"),
]

CSV_MEDIA_TYPE = "text/csv;charset=utf-8"


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    content: str
    media_type: str = CSV_MEDIA_TYPE


def _cell(value) -> str:
    return value.isoformat() if isinstance(value, date) else str(value)


def entries_to_frame(entries: Iterable[Entry]) -> pl.DataFrame:
    rows = list(entries)
    data = {label: [_cell(getattr(e, attr)) for e in rows] for label, attr in EXPORT_COLUMNS}
    return pl.DataFrame(data, schema={label: pl.Utf8 for label, _ in EXPORT_COLUMNS})


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def entries_to_csv(entries: Iterable[Entry]) -> str:
    header = ",".join(_quote(label) for label, _ in EXPORT_COLUMNS)
    body = entries_to_frame(entries).write_csv(include_header=False, quote_style="always")
    return f"{header}\n{body}"


def export_filename(today: Optional[date] = None) -> str:
    return f"logbook_{(today or date.today()).isoformat()}.csv"


def build_export(entries: Iterable[Entry], today: Optional[date] = None) -> ExportArtifact:
    rows = list(entries)
    artifact = ExportArtifact(filename=export_filename(today), content=entries_to_csv(rows))
    log.info(f"Exported {len(rows)} entries as {artifact.filename}")
    return artifact


def write_export(artifact: ExportArtifact, directory: Path) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / artifact.filename
    path.write_text(artifact.content, encoding="utf-8")
    log.info(f"Wrote export to {path}")
    return path
