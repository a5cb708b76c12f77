"""
Plain-text rendering of logbook entries for the terminal.
"""
from datetime import date
from typing import Iterable, List

from .models import Entry
from .view.pagination import ELLIPSIS, Page

EMPTY_MESSAGE = "No entries found"

TABLE_COLUMNS = [
    # (header, width)
    ("No", 5),
    ("Date", 11),
    ("Module / Feature", 20),
    ("Activity", 24),
    ("Technical Detail", 24),
    ("Obstacle", 18),
    ("Resolution", 18),
    ("Status", 12),
    ("PIC", 12),
]


def or_dash(text: str) -> str:
    return text if text else "-"


def format_table_date(value: date) -> str:
    return value.strftime("%d %b %Y") # 02 Jan 2025


def format_long_date(value: date) -> str:
    return f"{value.day} {value.strftime('%B %Y')}" # 2 January 2025


def _fit(text: str, width: int) -> str:
    text = " ".join(text.split()) # Tables are single-line
    if len(text) > width:
        return text[: width - 1] + "…"
    return text.ljust(width)


def _row(cells: Iterable[str]) -> str:
    return " ".join(_fit(cell, width) for cell, (_, width) in zip(cells, TABLE_COLUMNS)).rstrip()


def render_table(entries: Iterable[Entry]) -> str:
    lines = [_row(header for header, _ in TABLE_COLUMNS)]
    lines.append("-" * len(lines[0]))
    rows = [
        _row([
            str(e.sequence_number),
            format_table_date(e.date),
            e.module_or_feature,
            e.activity,
            or_dash(e.technical_detail),
            or_dash(e.obstacle),
            or_dash(e.resolution),
            e.status,
            e.person_in_charge,
        ])
        for e in entries
    ]
    lines.extend(rows or [EMPTY_MESSAGE])
    return "\n".join(lines)


def render_detail(entry: Entry) -> str:
    fields = [
        ("Date", format_long_date(entry.date)),
        ("Module / Feature", entry.module_or_feature),
        ("Activity", entry.activity),
        ("Technical Detail", or_dash(entry.technical_detail)),
        ("Obstacle", or_dash(entry.obstacle)),
        ("Resolution", or_dash(entry.resolution)),
        ("Status", entry.status),
        ("PIC", entry.person_in_charge),
    ]
    width = max(len(label) for label, _ in fields)
    lines: List[str] = [f"Entry No: {entry.sequence_number}"]
    lines.extend(f"{label.ljust(width)} : {value}" for label, value in fields)
    return "\n".join(lines)


def render_page_bar(page: Page) -> str:
    """e.g. ``< 1 ... 4 [5] 6 ... 10 >  Showing 41-50 of 97``"""
    if not page.total_pages:
        return page.showing
    parts = ["<" if page.has_previous else " "]
    for item in page.window:
        if item == ELLIPSIS:
            parts.append(ELLIPSIS)
        elif item == page.current_page:
            parts.append(f"[{item}]")
        else:
            parts.append(str(item))
    parts.append(">" if page.has_next else " ")
    return f"{' '.join(parts)}  {page.showing}"
