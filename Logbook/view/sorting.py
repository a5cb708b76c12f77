from typing import Iterable, List

from ..models import Entry


def sort_by_date_desc(entries: Iterable[Entry]) -> List[Entry]:
    # sorted() stays stable with reverse=True, so same-day entries keep their order
    return sorted(entries, key=lambda e: e.date, reverse=True)
