from datetime import date

from Logbook.view.sorting import sort_by_date_desc


def test_newest_first(make_entry):
    entries = [make_entry(1, date(2025, 1, 1)), make_entry(2, date(2025, 3, 1)), make_entry(3, date(2025, 2, 1))]
    assert [e.sequence_number for e in sort_by_date_desc(entries)] == [2, 3, 1]


def test_equal_dates_keep_input_order(make_entry):
    same_day = date(2025, 1, 5)
    entries = [
        make_entry(10, same_day),
        make_entry(4, date(2025, 1, 6)),
        make_entry(7, same_day),
        make_entry(1, same_day),
        make_entry(2, date(2025, 1, 4)),
    ]
    assert [e.sequence_number for e in sort_by_date_desc(entries)] == [4, 10, 7, 1, 2]


def test_returns_new_list(make_entry):
    entries = [make_entry(1, date(2025, 1, 1)), make_entry(2, date(2025, 1, 2))]
    result = sort_by_date_desc(entries)
    assert result is not entries
    assert [e.sequence_number for e in entries] == [1, 2]
