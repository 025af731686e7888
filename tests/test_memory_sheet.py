from datetime import date

import pytest

from services.date_locator import DateKey
from services.memory_sheet import BLACK, WHITE, MemorySheet


def _sheet():
    return MemorySheet(members=["Alice", "Bob"], events=[("3/1/2024", "Practice")])


def test_row_for_is_case_insensitive():
    assert _sheet().row_for(" alice ") == MemorySheet.FIRST_MEMBER_ROW
    assert _sheet().row_for("BOB") == MemorySheet.FIRST_MEMBER_ROW + 1


def test_row_for_missing_user():
    with pytest.raises(LookupError):
        _sheet().row_for("carol")


def test_col_for_date():
    key = DateKey(valid=True, value=date(2024, 3, 1))
    assert _sheet().col_for(key) == MemorySheet.FIRST_EVENT_COL


def test_empty_cell_defaults():
    cell = _sheet().read_cell(MemorySheet.FIRST_MEMBER_ROW, MemorySheet.FIRST_EVENT_COL)
    assert (cell.value, cell.note, cell.background) == ("", "", WHITE)


def test_write_keeps_background():
    sheet = _sheet()
    row, col = MemorySheet.FIRST_MEMBER_ROW, MemorySheet.FIRST_EVENT_COL
    sheet.black_out(row, col)
    sheet.write_cell(row, col, "n", "sick")
    cell = sheet.read_cell(row, col)
    assert (cell.value, cell.note, cell.background) == ("n", "sick", BLACK)


def test_out_of_range_cell():
    with pytest.raises(IndexError):
        _sheet().read_cell(99, MemorySheet.FIRST_EVENT_COL)
    with pytest.raises(IndexError):
        _sheet().event_info(0)


def test_from_config():
    sheet = MemorySheet.from_config(
        {"members": ["alice"], "events": [{"date": "3/1/2024", "label": "Practice"}]}
    )
    info = sheet.event_info(MemorySheet.FIRST_EVENT_COL)
    assert (info.event_date, info.label) == ("3/1/2024", "Practice")
