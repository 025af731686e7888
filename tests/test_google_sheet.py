# tests/test_google_sheet.py
from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from services.date_locator import DateKey
from services.google_sheet import GoogleSheet, open_worksheet

LAYOUT = {
    "name_col": 1,
    "date_row": 1,
    "label_row": 2,
    "first_member_row": 3,
    "first_event_col": 2,
}


def _make_sheet():
    ws = MagicMock()
    ws.title = "Attendance"
    ws.id = 42
    return GoogleSheet(ws, LAYOUT), ws


def test_row_for_skips_header_rows():
    """ヘッダー行の同名セルは無視されること"""
    sheet, ws = _make_sheet()
    ws.col_values.return_value = ["alice", "", "Bob", " Alice "]
    assert sheet.row_for("alice") == 4
    ws.col_values.assert_called_once_with(1)


def test_row_for_missing():
    sheet, ws = _make_sheet()
    ws.col_values.return_value = ["", "", "bob"]
    with pytest.raises(LookupError):
        sheet.row_for("alice")


def test_col_for_reads_date_row():
    sheet, ws = _make_sheet()
    ws.row_values.return_value = ["Name", "3/1/2024", "", "3/8/2024"]
    assert sheet.col_for(DateKey(valid=True, value=date(2024, 3, 8))) == 4
    ws.row_values.assert_called_once_with(1)


def test_read_cell_parses_metadata():
    sheet, ws = _make_sheet()
    ws.spreadsheet.fetch_sheet_metadata.return_value = {
        "sheets": [
            {
                "data": [
                    {
                        "rowData": [
                            {
                                "values": [
                                    {
                                        "formattedValue": "n",
                                        "note": "sick",
                                        "effectiveFormat": {"backgroundColor": {}},
                                    }
                                ]
                            }
                        ]
                    }
                ]
            }
        ]
    }

    cell = sheet.read_cell(3, 2)

    assert (cell.value, cell.note, cell.background) == ("n", "sick", "#000000")
    params = ws.spreadsheet.fetch_sheet_metadata.call_args.kwargs["params"]
    assert params["ranges"] == "'Attendance'!B3"


def test_read_empty_cell():
    """空セル（rowData省略）は空文字・白背景になること"""
    sheet, ws = _make_sheet()
    ws.spreadsheet.fetch_sheet_metadata.return_value = {"sheets": [{"data": [{}]}]}
    cell = sheet.read_cell(3, 2)
    assert (cell.value, cell.note, cell.background) == ("", "", "#ffffff")


def test_read_cell_white_background():
    sheet, ws = _make_sheet()
    ws.spreadsheet.fetch_sheet_metadata.return_value = {
        "sheets": [{"data": [{"rowData": [{"values": [
            {"effectiveFormat": {"backgroundColor": {"red": 1, "green": 1, "blue": 1}}}
        ]}]}]}]
    }
    assert sheet.read_cell(3, 2).background == "#ffffff"


def test_write_cell_single_request():
    """値とメモを1回のbatch_updateで書くこと"""
    sheet, ws = _make_sheet()
    sheet.write_cell(3, 2, "y", "arriving late")

    ws.spreadsheet.batch_update.assert_called_once()
    body = ws.spreadsheet.batch_update.call_args[0][0]
    update = body["requests"][0]["updateCells"]
    assert update["start"] == {"sheetId": 42, "rowIndex": 2, "columnIndex": 1}
    assert update["rows"][0]["values"][0] == {
        "userEnteredValue": {"stringValue": "y"},
        "note": "arriving late",
    }
    assert update["fields"] == "userEnteredValue,note"


def test_event_info():
    sheet, ws = _make_sheet()
    ws.batch_get.return_value = [[["3/1/2024 "]], [["Practice"]]]
    info = sheet.event_info(2)
    assert (info.event_date, info.label) == ("3/1/2024", "Practice")
    ws.batch_get.assert_called_once_with(["B1", "B2"])


def test_event_info_missing_label():
    sheet, ws = _make_sheet()
    ws.batch_get.return_value = [[["3/1/2024"]], []]
    assert sheet.event_info(2).label == ""


def test_open_worksheet_requires_env():
    with patch.dict("os.environ", {}, clear=True):
        with pytest.raises(RuntimeError):
            open_worksheet("sheet-id", "Attendance")


def test_open_worksheet_rejects_bad_json():
    with patch.dict("os.environ", {"GOOGLE_SERVICE_ACCOUNT_JSON": "{not json"}):
        with pytest.raises(RuntimeError, match="Invalid"):
            open_worksheet("sheet-id", "Attendance")


def test_open_worksheet_authorizes():
    with patch.dict("os.environ", {"GOOGLE_SERVICE_ACCOUNT_JSON": '{"type": "service_account"}'}), \
            patch("services.google_sheet.Credentials") as mock_creds, \
            patch("services.google_sheet.gspread") as mock_gspread:
        ws = open_worksheet("sheet-id", "Attendance")

    mock_creds.from_service_account_info.assert_called_once()
    client = mock_gspread.authorize.return_value
    client.open_by_key.assert_called_once_with("sheet-id")
    assert ws is client.open_by_key.return_value.worksheet.return_value
