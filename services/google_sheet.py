# services/google_sheet.py
import json
import logging
import os

import gspread
from google.oauth2.service_account import Credentials
from gspread.utils import rowcol_to_a1

from services.date_locator import DateKey, find_event_col
from services.sheet_interface import CellState, EventInfo, SheetInterface

log = logging.getLogger(__name__)

ENV_KEY = "GOOGLE_SERVICE_ACCOUNT_JSON"
SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

CELL_FIELDS = "sheets(data(rowData(values(formattedValue,note,effectiveFormat(backgroundColor)))))"


def open_worksheet(spreadsheet_id: str, worksheet: str) -> gspread.Worksheet:
    """サービスアカウント(環境変数のJSON)でワークシートを開く"""
    creds_json = os.getenv(ENV_KEY)
    if not creds_json:
        raise RuntimeError(
            f"Environment variable {ENV_KEY} not found. "
            "Set it to the full JSON payload of your service account key."
        )
    try:
        info = json.loads(creds_json)
    except json.JSONDecodeError as exc:
        raise RuntimeError("Invalid service account JSON payload.") from exc

    creds = Credentials.from_service_account_info(info, scopes=SCOPES)
    client = gspread.authorize(creds)
    log.debug("Opening worksheet %s / %s", spreadsheet_id, worksheet)
    return client.open_by_key(spreadsheet_id).worksheet(worksheet)


def _to_hex(color: dict) -> str:
    """Sheets APIのRGB(0〜1、0の成分は省略される)を#rrggbbに変換"""
    return "#" + "".join(
        f"{round(color.get(k, 0) * 255):02x}" for k in ("red", "green", "blue")
    )


def _first_value(value_range) -> str:
    return value_range[0][0] if value_range and value_range[0] else ""


class GoogleSheet(SheetInterface):
    """gspreadによる出欠シートアダプタ"""

    def __init__(self, worksheet: gspread.Worksheet, layout: dict):
        self._ws = worksheet
        self._name_col = layout["name_col"]
        self._date_row = layout["date_row"]
        self._label_row = layout["label_row"]
        self._first_member_row = layout["first_member_row"]
        self._first_event_col = layout["first_event_col"]

    def row_for(self, username: str) -> int:
        wanted = (username or "").strip().lower()
        names = self._ws.col_values(self._name_col)
        for row, name in enumerate(names, start=1):
            if row < self._first_member_row:
                continue
            if (name or "").strip().lower() == wanted:
                return row
        raise LookupError(f"Couldn't find user {username} in the attendance sheet")

    def col_for(self, date_key: DateKey) -> int:
        dates = self._ws.row_values(self._date_row)
        headers = {
            col: text
            for col, text in enumerate(dates, start=1)
            if col >= self._first_event_col and (text or "").strip()
        }
        return find_event_col(headers, date_key)

    def read_cell(self, row: int, col: int) -> CellState:
        a1 = rowcol_to_a1(row, col)
        metadata = self._ws.spreadsheet.fetch_sheet_metadata(
            params={"ranges": f"'{self._ws.title}'!{a1}", "fields": CELL_FIELDS}
        )
        try:
            values = metadata["sheets"][0]["data"][0]["rowData"][0]["values"][0]
        except (KeyError, IndexError):
            # 空セルは rowData ごと省略される
            values = {}

        background = values.get("effectiveFormat", {}).get("backgroundColor")
        return CellState(
            value=values.get("formattedValue", ""),
            note=values.get("note", ""),
            background=_to_hex(background) if background is not None else "#ffffff",
        )

    def write_cell(self, row: int, col: int, value: str, note: str) -> None:
        # 値とメモは1リクエストで更新する（片方だけ書かれることはない）
        body = {
            "requests": [
                {
                    "updateCells": {
                        "start": {
                            "sheetId": self._ws.id,
                            "rowIndex": row - 1,
                            "columnIndex": col - 1,
                        },
                        "rows": [
                            {"values": [{"userEnteredValue": {"stringValue": value}, "note": note}]}
                        ],
                        "fields": "userEnteredValue,note",
                    }
                }
            ]
        }
        self._ws.spreadsheet.batch_update(body)

    def event_info(self, col: int) -> EventInfo:
        date_range, label_range = self._ws.batch_get(
            [rowcol_to_a1(self._date_row, col), rowcol_to_a1(self._label_row, col)]
        )
        return EventInfo(
            event_date=_first_value(date_range).strip(),
            label=_first_value(label_range).strip(),
        )
