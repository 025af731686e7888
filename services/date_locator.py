# services/date_locator.py
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional

# 年なし(m/d)の日付がこれ以上過去なら翌年とみなす
YEARLESS_LOOKBACK_DAYS = 180


class ParseResult(Enum):
    RESOLVED = "resolved"
    ADD_TO_REASON = "add_to_reason"


@dataclass(frozen=True)
class DateKey:
    valid: bool
    value: Optional[date]


def _today() -> date:
    """テスト時にモック可能"""
    return date.today()


def _parse_slash_date(token: str, today: date) -> Optional[date]:
    parts = token.split("/")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        return None

    month, day = int(parts[0]), int(parts[1])
    if len(parts) == 3:
        year = int(parts[2])
        if len(parts[2]) <= 2:
            year += 2000
        return date(year, month, day)

    candidate = date(today.year, month, day)
    if candidate < today - timedelta(days=YEARLESS_LOOKBACK_DAYS):
        candidate = date(today.year + 1, month, day)
    return candidate


class DateLocator:
    """コマンドの先頭トークンを日付キーに変換する"""

    def __init__(self):
        self._key = DateKey(valid=False, value=None)

    @property
    def key(self) -> DateKey:
        return self._key

    def is_valid(self) -> bool:
        return self._key.valid

    def initialize(self, token: str) -> ParseResult:
        """日付として解釈できればRESOLVED、できなければADD_TO_REASON（例外は出さない）"""
        token = (token or "").strip()
        parsed = None
        try:
            if "-" in token:
                parsed = datetime.strptime(token, "%Y-%m-%d").date()
            elif "/" in token:
                parsed = _parse_slash_date(token, _today())
        except (ValueError, OverflowError):
            parsed = None

        if parsed is None:
            self._key = DateKey(valid=False, value=None)
            return ParseResult.ADD_TO_REASON

        self._key = DateKey(valid=True, value=parsed)
        return ParseResult.RESOLVED


def parse_header_date(text: str) -> date:
    """シートのヘッダー日付(m/d/yyyy または yyyy-mm-dd)をdateに変換する"""
    text = (text or "").strip()
    for fmt in ("%m/%d/%Y", "%Y-%m-%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"unrecognized event date: {text!r}")


def find_event_col(headers: dict[int, str], date_key: DateKey) -> int:
    """列番号→ヘッダー日付の対応から、日付キーに合う列を探す

    無効なキーは「今日以降で最初のイベント」を意味する。
    解釈できないヘッダーは読み飛ばす。
    """
    dated = []
    for col, text in headers.items():
        try:
            dated.append((parse_header_date(text), col))
        except ValueError:
            continue
    dated.sort()

    if date_key.valid:
        for event_date, col in dated:
            if event_date == date_key.value:
                return col
        raise LookupError(
            f"No event found on {date_key.value.month}/{date_key.value.day}/{date_key.value.year}"
        )

    today = _today()
    for event_date, col in dated:
        if event_date >= today:
            return col
    raise LookupError("No upcoming events found")
