from services.date_locator import DateKey, find_event_col
from services.sheet_interface import CellState, EventInfo, SheetInterface

WHITE = "#ffffff"
BLACK = "#000000"


class MemorySheet(SheetInterface):
    """メモリ上の出欠グリッド（テスト・動作確認用）

    1行目が日付、2行目がイベント名、3行目以降がメンバー。
    1列目が名前、2列目以降がイベント。
    """

    DATE_ROW = 1
    LABEL_ROW = 2
    FIRST_MEMBER_ROW = 3
    FIRST_EVENT_COL = 2

    def __init__(self, members: list[str], events: list[tuple[str, str]]):
        self._members = list(members)
        self._events = list(events)
        self._cells: dict[tuple[int, int], CellState] = {}
        self.writes: list[tuple[int, int, str, str]] = []

    @classmethod
    def from_config(cls, memory_config: dict) -> "MemorySheet":
        events = [(e["date"], e.get("label", "")) for e in memory_config.get("events", [])]
        return cls(members=memory_config.get("members", []), events=events)

    def row_for(self, username: str) -> int:
        wanted = (username or "").strip().lower()
        for i, name in enumerate(self._members):
            if name.strip().lower() == wanted:
                return self.FIRST_MEMBER_ROW + i
        raise LookupError(f"Couldn't find user {username} in the attendance sheet")

    def col_for(self, date_key: DateKey) -> int:
        headers = {
            self.FIRST_EVENT_COL + i: event_date
            for i, (event_date, _) in enumerate(self._events)
        }
        return find_event_col(headers, date_key)

    def read_cell(self, row: int, col: int) -> CellState:
        self._check_bounds(row, col)
        return self._cells.get((row, col), CellState(value="", note="", background=WHITE))

    def write_cell(self, row: int, col: int, value: str, note: str) -> None:
        current = self.read_cell(row, col)
        self._cells[(row, col)] = CellState(value=value, note=note, background=current.background)
        self.writes.append((row, col, value, note))

    def event_info(self, col: int) -> EventInfo:
        if not (self.FIRST_EVENT_COL <= col < self.FIRST_EVENT_COL + len(self._events)):
            raise IndexError(f"col {col} out of range")
        event_date, label = self._events[col - self.FIRST_EVENT_COL]
        return EventInfo(event_date=event_date, label=label)

    def set_cell(self, row: int, col: int, value: str = "", note: str = "", background: str = WHITE):
        """セル状態を直接設定する（書き込み履歴には残さない）"""
        self._check_bounds(row, col)
        self._cells[(row, col)] = CellState(value=value, note=note, background=background)

    def black_out(self, row: int, col: int):
        current = self.read_cell(row, col)
        self._cells[(row, col)] = CellState(value=current.value, note=current.note, background=BLACK)

    def _check_bounds(self, row: int, col: int):
        if not (self.FIRST_MEMBER_ROW <= row < self.FIRST_MEMBER_ROW + len(self._members)):
            raise IndexError(f"row {row} out of range")
        if not (self.FIRST_EVENT_COL <= col < self.FIRST_EVENT_COL + len(self._events)):
            raise IndexError(f"col {col} out of range")
