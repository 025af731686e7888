from abc import ABC, abstractmethod
from dataclasses import dataclass

from services.date_locator import DateKey


@dataclass(frozen=True)
class CellState:
    value: str        # "y" / "n" / ""
    note: str
    background: str   # "#rrggbb"


@dataclass(frozen=True)
class EventInfo:
    event_date: str   # シートのヘッダー表記のまま (m/d/yyyy)
    label: str


class SheetInterface(ABC):
    """出欠シート（人×日付のグリッド）の抽象インターフェース"""

    @abstractmethod
    def row_for(self, username: str) -> int:
        """ユーザー名から行番号を返す（見つからなければLookupError）"""
        ...

    @abstractmethod
    def col_for(self, date_key: DateKey) -> int:
        """日付キーから列番号を返す（見つからなければLookupError）"""
        ...

    @abstractmethod
    def read_cell(self, row: int, col: int) -> CellState:
        """セルの値・メモ・背景色を読む"""
        ...

    @abstractmethod
    def write_cell(self, row: int, col: int, value: str, note: str) -> None:
        """セルの値とメモを一括で書き込む"""
        ...

    @abstractmethod
    def event_info(self, col: int) -> EventInfo:
        """列ヘッダーからイベント情報を読む"""
        ...
