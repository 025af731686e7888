from dataclasses import dataclass
from enum import Enum
from typing import TypedDict, Optional

from services.date_locator import DateKey
from services.sheet_interface import EventInfo


class Directive(str, Enum):
    ENTER = "in"
    LEAVE = "out"


@dataclass(frozen=True)
class ResponseContext:
    username: str
    command: Directive
    text: str


@dataclass(frozen=True)
class MutationResult:
    previous_value: str
    previous_note: str
    cell_was_blacked_out: bool
    unchanged: bool
    value: str
    note: str


@dataclass(frozen=True)
class TimingResult:
    ok: bool
    late_change: bool
    past_event: bool
    error: Optional[str]


@dataclass(frozen=True)
class Outcome:
    no_change: bool
    late_change: bool
    past_event_change: bool
    blacked_out: bool
    note_added: bool
    value: str
    note: str


@dataclass(frozen=True)
class InOutResponse:
    kind: str   # "success" / "no_change" / "failure"
    text: str


class InOutState(TypedDict):
    username: str
    command: Directive
    text: str
    date_key: Optional[DateKey]       # 無効なら直近のイベント
    reason: str
    row: Optional[int]
    col: Optional[int]
    mutation: Optional[MutationResult]
    event_info: Optional[EventInfo]   # 取得失敗時はNone
    timing_result: Optional[TimingResult]
    response_kind: Optional[str]
    response_text: Optional[str]
    error_message: Optional[str]      # 致命的エラー（失敗応答になる）


def initial_state(context: ResponseContext) -> InOutState:
    return {
        "username": context.username,
        "command": context.command,
        "text": context.text,
        "date_key": None,
        "reason": "",
        "row": None,
        "col": None,
        "mutation": None,
        "event_info": None,
        "timing_result": None,
        "response_kind": None,
        "response_text": None,
        "error_message": None,
    }
