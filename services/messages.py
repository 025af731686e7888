# services/messages.py
from types import MappingProxyType
from typing import Mapping, Optional

DEFAULT_MESSAGES = {
    "success": ":white_check_mark: Success: ",
    "no_change": ":ok_hand: No change: ",
    "failure": ":x: Failed: ",
    "no_reason": "Please give a reason when marking yourself out (e.g. `/out 3/1 doctor appointment`)",
    "summary": "{username} is marked {status} for {label} on {date}",
    "summary_fallback": "{username} is marked {status} for {date}",
    "blacked_out": "\n:black_large_square: Heads up: this cell is blacked out, so you may not be expected at this event",
    "late_change": "\n:warning: This change came in late (after 10pm the night before). Please also let the organizers know directly",
    "past_change": "\n:rewind: This event is already in the past",
    "note_added": '\n:information_source: Added note "{reason}" to your cell',
}


def build_messages(overrides: Optional[dict] = None) -> Mapping[str, str]:
    """デフォルト文言に設定の上書きを重ねた読み取り専用テーブルを返す"""
    unknown = set(overrides or {}) - set(DEFAULT_MESSAGES)
    if unknown:
        raise KeyError(f"unknown message keys: {', '.join(sorted(unknown))}")
    return MappingProxyType({**DEFAULT_MESSAGES, **(overrides or {})})


MESSAGES = build_messages()
