# graph/nodes/parse_command_node.py
import logging

from graph.state import InOutState
from services.date_locator import DateLocator, ParseResult

log = logging.getLogger("attendance")


def split_command_text(text: str) -> tuple[str, str]:
    """先頭の単語（日付候補）と残り（理由）に分ける"""
    words = (text or "").strip().split(" ", 1)
    token = words[0]
    rest = words[1] if len(words) > 1 else ""
    return token, rest


def fold_token_into_reason(token: str, reason: str) -> str:
    """日付として解釈できなかったトークンを理由の先頭に戻す"""
    if not token:
        return reason
    return f"{token} {reason}" if reason else token


def parse_command_node(state: InOutState, logger: logging.Logger = None) -> dict:
    """コマンド本文から日付キーと理由を取り出すノード"""
    logger = logger or log
    token, reason = split_command_text(state["text"])
    logger.info("User %s: %s %s %s", state["username"], state["command"].value, token, reason)

    locator = DateLocator()
    if locator.initialize(token) == ParseResult.ADD_TO_REASON:
        reason = fold_token_into_reason(token, reason)

    return {"date_key": locator.key, "reason": reason}
