from typing import Mapping

from graph.state import Directive, InOutState
from services.messages import MESSAGES


def validate_node(state: InOutState, messages: Mapping[str, str] = None) -> dict:
    """入力チェック: 欠席(out)には理由が必須"""
    messages = messages or MESSAGES
    if state["command"] == Directive.LEAVE and len(state["reason"]) == 0:
        return {"error_message": messages["no_reason"]}
    return {"error_message": None}
