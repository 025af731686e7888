import logging
from typing import Callable, Mapping, Optional

from graph.state import Directive, InOutState, MutationResult, Outcome, TimingResult
from services.date_locator import DateKey
from services.messages import MESSAGES

log = logging.getLogger("attendance")


def build_outcome(
    directive: Directive,
    mutation: MutationResult,
    timing: Optional[TimingResult],
) -> Outcome:
    """各ステップの結果から応答用のフラグをまとめる"""
    timing_ok = timing is not None and timing.ok
    return Outcome(
        no_change=mutation.unchanged,
        late_change=timing_ok and timing.late_change,
        past_event_change=timing_ok and timing.past_event,
        blacked_out=mutation.cell_was_blacked_out,
        note_added=directive == Directive.ENTER and len(mutation.note) > 0,
        value=mutation.value,
        note=mutation.note,
    )


def _key_text(date_key: Optional[DateKey]) -> str:
    if date_key is None or not date_key.valid:
        return "the next event"
    d = date_key.value
    return f"{d.month}/{d.day}/{d.year}"


def event_summary(state: InOutState, messages: Mapping[str, str]) -> str:
    """「誰が・どのイベントに・出欠どちらか」の一文"""
    info = state["event_info"]
    status = state["command"].value
    if info is None or not info.label:
        date_text = info.event_date if info is not None and info.event_date else _key_text(state["date_key"])
        return messages["summary_fallback"].format(
            username=state["username"], status=status, date=date_text
        )
    return messages["summary"].format(
        username=state["username"], status=status, label=info.label, date=info.event_date
    )


def compose_response(outcome: Outcome, summary: str, messages: Mapping[str, str]) -> str:
    """基本行＋イベント概要に、黒塗り・直前・過去・メモ追加の順で注意書きを付ける"""
    response = (messages["no_change"] if outcome.no_change else messages["success"]) + summary
    if outcome.blacked_out:
        response += messages["blacked_out"]
    if outcome.late_change:
        response += messages["late_change"]
    if outcome.past_event_change:
        response += messages["past_change"]
    if outcome.note_added:
        response += messages["note_added"].format(reason=outcome.note)
    return response


def respond_node(
    state: InOutState,
    responder=None,
    on_success: Callable[[], None] = None,
    messages: Mapping[str, str] = None,
    logger: logging.Logger = None,
) -> dict:
    """応答文を組み立てて返信するノード（成功時はコールバックも呼ぶ）"""
    logger = logger or log
    messages = messages or MESSAGES

    if state["error_message"] is not None:
        text = messages["failure"] + state["error_message"]
        kind = "failure"
    else:
        outcome = build_outcome(state["command"], state["mutation"], state["timing_result"])
        text = compose_response(outcome, event_summary(state, messages), messages)
        kind = "no_change" if outcome.no_change else "success"

        if on_success is not None:
            try:
                on_success()
            except Exception:
                logger.exception("after-success callback failed")

    if not responder.send(text):
        logger.warning("Failed to deliver %s response to %s", kind, state["username"])

    return {"response_kind": kind, "response_text": text}
