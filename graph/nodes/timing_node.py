# graph/nodes/timing_node.py
import logging
from datetime import datetime, time, timedelta

from graph.state import Directive, InOutState, TimingResult
from services.date_locator import parse_header_date
from services.sheet_interface import SheetInterface

log = logging.getLogger("attendance")

DEFAULT_TIMING = {"late_change_hours": 2, "past_grace_hours": 24}


def _now() -> datetime:
    """テスト時にモック可能な現在時刻取得"""
    return datetime.now()


def advise_timing(
    event_date: str,
    directive: Directive,
    now: datetime,
    timing: dict = None,
) -> TimingResult:
    """更新が直前（前日22時以降の欠席）か、過去イベントへの更新かを判定する

    日付が解釈できない場合は例外を出さず ok=False を返す。
    """
    timing = timing or DEFAULT_TIMING
    try:
        event_start = datetime.combine(parse_header_date(event_date), time.min)
    except (ValueError, TypeError) as err:
        return TimingResult(ok=False, late_change=False, past_event=False, error=str(err))

    update_before = event_start - timedelta(hours=timing["late_change_hours"])
    past_after = event_start + timedelta(hours=timing["past_grace_hours"])

    return TimingResult(
        ok=True,
        late_change=directive == Directive.LEAVE and now > update_before,
        past_event=now > past_after,
        error=None,
    )


def timing_node(
    state: InOutState,
    sheet: SheetInterface = None,
    timing: dict = None,
    logger: logging.Logger = None,
) -> dict:
    """イベント情報を読み、タイミングの注意書きを判定するノード（失敗しても更新は有効）"""
    logger = logger or log
    try:
        info = sheet.event_info(state["col"])
    except Exception as err:
        logger.warning("Error reading event info for col %s: %s", state["col"], err)
        return {
            "event_info": None,
            "timing_result": TimingResult(ok=False, late_change=False, past_event=False, error=str(err)),
        }

    result = advise_timing(info.event_date, state["command"], _now(), timing)
    if not result.ok:
        logger.warning("Error checking if update came too late: %s", result.error)
    elif result.late_change:
        logger.info("Alerting user about late change")

    return {"event_info": info, "timing_result": result}
