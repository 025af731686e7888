# graph/graph.py
import logging
from functools import partial
from typing import Callable

from langgraph.graph import StateGraph, END

from graph.state import InOutResponse, InOutState, ResponseContext, initial_state
from services.config_loader import DEFAULT_CONFIG
from services.messages import build_messages
from services.sheet_interface import SheetInterface


def _route_on_error(next_node: str):
    def route(state: InOutState) -> str:
        if state["error_message"] is not None:
            return "respond"
        return next_node
    return route


route_after_validate = _route_on_error("resolve")
route_after_resolve = _route_on_error("mutate")
route_after_mutate = _route_on_error("timing")


def build_graph(
    sheet: SheetInterface = None,
    responder=None,
    on_success: Callable[[], None] = None,
    settings: dict = None,
    logger: logging.Logger = None,
):
    """出欠更新のLangGraphを構築して返す

    各ノード関数はサービス依存を持つため、functools.partialでラップして
    LangGraphが期待する (state) -> dict シグネチャに合わせる。
    致命的エラー（理由なし・セル特定失敗・書き込み失敗）は respond に直行する。
    """
    from graph.nodes.parse_command_node import parse_command_node
    from graph.nodes.validate_node import validate_node
    from graph.nodes.resolve_node import resolve_node
    from graph.nodes.mutate_node import mutate_node
    from graph.nodes.timing_node import timing_node
    from graph.nodes.respond_node import respond_node

    settings = settings or DEFAULT_CONFIG
    messages = build_messages(settings.get("messages"))

    workflow = StateGraph(InOutState)

    workflow.add_node("parse_command", partial(parse_command_node, logger=logger))
    workflow.add_node("validate", partial(validate_node, messages=messages))
    workflow.add_node("resolve", partial(resolve_node, sheet=sheet, logger=logger))
    workflow.add_node(
        "mutate",
        partial(
            mutate_node,
            sheet=sheet,
            blackout_color=settings["sheet"]["blackout_color"],
            logger=logger,
        ),
    )
    workflow.add_node(
        "timing", partial(timing_node, sheet=sheet, timing=settings["timing"], logger=logger)
    )
    workflow.add_node(
        "respond",
        partial(
            respond_node,
            responder=responder,
            on_success=on_success,
            messages=messages,
            logger=logger,
        ),
    )

    workflow.set_entry_point("parse_command")
    workflow.add_edge("parse_command", "validate")
    workflow.add_conditional_edges(
        "validate",
        route_after_validate,
        {"resolve": "resolve", "respond": "respond"},
    )
    workflow.add_conditional_edges(
        "resolve",
        route_after_resolve,
        {"mutate": "mutate", "respond": "respond"},
    )
    workflow.add_conditional_edges(
        "mutate",
        route_after_mutate,
        {"timing": "timing", "respond": "respond"},
    )
    workflow.add_edge("timing", "respond")
    workflow.add_edge("respond", END)

    return workflow.compile()


def handle_in_out(
    context: ResponseContext,
    sheet: SheetInterface,
    responder,
    on_success: Callable[[], None] = None,
    settings: dict = None,
    logger: logging.Logger = None,
) -> InOutResponse:
    """1件の in/out 操作を最後まで処理し、送信した応答を返す"""
    graph = build_graph(
        sheet=sheet,
        responder=responder,
        on_success=on_success,
        settings=settings,
        logger=logger,
    )
    result = graph.invoke(initial_state(context))
    return InOutResponse(kind=result["response_kind"], text=result["response_text"])
