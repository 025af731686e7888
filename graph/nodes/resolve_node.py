import logging

from graph.state import InOutState
from services.sheet_interface import SheetInterface

log = logging.getLogger("attendance")


def resolve_node(state: InOutState, sheet: SheetInterface = None, logger: logging.Logger = None) -> dict:
    """ユーザー名と日付キーからシート上の行・列を特定するノード"""
    logger = logger or log
    try:
        row = sheet.row_for(state["username"])
        col = sheet.col_for(state["date_key"])
    except Exception as err:
        logger.warning("Error locating cell for %s: %s", state["username"], err)
        return {"error_message": str(err) or type(err).__name__}

    return {"row": row, "col": col}
