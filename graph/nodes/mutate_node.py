import logging

from graph.state import Directive, InOutState, MutationResult
from services.sheet_interface import SheetInterface

log = logging.getLogger("attendance")

TARGET_VALUES = {
    Directive.ENTER: "y",
    Directive.LEAVE: "n",
}


def apply_directive(
    sheet: SheetInterface,
    row: int,
    col: int,
    directive: Directive,
    reason: str,
    blackout_color: str = "#000000",
) -> MutationResult:
    """セルを y/n と理由メモで上書きし、更新前の状態を返す

    変更なし判定は値とメモの両方を比較する。変更なしでも書き込みは行う。
    黒塗りセルも書き込みは止めない（応答に注意書きが付くだけ）。
    """
    cell = sheet.read_cell(row, col)
    target = TARGET_VALUES[directive]
    unchanged = cell.value == target and cell.note == reason

    sheet.write_cell(row, col, target, reason)

    return MutationResult(
        previous_value=cell.value,
        previous_note=cell.note,
        cell_was_blacked_out=cell.background.lower() == blackout_color.lower(),
        unchanged=unchanged,
        value=target,
        note=reason,
    )


def mutate_node(
    state: InOutState,
    sheet: SheetInterface = None,
    blackout_color: str = "#000000",
    logger: logging.Logger = None,
) -> dict:
    """出欠セルを更新するノード"""
    logger = logger or log
    row, col = state["row"], state["col"]
    try:
        result = apply_directive(sheet, row, col, state["command"], state["reason"], blackout_color)
    except Exception as err:
        logger.warning("Error updating spreadsheet: %s", err)
        return {"error_message": str(err) or type(err).__name__}

    logger.info("Success: updated (row %s, col %s)", row, col)
    return {"mutation": result}
