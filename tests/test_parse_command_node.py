from datetime import date

import pytest

from graph.nodes.parse_command_node import (
    fold_token_into_reason,
    parse_command_node,
    split_command_text,
)
from graph.state import Directive, ResponseContext, initial_state


def _make_state(command=Directive.LEAVE, text=""):
    return initial_state(ResponseContext(username="bob", command=command, text=text))


def test_split_command_text():
    assert split_command_text("3/1 dentist at noon") == ("3/1", "dentist at noon")
    assert split_command_text("3/1") == ("3/1", "")
    assert split_command_text("") == ("", "")


def test_date_token_is_removed_from_reason():
    """日付トークンは理由に含まれないこと"""
    result = parse_command_node(_make_state(text="3/1/2024 dentist"))
    assert result["date_key"].valid is True
    assert result["date_key"].value == date(2024, 3, 1)
    assert result["reason"] == "dentist"


def test_invalid_token_folded_into_reason():
    """日付でない先頭語は理由の先頭に1回だけ戻ること"""
    result = parse_command_node(_make_state(text="not-a-date meeting conflict"))
    assert result["date_key"].valid is False
    assert result["reason"] == "not-a-date meeting conflict"


@pytest.mark.parametrize(
    "text",
    ["sick", "sick today", "family  event  (double spaced)", "out of town until 3/5"],
)
def test_invalid_token_preserves_original_text(text):
    result = parse_command_node(_make_state(text=text))
    assert result["reason"] == text


def test_empty_text():
    result = parse_command_node(_make_state(command=Directive.ENTER, text=""))
    assert result["date_key"].valid is False
    assert result["reason"] == ""


def test_fold_token_into_reason():
    assert fold_token_into_reason("", "reason") == "reason"
    assert fold_token_into_reason("word", "") == "word"
    assert fold_token_into_reason("word", "rest") == "word rest"


def test_leading_spaces_are_dropped():
    """先頭の空白は捨て、最初の単語を日付候補として扱うこと"""
    result = parse_command_node(_make_state(text="   3/1/2024 dentist"))
    assert result["date_key"].value == date(2024, 3, 1)
    assert result["reason"] == "dentist"

    result = parse_command_node(_make_state(text="  sick today"))
    assert result["reason"] == "sick today"
