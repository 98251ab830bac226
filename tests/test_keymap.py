"""Tests for keyboard and button normalization."""

import pytest

from calcpad.keymap import KEY_BINDINGS, normalize_button, normalize_key, split_keys
from calcpad.models import InputEvent, Operation


# --- Keyboard ---

@pytest.mark.parametrize("key", list("0123456789"))
def test_digits_pass_through(key):
    assert normalize_key(key) == InputEvent(Operation.DIGIT, key)


@pytest.mark.parametrize(
    "key, glyph",
    [("/", "÷"), ("*", "×"), ("-", "−"), ("+", "+"), ("×", "×"), ("÷", "÷"), ("−", "−")],
)
def test_operator_keys_map_to_glyphs(key, glyph):
    assert normalize_key(key) == InputEvent(Operation.OPERATOR, glyph)


@pytest.mark.parametrize(
    "key, op",
    [
        ("Enter", Operation.EQUALS),
        ("=", Operation.EQUALS),
        ("Backspace", Operation.BACKSPACE),
        ("Escape", Operation.CLEAR),
        ("Delete", Operation.CLEAR),
        (".", Operation.DECIMAL_POINT),
        ("%", Operation.PERCENT),
    ],
)
def test_control_keys(key, op):
    assert normalize_key(key) == InputEvent(op)


def test_parentheses():
    assert normalize_key("(") == InputEvent(Operation.PARENTHESIS, "(")
    assert normalize_key(")") == InputEvent(Operation.PARENTHESIS, ")")


@pytest.mark.parametrize("key", ["a", "Shift", "", "^", "12", " "])
def test_unknown_keys_ignored(key):
    assert normalize_key(key) is None


# --- Buttons ---

@pytest.mark.parametrize(
    "action, op",
    [
        ("clear", Operation.CLEAR),
        ("back", Operation.BACKSPACE),
        ("percent", Operation.PERCENT),
        ("equals", Operation.EQUALS),
    ],
)
def test_button_actions(action, op):
    assert normalize_button(action=action) == InputEvent(op)


def test_button_values():
    assert normalize_button(value="7") == InputEvent(Operation.DIGIT, "7")
    assert normalize_button(value="÷") == InputEvent(Operation.OPERATOR, "÷")
    assert normalize_button(value=".") == InputEvent(Operation.DECIMAL_POINT)
    assert normalize_button(value="(") == InputEvent(Operation.PARENTHESIS, "(")


def test_button_action_wins_over_value():
    assert normalize_button(value="7", action="clear") == InputEvent(Operation.CLEAR)


def test_unknown_buttons_ignored():
    assert normalize_button() is None
    assert normalize_button(action="sqrt") is None
    assert normalize_button(value="x") is None


# --- Splitting typed text ---

def test_split_characters():
    assert split_keys("2+3*4") == ["2", "+", "3", "*", "4"]


def test_split_drops_whitespace():
    assert split_keys(" 1 2 ") == ["1", "2"]


@pytest.mark.parametrize("word, key", [("enter", "Enter"), ("Backspace", "Backspace"), (" ESCAPE ", "Escape")])
def test_split_named_key(word, key):
    assert split_keys(word) == [key]


def test_bindings_cover_every_operation_key():
    keys = " ".join(k for k, _ in KEY_BINDINGS)
    for name in ("Enter", "Backspace", "Escape", "%", "."):
        assert name in keys
