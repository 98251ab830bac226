"""Input normalization — raw keys and keypad buttons to InputEvents.

Keys are named the way a browser reports ``KeyboardEvent.key``: single
characters for printable keys, words for the rest ("Enter", "Backspace").
Buttons carry either an action ("clear", "back", ...) or a value ("7", "×").
Anything unrecognised normalizes to None and is ignored by the caller.
"""

from __future__ import annotations

from typing import Optional

from calcpad.models import ASCII_TO_GLYPH, DIGITS, OPERATOR_GLYPHS, InputEvent, Operation

# Named (non-character) keys
_NAMED_KEYS: dict[str, Operation] = {
    "Enter": Operation.EQUALS,
    "Backspace": Operation.BACKSPACE,
    "Escape": Operation.CLEAR,
    "Delete": Operation.CLEAR,
}

# Single-character keys that map to a value-less operation
_CHAR_KEYS: dict[str, Operation] = {
    "=": Operation.EQUALS,
    ".": Operation.DECIMAL_POINT,
    "%": Operation.PERCENT,
}

# data-action values on keypad buttons
_BUTTON_ACTIONS: dict[str, Operation] = {
    "clear": Operation.CLEAR,
    "back": Operation.BACKSPACE,
    "percent": Operation.PERCENT,
    "equals": Operation.EQUALS,
}

# (key, description) rows for help output
KEY_BINDINGS: list[tuple[str, str]] = [
    ("0-9", "Digit"),
    (".", "Decimal point (leading 0 added when needed)"),
    ("+", "Add"),
    ("-", "Subtract (−)"),
    ("*", "Multiply (×)"),
    ("/", "Divide (÷)"),
    ("( )", "Parentheses"),
    ("%", "Divide the last number by 100"),
    ("Enter, =", "Evaluate"),
    ("Backspace", "Delete last character"),
    ("Escape, Delete", "Clear"),
]


def _value_event(value: str) -> Optional[InputEvent]:
    """Classify a single-character value shared by keys and buttons."""
    if len(value) != 1:
        return None
    if value in DIGITS:
        return InputEvent(Operation.DIGIT, value)
    if value in ASCII_TO_GLYPH:
        return InputEvent(Operation.OPERATOR, ASCII_TO_GLYPH[value])
    if value in OPERATOR_GLYPHS:
        return InputEvent(Operation.OPERATOR, value)
    if value in "()":
        return InputEvent(Operation.PARENTHESIS, value)
    if value == ".":
        return InputEvent(Operation.DECIMAL_POINT)
    return None


def normalize_key(key: str) -> Optional[InputEvent]:
    """Translate a keyboard key into an InputEvent, or None to ignore it."""
    if key in _NAMED_KEYS:
        return InputEvent(_NAMED_KEYS[key])
    if key in _CHAR_KEYS:
        return InputEvent(_CHAR_KEYS[key])
    return _value_event(key)


def split_keys(text: str) -> list[str]:
    """Split typed text into keys.

    A whole word naming a key ("enter", "Backspace") is that one key; any
    other text is a run of single-character keys with whitespace dropped.
    """
    word = text.strip().lower()
    for name in _NAMED_KEYS:
        if word == name.lower():
            return [name]
    return [ch for ch in text if not ch.isspace()]


def normalize_button(value: Optional[str] = None, action: Optional[str] = None) -> Optional[InputEvent]:
    """Translate a keypad button (action or value) into an InputEvent.

    The action wins when a button carries both.
    """
    if action:
        op = _BUTTON_ACTIONS.get(action)
        return InputEvent(op) if op else None
    if value:
        return _value_event(value)
    return None
