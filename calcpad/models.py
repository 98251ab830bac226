"""Data models for the calcpad calculator core.

Operation enum, InputEvent, operator glyph tables and the error hierarchy:
the typed structures that flow through keymap → dispatch → buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Operation(str, Enum):
    """Canonical keypad operations."""

    DIGIT = "digit"
    DECIMAL_POINT = "decimal-point"
    OPERATOR = "operator"
    PARENTHESIS = "parenthesis"
    BACKSPACE = "backspace"
    CLEAR = "clear"
    PERCENT = "percent"
    EQUALS = "equals"


@dataclass(frozen=True)
class InputEvent:
    """A normalized input event.

    ``value`` carries the digit, operator glyph or parenthesis for the
    operations that need one and is None otherwise.
    """

    operation: Operation
    value: Optional[str] = None


# Display glyphs shown to the user
PLUS = "+"
MINUS = "\u2212"  # −
TIMES = "\u00d7"  # ×
DIVIDE = "\u00f7"  # ÷

OPERATOR_GLYPHS = (PLUS, MINUS, TIMES, DIVIDE)

# ASCII operator → display glyph
ASCII_TO_GLYPH: dict[str, str] = {
    "+": PLUS,
    "-": MINUS,
    "*": TIMES,
    "/": DIVIDE,
}

# Display glyph → canonical arithmetic operator
GLYPH_TO_ASCII: dict[str, str] = {
    TIMES: "*",
    DIVIDE: "/",
    MINUS: "-",
}

# Every character treated as an operator inside the buffer. Results written
# back after evaluation may carry an ASCII sign, so both forms count.
OPERATOR_CHARS = frozenset("+-*/") | frozenset(OPERATOR_GLYPHS)

DIGITS = "0123456789"


class CalcpadError(Exception):
    """Base class for calcpad errors."""


class EvaluationError(CalcpadError):
    """The expression could not be evaluated to a finite number."""


class ExpressionSyntaxError(EvaluationError):
    """The expression does not match the arithmetic grammar."""

    def __init__(self, message: str, position: int = -1) -> None:
        super().__init__(message)
        self.position = position


class InvalidCharacterError(EvaluationError):
    """The expression contains a character outside the allow-list."""

    def __init__(self, char: str, position: int) -> None:
        super().__init__(f"Invalid character {char!r} at position {position}")
        self.char = char
        self.position = position
