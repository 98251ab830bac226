"""Expression buffer — the calculator's entire mutable state.

ExpressionBuffer owns the expression text, the "just evaluated" flag and a
display sink. Every operation either mutates the text and pushes the new
display value, or is a no-op. Only evaluate() can fail, and it converts the
failure into the error display instead of raising.

Flag states:
    fresh            — typing extends the current expression
    post-evaluation  — the text is a result; a digit or decimal point
                       starts a new expression, anything else chains on it
"""

from __future__ import annotations

import logging
import math
import re
from typing import Optional

from calcpad.display import DisplaySink, RecordingDisplay
from calcpad.evaluator import calculate, format_number
from calcpad.models import (
    ASCII_TO_GLYPH,
    DIGITS,
    MINUS,
    OPERATOR_CHARS,
    OPERATOR_GLYPHS,
    EvaluationError,
)
from calcpad.settings import Settings

logger = logging.getLogger(__name__)

# Number segments are bounded by operators (glyph or ASCII) and parentheses
_SEGMENT_SPLIT_RE = re.compile(r"[+\-*/()×÷−]")
_TRAILING_NUMBER_RE = re.compile(r"[0-9]+\.?[0-9]*$")

# Inputs that start a new expression right after an evaluation
_FRESH_START = frozenset(DIGITS + ".")


class ExpressionBuffer:
    """Keypad expression state plus its display."""

    def __init__(
        self,
        display: Optional[DisplaySink] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.sink: DisplaySink = display if display is not None else RecordingDisplay()
        self.text = ""
        self.just_evaluated = False
        self.display = self.settings.empty_token

    def __repr__(self) -> str:
        return f"ExpressionBuffer(text={self.text!r}, just_evaluated={self.just_evaluated})"

    def _show(self, value: str) -> None:
        self.display = value
        self.sink.show(value)

    def _update_display(self) -> None:
        self._show(self.text or self.settings.empty_token)

    def append(self, token: str) -> None:
        """Append a digit, decimal point, operator glyph or parenthesis."""
        if self.just_evaluated and token in _FRESH_START:
            self.text = ""
        self.just_evaluated = False
        self.text += token
        self._update_display()

    def insert_operator(self, glyph: str) -> None:
        """Insert an operator, replacing a trailing one.

        A leading operator is only accepted for minus.
        """
        glyph = ASCII_TO_GLYPH.get(glyph, glyph)
        if glyph not in OPERATOR_GLYPHS:
            logger.debug("Ignoring unknown operator %r", glyph)
            return
        if not self.text:
            if glyph != MINUS:
                logger.debug("Rejected leading operator %r", glyph)
                return
        elif self.text[-1] in OPERATOR_CHARS:
            self.text = self.text[:-1] + glyph
            self.just_evaluated = False
            self._update_display()
            return
        self.append(glyph)

    def insert_decimal_point(self) -> None:
        """Insert a decimal point, at most one per number.

        A point that would start a number gets a leading zero (``0.5``, not
        ``.5``).
        """
        if self.just_evaluated:
            self.text = ""
            self.just_evaluated = False

        segment = _SEGMENT_SPLIT_RE.split(self.text)[-1]
        if "." in segment:
            logger.debug("Rejected second decimal point in %r", segment)
            return
        if not segment and (not self.text or self.text[-1] in OPERATOR_CHARS or self.text[-1] == "("):
            self.append("0")
        self.append(".")

    def backspace(self) -> None:
        if not self.text:
            return
        self.text = self.text[:-1]
        self.just_evaluated = False
        self._update_display()

    def clear(self) -> None:
        self.text = ""
        self.just_evaluated = False
        self._update_display()

    def apply_percent(self) -> None:
        """Divide the last number in the expression by 100."""
        m = _TRAILING_NUMBER_RE.search(self.text)
        if not m:
            return
        value = float(m.group()) / 100
        if not math.isfinite(value):
            logger.debug("Ignoring percent of out-of-range number (%d digits)", len(m.group()))
            return
        replaced = format_number(value)
        self.text = self.text[: m.start()] + replaced
        self.just_evaluated = False
        self._update_display()

    def evaluate(self) -> None:
        """Evaluate the expression and replace it with the result.

        Any failure clears the expression and shows the error token.
        """
        if not self.text.strip():
            return
        expr = self.text
        try:
            result = format_number(calculate(expr))
        except EvaluationError as e:
            logger.debug("Evaluation of %r failed: %s", expr, e)
            self.text = ""
            self.just_evaluated = True
            self._show(self.settings.error_token)
            return

        logger.debug("Evaluated %r -> %s", expr, result)
        self.text = result
        self.just_evaluated = True
        self._update_display()
