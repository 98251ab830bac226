"""Arithmetic evaluation for calcpad expressions.

Expressions arrive in display form (``2+3×4``), are canonicalised to ASCII
operators, checked against a character allow-list and then evaluated by a
small recursive-descent parser. Nothing here ever hands text to eval().

Grammar (left-associative, ``* / %`` over ``+ -``, unary signs tightest):

    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/" | "%") unary)*
    unary      := ("+" | "-") unary | primary
    primary    := NUMBER | "(" expression ")"
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal

from calcpad.models import (
    GLYPH_TO_ASCII,
    EvaluationError,
    ExpressionSyntaxError,
    InvalidCharacterError,
)

# Digits, the four operators, parentheses, decimal point and percent.
# Whitespace is checked separately with str.isspace().
_ALLOWED_CHARS = frozenset("0123456789+-*/().%")

_NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")

_OPERATOR_TOKENS = frozenset("+-*/%()")


@dataclass(frozen=True)
class Token:
    """A lexical token: ``kind`` is 'number' or 'op'."""

    kind: str
    text: str
    position: int


def canonicalize(expr: str) -> str:
    """Replace display glyphs with their ASCII operators."""
    for glyph, ascii_op in GLYPH_TO_ASCII.items():
        expr = expr.replace(glyph, ascii_op)
    return expr


def validate(expr: str) -> None:
    """Raise InvalidCharacterError on the first character outside the allow-list."""
    for i, ch in enumerate(expr):
        if ch not in _ALLOWED_CHARS and not ch.isspace():
            raise InvalidCharacterError(ch, i)


def tokenize(expr: str) -> list[Token]:
    """Split a canonical expression into number and operator tokens."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(expr):
        ch = expr[pos]
        if ch.isspace():
            pos += 1
            continue
        m = _NUMBER_RE.match(expr, pos)
        if m:
            tokens.append(Token("number", m.group(), pos))
            pos = m.end()
            continue
        if ch in _OPERATOR_TOKENS:
            tokens.append(Token("op", ch, pos))
            pos += 1
            continue
        if ch == ".":
            raise ExpressionSyntaxError("Decimal point without digits", pos)
        raise InvalidCharacterError(ch, pos)
    return tokens


class _Parser:
    """Recursive-descent evaluator over a token list."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.index = 0

    def _peek(self) -> Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _advance(self) -> Token:
        tok = self.tokens[self.index]
        self.index += 1
        return tok

    def _at_op(self, ops: str) -> bool:
        tok = self._peek()
        return tok is not None and tok.kind == "op" and tok.text in ops

    def parse(self) -> float:
        if not self.tokens:
            raise ExpressionSyntaxError("Empty expression", 0)
        value = self._expression()
        tok = self._peek()
        if tok is not None:
            raise ExpressionSyntaxError(f"Unexpected {tok.text!r}", tok.position)
        return value

    def _expression(self) -> float:
        left = self._term()
        while self._at_op("+-"):
            op = self._advance().text
            right = self._term()
            left = left + right if op == "+" else left - right
        return left

    def _term(self) -> float:
        left = self._unary()
        while self._at_op("*/%"):
            tok = self._advance()
            right = self._unary()
            if tok.text == "*":
                left = left * right
            elif right == 0:
                raise EvaluationError(f"Division by zero at position {tok.position}")
            elif tok.text == "/":
                left = left / right
            else:
                # Remainder takes the sign of the dividend
                left = math.fmod(left, right)
        return left

    def _unary(self) -> float:
        if self._at_op("+-"):
            op = self._advance().text
            operand = self._unary()
            return -operand if op == "-" else operand
        return self._primary()

    def _primary(self) -> float:
        tok = self._peek()
        if tok is None:
            end = self.tokens[-1].position + 1 if self.tokens else 0
            raise ExpressionSyntaxError("Unexpected end of expression", end)
        if tok.kind == "number":
            self._advance()
            return float(tok.text)
        if tok.text == "(":
            self._advance()
            value = self._expression()
            if not self._at_op(")"):
                closing = self._peek()
                pos = closing.position if closing else tok.position
                raise ExpressionSyntaxError("Unbalanced parenthesis", pos)
            self._advance()
            return value
        raise ExpressionSyntaxError(f"Unexpected {tok.text!r}", tok.position)


def evaluate(expr: str) -> float:
    """Evaluate a canonical (ASCII) arithmetic expression.

    Raises:
        ExpressionSyntaxError: the text does not match the grammar.
        InvalidCharacterError: the text contains a non-arithmetic character.
        EvaluationError: division by zero or a non-finite result.
    """
    try:
        value = _Parser(tokenize(expr)).parse()
    except RecursionError:
        raise ExpressionSyntaxError("Expression nested too deeply") from None
    except OverflowError as e:
        raise EvaluationError("Numeric overflow") from e
    if not math.isfinite(value):
        raise EvaluationError(f"Non-finite result: {value}")
    return value


def calculate(expr: str) -> float:
    """Canonicalise, validate and evaluate a display-form expression."""
    canonical = canonicalize(expr)
    validate(canonical)
    return evaluate(canonical)


def format_number(value: float) -> str:
    """Render a float as the shortest plain decimal string.

    14.0 → '14', 0.1 + 0.2 → '0.30000000000000004', 1e-7 → '0.0000001'.
    Exponent notation is never produced, so the text can always be
    evaluated again.
    """
    if not math.isfinite(value):
        raise EvaluationError(f"Cannot format non-finite value: {value}")
    if value == 0:
        return "0"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")
