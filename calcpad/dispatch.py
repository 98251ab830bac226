"""Dispatch InputEvents to the ExpressionBuffer.

One place maps each Operation to its buffer method, so a UI adapter, the CLI
and the tests all drive the calculator the same way.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from calcpad.buffer import ExpressionBuffer
from calcpad.keymap import normalize_key
from calcpad.models import InputEvent, Operation

logger = logging.getLogger(__name__)

_HANDLERS: dict[Operation, Callable[[ExpressionBuffer, InputEvent], None]] = {
    Operation.DIGIT: lambda buf, ev: buf.append(ev.value),
    Operation.PARENTHESIS: lambda buf, ev: buf.append(ev.value),
    Operation.DECIMAL_POINT: lambda buf, ev: buf.insert_decimal_point(),
    Operation.OPERATOR: lambda buf, ev: buf.insert_operator(ev.value),
    Operation.BACKSPACE: lambda buf, ev: buf.backspace(),
    Operation.CLEAR: lambda buf, ev: buf.clear(),
    Operation.PERCENT: lambda buf, ev: buf.apply_percent(),
    Operation.EQUALS: lambda buf, ev: buf.evaluate(),
}


def dispatch(buffer: ExpressionBuffer, event: InputEvent) -> str:
    """Apply one event to the buffer and return the resulting display."""
    if event.operation in (Operation.DIGIT, Operation.PARENTHESIS, Operation.OPERATOR) and not event.value:
        raise ValueError(f"{event.operation.value} event requires a value")
    _HANDLERS[event.operation](buffer, event)
    return buffer.display


def feed(
    buffer: ExpressionBuffer,
    keys: Iterable[str],
    on_event: Optional[Callable[[str, str], None]] = None,
) -> str:
    """Normalize and dispatch raw keys in order, skipping unknown ones.

    Args:
        buffer: Target buffer.
        keys: Raw key names ("7", "*", "Enter", ...).
        on_event: Called with (key, display) after each dispatched key.

    Returns:
        The display after the last key.
    """
    for key in keys:
        event = normalize_key(key)
        if event is None:
            logger.debug("Ignoring unmapped key %r", key)
            continue
        display = dispatch(buffer, event)
        if on_event:
            on_event(key, display)
    return buffer.display
