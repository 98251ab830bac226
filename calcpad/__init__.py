"""calcpad — keypad arithmetic calculator core.

Keeps an expression built from keypad or keyboard input, pushes it to a
display after every change, and evaluates it with standard precedence
using its own parser (no eval()).

Usage:
    python -m calcpad eval "2+3×4"             # 14
    python -m calcpad press 2 + 3 '*' 4 Enter  # Replay keystrokes
    python -m calcpad repl                     # Interactive session
"""

from calcpad.buffer import ExpressionBuffer
from calcpad.dispatch import dispatch, feed
from calcpad.models import InputEvent, Operation

__all__ = ["ExpressionBuffer", "InputEvent", "Operation", "dispatch", "feed"]
