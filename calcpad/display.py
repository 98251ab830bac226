"""Display sinks — where the buffer pushes its text after every change.

A sink only has to provide ``show(text)``. The buffer has already substituted
the empty and error tokens, so sinks render verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


class DisplaySink(Protocol):
    def show(self, text: str) -> None: ...


@dataclass
class RecordingDisplay:
    """Keeps every pushed value; ``current`` is the latest one."""

    history: list[str] = field(default_factory=list)

    def show(self, text: str) -> None:
        self.history.append(text)

    @property
    def current(self) -> str:
        return self.history[-1] if self.history else ""


class ConsoleDisplay:
    """Render the display as a right-aligned Rich panel."""

    def __init__(self, console: Console, width: int = 32, error_token: str = "Error") -> None:
        self.console = console
        self.width = width
        self.error_token = error_token

    def render(self, text: str) -> Panel:
        style = "bold red" if text == self.error_token else "bold"
        return Panel(
            Text(text, style=style, justify="right", overflow="fold"),
            width=self.width,
            border_style="dim",
        )

    def show(self, text: str) -> None:
        self.console.print(self.render(text))
