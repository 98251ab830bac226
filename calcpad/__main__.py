"""CLI for the calcpad keypad calculator.

Usage:
    python -m calcpad eval "2+3×4"             # Evaluate an expression
    python -m calcpad press 2 + 3 '*' 4 Enter  # Replay keystrokes
    python -m calcpad press --trace "12.5%"    # Show the display after each key
    python -m calcpad repl                     # Interactive keypad session
    python -m calcpad keys                     # Show key bindings
"""

from __future__ import annotations

import logging
from typing import List

import typer
from rich.console import Console
from rich.table import Table

from calcpad.buffer import ExpressionBuffer
from calcpad.dispatch import feed
from calcpad.display import ConsoleDisplay
from calcpad.evaluator import calculate, format_number
from calcpad.keymap import KEY_BINDINGS, split_keys
from calcpad.logging_config import setup_logging
from calcpad.models import EvaluationError
from calcpad.settings import Settings, load_settings

app = typer.Typer(
    name="calcpad",
    help="Keypad arithmetic calculator",
    no_args_is_help=True,
)
console = Console(stderr=True)

_QUIT_WORDS = ("q", "quit")


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else load_settings()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Keypad arithmetic calculator."""
    settings = load_settings()
    setup_logging(logging.DEBUG if verbose else settings.log_level, console=console)
    ctx.obj = settings


@app.command("eval")
def cmd_eval(
    ctx: typer.Context,
    expression: str = typer.Argument(help="Expression, e.g. '2+3×4' or '(1+2)/4'"),
) -> None:
    """Evaluate an expression and print the result."""
    settings = _settings(ctx)
    try:
        value = calculate(expression)
    except EvaluationError as e:
        console.print(f"[red]Error:[/red] {e}")
        typer.echo(settings.error_token)
        raise typer.Exit(1)
    typer.echo(format_number(value))


@app.command("press")
def cmd_press(
    ctx: typer.Context,
    keys: List[str] = typer.Argument(help="Keys: characters ('12+3') or names (Enter, Backspace, Escape)"),
    trace: bool = typer.Option(False, "--trace", "-t", help="Print the display after every key"),
) -> None:
    """Replay keystrokes through a fresh calculator and print the display."""
    settings = _settings(ctx)
    buffer = ExpressionBuffer(settings=settings)

    def _trace(key: str, display: str) -> None:
        console.print(f"  [dim]{key:>9}[/dim]  {display}")

    expanded = [k for arg in keys for k in split_keys(arg)]
    display = feed(buffer, expanded, on_event=_trace if trace else None)
    typer.echo(display)
    if display == settings.error_token and buffer.just_evaluated and not buffer.text:
        raise typer.Exit(1)


@app.command("repl")
def cmd_repl(ctx: typer.Context) -> None:
    """Interactive keypad session. Empty line evaluates, 'q' quits."""
    settings = _settings(ctx)
    out = Console()
    renderer = ConsoleDisplay(out, error_token=settings.error_token)
    buffer = ExpressionBuffer(settings=settings)

    console.print("[dim]Type keys (2+3*4, %, ( ), Backspace, Escape). Empty line evaluates, q quits.[/dim]")
    renderer.show(buffer.display)
    while True:
        try:
            line = out.input("[bold]>[/bold] ")
        except EOFError:
            break
        word = line.strip()
        if word.lower() in _QUIT_WORDS:
            break
        feed(buffer, split_keys(line) if word else ["Enter"])
        renderer.show(buffer.display)


@app.command("keys")
def cmd_keys() -> None:
    """Show key bindings."""
    table = Table(title="Key Bindings", show_header=True, header_style="bold")
    table.add_column("Key", style="green", min_width=12)
    table.add_column("Action", min_width=30)

    for key, action in KEY_BINDINGS:
        table.add_row(key, action)

    out = Console()
    out.print()
    out.print(table)
    out.print()


if __name__ == "__main__":
    app()
