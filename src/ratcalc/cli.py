"""
ratcalc command-line interface.

Commands:
- eval: Evaluate one expression
- rpn:  Show the postfix (Reverse Polish) form of an expression
- tree: Show the parsed expression tree
- repl: Read expressions interactively until EOF or "quit"
"""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from ratcalc._version import get_version
from ratcalc.core.calc import evaluate_tree, format_postfix, parse, to_postfix, tokenize
from ratcalc.core.config import CalcConfig, load_config
from ratcalc.core.errors import CalcError

console = Console(highlight=False)

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_QUIT_WORDS = {"quit", "exit"}


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"ratcalc version {get_version()}")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        raise typer.Exit()


# =============================================================================
# Main Application
# =============================================================================

app = typer.Typer(
    help="ratcalc – exact rational arithmetic for text expressions",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to ratcalc.toml (default: ./ratcalc.toml if present)",
    ),
) -> None:
    """ratcalc CLI main callback for global options."""
    try:
        calc_config = load_config(config)
    except CalcError as e:
        console.print(f"[red]Config error: {escape(e.message)}[/red]")
        raise typer.Exit(1)

    logging.basicConfig(
        level=getattr(logging, calc_config.logging.level, logging.WARNING),
        format=_LOG_FORMAT,
    )
    ctx.obj = calc_config


def _get_config(ctx: typer.Context) -> CalcConfig:
    if isinstance(ctx.obj, CalcConfig):
        return ctx.obj
    return CalcConfig()


def _print_error(error: CalcError) -> None:
    console.print(f"[red]Error ({error.kind}): {escape(str(error))}[/red]")


# =============================================================================
# Commands
# =============================================================================


@app.command(name="eval")
def eval_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression to evaluate, e.g. '(1 + 2) / 3'"),
    show_postfix: bool = typer.Option(False, "--postfix", help="Also print the postfix form"),
    show_tree: bool = typer.Option(False, "--tree", help="Also print the parsed tree"),
) -> None:
    """Evaluate an expression exactly."""
    limits = _get_config(ctx).limits.to_limits()
    try:
        tree = parse(expression, limits)
        if show_postfix:
            console.print(f"Postfix: {escape(format_postfix(tree.postfix()))}")
        if show_tree:
            console.print(f"Tree: {escape(str(tree))}")
        value = evaluate_tree(tree)
    except CalcError as e:
        _print_error(e)
        raise typer.Exit(1)

    console.print(f"[green]Result: {escape(str(value))}[/green]")


@app.command(name="rpn")
def rpn_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression to convert"),
) -> None:
    """Print the postfix (Reverse Polish) form of an expression."""
    limits = _get_config(ctx).limits.to_limits()
    try:
        postfix = to_postfix(tokenize(expression), limits, expression)
    except CalcError as e:
        _print_error(e)
        raise typer.Exit(1)

    console.print(escape(format_postfix(postfix)))


@app.command(name="tree")
def tree_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression to parse"),
) -> None:
    """Print the parsed expression tree and its depth."""
    limits = _get_config(ctx).limits.to_limits()
    try:
        tree = parse(expression, limits)
    except CalcError as e:
        _print_error(e)
        raise typer.Exit(1)

    console.print(escape(str(tree)))
    console.print(f"Depth: {tree.depth}")


@app.command(name="repl")
def repl_command(ctx: typer.Context) -> None:
    """Evaluate expressions interactively. Ends on EOF, 'quit' or 'exit'."""
    limits = _get_config(ctx).limits.to_limits()
    console.print("Enter an expression")

    while True:
        try:
            line = console.input(">> ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if line.strip().lower() in _QUIT_WORDS:
            break
        if not line.strip():
            continue

        try:
            value = evaluate_tree(parse(line, limits))
        except CalcError as e:
            _print_error(e)
            continue
        console.print(f"Result: {escape(str(value))}")


# =============================================================================
# Main Entry Point
# =============================================================================


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
