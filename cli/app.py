from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from cli.arguments import parse_argument
from core.config import Config
from core.config_file import create_default_config
from core.engine import FactorialEngine, FactorialStatus
from core.exceptions import ArgumentError, ConfigurationError
from core.numeric import IntegerType, resolve_integer_type

__version__ = "0.1.0"

app = typer.Typer(
    add_completion=False,
    help="Compute factorials of the given integers, reusing earlier results.",
)
console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)


@dataclass
class RunSummary:
    """Counts of per-argument outcomes for one run."""

    computed: int = 0
    invalid: int = 0
    negative: int = 0
    overflowed: int = 0

    @property
    def rejected(self) -> int:
        return self.invalid + self.negative + self.overflowed


def _error(message: str) -> None:
    err_console.print(escape(message), style="red")


def process_values(values: List[str], engine: FactorialEngine, parse_type: IntegerType) -> RunSummary:
    """
    Compute and report the factorial of every value, in order.

    Failures are reported on stderr and never stop the loop.

    Args:
        values: Raw command line values.
        engine: Engine shared by all values of the run.
        parse_type: Integer type the values are parsed into.

    Returns:
        RunSummary with the outcome counts.
    """
    summary = RunSummary()
    for position, text in enumerate(values, start=1):
        try:
            n = parse_argument(position, text, parse_type)
        except ArgumentError as e:
            _error(str(e))
            summary.invalid += 1
            continue

        if n < 0:
            _error(f"Argument {position} = {text} is negative")
            summary.negative += 1
            continue

        result = engine.compute(n)
        if result.status is FactorialStatus.OVERFLOW:
            _error(f"Argument {position} = {n} forced the factorial function to overflow")
            summary.overflowed += 1
        elif result.status is FactorialStatus.NEGATIVE_INPUT:
            _error(f"Argument {position} = {text} is negative")
            summary.negative += 1
        else:
            console.print(f"The factorial of {n} is {result.value}", markup=False)
            summary.computed += 1
    return summary


def describe_cache(engine: FactorialEngine, summary: RunSummary) -> str:
    return (
        f"Cache: {engine.cache_size} entries up to {engine.highest_index}! "
        f"({engine.output_type.name}); {summary.computed} computed, {summary.rejected} rejected"
    )


@app.command(context_settings={"ignore_unknown_options": True})
def run(
    values: Optional[List[str]] = typer.Argument(
        None,
        help="Integers to compute the factorial of (negative values are reported, not computed)",
        show_default=False,
    ),
    output_type: str = typer.Option(
        "",
        "--output-type",
        help="Integer type factorials are stored in (default from config: uint64)",
        show_default=False,
    ),
    input_type: str = typer.Option(
        "",
        "--input-type",
        help="Integer type arguments are parsed into (default from config: int32)",
        show_default=False,
    ),
    show_cache: bool = typer.Option(
        False,
        "--show-cache",
        help="Print a cache summary to stderr after processing",
        show_default=False,
    ),
    init_config: bool = typer.Option(
        False,
        "--init-config",
        help="Write a default .memo-factorial.toml to the config directory and exit",
        show_default=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        show_default=False,
    ),
) -> None:
    """
    Print the factorial of each value. Errors for individual values go to stderr.

    A bare -- ends option parsing and is not counted as a value.
    """
    if version:
        console.print(f"memo-factorial v{__version__}")
        raise typer.Exit(code=0)

    try:
        settings = Config()
        if init_config:
            path = create_default_config(str(settings.config_dir))
            console.print(f"Wrote {path}", markup=False)
            raise typer.Exit(code=0)

        parse_type = resolve_integer_type(input_type or settings.input_type)
        engine = FactorialEngine(output_type or settings.output_type, parse_type)
    except ConfigurationError as e:
        _error(f"Configuration error: {e}")
        raise typer.Exit(code=1)

    summary = process_values(values or [], engine, parse_type)

    if show_cache or settings.show_cache:
        err_console.print(describe_cache(engine, summary), markup=False)
