"""CLI entry point for grammarkit.

Invoked as::

    grammarkit [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m grammarkit.cli.main

Commands
--------
version     Show version information
grammars    List registered grammars
levels      Show the precedence levels of a grammar
parse       Parse an expression and dump the AST to JSON or YAML
eval        Parse and evaluate an expression
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from grammarkit.parser.errors import RichParseError
    from grammarkit.schema.nodes import NodeSchema, PatternElement

console = Console()
err_console = Console(stderr=True)


def _load_grammar(reference: str) -> tuple[NodeSchema, ...]:
    """Resolve a grammar name or ``module:attribute`` reference, exiting on error."""
    from grammarkit.grammars import GrammarNotFoundError, default_registry

    default_registry.load_entrypoints()
    try:
        return default_registry.resolve(reference)
    except GrammarNotFoundError as exc:
        err_console.print(f"[red]Error:[/red] {escape(exc.args[0])}")
        sys.exit(1)
    except (ImportError, AttributeError) as exc:
        err_console.print(f"[red]Error:[/red] Cannot load grammar {reference!r}: {escape(str(exc))}")
        sys.exit(1)


def _print_parse_error(error: RichParseError) -> None:
    from grammarkit.parser.errors import format_error

    err_console.print(
        Panel(escape(format_error(error)), title=f"[red]{error.kind.value}[/red]", expand=False)
    )


def _split_pairs(values: tuple[str, ...], option: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got {item!r}", param_hint=option)
        pairs[name.strip()] = value.strip()
    return pairs


def _parse_vars(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, str]:
    return _split_pairs(values, "--var")


def _parse_sets(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for name, raw in _split_pairs(values, "--set").items():
        try:
            data[name] = json.loads(raw)
        except json.JSONDecodeError:
            raise click.BadParameter(f"value of {name!r} is not valid JSON: {raw!r}", param_hint="--set") from None
    return data


def _describe_element(element: PatternElement) -> str:
    from grammarkit.schema.nodes import (
        Bound,
        BooleanPattern,
        ConstPattern,
        ExprPattern,
        IdentPattern,
        NullPattern,
        NumberPattern,
        StringPattern,
    )

    kind = element.kind
    if isinstance(kind, ConstPattern):
        text = json.dumps(kind.value, ensure_ascii=False)
    elif isinstance(kind, ExprPattern):
        text = kind.role.value + (f"<{kind.constraint}>" if kind.constraint else "")
    elif isinstance(kind, NumberPattern):
        text = "number"
    elif isinstance(kind, StringPattern):
        text = "string"
    elif isinstance(kind, IdentPattern):
        text = "ident"
    elif isinstance(kind, NullPattern):
        text = "null"
    elif isinstance(kind, BooleanPattern):
        text = "boolean"
    else:
        text = "undefined"
    if isinstance(element, Bound):
        return f"{element.name}:{text}"
    return text


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="grammarkit")
def cli() -> None:
    """grammarkit: precedence-climbing expression parser, type checker and evaluator."""


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from grammarkit import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]grammarkit[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# grammars command
# ---------------------------------------------------------------------------


@cli.command(name="grammars")
def grammars_command() -> None:
    """List registered grammars, including those loaded from entry-points."""
    from grammarkit.grammars import default_registry

    default_registry.load_entrypoints()
    table = Table(title="Registered grammars")
    table.add_column("Name", style="bold")
    table.add_column("Rules", justify="right")
    for name in default_registry.list_grammars():
        table.add_row(name, str(len(default_registry.build(name))))
    console.print(table)


# ---------------------------------------------------------------------------
# levels command
# ---------------------------------------------------------------------------


@cli.command(name="levels")
@click.argument("grammar")
def levels_command(grammar: str) -> None:
    """Show the precedence levels of GRAMMAR, loosest first.

    GRAMMAR is a registered grammar name or a module:attribute reference.
    """
    from grammarkit.grammar import build_grammar
    from grammarkit.schema.nodes import Fixed

    nodes = _load_grammar(grammar)
    table = Table(title=f"Grammar {grammar!r}")
    table.add_column("Precedence", justify="right")
    table.add_column("Rule", style="bold")
    table.add_column("Pattern")
    table.add_column("Result")
    for level in build_grammar(nodes):
        precedence = "atom" if level.is_atom_level else str(level.precedence)
        for schema in level.nodes:
            pattern = " ".join(_describe_element(e) for e in schema.pattern)
            if isinstance(schema.result_type, Fixed):
                result = schema.result_type.schema
            else:
                result = "union(" + ", ".join(schema.result_type.bindings) + ")"
            table.add_row(precedence, schema.name, escape(pattern), escape(result))
    console.print(table)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("expression")
@click.option("--grammar", "-g", default="standard", show_default=True, help="Grammar name or module:attribute")
@click.option("--var", "variables", multiple=True, callback=_parse_vars, help="Variable schema as NAME=SCHEMA")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="AST output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def parse_command(
    expression: str,
    grammar: str,
    variables: dict[str, str],
    output_format: str,
    output: str | None,
) -> None:
    """Parse EXPRESSION and dump the AST.

    Examples:

    \b
        grammarkit parse "1 + 2 * 3"
        grammarkit parse "price * qty" --var price=number --var qty=number --format yaml
    """
    from grammarkit.ast import AstSerializer
    from grammarkit.parser import create_parser

    parser = create_parser(_load_grammar(grammar))
    outcome = parser.parse_with_errors(expression, variables)
    if not outcome.success:
        assert outcome.error is not None
        _print_parse_error(outcome.error)
        sys.exit(1)

    assert outcome.ast is not None
    serializer = AstSerializer()
    if output_format == "json":
        text = serializer.to_json(outcome.ast, indent=2)
    else:
        text = serializer.to_yaml(outcome.ast)

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]AST written to[/green] {output}")
    else:
        console.print(Syntax(text, output_format, line_numbers=True))

    if outcome.remaining and outcome.remaining.strip():
        err_console.print(f"[yellow]Warning:[/yellow] unparsed input: {escape(outcome.remaining.strip())!r}")


# ---------------------------------------------------------------------------
# eval command
# ---------------------------------------------------------------------------


@cli.command(name="eval")
@click.argument("expression")
@click.option("--grammar", "-g", default="standard", show_default=True, help="Grammar name or module:attribute")
@click.option("--var", "variables", multiple=True, callback=_parse_vars, help="Variable schema as NAME=SCHEMA")
@click.option("--set", "values", multiple=True, callback=_parse_sets, help="Variable value as NAME=JSON")
def eval_command(
    expression: str,
    grammar: str,
    variables: dict[str, str],
    values: dict[str, Any],
) -> None:
    """Parse and evaluate EXPRESSION.

    Examples:

    \b
        grammarkit eval "(1 + 2) * 3"
        grammarkit eval "age >= 18" --var age=number --set age=21
    """
    from grammarkit.lexer import UNDEFINED
    from grammarkit.parser import ExpressionSyntaxError, create_parser
    from grammarkit.runtime import EvaluationError
    from grammarkit.validator import SchemaDescriptorError

    parser = create_parser(_load_grammar(grammar))
    try:
        evaluator = parser.compile(expression, variables)
    except ExpressionSyntaxError as exc:
        _print_parse_error(exc.error)
        sys.exit(1)
    except SchemaDescriptorError as exc:
        err_console.print(f"[red]Schema error:[/red] {escape(str(exc))}")
        sys.exit(1)

    try:
        result = evaluator(values)
    except EvaluationError as exc:
        err_console.print(f"[red]Evaluation error:[/red] {escape(str(exc))}")
        sys.exit(1)
    except ArithmeticError as exc:
        err_console.print(f"[red]Arithmetic error:[/red] {escape(str(exc))}")
        sys.exit(1)

    rendered = "undefined" if result is UNDEFINED else json.dumps(result, ensure_ascii=False)
    console.print(escape(rendered), highlight=False)
    console.print(f"[dim]type: {escape(evaluator.output_schema)}[/dim]", highlight=False)


if __name__ == "__main__":
    cli()
