"""grammarkit: precedence-climbing expression parser, type checker and evaluator.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    from grammarkit import create_parser, define_node, const, lhs, rhs

    add = define_node(
        name="add",
        pattern=[lhs("number").bind("left"), const("+"), rhs("number").bind("right")],
        precedence=1,
        result_type="number",
        eval=lambda b, data: b["left"] + b["right"],
    )

    parser = create_parser([add])
    node, remaining = parser.parse("1 + 2")
    parser.evaluate(node, {})
    3

    grammarkit.__version__
    '0.1.0'
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from grammarkit.lexer.lexer import UNDEFINED
from grammarkit.schema.nodes import (
    ComputedUnion,
    Fixed,
    GrammarDefinitionError,
    NodeSchema,
    boolean_literal,
    const,
    define_node,
    expr,
    ident,
    lhs,
    null_literal,
    number,
    rhs,
    string,
    undefined_literal,
    union,
)

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from grammarkit.config import ParserConfig
    from grammarkit.parser.matcher import ParseResult
    from grammarkit.parser.parser import ParseOutcome, Parser
    from grammarkit.parser.errors import RichParseError


def parse(
    nodes: Iterable[NodeSchema], text: str, context: Mapping[str, str] | None = None
) -> "ParseResult":
    """Parse ``text`` with the rules ``nodes``.

    Returns
    -------
    tuple
        ``()`` when nothing matched, else ``(node, remaining)``.
    """
    from grammarkit.parser.parser import parse as _parse

    return _parse(nodes, text, context)


def parse_with_errors(
    nodes: Iterable[NodeSchema],
    text: str,
    context: Mapping[str, str] | None = None,
    config: "ParserConfig | None" = None,
) -> "ParseOutcome":
    """Parse ``text``, describing the failure when nothing matched."""
    from grammarkit.parser.parser import parse_with_errors as _parse_with_errors

    return _parse_with_errors(nodes, text, context, config)


def create_parser(
    nodes: Iterable[NodeSchema], config: "ParserConfig | None" = None
) -> "Parser":
    """Build a reusable ``Parser`` for ``nodes``."""
    from grammarkit.parser.parser import create_parser as _create_parser

    return _create_parser(nodes, config=config)


def evaluate(ast: Any, data: Mapping[str, Any], nodes: Iterable[NodeSchema]) -> Any:
    """Evaluate ``ast`` against ``data`` using the rules ``nodes``.

    A convenience wrapper with positional ``data`` and ``nodes``.  The
    underlying entry point, ``grammarkit.runtime.evaluate(ast, ctx)``,
    takes both together in an ``EvalContext`` along with an optional
    shared ``SchemaValidator``.

    Raises
    ------
    grammarkit.runtime.EvaluationError
        On any evaluation contract violation.
    """
    from grammarkit.runtime.eval import EvalContext, evaluate as _evaluate

    return _evaluate(ast, EvalContext(data=data, nodes=tuple(nodes)))


def create_evaluator(nodes: Iterable[NodeSchema]) -> Any:
    """Return ``evaluator(ast, data)`` bound to ``nodes``."""
    from grammarkit.runtime.eval import create_evaluator as _create_evaluator

    return _create_evaluator(tuple(nodes))


def infer(ast: Any) -> str:
    """Return the static type (``output_schema``) of a parsed tree."""
    from grammarkit.runtime.infer import infer as _infer

    return _infer(ast)


def format_error(error: "RichParseError") -> str:
    """Render a parse error for terminal display."""
    from grammarkit.parser.errors import format_error as _format_error

    return _format_error(error)


__all__ = [
    "__version__",
    "UNDEFINED",
    "NodeSchema",
    "Fixed",
    "ComputedUnion",
    "GrammarDefinitionError",
    "define_node",
    "number",
    "string",
    "ident",
    "const",
    "null_literal",
    "boolean_literal",
    "undefined_literal",
    "lhs",
    "rhs",
    "expr",
    "union",
    "parse",
    "parse_with_errors",
    "create_parser",
    "evaluate",
    "create_evaluator",
    "infer",
    "format_error",
]
