"""Public parse entry points for grammarkit.

Two functional entry points wrap the parsing engine:

- ``parse`` returns ``()`` or ``(node, remaining)`` and never raises for
  unparseable input.
- ``parse_with_errors`` returns a ``ParseOutcome`` that carries a
  ``RichParseError`` when nothing could be matched.

``Parser`` (built by ``create_parser``) bundles a grammar with its
configuration and a schema validator, and adds ``compile`` for turning
an expression into a reusable ``BoundEvaluator``.

Usage
-----
::

    from grammarkit import create_parser
    from grammarkit.grammars import arithmetic

    parser = create_parser(arithmetic())
    node, rest = parser.parse("1 + 2 * 3")
    parser.evaluate(node, {})                     # 7

    area = parser.compile("w * h", {"w": "number", "h": "number"})
    area({"w": 3, "h": 4})                        # 12
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from grammarkit.ast.nodes import ASTNode
from grammarkit.config import DEFAULT_CONFIG, ParserConfig
from grammarkit.grammar.grammar import Grammar, build_grammar
from grammarkit.parser.engine import ProgressTracker, parse_levels
from grammarkit.parser.errors import (
    ExpressionSyntaxError,
    RichParseError,
    empty_input_error,
    no_match_error,
    unexpected_token_error,
)
from grammarkit.parser.matcher import ParseResult
from grammarkit.runtime.eval import EvalContext, evaluate
from grammarkit.schema.nodes import NodeSchema
from grammarkit.validator.validator import SchemaValidator

logger = logging.getLogger(__name__)

_EMPTY_CONTEXT: Mapping[str, str] = {}


@dataclass(frozen=True)
class ParseOutcome:
    """Result of ``parse_with_errors``.

    Parameters
    ----------
    success:
        Whether anything was matched.
    input:
        The original input.
    ast:
        The parsed tree, on success.
    remaining:
        Unconsumed input, on success.  A partial match is a success.
    error:
        The failure description, when ``success`` is False.
    """

    success: bool
    input: str
    ast: ASTNode | None = None
    remaining: str | None = None
    error: RichParseError | None = None


def _failure_offset(grammar: Grammar, text: str, context: Mapping[str, str]) -> int:
    tracker = ProgressTracker(text)
    parse_levels(grammar, text, context, 0, tracker)
    offset = tracker.furthest_offset
    while offset < len(text) and text[offset].isspace():
        offset += 1
    return offset


def _parse_with_errors(
    grammar: Grammar,
    text: str,
    context: Mapping[str, str],
    config: ParserConfig,
) -> ParseOutcome:
    if not text.strip():
        return ParseOutcome(success=False, input=text, error=empty_input_error(text, config))

    result = parse_levels(grammar, text, context)
    if result:
        node, remaining = result
        return ParseOutcome(success=True, input=text, ast=node, remaining=remaining)

    offset = _failure_offset(grammar, text, context)
    logger.debug("No rule matched %r; furthest offset %d", text, offset)
    return ParseOutcome(success=False, input=text, error=no_match_error(text, offset, config))


def parse(
    nodes: Iterable[NodeSchema],
    text: str,
    context: Mapping[str, str] | None = None,
) -> ParseResult:
    """Parse ``text`` with the rules ``nodes``.

    Parameters
    ----------
    nodes:
        Operator rules; the built-in atoms are always available.
    text:
        The expression to parse.
    context:
        Variable name to schema descriptor; identifiers not listed get
        the ``unknown`` schema.

    Returns
    -------
    tuple
        ``()`` when nothing matched, else ``(node, remaining)``.
    """
    return parse_levels(build_grammar(nodes), text, context or _EMPTY_CONTEXT)


def parse_with_errors(
    nodes: Iterable[NodeSchema],
    text: str,
    context: Mapping[str, str] | None = None,
    config: ParserConfig | None = None,
) -> ParseOutcome:
    """Parse ``text`` and describe the failure if nothing matched.

    Empty or whitespace-only input fails with ``empty_input`` without
    attempting a parse.  Otherwise a total failure is reported as
    ``no_match`` at the furthest offset any terminal was matched.
    """
    return _parse_with_errors(
        build_grammar(nodes), text, context or _EMPTY_CONTEXT, config or DEFAULT_CONFIG
    )


class BoundEvaluator:
    """A compiled expression, callable with a data mapping.

    Instances are created by ``Parser.compile``.
    """

    def __init__(self, parser: Parser, ast: ASTNode, schema: Mapping[str, str]) -> None:
        self.parser = parser
        self.ast = ast
        self.schema = dict(schema)

    @property
    def output_schema(self) -> str:
        """Static type of the compiled expression."""
        return self.ast.output_schema

    def __call__(self, data: Mapping[str, Any]) -> Any:
        return self.parser.evaluate(self.ast, data)

    def __repr__(self) -> str:
        return f"BoundEvaluator(node={self.ast.node!r}, output_schema={self.output_schema!r})"


class Parser:
    """A grammar together with its configuration and validator.

    Parameters
    ----------
    nodes:
        Operator rules in declaration order.
    config:
        Error rendering and trailing-input options.
    validator:
        Validator used when evaluating; one is created if omitted.

    Raises
    ------
    GrammarDefinitionError
        If two rules share a name.
    """

    def __init__(
        self,
        nodes: Iterable[NodeSchema],
        config: ParserConfig | None = None,
        validator: SchemaValidator | None = None,
    ) -> None:
        self.nodes: tuple[NodeSchema, ...] = tuple(nodes)
        self.grammar: Grammar = build_grammar(self.nodes)
        self.config = config or DEFAULT_CONFIG
        self.validator = validator if validator is not None else SchemaValidator()

    def parse(self, text: str, context: Mapping[str, str] | None = None) -> ParseResult:
        """Silent parse; see ``grammarkit.parser.parse``."""
        return parse_levels(self.grammar, text, context or _EMPTY_CONTEXT)

    def parse_with_errors(
        self, text: str, context: Mapping[str, str] | None = None
    ) -> ParseOutcome:
        """Parse with diagnostics; see ``grammarkit.parser.parse_with_errors``."""
        return _parse_with_errors(self.grammar, text, context or _EMPTY_CONTEXT, self.config)

    def evaluate(self, ast: Any, data: Mapping[str, Any]) -> Any:
        """Evaluate a tree parsed with this parser's rules."""
        return evaluate(ast, EvalContext(data=data, nodes=self.nodes, validator=self.validator))

    def compile(self, text: str, schema: Mapping[str, str] | None = None) -> BoundEvaluator:
        """Parse ``text`` once and return an evaluator for it.

        Parameters
        ----------
        text:
            The expression.
        schema:
            Variable name to schema descriptor, used both for parsing and
            for validating data at call time.

        Raises
        ------
        ExpressionSyntaxError
            If nothing matched, or text is left over and the config does
            not allow trailing input.
        SchemaDescriptorError
            If a descriptor in ``schema`` is malformed.
        """
        context = dict(schema or {})
        for descriptor in context.values():
            if not self.validator.always_passes(descriptor):
                self.validator.compile(descriptor)

        outcome = self.parse_with_errors(text, context)
        if not outcome.success:
            assert outcome.error is not None
            raise ExpressionSyntaxError(outcome.error)

        assert outcome.ast is not None and outcome.remaining is not None
        leftover = outcome.remaining.strip()
        if leftover and not self.config.allow_trailing_input:
            offset = len(text) - len(outcome.remaining.lstrip())
            raise ExpressionSyntaxError(
                unexpected_token_error(text, offset, leftover, "end of input", self.config)
            )
        return BoundEvaluator(self, outcome.ast, context)


def create_parser(
    nodes: Iterable[NodeSchema],
    config: ParserConfig | None = None,
    validator: SchemaValidator | None = None,
) -> Parser:
    """Build a ``Parser`` for ``nodes``."""
    return Parser(nodes, config=config, validator=validator)
