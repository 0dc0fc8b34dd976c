"""grammarkit parser module.

Exports the parse entry points, the ``Parser`` object and the rich
parse error types.
"""
from __future__ import annotations

from grammarkit.parser.engine import ProgressTracker, match_rule, parse_levels
from grammarkit.parser.errors import (
    ErrorContext,
    ExpressionSyntaxError,
    ParseErrorKind,
    RichParseError,
    SourcePosition,
    calculate_position,
    create_snippet,
    empty_input_error,
    format_error,
    format_errors,
    no_match_error,
    type_mismatch_error,
    unclosed_paren_error,
    unexpected_token_error,
    unterminated_string_error,
)
from grammarkit.parser.matcher import NO_MATCH, ParseResult, match_terminal
from grammarkit.parser.parser import (
    BoundEvaluator,
    ParseOutcome,
    Parser,
    create_parser,
    parse,
    parse_with_errors,
)

__all__ = [
    "parse",
    "parse_with_errors",
    "ParseOutcome",
    "Parser",
    "BoundEvaluator",
    "create_parser",
    "parse_levels",
    "match_rule",
    "match_terminal",
    "ProgressTracker",
    "ParseResult",
    "NO_MATCH",
    "ParseErrorKind",
    "SourcePosition",
    "ErrorContext",
    "RichParseError",
    "ExpressionSyntaxError",
    "calculate_position",
    "create_snippet",
    "no_match_error",
    "type_mismatch_error",
    "unterminated_string_error",
    "unclosed_paren_error",
    "unexpected_token_error",
    "empty_input_error",
    "format_error",
    "format_errors",
]
