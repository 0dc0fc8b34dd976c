"""Rich parse error types for grammarkit.

The parsing engine itself never raises: a failed match is ``()``.  The
types here describe a failure *after* the fact, for callers that asked
for diagnostics via ``parse_with_errors`` or ``Parser.compile``.  Every
error carries the original input, a 1-based line/column position and a
one-line snippet with a marker at the failure point, so that the CLI can
print an actionable message.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from grammarkit.config import DEFAULT_CONFIG, ParserConfig


class ParseErrorKind(Enum):
    """Category of a parse failure."""

    NO_MATCH = "no_match"
    TYPE_MISMATCH = "type_mismatch"
    UNTERMINATED_STRING = "unterminated_string"
    UNCLOSED_PAREN = "unclosed_paren"
    UNEXPECTED_TOKEN = "unexpected_token"
    EMPTY_INPUT = "empty_input"


@dataclass(frozen=True, slots=True)
class SourcePosition:
    """A location in the input.

    Parameters
    ----------
    offset:
        Zero-based character offset.
    line:
        One-based line number.
    column:
        One-based column within the line.
    """

    offset: int
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Optional detail rendered under an error message."""

    expected: str | None = None
    actual: str | None = None
    parsing: str | None = None


@dataclass(frozen=True)
class RichParseError:
    """A parse failure with position, snippet and optional context.

    Parameters
    ----------
    kind:
        The failure category.
    message:
        Human-readable description, including the position.
    position:
        Where the failure was detected.
    snippet:
        The input around ``position`` with a marker inserted.
    input:
        The complete original input.
    context:
        Expected/actual detail, if the kind provides it.
    """

    kind: ParseErrorKind
    message: str
    position: SourcePosition
    snippet: str
    input: str
    context: ErrorContext | None = None

    def __str__(self) -> str:
        return self.message


class ExpressionSyntaxError(Exception):
    """Raised by ``Parser.compile`` when an expression cannot be compiled.

    Parameters
    ----------
    error:
        The structured description of the failure.
    """

    def __init__(self, error: RichParseError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def kind(self) -> ParseErrorKind:
        """Shortcut for ``self.error.kind``."""
        return self.error.kind


# ---------------------------------------------------------------------------
# Position and snippet helpers
# ---------------------------------------------------------------------------


def calculate_position(text: str, offset: int) -> SourcePosition:
    """Return the line/column of ``offset`` in ``text``."""
    before = text[:offset]
    line = before.count("\n") + 1
    column = offset - before.rfind("\n")
    return SourcePosition(offset=offset, line=line, column=column)


def create_snippet(
    text: str,
    offset: int,
    context_chars: int = DEFAULT_CONFIG.snippet_context,
    marker: str = DEFAULT_CONFIG.snippet_marker,
) -> str:
    """Render ``text`` around ``offset`` with ``marker`` at the offset.

    At most ``context_chars`` characters are kept on each side; a cut side
    is shown as ``...``.  Newlines, tabs and carriage returns are escaped
    so the snippet always fits on one line.
    """
    if not text:
        return "(empty input)"
    start = max(0, offset - context_chars)
    end = min(len(text), offset + context_chars)
    parts = []
    if start > 0:
        parts.append("...")
    parts.extend((text[start:offset], marker, text[offset:end]))
    if end < len(text):
        parts.append("...")
    snippet = "".join(parts)
    return snippet.replace("\n", "\\n").replace("\t", "\\t").replace("\r", "\\r")


def _create(
    kind: ParseErrorKind,
    message: str,
    text: str,
    offset: int,
    context: ErrorContext | None,
    config: ParserConfig | None,
) -> RichParseError:
    cfg = config or DEFAULT_CONFIG
    return RichParseError(
        kind=kind,
        message=message,
        position=calculate_position(text, offset),
        snippet=create_snippet(text, offset, cfg.snippet_context, cfg.snippet_marker),
        input=text,
        context=context,
    )


def _at(text: str, offset: int) -> str:
    position = calculate_position(text, offset)
    return f"{position.line}:{position.column}"


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def no_match_error(
    text: str, offset: int, config: ParserConfig | None = None
) -> RichParseError:
    """No rule matched at ``offset``."""
    remaining = text[offset:].strip()
    preview = remaining[:20] + ("..." if len(remaining) > 20 else "")
    if not text.strip():
        message = "Empty or whitespace-only input"
    elif offset >= len(text):
        message = "Unexpected end of input"
    else:
        message = f'No grammar rule matched at position {_at(text, offset)}: "{preview}"'
    return _create(ParseErrorKind.NO_MATCH, message, text, offset, None, config)


def type_mismatch_error(
    text: str,
    offset: int,
    expected: str,
    actual: str,
    parsing: str | None = None,
    config: ParserConfig | None = None,
) -> RichParseError:
    """A sub-expression had schema ``actual`` where ``expected`` was required."""
    message = f"Type mismatch at {_at(text, offset)}: expected '{expected}', got '{actual}'"
    if parsing:
        message += f" while parsing {parsing}"
    context = ErrorContext(expected=expected, actual=actual, parsing=parsing)
    return _create(ParseErrorKind.TYPE_MISMATCH, message, text, offset, context, config)


def unterminated_string_error(
    text: str, offset: int, quote: str, config: ParserConfig | None = None
) -> RichParseError:
    """A string literal opened at ``offset`` has no closing ``quote``."""
    message = f"Unterminated string literal at {_at(text, offset)}: missing closing {quote}"
    context = ErrorContext(parsing="string literal")
    return _create(ParseErrorKind.UNTERMINATED_STRING, message, text, offset, context, config)


def unclosed_paren_error(
    text: str, offset: int, config: ParserConfig | None = None
) -> RichParseError:
    """A parenthesized group is missing its ``)``."""
    message = f"Unclosed parenthesis at {_at(text, offset)}: missing ')'"
    context = ErrorContext(parsing="parenthesized expression")
    return _create(ParseErrorKind.UNCLOSED_PAREN, message, text, offset, context, config)


def unexpected_token_error(
    text: str,
    offset: int,
    found: str,
    expected: str | None = None,
    config: ParserConfig | None = None,
) -> RichParseError:
    """Text ``found`` at ``offset`` could not be consumed."""
    message = f"Unexpected token at {_at(text, offset)}: found '{found}'"
    if expected:
        message += f", expected {expected}"
    context = ErrorContext(expected=expected, parsing="expression")
    return _create(ParseErrorKind.UNEXPECTED_TOKEN, message, text, offset, context, config)


def empty_input_error(text: str, config: ParserConfig | None = None) -> RichParseError:
    """The input is empty or whitespace only."""
    return _create(
        ParseErrorKind.EMPTY_INPUT,
        "Cannot parse empty or whitespace-only input",
        text,
        0,
        None,
        config,
    )


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_error(error: RichParseError) -> str:
    """Render ``error`` as a multi-line block for terminal display.

    Example::

        Error at line 1, column 5:
          Unexpected end of input

          1 + →
    """
    lines = [
        f"Error at line {error.position.line}, column {error.position.column}:",
        f"  {error.message}",
        "",
        f"  {error.snippet}",
    ]
    ctx = error.context
    if ctx is not None and ctx.expected and ctx.actual:
        lines.extend(("", f"  Expected: {ctx.expected}", f"  Actual:   {ctx.actual}"))
    return "\n".join(lines)


def format_errors(errors: Iterable[RichParseError]) -> str:
    """Render several errors separated by blank lines."""
    return "\n\n".join(format_error(error) for error in errors)
