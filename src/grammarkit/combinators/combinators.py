"""Standalone parser combinators.

These predate the rule-based grammar and are kept for hand-written
parsers that do not need precedence levels.  Every parser exposes
``parse(text, context) -> () | (value, remaining)``, the same result
shape as the parsing engine, so they compose freely::

    pair = Sequence(NumberToken(), ConstToken(","), NumberToken())
    pair.parse("1, 2", {})        # ([literal 1, const ",", literal 2], "")

Primitive tokens yield AST nodes; ``Sequence`` and ``Many`` yield lists.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, Union

from grammarkit.parser.matcher import (
    NO_MATCH,
    match_const,
    match_ident,
    match_number,
    match_string,
)

CombinatorResult = Union[tuple[()], tuple[Any, str]]


class TextParser(Protocol):
    """Anything with a combinator-style ``parse`` method."""

    def parse(self, text: str, context: Mapping[str, str]) -> CombinatorResult: ...


# ---------------------------------------------------------------------------
# Primitive tokens
# ---------------------------------------------------------------------------


class NumberToken:
    """Parse a number literal."""

    def parse(self, text: str, context: Mapping[str, str]) -> CombinatorResult:
        return match_number(text)


class StringToken:
    """Parse a string literal delimited by one of ``quotes``."""

    def __init__(self, quotes: tuple[str, ...] = ('"', "'")) -> None:
        self.quotes = tuple(quotes)

    def parse(self, text: str, context: Mapping[str, str]) -> CombinatorResult:
        return match_string(text, self.quotes)


class IdentToken:
    """Parse an identifier, typed from ``context``."""

    def parse(self, text: str, context: Mapping[str, str]) -> CombinatorResult:
        return match_ident(text, context)


class ConstToken:
    """Parse the exact text ``value``."""

    def __init__(self, value: str) -> None:
        self.value = value

    def parse(self, text: str, context: Mapping[str, str]) -> CombinatorResult:
        return match_const(text, self.value)


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


class Choice:
    """Return the first alternative that matches."""

    def __init__(self, *parsers: TextParser) -> None:
        self.parsers = parsers

    def parse(self, text: str, context: Mapping[str, str]) -> CombinatorResult:
        for parser in self.parsers:
            result = parser.parse(text, context)
            if result:
                return result
        return NO_MATCH


class Sequence:
    """Match every parser in order; the value is the list of results."""

    def __init__(self, *parsers: TextParser) -> None:
        self.parsers = parsers

    def parse(self, text: str, context: Mapping[str, str]) -> CombinatorResult:
        values: list[Any] = []
        remaining = text
        for parser in self.parsers:
            result = parser.parse(remaining, context)
            if not result:
                return NO_MATCH
            value, remaining = result
            values.append(value)
        return values, remaining


class Maybe:
    """Match ``parser`` or nothing; yields ``(None, text)`` on failure."""

    def __init__(self, parser: TextParser) -> None:
        self.parser = parser

    def parse(self, text: str, context: Mapping[str, str]) -> CombinatorResult:
        result = self.parser.parse(text, context)
        if result:
            return result
        return None, text


class Many:
    """Match ``parser`` zero or more times.

    Stops at the first failure or at a match that consumes nothing.
    """

    def __init__(self, parser: TextParser) -> None:
        self.parser = parser

    def parse(self, text: str, context: Mapping[str, str]) -> CombinatorResult:
        values: list[Any] = []
        remaining = text
        while True:
            result = self.parser.parse(remaining, context)
            if not result:
                break
            value, rest = result
            if rest == remaining:
                break
            values.append(value)
            remaining = rest
        return values, remaining
