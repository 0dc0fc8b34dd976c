"""Pattern matcher: turns one terminal pattern element into an AST node.

Sub-expression elements are not handled here; the parsing engine
resolves them against the grammar.  Every function returns either ``()``
(no match) or ``(node, remaining)``.
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Union

from grammarkit.ast.nodes import ASTNode, ConstNode, IdentifierNode, LiteralNode
from grammarkit.lexer.lexer import (
    Token,
    scan_const,
    scan_ident,
    scan_keyword,
    scan_number,
    scan_string,
)
from grammarkit.schema.nodes import (
    UNKNOWN_SCHEMA,
    BooleanPattern,
    ConstPattern,
    ElementKind,
    IdentPattern,
    NullPattern,
    NumberPattern,
    StringPattern,
    UndefinedPattern,
)

ParseResult = Union[tuple[()], tuple[ASTNode, str]]

NO_MATCH: tuple[()] = ()


def _literal(token: Token | None, schema: str) -> ParseResult:
    if token is None:
        return NO_MATCH
    return LiteralNode(raw=token.raw, value=token.value, output_schema=schema), token.rest


def match_number(text: str) -> ParseResult:
    """Match a number literal."""
    return _literal(scan_number(text), "number")


def match_string(text: str, quotes: tuple[str, ...]) -> ParseResult:
    """Match a string literal delimited by one of ``quotes``."""
    return _literal(scan_string(text, quotes), "string")


def match_ident(text: str, context: Mapping[str, str]) -> ParseResult:
    """Match an identifier and resolve its schema from ``context``."""
    token = scan_ident(text)
    if token is None:
        return NO_MATCH
    schema = context.get(token.raw, UNKNOWN_SCHEMA)
    return IdentifierNode(name=token.raw, output_schema=schema), token.rest


def match_const(text: str, value: str) -> ParseResult:
    """Match the exact text ``value``."""
    token = scan_const(text, value)
    if token is None:
        return NO_MATCH
    return ConstNode(output_schema=json.dumps(value, ensure_ascii=False)), token.rest


def match_null(text: str) -> ParseResult:
    """Match the ``null`` keyword."""
    return _literal(scan_keyword(text, "null"), "null")


def match_boolean(text: str) -> ParseResult:
    """Match ``true`` or ``false``."""
    token = scan_keyword(text, "true") or scan_keyword(text, "false")
    return _literal(token, "boolean")


def match_undefined(text: str) -> ParseResult:
    """Match the ``undefined`` keyword."""
    return _literal(scan_keyword(text, "undefined"), "undefined")


def match_terminal(
    kind: ElementKind, text: str, context: Mapping[str, str]
) -> ParseResult:
    """Match a single non-recursive pattern element against ``text``."""
    if isinstance(kind, NumberPattern):
        return match_number(text)
    if isinstance(kind, StringPattern):
        return match_string(text, kind.quotes)
    if isinstance(kind, IdentPattern):
        return match_ident(text, context)
    if isinstance(kind, ConstPattern):
        return match_const(text, kind.value)
    if isinstance(kind, NullPattern):
        return match_null(text)
    if isinstance(kind, BooleanPattern):
        return match_boolean(text)
    if isinstance(kind, UndefinedPattern):
        return match_undefined(text)
    return NO_MATCH
