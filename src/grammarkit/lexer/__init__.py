"""grammarkit lexer module.

Exports the terminal scanners used by the pattern matcher.
"""
from __future__ import annotations

from grammarkit.lexer.lexer import (
    KEYWORD_VALUES,
    UNDEFINED,
    Token,
    TokenKind,
    decode_escapes,
    scan_const,
    scan_ident,
    scan_keyword,
    scan_number,
    scan_string,
)

__all__ = [
    "Token",
    "TokenKind",
    "UNDEFINED",
    "KEYWORD_VALUES",
    "decode_escapes",
    "scan_number",
    "scan_string",
    "scan_ident",
    "scan_const",
    "scan_keyword",
]
