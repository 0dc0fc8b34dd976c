"""Terminal scanners for grammarkit pattern elements.

Each scanner looks at the *remaining* input of a parse, skips leading
whitespace and tries to read exactly one token shape from the front of
it.  Scanners never raise: they return a ``Token`` on success and
``None`` when the input does not start with the requested shape.

Token shapes:

- Numbers: optional ``-``, a digit run, optional ``.`` plus a digit run.
  A ``.`` that is not followed by a digit is consumed but is not part of
  the token text (``"5."`` reads as ``5``).
- Strings: an opening quote from the allowed set, content up to the next
  unescaped occurrence of the *same* quote.  ``raw`` keeps the source
  text between the quotes; ``value`` has escapes decoded.  A string with
  no closing quote is not a token at all.
- Identifiers: ``[A-Za-z_$][A-Za-z0-9_$]*``.
- Constants: exact text.
- Keywords (``null``, ``true``, ``false``, ``undefined``): exact text not
  followed by an identifier character, so ``nullable`` is not ``null``.

Supported string escapes: ``\\n \\t \\r \\\\ \\" \\' \\0 \\b \\f \\v \\xHH
\\uHHHH``.  Unknown escapes are kept verbatim.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Final

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_NUMBER: Final[re.Pattern[str]] = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")
_IDENT: Final[re.Pattern[str]] = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_IDENT_CONT: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9_$]")
_DIGIT: Final[re.Pattern[str]] = re.compile(r"[0-9]")
_HEX2: Final[re.Pattern[str]] = re.compile(r"[0-9a-fA-F]{2}")
_HEX4: Final[re.Pattern[str]] = re.compile(r"[0-9a-fA-F]{4}")

_ESCAPE_MAP: Final[dict[str, str]] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "0": "\0",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}


class _Undefined:
    """Singleton standing in for an ``undefined`` value."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final = _Undefined()

# Keyword text -> literal value
KEYWORD_VALUES: Final[dict[str, Any]] = {
    "null": None,
    "true": True,
    "false": False,
    "undefined": UNDEFINED,
}


class TokenKind(Enum):
    """Shapes a scanner can produce."""

    NUMBER = auto()
    STRING = auto()
    IDENT = auto()
    CONST = auto()
    KEYWORD = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A scanned token.

    Parameters
    ----------
    kind:
        Which scanner produced the token.
    raw:
        Source text of the token (string content without quotes).
    value:
        Decoded value: a number, a decoded string, a keyword value, or
        the text itself for identifiers and constants.
    rest:
        Input remaining after the token.
    """

    kind: TokenKind
    raw: str
    value: Any
    rest: str


# ---------------------------------------------------------------------------
# Escape decoding
# ---------------------------------------------------------------------------


def decode_escapes(text: str) -> str:
    """Decode backslash escape sequences in ``text``.

    A trailing lone backslash and unknown or malformed escapes are kept
    as written.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        if i + 1 >= n:
            out.append("\\")
            i += 1
            continue
        esc = text[i + 1]
        if esc in _ESCAPE_MAP:
            out.append(_ESCAPE_MAP[esc])
            i += 2
        elif esc == "x" and _HEX2.fullmatch(text, i + 2, i + 4):
            out.append(chr(int(text[i + 2 : i + 4], 16)))
            i += 4
        elif esc == "u" and _HEX4.fullmatch(text, i + 2, i + 6):
            out.append(chr(int(text[i + 2 : i + 6], 16)))
            i += 6
        else:
            out.append("\\" + esc)
            i += 2
    return "".join(out)


# ---------------------------------------------------------------------------
# Scanners
# ---------------------------------------------------------------------------


def scan_number(text: str) -> Token | None:
    """Scan a numeric literal.  Integers decode to ``int``, others to ``float``."""
    source = text.lstrip()
    match = _NUMBER.match(source)
    if match is None:
        return None
    raw = match.group()
    end = match.end()
    # "5." : the dot is consumed but is not part of the number
    if end < len(source) and source[end] == "." and not _DIGIT.match(source, end + 1):
        end += 1
    value: int | float = float(raw) if "." in raw else int(raw)
    return Token(TokenKind.NUMBER, raw, value, source[end:])


def scan_string(text: str, quotes: tuple[str, ...]) -> Token | None:
    """Scan a quoted string opened by one of ``quotes``."""
    source = text.lstrip()
    quote = next((q for q in quotes if q and source.startswith(q)), None)
    if quote is None:
        return None
    i = len(quote)
    n = len(source)
    while i < n:
        if source[i] == "\\":
            i += 2
            continue
        if source.startswith(quote, i):
            raw = source[len(quote) : i]
            return Token(TokenKind.STRING, raw, decode_escapes(raw), source[i + len(quote) :])
        i += 1
    return None


def scan_ident(text: str) -> Token | None:
    """Scan an identifier."""
    source = text.lstrip()
    match = _IDENT.match(source)
    if match is None:
        return None
    name = match.group()
    return Token(TokenKind.IDENT, name, name, source[match.end() :])


def scan_const(text: str, value: str) -> Token | None:
    """Scan the exact text ``value``."""
    source = text.lstrip()
    if not source.startswith(value):
        return None
    return Token(TokenKind.CONST, value, value, source[len(value) :])


def scan_keyword(text: str, keyword: str) -> Token | None:
    """Scan ``keyword`` unless it is the prefix of a longer identifier."""
    source = text.lstrip()
    if not source.startswith(keyword):
        return None
    rest = source[len(keyword) :]
    if rest and _IDENT_CONT.match(rest):
        return None
    return Token(TokenKind.KEYWORD, keyword, KEYWORD_VALUES[keyword], rest)
