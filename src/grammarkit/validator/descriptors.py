"""Compile schema descriptor strings into pydantic type adapters.

A schema descriptor is the string an AST node carries as its
``output_schema`` and that a parse context assigns to each variable.
Descriptors describe runtime values; this module turns them into
``pydantic.TypeAdapter`` objects that can check a value.

Descriptor syntax
-----------------
::

    descriptor  := alternative ("|" alternative)*
    alternative := primary ("[]")*
    primary     := "(" descriptor ")"
                 | literal
                 | NUMBER ("<" | "<=") base (("<" | "<=") NUMBER)?
                 | base (comparison NUMBER)?
    base        := "number" | "number.integer"
                 | "string" | "string.<subtype>"
                 | "boolean" | "null" | "undefined" | "unknown"
    literal     := "'...'" | '"..."' | NUMBER | "true" | "false"

Comparisons on ``number`` bound its value; on ``string`` they bound its
length.  String subtypes: ``email``, ``uuid``, ``url``, ``alpha``,
``alphanumeric``, ``digits``, ``lower``, ``upper``.

Numbers are strict: ``True`` is not a number and ``"5"`` is not a number.
Any ``int`` is a number, including one too large to convert to ``float``.
"""
from __future__ import annotations

import re
from typing import Annotated, Any, Final, Literal, Union

from pydantic import AnyUrl, EmailStr, Field, InstanceOf, StrictBool, TypeAdapter

from grammarkit.lexer.lexer import UNDEFINED, decode_escapes
from grammarkit.schema.nodes import UNKNOWN_SCHEMA


class SchemaDescriptorError(ValueError):
    """Raised when a schema descriptor string cannot be compiled.

    Parameters
    ----------
    descriptor:
        The offending descriptor.
    reason:
        What is wrong with it.
    """

    def __init__(self, descriptor: str, reason: str) -> None:
        super().__init__(f"Invalid schema descriptor {descriptor!r}: {reason}")
        self.descriptor = descriptor
        self.reason = reason


# ---------------------------------------------------------------------------
# Base types
# ---------------------------------------------------------------------------

_STRING_PATTERNS: Final[dict[str, str]] = {
    "alpha": r"^[A-Za-z]*$",
    "alphanumeric": r"^[A-Za-z0-9]*$",
    "digits": r"^[0-9]*$",
    "lower": r"^[^A-Z]*$",
    "upper": r"^[^a-z]*$",
    "uuid": r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$",
}

_FIXED_TYPES: Final[dict[str, Any]] = {
    "boolean": StrictBool,
    "null": None,
    "undefined": InstanceOf[type(UNDEFINED)],
    UNKNOWN_SCHEMA: Any,
    "any": Any,
    "string.email": EmailStr,
    "string.url": AnyUrl,
}

# ``base OP n``
_VALUE_BOUNDS: Final[dict[str, str]] = {">": "gt", ">=": "ge", "<": "lt", "<=": "le"}
# ``n OP base``
_REVERSED_BOUNDS: Final[dict[str, str]] = {"<": "gt", "<=": "ge"}

_TOKEN: Final[re.Pattern[str]] = re.compile(
    r"""\s*(?:
        (?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
      | (?P<number>-?[0-9]+(?:\.[0-9]+)?)
      | (?P<name>[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*)
      | (?P<op><=|>=|<|>|\[\]|\||\(|\))
    )""",
    re.VERBOSE,
)


def _tokenize(descriptor: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    pos = 0
    end = len(descriptor.rstrip())
    while pos < end:
        match = _TOKEN.match(descriptor, pos)
        if match is None or match.end() == pos:
            raise SchemaDescriptorError(
                descriptor, f"unexpected character {descriptor[pos:].lstrip()[:1]!r}"
            )
        kind = match.lastgroup
        assert kind is not None
        tokens.append((kind, match.group(kind)))
        pos = match.end()
    return tokens


def _number(text: str) -> int | float:
    return float(text) if "." in text else int(text)


def _length_bounds(bounds: dict[str, int | float], descriptor: str) -> dict[str, int]:
    lengths: dict[str, int] = {}
    for key, value in bounds.items():
        if not isinstance(value, int):
            raise SchemaDescriptorError(descriptor, "string length bounds must be integers")
        if key == "gt":
            lengths["min_length"] = value + 1
        elif key == "ge":
            lengths["min_length"] = value
        elif key == "lt":
            lengths["max_length"] = value - 1
        else:
            lengths["max_length"] = value
    return lengths


def _base_type(name: str, bounds: dict[str, int | float], descriptor: str) -> Any:
    if name in ("number", "number.integer"):
        if name == "number.integer":
            bounds = {**bounds, "multiple_of": 1}
        # int first so integers too large for a float still validate
        return Union[
            Annotated[int, Field(strict=True, **bounds)],  # type: ignore[call-overload]
            Annotated[float, Field(strict=True, **bounds)],  # type: ignore[call-overload]
        ]

    if name == "string" or (name.startswith("string.") and name[7:] in _STRING_PATTERNS):
        kwargs: dict[str, Any] = _length_bounds(bounds, descriptor)
        if name != "string":
            kwargs["pattern"] = _STRING_PATTERNS[name[7:]]
        return Annotated[str, Field(strict=True, **kwargs)]

    if name in _FIXED_TYPES:
        if bounds:
            raise SchemaDescriptorError(descriptor, f"{name!r} does not accept comparisons")
        return _FIXED_TYPES[name]

    raise SchemaDescriptorError(descriptor, f"unknown type {name!r}")


# ---------------------------------------------------------------------------
# Descriptor parser
# ---------------------------------------------------------------------------


class _DescriptorParser:
    """Recursive-descent parser producing a Python type annotation."""

    def __init__(self, descriptor: str) -> None:
        self._descriptor = descriptor
        self._tokens = _tokenize(descriptor)
        self._pos = 0

    def parse(self) -> Any:
        if not self._tokens:
            raise SchemaDescriptorError(self._descriptor, "descriptor is empty")
        result = self._union()
        if self._pos < len(self._tokens):
            raise SchemaDescriptorError(
                self._descriptor, f"unexpected {self._tokens[self._pos][1]!r}"
            )
        return result

    # -- token helpers -------------------------------------------------

    def _peek(self, kind: str | None = None, value: str | None = None) -> bool:
        if self._pos >= len(self._tokens):
            return False
        tok_kind, tok_value = self._tokens[self._pos]
        return (kind is None or tok_kind == kind) and (value is None or tok_value == value)

    def _next(self, kind: str, expected: str) -> str:
        if not self._peek(kind):
            found = self._tokens[self._pos][1] if self._pos < len(self._tokens) else "end"
            raise SchemaDescriptorError(self._descriptor, f"expected {expected}, found {found!r}")
        value = self._tokens[self._pos][1]
        self._pos += 1
        return value

    def _comparison(self) -> str | None:
        if self._peek("op") and self._tokens[self._pos][1] in _VALUE_BOUNDS:
            op = self._tokens[self._pos][1]
            self._pos += 1
            return op
        return None

    # -- grammar -------------------------------------------------------

    def _union(self) -> Any:
        alternatives = [self._alternative()]
        while self._peek("op", "|"):
            self._pos += 1
            alternatives.append(self._alternative())
        if len(alternatives) == 1:
            return alternatives[0]
        return Union[tuple(alternatives)]

    def _alternative(self) -> Any:
        result = self._primary()
        while self._peek("op", "[]"):
            self._pos += 1
            result = list[result]  # type: ignore[valid-type]
        return result

    def _primary(self) -> Any:
        if self._peek("op", "("):
            self._pos += 1
            inner = self._union()
            self._next("op", "')'")
            return inner

        if self._peek("string"):
            text = self._next("string", "string")
            return Literal[decode_escapes(text[1:-1])]

        if self._peek("number"):
            value = _number(self._next("number", "number"))
            op = self._comparison()
            if op is None:
                return Literal[value]
            if op not in _REVERSED_BOUNDS:
                raise SchemaDescriptorError(
                    self._descriptor, f"a lower bound must use '<' or '<=', not {op!r}"
                )
            bounds = {_REVERSED_BOUNDS[op]: value}
            name = self._next("name", "a type name")
            upper = self._comparison()
            if upper is not None:
                if upper not in ("<", "<="):
                    raise SchemaDescriptorError(
                        self._descriptor, f"an upper bound must use '<' or '<=', not {upper!r}"
                    )
                bounds[_VALUE_BOUNDS[upper]] = _number(self._next("number", "number"))
            return _base_type(name, bounds, self._descriptor)

        name = self._next("name", "a type")
        if name in ("true", "false"):
            return Literal[name == "true"]
        bounds = {}
        op = self._comparison()
        if op is not None:
            bounds[_VALUE_BOUNDS[op]] = _number(self._next("number", "number"))
        return _base_type(name, bounds, self._descriptor)


def descriptor_type(descriptor: str) -> Any:
    """Return the Python type annotation described by ``descriptor``.

    Raises
    ------
    SchemaDescriptorError
        If ``descriptor`` is malformed or names an unknown type.
    """
    return _DescriptorParser(descriptor).parse()


def compile_descriptor(descriptor: str) -> TypeAdapter[Any]:
    """Compile ``descriptor`` into a ``TypeAdapter``."""
    return TypeAdapter(descriptor_type(descriptor))
