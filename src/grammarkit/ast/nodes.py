"""AST node definitions for grammarkit.

Every node produced by the parsing engine is a frozen dataclass carrying
a ``node`` discriminator and an ``output_schema`` — the static type
descriptor used for constraint matching.  There are four built-in node
shapes and one generic shape for user rules:

``LiteralNode``     numbers, strings and keyword literals
``IdentifierNode``  a variable reference resolved against the context
``ConstNode``       a matched constant token (never evaluated)
``CompositeNode``   any rule with named bindings, including the
                    built-in ``parentheses`` node

Downstream code should dispatch on ``node`` or use ``isinstance``.
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class LiteralNode:
    """A literal value.

    Parameters
    ----------
    raw:
        Source text (string content without quotes, escapes undecoded).
    value:
        The decoded value.
    output_schema:
        ``number``, ``string``, ``boolean``, ``null`` or ``undefined``.
    """

    raw: str
    value: Any
    output_schema: str

    @property
    def node(self) -> str:
        return "literal"


@dataclass(frozen=True, slots=True)
class IdentifierNode:
    """A variable reference; ``output_schema`` comes from the parse context."""

    name: str
    output_schema: str

    @property
    def node(self) -> str:
        return "identifier"


@dataclass(frozen=True, slots=True)
class ConstNode:
    """A matched constant.  ``output_schema`` is the JSON-quoted text."""

    output_schema: str

    @property
    def node(self) -> str:
        return "const"


@dataclass(frozen=True, slots=True)
class CompositeNode:
    """A node produced by a rule with named bindings.

    Parameters
    ----------
    node:
        The rule name.
    output_schema:
        The computed static type of this node.
    fields:
        Named bindings (or the fields returned by the rule's
        ``configure`` function).
    """

    node: str
    output_schema: str
    fields: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def get(self, key: str, default: Any = None) -> Any:
        """Return field ``key`` or ``default``."""
        return self.fields.get(key, default)


ASTNode = Union[LiteralNode, IdentifierNode, ConstNode, CompositeNode]

AST_NODE_TYPES = (LiteralNode, IdentifierNode, ConstNode, CompositeNode)


def is_node(value: object) -> bool:
    """Return True if ``value`` is one of the grammarkit AST node types."""
    return isinstance(value, AST_NODE_TYPES)
