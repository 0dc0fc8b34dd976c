"""Schema model for grammarkit grammars.

A grammar is declared as a collection of ``NodeSchema`` rules.  Each rule
has an ordered ``pattern`` of pattern elements, a ``precedence`` (lower
binds looser) and a ``result_type`` describing the static type of the
node it produces.

Pattern elements are small frozen dataclasses describing *what* to match
(a number, a quoted string, an identifier, an exact constant, a keyword
literal or a recursive sub-expression).  Every element in a pattern is
wrapped in exactly one of two variants:

``Unbound(kind)``
    The element is matched and then discarded.
``Bound(name, kind)``
    The matched child becomes the field ``name`` of the produced node.

The factory functions in this module return ``Unbound`` elements; call
``.bind(name)`` to name one::

    from grammarkit.schema import const, define_node, lhs, rhs

    add = define_node(
        name="add",
        pattern=[lhs("number").bind("left"), const("+"), rhs("number").bind("right")],
        precedence=1,
        result_type="number",
        eval=lambda values, data: values["left"] + values["right"],
    )
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

# Node names the evaluator handles itself; user rules may not reuse them.
RESERVED_NODE_NAMES: frozenset[str] = frozenset(
    {"literal", "identifier", "const", "parentheses"}
)

UNKNOWN_SCHEMA = "unknown"


class GrammarDefinitionError(ValueError):
    """Raised when a node rule or a rule set is malformed.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    node_name:
        Name of the offending rule, when known.
    """

    def __init__(self, message: str, node_name: str | None = None) -> None:
        prefix = f"Invalid node {node_name!r}: " if node_name else ""
        super().__init__(prefix + message)
        self.node_name = node_name


# ---------------------------------------------------------------------------
# Pattern element kinds
# ---------------------------------------------------------------------------


class Role(Enum):
    """Grammar slice a sub-expression recurses into.

    LHS
        Strictly tighter-binding levels only (prevents left recursion).
    RHS
        The current level and tighter (right-associative chaining).
    EXPR
        The full grammar from the loosest level (precedence reset).
    """

    LHS = "lhs"
    RHS = "rhs"
    EXPR = "expr"


@dataclass(frozen=True, slots=True)
class NumberPattern:
    """Numeric literal: optional ``-``, digits, optional ``.`` digits."""


@dataclass(frozen=True, slots=True)
class StringPattern:
    """Quoted string literal delimited by one of ``quotes``."""

    quotes: tuple[str, ...] = ('"', "'")


@dataclass(frozen=True, slots=True)
class IdentPattern:
    """Identifier resolved against the parse context."""


@dataclass(frozen=True, slots=True)
class ConstPattern:
    """Exact text, e.g. an operator or a keyword."""

    value: str


@dataclass(frozen=True, slots=True)
class NullPattern:
    """The ``null`` keyword."""


@dataclass(frozen=True, slots=True)
class BooleanPattern:
    """The ``true`` or ``false`` keyword."""


@dataclass(frozen=True, slots=True)
class UndefinedPattern:
    """The ``undefined`` keyword."""


@dataclass(frozen=True, slots=True)
class ExprPattern:
    """A recursive sub-expression.

    Parameters
    ----------
    role:
        Which grammar slice the sub-parse uses.
    constraint:
        Schema descriptor the sub-result's ``output_schema`` must equal
        exactly, or ``None`` to accept any result.
    """

    role: Role
    constraint: str | None = None


ElementKind = Union[
    NumberPattern,
    StringPattern,
    IdentPattern,
    ConstPattern,
    NullPattern,
    BooleanPattern,
    UndefinedPattern,
    ExprPattern,
]

_ELEMENT_KINDS = (
    NumberPattern,
    StringPattern,
    IdentPattern,
    ConstPattern,
    NullPattern,
    BooleanPattern,
    UndefinedPattern,
    ExprPattern,
)


# ---------------------------------------------------------------------------
# Bound / Unbound wrappers
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Bound:
    """A pattern element whose match becomes the node field ``name``."""

    name: str
    kind: ElementKind


@dataclass(frozen=True, slots=True)
class Unbound:
    """A pattern element that is matched and discarded."""

    kind: ElementKind

    def bind(self, name: str) -> Bound:
        """Return a ``Bound`` element naming this match ``name``."""
        if not name:
            raise GrammarDefinitionError("binding name must be a non-empty string")
        return Bound(name=name, kind=self.kind)


PatternElement = Union[Bound, Unbound]


def number() -> Unbound:
    """Create a number literal pattern element."""
    return Unbound(NumberPattern())


def string(quotes: Iterable[str] = ('"', "'")) -> Unbound:
    """Create a string literal pattern element accepting ``quotes``."""
    quote_tuple = tuple(quotes)
    if not quote_tuple or any(not q for q in quote_tuple):
        raise GrammarDefinitionError("string() needs at least one non-empty quote character")
    return Unbound(StringPattern(quote_tuple))


def ident() -> Unbound:
    """Create an identifier pattern element."""
    return Unbound(IdentPattern())


def const(value: str) -> Unbound:
    """Create an exact-text pattern element."""
    if not value:
        raise GrammarDefinitionError("const() needs a non-empty string")
    return Unbound(ConstPattern(value))


def null_literal() -> Unbound:
    """Create a ``null`` keyword pattern element."""
    return Unbound(NullPattern())


def boolean_literal() -> Unbound:
    """Create a ``true``/``false`` keyword pattern element."""
    return Unbound(BooleanPattern())


def undefined_literal() -> Unbound:
    """Create an ``undefined`` keyword pattern element."""
    return Unbound(UndefinedPattern())


def lhs(constraint: str | None = None) -> Unbound:
    """Create a left-operand sub-expression (tighter levels only).

    Use it as the first element of an infix rule so the rule cannot
    recurse into itself without consuming input.
    """
    return Unbound(ExprPattern(Role.LHS, constraint))


def rhs(constraint: str | None = None) -> Unbound:
    """Create a right-operand sub-expression (current level and tighter)."""
    return Unbound(ExprPattern(Role.RHS, constraint))


def expr(constraint: str | None = None) -> Unbound:
    """Create a sub-expression that restarts from the loosest level."""
    return Unbound(ExprPattern(Role.EXPR, constraint))


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Fixed:
    """A static result type given as a schema descriptor string."""

    schema: str


@dataclass(frozen=True, slots=True)
class ComputedUnion:
    """A result type derived from the output schemas of named bindings."""

    bindings: tuple[str, ...]


ResultType = Union[Fixed, ComputedUnion]


def union(*bindings: str) -> ComputedUnion:
    """Declare a result type computed as the union of ``bindings``."""
    return ComputedUnion(tuple(bindings))


ConfigureFn = Callable[[Mapping[str, Any], Mapping[str, str]], Mapping[str, Any]]
EvalFn = Callable[[dict[str, Any], Mapping[str, Any]], Any]


# ---------------------------------------------------------------------------
# Node schema
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NodeSchema:
    """A single grammar rule.

    Parameters
    ----------
    name:
        Node kind produced by this rule (the ``node`` discriminator).
    pattern:
        Ordered pattern elements.
    precedence:
        Binding strength; lower values bind looser (outer in the tree).
    result_type:
        ``Fixed(descriptor)`` or ``ComputedUnion(binding names)``.
    configure:
        Optional ``(bindings, context) -> fields`` transform.
    eval:
        Optional ``(evaluated_bindings, data) -> value`` function.
    """

    name: str
    pattern: tuple[PatternElement, ...]
    precedence: int
    result_type: ResultType
    configure: ConfigureFn | None = None
    eval: EvalFn | None = None

    @property
    def binding_names(self) -> tuple[str, ...]:
        """Return the names of all bound elements in pattern order."""
        return tuple(e.name for e in self.pattern if isinstance(e, Bound))


def _normalize_element(element: object, node_name: str) -> PatternElement:
    if isinstance(element, (Bound, Unbound)):
        return element
    if isinstance(element, _ELEMENT_KINDS):
        return Unbound(element)
    raise GrammarDefinitionError(
        f"pattern element {element!r} is not a grammarkit pattern element", node_name
    )


def define_node(
    *,
    name: str,
    pattern: Iterable[PatternElement | ElementKind],
    precedence: int,
    result_type: str | ResultType,
    configure: ConfigureFn | None = None,
    eval: EvalFn | None = None,  # noqa: A002
) -> NodeSchema:
    """Define a grammar rule.

    Raises
    ------
    GrammarDefinitionError
        If the rule is malformed (see module docs for the checks).
    """
    if not name:
        raise GrammarDefinitionError("node name must be a non-empty string")
    if name in RESERVED_NODE_NAMES:
        raise GrammarDefinitionError("name is reserved for built-in nodes", name)
    if isinstance(precedence, bool) or not isinstance(precedence, int):
        raise GrammarDefinitionError(
            f"precedence must be an int, got {type(precedence).__name__}", name
        )

    elements = tuple(_normalize_element(e, name) for e in pattern)
    if not elements:
        raise GrammarDefinitionError("pattern must contain at least one element", name)

    seen: set[str] = set()
    for element in elements:
        if isinstance(element, Bound):
            if element.name in seen:
                raise GrammarDefinitionError(
                    f"binding {element.name!r} is bound more than once", name
                )
            seen.add(element.name)

    if isinstance(result_type, str):
        resolved: ResultType = Fixed(result_type)
    elif isinstance(result_type, (Fixed, ComputedUnion)):
        resolved = result_type
    else:
        raise GrammarDefinitionError(
            f"result_type must be a descriptor string or ComputedUnion, got {result_type!r}",
            name,
        )
    if isinstance(resolved, ComputedUnion):
        missing = [b for b in resolved.bindings if b not in seen]
        if missing:
            raise GrammarDefinitionError(
                f"union result type names unbound bindings {missing}", name
            )

    return NodeSchema(
        name=name,
        pattern=elements,
        precedence=precedence,
        result_type=resolved,
        configure=configure,
        eval=eval,
    )
