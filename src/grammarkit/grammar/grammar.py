"""Grammar construction for grammarkit.

A ``Grammar`` is an ordered tuple of precedence ``Level`` objects,
loosest-binding first.  ``build_grammar`` groups user rules by their
``precedence``, sorts the levels ascending and always appends the fixed
built-in atom level as the last one:

    [ops@p1] [ops@p2] ... [number, string, null, boolean, undefined,
                           identifier, parentheses]

The atom order is significant: keyword literals are tried before the
generic identifier atom so that ``null``/``true``/``false``/``undefined``
never match as identifiers.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

from grammarkit.schema.nodes import (
    UNKNOWN_SCHEMA,
    Fixed,
    GrammarDefinitionError,
    NodeSchema,
    boolean_literal,
    const,
    define_node,
    expr,
    ident,
    null_literal,
    number,
    string,
    undefined_literal,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Level:
    """Rules sharing one precedence value, tried in declaration order.

    Parameters
    ----------
    precedence:
        The shared precedence, or ``None`` for the built-in atom level.
    nodes:
        The rules of this level.
    """

    precedence: int | None
    nodes: tuple[NodeSchema, ...]

    @property
    def is_atom_level(self) -> bool:
        """Return True for the built-in atom level."""
        return self.precedence is None


Grammar = tuple[Level, ...]

# ---------------------------------------------------------------------------
# Built-in atoms
# ---------------------------------------------------------------------------

# Atoms sit below every operator level; the value is never used for sorting.
ATOM_PRECEDENCE = 0

NUMBER_LITERAL = define_node(
    name="number_literal",
    pattern=[number()],
    precedence=ATOM_PRECEDENCE,
    result_type="number",
)

STRING_LITERAL = define_node(
    name="string_literal",
    pattern=[string(['"', "'"])],
    precedence=ATOM_PRECEDENCE,
    result_type="string",
)

NULL_LITERAL = define_node(
    name="null_literal",
    pattern=[null_literal()],
    precedence=ATOM_PRECEDENCE,
    result_type="null",
)

BOOLEAN_LITERAL = define_node(
    name="boolean_literal",
    pattern=[boolean_literal()],
    precedence=ATOM_PRECEDENCE,
    result_type="boolean",
)

UNDEFINED_LITERAL = define_node(
    name="undefined_literal",
    pattern=[undefined_literal()],
    precedence=ATOM_PRECEDENCE,
    result_type="undefined",
)

IDENTIFIER = define_node(
    name="identifier_atom",
    pattern=[ident()],
    precedence=ATOM_PRECEDENCE,
    result_type="unknown",
)

# define_node() rejects the reserved name, so the atom is built directly.
PARENTHESES = NodeSchema(
    name="parentheses",
    pattern=(const("("), expr().bind("inner"), const(")")),
    precedence=ATOM_PRECEDENCE,
    result_type=Fixed(UNKNOWN_SCHEMA),
)

BUILT_IN_ATOMS: tuple[NodeSchema, ...] = (
    NUMBER_LITERAL,
    STRING_LITERAL,
    NULL_LITERAL,
    BOOLEAN_LITERAL,
    UNDEFINED_LITERAL,
    IDENTIFIER,
    PARENTHESES,
)

ATOM_LEVEL = Level(precedence=None, nodes=BUILT_IN_ATOMS)


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


@lru_cache(maxsize=128)
def _build(nodes: tuple[NodeSchema, ...]) -> Grammar:
    seen: set[str] = set()
    by_precedence: dict[int, list[NodeSchema]] = {}
    for node in nodes:
        if node.name in seen:
            raise GrammarDefinitionError("rule name is defined more than once", node.name)
        seen.add(node.name)
        by_precedence.setdefault(node.precedence, []).append(node)

    levels = [Level(precedence=p, nodes=tuple(by_precedence[p])) for p in sorted(by_precedence)]
    levels.append(ATOM_LEVEL)
    logger.debug(
        "Built grammar with %d operator level(s) from %d rule(s)", len(levels) - 1, len(nodes)
    )
    return tuple(levels)


def build_grammar(nodes: Iterable[NodeSchema]) -> Grammar:
    """Group ``nodes`` into precedence levels and append the atom level.

    Parameters
    ----------
    nodes:
        Operator rules in declaration order.  Built-in atoms are added
        automatically and must not be passed in.

    Returns
    -------
    Grammar
        Levels sorted by ascending precedence, atom level last.

    Raises
    ------
    GrammarDefinitionError
        If two rules share a name.
    """
    return _build(tuple(nodes))
