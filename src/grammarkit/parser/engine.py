"""Precedence-climbing parsing engine.

Parsing walks the grammar's levels from a start index.  Within a level
the rules are tried in declaration order and the first rule whose whole
pattern matches wins; if none matches, the next (tighter) level is
tried.  The atom level is last and ends the descent.

Sub-expression elements recurse into a slice of the grammar chosen by
their role:

``lhs``   levels strictly after the current one (no left recursion)
``rhs``   the current level and after (right-associative chains:
          ``1+2+3`` is ``add(1, add(2, 3))``)
``expr``  the whole grammar (parentheses, ternary branches)

A sub-expression with a constraint only matches when the sub-result's
``output_schema`` equals the constraint string exactly.  On mismatch the
enclosing rule fails and the engine moves on to the next rule or level;
this is how operators are overloaded by static type.

Failures are silent: every function returns ``()`` rather than raising.
A match that leaves input unconsumed is still a match.

Within one top-level parse, the result of parsing from a given level at
a given input position is memoized.  Rules sharing a left operand would
otherwise re-parse it once per rule at every level, which grows
exponentially with nesting depth.
"""
from __future__ import annotations

from collections.abc import Mapping

from grammarkit.ast.builder import build_node
from grammarkit.ast.nodes import ASTNode
from grammarkit.grammar.grammar import Grammar
from grammarkit.parser.matcher import NO_MATCH, ParseResult, match_terminal
from grammarkit.schema.nodes import ExprPattern, NodeSchema, Role


class ProgressTracker:
    """Records the furthest input offset reached by any terminal match.

    Parameters
    ----------
    source:
        The complete input of the parse being tracked.
    """

    __slots__ = ("_length", "_min_remaining")

    def __init__(self, source: str) -> None:
        self._length = len(source)
        self._min_remaining = len(source)

    def record(self, remaining: str) -> None:
        """Note that a terminal matched, leaving ``remaining`` unconsumed."""
        if len(remaining) < self._min_remaining:
            self._min_remaining = len(remaining)

    @property
    def furthest_offset(self) -> int:
        """Offset just past the furthest terminal matched so far."""
        return self._length - self._min_remaining


class _Session:
    """State shared by every recursive call of one top-level parse."""

    __slots__ = ("grammar", "context", "tracker", "memo")

    def __init__(
        self,
        grammar: Grammar,
        context: Mapping[str, str],
        tracker: ProgressTracker | None,
    ) -> None:
        self.grammar = grammar
        self.context = context
        self.tracker = tracker
        # (start level, len(remaining input)) -> result
        self.memo: dict[tuple[int, int], ParseResult] = {}


def _slice_start(role: Role, index: int) -> int:
    if role is Role.LHS:
        return index + 1
    if role is Role.RHS:
        return index
    return 0


def _match_rule(session: _Session, schema: NodeSchema, index: int, text: str) -> ParseResult:
    remaining = text
    children: list[ASTNode] = []
    for element in schema.pattern:
        kind = element.kind
        if isinstance(kind, ExprPattern):
            result = _parse_levels(session, _slice_start(kind.role, index), remaining)
            if result and kind.constraint is not None and result[0].output_schema != kind.constraint:
                result = NO_MATCH
        else:
            result = match_terminal(kind, remaining, session.context)
            if result and session.tracker is not None:
                session.tracker.record(result[1])
        if not result:
            return NO_MATCH
        node, remaining = result
        children.append(node)
    return build_node(schema, children, session.context), remaining


def _parse_levels(session: _Session, start: int, text: str) -> ParseResult:
    key = (start, len(text))
    cached = session.memo.get(key)
    if cached is not None:
        return cached
    result: ParseResult = NO_MATCH
    grammar = session.grammar
    for index in range(start, len(grammar)):
        for schema in grammar[index].nodes:
            result = _match_rule(session, schema, index, text)
            if result:
                break
        if result:
            break
    session.memo[key] = result
    return result


def match_rule(
    schema: NodeSchema,
    grammar: Grammar,
    index: int,
    text: str,
    context: Mapping[str, str],
    tracker: ProgressTracker | None = None,
) -> ParseResult:
    """Match every element of ``schema`` in order, or fail as a whole.

    ``index`` is the position of the rule's level in ``grammar``; it
    anchors the ``lhs``/``rhs`` slices.
    """
    return _match_rule(_Session(grammar, context, tracker), schema, index, text)


def parse_levels(
    grammar: Grammar,
    text: str,
    context: Mapping[str, str],
    start: int = 0,
    tracker: ProgressTracker | None = None,
) -> ParseResult:
    """Parse ``text`` using the levels of ``grammar`` from ``start`` on.

    Returns
    -------
    tuple
        ``()`` if nothing matched, else ``(node, remaining)``.
    """
    return _parse_levels(_Session(grammar, context, tracker), start, text)
