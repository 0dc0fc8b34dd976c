"""
Property-based tests using Hypothesis.

These tests check parser, evaluator and error-reporting invariants over
generated inputs instead of hand-picked examples.
"""
from __future__ import annotations

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from grammarkit.ast.nodes import LiteralNode
from grammarkit.grammars import arithmetic, standard
from grammarkit.parser import calculate_position, create_parser, create_snippet, parse
from grammarkit.validator import SchemaValidator

ARITHMETIC = arithmetic()
STANDARD = standard()

_ints = st.integers(min_value=-1000, max_value=1000)
_spaces = st.text(alphabet=" \t\n", max_size=3)
# finite floats whose repr has no exponent part
_decimals = st.floats(
    min_value=-1e12, max_value=1e12, allow_nan=False, allow_infinity=False
).map(lambda x: x if abs(x) >= 1e-4 else 0.0)


def _value(text: str) -> object:
    return create_parser(ARITHMETIC).compile(text)({})


# =============================================================================
# Parser Properties
# =============================================================================


class TestParserProperties:
    """Invariants of the silent parse entry point."""

    @given(st.text(alphabet="0123456789+-*/%() .xy", max_size=60))
    @settings(max_examples=300)
    def test_arithmetic_never_raises_and_returns_suffix(self, text: str) -> None:
        """Invariant: the result is () or (node, remaining) with remaining a proper suffix."""
        result = parse(ARITHMETIC, text)
        if result:
            _node, remaining = result
            assert text.endswith(remaining)
            assert len(remaining) < len(text)

    @given(st.text(alphabet="0123456789+-*/<>=!&|?:'\"() abtrue", max_size=30))
    @settings(max_examples=200)
    def test_standard_never_raises(self, text: str) -> None:
        """Invariant: unparseable input is a silent no-match, never an exception."""
        result = parse(STANDARD, text)
        if result:
            assert text.endswith(result[1])

    @given(st.text(alphabet="0123456789+*() ", max_size=40))
    @settings(max_examples=100)
    def test_parse_is_deterministic(self, text: str) -> None:
        """Invariant: parsing the same text twice yields the same tree."""
        assert parse(ARITHMETIC, text) == parse(ARITHMETIC, text)

    @given(st.text(alphabet=" \t\n\r", max_size=20))
    def test_whitespace_only_is_no_match(self, text: str) -> None:
        assert parse(STANDARD, text) == ()

    @given(_ints, _ints, _spaces, _spaces, _spaces, _spaces)
    @settings(max_examples=100)
    def test_whitespace_does_not_change_tree(
        self, a: int, b: int, s1: str, s2: str, s3: str, s4: str
    ) -> None:
        compact, _ = parse(ARITHMETIC, f"{a}*{b}")
        spaced, _ = parse(ARITHMETIC, f"{s1}{a}{s2}*{s3}{b}{s4}")
        assert compact == spaced

    @given(
        st.text(
            alphabet=st.characters(exclude_characters="\"\\", exclude_categories=("Cs",)),
            max_size=50,
        )
    )
    @settings(max_examples=200)
    def test_plain_string_literal_value(self, content: str) -> None:
        """Invariant: a quoted string without escapes decodes to its content."""
        node, remaining = parse([], f'"{content}"')
        assert node.value == content
        assert remaining == ""

    @given(st.integers())
    @settings(max_examples=200)
    def test_integer_literal_round_trip(self, n: int) -> None:
        node, remaining = parse([], str(n))
        assert isinstance(node, LiteralNode)
        assert node.value == n
        assert remaining == ""

    @given(_decimals)
    @settings(max_examples=200)
    def test_decimal_literal_round_trip(self, x: float) -> None:
        text = repr(x)
        node, remaining = parse([], text)
        assert isinstance(node, LiteralNode)
        assert node.value == x
        assert remaining == ""


# =============================================================================
# Evaluation Properties
# =============================================================================


class TestEvaluationProperties:
    """Arithmetic evaluation agrees with Python for the usual precedence."""

    @given(_ints, _ints, _ints)
    @settings(max_examples=200)
    def test_multiplication_binds_tighter(self, a: int, b: int, c: int) -> None:
        assert _value(f"{a} + {b} * {c}") == a + b * c
        assert _value(f"{a} * {b} + {c}") == a * b + c

    @given(_ints, _ints, _ints)
    @settings(max_examples=200)
    def test_parentheses_group(self, a: int, b: int, c: int) -> None:
        assert _value(f"({a} + {b}) * {c}") == (a + b) * c

    @given(_ints, _ints)
    @settings(max_examples=100)
    def test_comparisons_match_python(self, a: int, b: int) -> None:
        compiled = create_parser(STANDARD).compile("a < b", {"a": "number", "b": "number"})
        assert compiled({"a": a, "b": b}) is (a < b)

    @given(_ints)
    @settings(max_examples=100)
    def test_lower_bound_validation(self, x: int) -> None:
        result = SchemaValidator().validate(x, "number >= 0")
        assert result.ok is (x >= 0)


# =============================================================================
# Error Reporting Properties
# =============================================================================


class TestErrorReportingProperties:
    """Positions and snippets are consistent for any input."""

    @given(st.text(max_size=200), st.data())
    @settings(max_examples=200)
    def test_position_matches_prefix(self, text: str, data: st.DataObject) -> None:
        offset = data.draw(st.integers(min_value=0, max_value=len(text)))
        position = calculate_position(text, offset)
        prefix = text[:offset]
        assert position.line == prefix.count("\n") + 1
        assert position.column >= 1
        assert position.column == len(prefix) - prefix.rfind("\n")

    @given(st.text(min_size=1, max_size=200), st.data())
    @settings(max_examples=200)
    def test_snippet_is_single_line_with_marker(self, text: str, data: st.DataObject) -> None:
        offset = data.draw(st.integers(min_value=0, max_value=len(text)))
        snippet = create_snippet(text, offset)
        assert "\n" not in snippet
        assert "\r" not in snippet
        assert "→" in snippet

    @given(st.text(alphabet="0123456789+*() @", min_size=1, max_size=40))
    @settings(max_examples=200)
    def test_failures_point_inside_input(self, text: str) -> None:
        assume(text.strip())
        outcome = create_parser(ARITHMETIC).parse_with_errors(text)
        if not outcome.success:
            assert outcome.error is not None
            assert 0 <= outcome.error.position.offset <= len(text)
            assert outcome.error.position.line >= 1
            assert outcome.error.position.column >= 1

    @given(_ints, st.lists(st.tuples(st.sampled_from("+-*/%"), _ints), max_size=5))
    @settings(max_examples=200)
    def test_complete_expression_leaves_nothing(
        self, first: int, rest: list[tuple[str, int]]
    ) -> None:
        """Invariant: a fully consumed parse succeeds with no error and no remainder."""
        text = str(first) + "".join(f" {op} {n}" for op, n in rest)
        outcome = create_parser(ARITHMETIC).parse_with_errors(text)
        assert outcome.success
        assert outcome.error is None
        assert outcome.remaining == ""
