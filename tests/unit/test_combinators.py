"""Unit tests for grammarkit.combinators."""
from __future__ import annotations

from grammarkit.ast.nodes import ConstNode, IdentifierNode, LiteralNode
from grammarkit.combinators import (
    Choice,
    ConstToken,
    IdentToken,
    Many,
    Maybe,
    NumberToken,
    Sequence,
    StringToken,
)


class TestTokens:
    def test_number(self) -> None:
        value, remaining = NumberToken().parse(" 12 rest", {})
        assert value == LiteralNode(raw="12", value=12, output_schema="number")
        assert remaining == " rest"

    def test_string_default_quotes(self) -> None:
        value, _ = StringToken().parse("'x'", {})
        assert value.value == "x"

    def test_string_custom_quotes(self) -> None:
        assert StringToken(("`",)).parse("'x'", {}) == ()
        value, _ = StringToken(("`",)).parse("`x`", {})
        assert value.value == "x"

    def test_ident_uses_context(self) -> None:
        value, _ = IdentToken().parse("total", {"total": "number"})
        assert value == IdentifierNode(name="total", output_schema="number")

    def test_const(self) -> None:
        value, remaining = ConstToken("=>").parse(" => 1", {})
        assert value == ConstNode(output_schema='"=>"')
        assert remaining == " 1"

    def test_failures_are_empty_tuples(self) -> None:
        assert NumberToken().parse("abc", {}) == ()
        assert ConstToken(",").parse(";", {}) == ()


class TestChoice:
    def test_first_match_wins(self) -> None:
        parser = Choice(NumberToken(), IdentToken())
        value, _ = parser.parse("x", {})
        assert value.node == "identifier"

    def test_order_matters(self) -> None:
        parser = Choice(ConstToken("<"), ConstToken("<="))
        _, remaining = parser.parse("<=", {})
        assert remaining == "="

    def test_no_alternative(self) -> None:
        assert Choice(NumberToken()).parse("'s'", {}) == ()

    def test_empty_choice(self) -> None:
        assert Choice().parse("1", {}) == ()


class TestSequence:
    def test_all_in_order(self) -> None:
        pair = Sequence(NumberToken(), ConstToken(","), NumberToken())
        values, remaining = pair.parse("1, 2", {})
        assert [v.node for v in values] == ["literal", "const", "literal"]
        assert remaining == ""

    def test_fails_as_a_whole(self) -> None:
        pair = Sequence(NumberToken(), ConstToken(","), NumberToken())
        assert pair.parse("1, x", {}) == ()

    def test_empty_sequence_consumes_nothing(self) -> None:
        assert Sequence().parse("abc", {}) == ([], "abc")


class TestMaybe:
    def test_present(self) -> None:
        value, remaining = Maybe(ConstToken("-")).parse("-1", {})
        assert value.node == "const"
        assert remaining == "1"

    def test_absent(self) -> None:
        assert Maybe(ConstToken("-")).parse("1", {}) == (None, "1")


class TestMany:
    def test_repeats(self) -> None:
        values, remaining = Many(NumberToken()).parse("1 2 3 x", {})
        assert [v.value for v in values] == [1, 2, 3]
        assert remaining == " x"

    def test_zero_matches(self) -> None:
        assert Many(NumberToken()).parse("x", {}) == ([], "x")

    def test_stops_on_empty_match(self) -> None:
        values, remaining = Many(Maybe(NumberToken())).parse("1 x", {})
        assert [v.value for v in values] == [1]
        assert remaining == " x"

    def test_composes_with_sequence(self) -> None:
        items = Sequence(
            NumberToken(), Many(Sequence(ConstToken(","), NumberToken()))
        )
        (first, rest), remaining = items.parse("1, 2, 3", {})
        assert first.value == 1
        assert [pair[1].value for pair in rest] == [2, 3]
        assert remaining == ""
