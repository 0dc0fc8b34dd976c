"""Unit tests for grammarkit.lexer — terminal scanners and escape decoding."""
from __future__ import annotations

import pickle

import pytest

from grammarkit.lexer.lexer import (
    UNDEFINED,
    TokenKind,
    decode_escapes,
    scan_const,
    scan_ident,
    scan_keyword,
    scan_number,
    scan_string,
)


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


class TestScanNumber:
    @pytest.mark.parametrize("source, raw, value", [
        ("42", "42", 42),
        ("-7", "-7", -7),
        ("3.14", "3.14", 3.14),
        ("-0.5", "-0.5", -0.5),
        ("007", "007", 7),
    ])
    def test_valid_numbers(self, source: str, raw: str, value: float) -> None:
        token = scan_number(source)
        assert token is not None
        assert token.kind is TokenKind.NUMBER
        assert token.raw == raw
        assert token.value == value
        assert token.rest == ""

    def test_integer_decodes_to_int(self) -> None:
        token = scan_number("12")
        assert token is not None and type(token.value) is int

    def test_fraction_decodes_to_float(self) -> None:
        token = scan_number("1.0")
        assert token is not None and type(token.value) is float

    def test_leading_whitespace_skipped(self) -> None:
        token = scan_number("   5 + 1")
        assert token is not None
        assert token.raw == "5"
        assert token.rest == " + 1"

    def test_trailing_dot_consumed_but_not_in_raw(self) -> None:
        token = scan_number("5.")
        assert token is not None
        assert token.raw == "5"
        assert token.value == 5
        assert token.rest == ""

    def test_trailing_dot_before_operator(self) -> None:
        token = scan_number("5.+1")
        assert token is not None
        assert token.rest == "+1"

    @pytest.mark.parametrize("source", ["", "abc", ".5", "-", "- 5", "+5"])
    def test_non_numbers(self, source: str) -> None:
        assert scan_number(source) is None


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------


class TestScanString:
    def test_double_quoted(self) -> None:
        token = scan_string('"hello" rest', ('"',))
        assert token is not None
        assert token.raw == "hello"
        assert token.value == "hello"
        assert token.rest == " rest"

    def test_single_quoted(self) -> None:
        token = scan_string("'hi'", ('"', "'"))
        assert token is not None and token.value == "hi"

    def test_quote_not_in_allowed_set(self) -> None:
        assert scan_string("'hi'", ('"',)) is None

    def test_closing_quote_must_match_opening(self) -> None:
        token = scan_string("\"it's\"", ('"', "'"))
        assert token is not None
        assert token.value == "it's"

    def test_unterminated_is_no_match(self) -> None:
        assert scan_string('"open', ('"',)) is None

    def test_escaped_quote_does_not_close(self) -> None:
        token = scan_string(r'"a\"b"', ('"',))
        assert token is not None
        assert token.raw == r"a\"b"
        assert token.value == 'a"b'

    def test_raw_keeps_escapes_value_decodes(self) -> None:
        token = scan_string(r'"line\nnext"', ('"',))
        assert token is not None
        assert token.raw == r"line\nnext"
        assert token.value == "line\nnext"

    def test_empty_string(self) -> None:
        token = scan_string('""', ('"',))
        assert token is not None and token.value == ""

    def test_multi_character_quote(self) -> None:
        token = scan_string("'''doc''' tail", ("'''",))
        assert token is not None
        assert token.value == "doc"
        assert token.rest == " tail"


class TestDecodeEscapes:
    @pytest.mark.parametrize("source, expected", [
        (r"\n", "\n"),
        (r"\t", "\t"),
        (r"\r", "\r"),
        (r"\\", "\\"),
        (r"\"", '"'),
        (r"\'", "'"),
        (r"\0", "\0"),
        (r"\x41", "A"),
        (r"\u00e9", "\u00e9"),
    ])
    def test_known_escapes(self, source: str, expected: str) -> None:
        assert decode_escapes(source) == expected

    def test_unknown_escape_kept(self) -> None:
        assert decode_escapes(r"\q") == r"\q"

    def test_malformed_hex_kept(self) -> None:
        assert decode_escapes(r"\xZZ") == r"\xZZ"

    def test_trailing_backslash_kept(self) -> None:
        assert decode_escapes("abc\\") == "abc\\"


# ---------------------------------------------------------------------------
# Identifiers, constants and keywords
# ---------------------------------------------------------------------------


class TestScanIdent:
    @pytest.mark.parametrize("source, name", [
        ("x", "x"),
        ("_private", "_private"),
        ("$dollar", "$dollar"),
        ("camelCase2 + 1", "camelCase2"),
    ])
    def test_identifiers(self, source: str, name: str) -> None:
        token = scan_ident(source)
        assert token is not None and token.raw == name

    def test_digit_cannot_start_identifier(self) -> None:
        assert scan_ident("1abc") is None


class TestScanConst:
    def test_exact_prefix(self) -> None:
        token = scan_const("  >= 1", ">=")
        assert token is not None
        assert token.rest == " 1"

    def test_const_has_no_word_boundary(self) -> None:
        token = scan_const("andrew", "and")
        assert token is not None and token.rest == "rew"

    def test_mismatch(self) -> None:
        assert scan_const("<", "<=") is None


class TestScanKeyword:
    @pytest.mark.parametrize("keyword, value", [
        ("null", None),
        ("true", True),
        ("false", False),
        ("undefined", UNDEFINED),
    ])
    def test_keywords(self, keyword: str, value: object) -> None:
        token = scan_keyword(keyword + " rest", keyword)
        assert token is not None
        assert token.value is value
        assert token.rest == " rest"

    def test_keyword_prefix_of_identifier_is_no_match(self) -> None:
        assert scan_keyword("nullable", "null") is None
        assert scan_keyword("true_value", "true") is None

    def test_keyword_followed_by_operator(self) -> None:
        token = scan_keyword("true&&x", "true")
        assert token is not None and token.rest == "&&x"


class TestUndefined:
    def test_singleton(self) -> None:
        assert type(UNDEFINED)() is UNDEFINED

    def test_falsy_with_readable_repr(self) -> None:
        assert not UNDEFINED
        assert repr(UNDEFINED) == "undefined"

    def test_survives_pickling(self) -> None:
        assert pickle.loads(pickle.dumps(UNDEFINED)) is UNDEFINED
