#!/usr/bin/env python3
"""Example: Error reporting — grammarkit

Shows the diagnostics produced by ``parse_with_errors`` and
``Parser.compile`` for input that cannot be parsed.

Usage:
    python examples/02_error_reporting.py

Requirements:
    pip install grammarkit
"""
from __future__ import annotations

from grammarkit import format_error, parse_with_errors
from grammarkit.config import ParserConfig
from grammarkit.grammars import standard
from grammarkit.parser import ExpressionSyntaxError, create_parser

BROKEN_INPUTS = [
    "",
    "(1 + 2",
    "(price *\n  @discount)",
]


def main() -> None:
    nodes = standard()

    # Step 1: Failures never raise from parse_with_errors
    for text in BROKEN_INPUTS:
        outcome = parse_with_errors(nodes, text, {"price": "number"})
        assert outcome.error is not None
        print(f"[{outcome.error.kind.value}] {text!r}")
        print(format_error(outcome.error))
        print()

    # Step 2: compile() also rejects input that is only partly consumed
    parser = create_parser(nodes, ParserConfig(snippet_marker="<!>"))
    try:
        parser.compile("1 + 2 3")
    except ExpressionSyntaxError as exc:
        print(f"compile() failed with {exc.kind.value}:")
        print(format_error(exc.error))


if __name__ == "__main__":
    main()
