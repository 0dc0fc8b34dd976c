#!/usr/bin/env python3
"""Example: Custom grammar — grammarkit

Builds a small query language with a prefix operator, a ``configure``
hook that reshapes the node and a computed union result type, and
looks it up through a grammar registry.

Usage:
    python examples/04_custom_grammar.py

Requirements:
    pip install grammarkit
"""
from __future__ import annotations

from grammarkit import const, define_node, expr, ident, lhs, rhs, union
from grammarkit.ast import AstSerializer
from grammarkit.grammars import GrammarRegistry
from grammarkit.parser import create_parser


def query_grammar():
    coalesce = define_node(
        name="coalesce",
        pattern=[lhs().bind("value"), const("??"), rhs().bind("fallback")],
        precedence=1,
        result_type=union("value", "fallback"),
        eval=lambda b, _data: b["fallback"] if b["value"] is None else b["value"],
    )
    field = define_node(
        name="field",
        pattern=[const("@"), ident().bind("name")],
        precedence=2,
        result_type="unknown",
        configure=lambda b, _ctx: {"path": b["name"].name},
        eval=None,
    )
    upper = define_node(
        name="upper",
        pattern=[const("upper("), expr("string").bind("text"), const(")")],
        precedence=3,
        result_type="string",
        eval=lambda b, _data: b["text"].upper(),
    )
    return [coalesce, field, upper]


def main() -> None:
    registry = GrammarRegistry()
    registry.register("query")(query_grammar)
    nodes = registry.build("query")

    parser = create_parser(nodes)

    # Step 1: Union result types
    node, _ = parser.parse("nickname ?? 'anonymous'")
    print(f"coalesce type: {node.output_schema}")
    print(f"value: {parser.evaluate(node, {'nickname': None})}")

    # Step 2: configure() reshapes the stored fields
    node, _ = parser.parse("@customer")
    print(AstSerializer().to_json(node))

    # Step 3: A constrained sub-expression
    shout = parser.compile("upper('hello')")
    print(f"{shout({})} ({shout.output_schema})")


if __name__ == "__main__":
    main()
