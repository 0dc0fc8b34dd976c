#!/usr/bin/env python3
"""Example: Quickstart — grammarkit

Minimal working example: define two operator rules, parse an
expression, inspect its static type and evaluate it.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install grammarkit
"""
from __future__ import annotations

import grammarkit
from grammarkit import const, define_node, evaluate, infer, lhs, parse, rhs

add = define_node(
    name="add",
    pattern=[lhs("number").bind("left"), const("+"), rhs("number").bind("right")],
    precedence=1,
    result_type="number",
    eval=lambda b, _data: b["left"] + b["right"],
)

mul = define_node(
    name="mul",
    pattern=[lhs("number").bind("left"), const("*"), rhs("number").bind("right")],
    precedence=2,
    result_type="number",
    eval=lambda b, _data: b["left"] * b["right"],
)

NODES = [add, mul]


def main() -> None:
    print(f"grammarkit version: {grammarkit.__version__}")

    # Step 1: Parse. The context declares the static type of each variable.
    node, remaining = parse(NODES, "1 + x * 3", {"x": "number"})
    print(f"Top node: {node.node}, right operand: {node['right'].node}")
    print(f"Unconsumed input: {remaining!r}")

    # Step 2: Static type of the whole expression
    print(f"Type: {infer(node)}")

    # Step 3: Evaluate with runtime data
    print(f"Value with x=4: {evaluate(node, {'x': 4}, NODES)}")

    # Step 4: A type mismatch is not an error, just a shorter match
    node, remaining = parse(NODES, "1 + 'two'")
    print(f"Mismatch parses as {node.node} {node.value!r}, leaving {remaining!r}")


if __name__ == "__main__":
    main()
