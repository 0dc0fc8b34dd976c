#!/usr/bin/env python3
"""Example: Validated variables — grammarkit

Variables carry schema descriptors.  The parser uses the descriptor
string for type checking; the evaluator validates runtime values
against it.

Usage:
    python examples/03_validated_variables.py

Requirements:
    pip install grammarkit
"""
from __future__ import annotations

from grammarkit.grammars import standard
from grammarkit.parser import create_parser
from grammarkit.runtime import EvaluationError
from grammarkit.validator import SchemaValidator

SCHEMA = {
    "age": "number",
    "email": "string.email",
}

ORDERS = [
    {"age": 34, "email": "ada@example.com"},
    {"age": 16, "email": "kid@example.com"},
    {"age": 40, "email": "not an address"},
]


def main() -> None:
    # Step 1: Check values directly
    validator = SchemaValidator()
    for value in (5, -5, "5"):
        result = validator.validate(value, "number >= 0")
        print(f"number >= 0 with {value!r}: ok={result.ok} {result.reason}")

    # Step 2: Compile once, evaluate many times
    parser = create_parser(standard())
    rule = parser.compile("age >= 18 ? 'allowed' : 'denied'", SCHEMA)
    print(f"\nCompiled {rule!r}")
    for data in ORDERS:
        print(f"  age={data['age']}: {rule(data)}")

    # Step 3: A value failing its schema raises
    contact = parser.compile("email", SCHEMA)
    for data in ORDERS:
        try:
            print(f"  contact: {contact(data)}")
        except EvaluationError as exc:
            print(f"  rejected: {exc}")


if __name__ == "__main__":
    main()
