"""Shared test fixtures for grammarkit.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from grammarkit.schema.nodes import NodeSchema, const, define_node, lhs, rhs


def _numeric(name: str, symbol: str, precedence: int, fn) -> NodeSchema:  # type: ignore[no-untyped-def]
    return define_node(
        name=name,
        pattern=[lhs("number").bind("left"), const(symbol), rhs("number").bind("right")],
        precedence=precedence,
        result_type="number",
        eval=lambda b, _data: fn(b["left"], b["right"]),
    )


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "grammarkit"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def add_node() -> NodeSchema:
    """``number + number`` at precedence 1."""
    return _numeric("add", "+", 1, lambda a, b: a + b)


@pytest.fixture()
def mul_node() -> NodeSchema:
    """``number * number`` at precedence 2."""
    return _numeric("mul", "*", 2, lambda a, b: a * b)


@pytest.fixture()
def arithmetic_nodes(add_node: NodeSchema, mul_node: NodeSchema) -> list[NodeSchema]:
    """``add`` (precedence 1) and ``mul`` (precedence 2)."""
    return [add_node, mul_node]


@pytest.fixture()
def concat_node() -> NodeSchema:
    """``string + string``, sharing the ``+`` operator with ``add``."""
    return define_node(
        name="concat",
        pattern=[lhs("string").bind("left"), const("+"), rhs("string").bind("right")],
        precedence=1,
        result_type="string",
        eval=lambda b, _data: b["left"] + b["right"],
    )


@pytest.fixture()
def overloaded_nodes(add_node: NodeSchema, concat_node: NodeSchema) -> list[NodeSchema]:
    """Two rules on ``+`` told apart only by operand type."""
    return [add_node, concat_node]
