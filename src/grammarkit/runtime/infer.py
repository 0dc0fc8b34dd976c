"""Runtime type inference: read the static type a parse assigned to a tree."""
from __future__ import annotations

from typing import Any

from grammarkit.ast.nodes import is_node
from grammarkit.runtime.errors import InvalidNodeError


def infer(ast: Any) -> str:
    """Return the ``output_schema`` of ``ast``.

    Raises
    ------
    InvalidNodeError
        If ``ast`` is not an AST node.
    """
    if not is_node(ast):
        raise InvalidNodeError(
            f"Invalid AST node: expected an AST node, got {type(ast).__name__}"
        )
    return ast.output_schema
