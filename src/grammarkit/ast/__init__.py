"""grammarkit AST module.

Exports the AST node types, the node builder and the serializer.
"""
from __future__ import annotations

from grammarkit.ast.builder import build_node, compute_union_schema, extract_bindings
from grammarkit.ast.nodes import (
    AST_NODE_TYPES,
    ASTNode,
    CompositeNode,
    ConstNode,
    IdentifierNode,
    LiteralNode,
    is_node,
)
from grammarkit.ast.serializer import AstSerializer

__all__ = [
    "ASTNode",
    "AST_NODE_TYPES",
    "LiteralNode",
    "IdentifierNode",
    "ConstNode",
    "CompositeNode",
    "is_node",
    "build_node",
    "extract_bindings",
    "compute_union_schema",
    "AstSerializer",
]
