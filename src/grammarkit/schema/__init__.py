"""grammarkit schema module.

Exports the node-rule model and the pattern element factories.
"""
from __future__ import annotations

from grammarkit.schema.nodes import (
    RESERVED_NODE_NAMES,
    UNKNOWN_SCHEMA,
    BooleanPattern,
    Bound,
    ComputedUnion,
    ConstPattern,
    ElementKind,
    ExprPattern,
    Fixed,
    GrammarDefinitionError,
    IdentPattern,
    NodeSchema,
    NullPattern,
    NumberPattern,
    PatternElement,
    ResultType,
    Role,
    StringPattern,
    Unbound,
    UndefinedPattern,
    boolean_literal,
    const,
    define_node,
    expr,
    ident,
    lhs,
    null_literal,
    number,
    rhs,
    string,
    undefined_literal,
    union,
)

__all__ = [
    # Rules
    "NodeSchema",
    "define_node",
    "GrammarDefinitionError",
    "RESERVED_NODE_NAMES",
    "UNKNOWN_SCHEMA",
    # Result types
    "Fixed",
    "ComputedUnion",
    "ResultType",
    "union",
    # Pattern elements
    "PatternElement",
    "ElementKind",
    "Bound",
    "Unbound",
    "Role",
    "NumberPattern",
    "StringPattern",
    "IdentPattern",
    "ConstPattern",
    "NullPattern",
    "BooleanPattern",
    "UndefinedPattern",
    "ExprPattern",
    # Factories
    "number",
    "string",
    "ident",
    "const",
    "null_literal",
    "boolean_literal",
    "undefined_literal",
    "lhs",
    "rhs",
    "expr",
]
