"""Build AST nodes from matched rule patterns.

Once the parsing engine has matched every element of a rule, the
children are handed to ``build_node`` which:

1. Extracts the ``name -> child`` map from the ``Bound`` elements.
2. Passes a lone unnamed child through unchanged (grouping-only rules
   disappear from the tree).
3. Applies the rule's ``configure`` function, if any, to obtain the
   node's fields; otherwise the bindings are the fields.
4. Computes the node's ``output_schema``.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from grammarkit.ast.nodes import ASTNode, CompositeNode
from grammarkit.schema.nodes import (
    UNKNOWN_SCHEMA,
    Bound,
    ComputedUnion,
    NodeSchema,
    PatternElement,
)


def extract_bindings(
    pattern: Sequence[PatternElement], children: Sequence[Any]
) -> dict[str, Any]:
    """Return the children matched by ``Bound`` elements, keyed by name."""
    return {
        element.name: child
        for element, child in zip(pattern, children)
        if isinstance(element, Bound)
    }


def compute_union_schema(bindings: Mapping[str, Any], names: Sequence[str]) -> str:
    """Union the output schemas of ``names``.

    ``unknown`` schemas are skipped and duplicates removed; the members
    are sorted and joined with `` | ``.  Returns ``unknown`` when nothing
    is left.
    """
    schemas: set[str] = set()
    for name in names:
        schema = getattr(bindings.get(name), "output_schema", None)
        if schema and schema != UNKNOWN_SCHEMA:
            schemas.add(schema)
    if not schemas:
        return UNKNOWN_SCHEMA
    return " | ".join(sorted(schemas))


def _output_schema(schema: NodeSchema, bindings: Mapping[str, Any]) -> str:
    result_type = schema.result_type
    if isinstance(result_type, ComputedUnion):
        return compute_union_schema(bindings, result_type.bindings)
    if result_type.schema == UNKNOWN_SCHEMA and len(bindings) == 1:
        (only,) = bindings.values()
        inner = getattr(only, "output_schema", None)
        if inner:
            return inner
    return result_type.schema


def build_node(
    schema: NodeSchema,
    children: Sequence[ASTNode],
    context: Mapping[str, str],
) -> ASTNode:
    """Turn the matched ``children`` of ``schema`` into an AST node."""
    bindings = extract_bindings(schema.pattern, children)

    if not bindings and len(children) == 1:
        return children[0]

    fields = dict(schema.configure(bindings, context)) if schema.configure else bindings
    return CompositeNode(
        node=schema.name,
        output_schema=_output_schema(schema, bindings),
        fields=fields,
    )
