"""AST serialization and deserialization for grammarkit.

Provides conversion of AST trees to and from plain dicts, JSON and YAML.
The dict form is the tagged-union shape every node has::

    {"node": "add", "outputSchema": "number", "left": {...}, "right": {...}}

``from_dict`` doubles as the AST shape validator: the evaluator runs it
on plain mappings before walking them, so shape problems surface as
``InvalidNodeError``.

Usage
-----
::

    from grammarkit.ast.serializer import AstSerializer

    serializer = AstSerializer()
    data = serializer.to_dict(node)
    yaml_text = serializer.to_yaml(node)
    assert serializer.from_yaml(yaml_text) == node
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import yaml

from grammarkit.ast.nodes import (
    ASTNode,
    CompositeNode,
    ConstNode,
    IdentifierNode,
    LiteralNode,
    is_node,
)
from grammarkit.lexer.lexer import UNDEFINED
from grammarkit.schema.nodes import UNKNOWN_SCHEMA

_NODE_KEY = "node"
_SCHEMA_KEY = "outputSchema"


def _invalid(message: str) -> Exception:
    # runtime imports this module, so the error type is resolved lazily
    from grammarkit.runtime.errors import InvalidNodeError

    return InvalidNodeError(message)


def _raw_text(value: Any) -> str:
    # source text for a literal rebuilt from data that did not carry it
    if value is UNDEFINED:
        return "undefined"
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


class AstSerializer:
    """Converts between AST nodes and plain Python dicts."""

    # ------------------------------------------------------------------
    # Serialization (AST → dict)
    # ------------------------------------------------------------------

    def to_dict(self, node: ASTNode) -> dict[str, Any]:
        """Serialize an AST node to a JSON-compatible dict.

        ``undefined`` literal values are omitted; ``from_dict`` restores
        them from the ``undefined`` output schema.
        """
        if isinstance(node, LiteralNode):
            data: dict[str, Any] = {
                _NODE_KEY: "literal",
                _SCHEMA_KEY: node.output_schema,
                "raw": node.raw,
            }
            if node.value is not UNDEFINED:
                data["value"] = node.value
            return data
        if isinstance(node, IdentifierNode):
            return {_NODE_KEY: "identifier", _SCHEMA_KEY: node.output_schema, "name": node.name}
        if isinstance(node, ConstNode):
            return {_NODE_KEY: "const", _SCHEMA_KEY: node.output_schema}
        if isinstance(node, CompositeNode):
            data = {_NODE_KEY: node.node, _SCHEMA_KEY: node.output_schema}
            for key, value in node.fields.items():
                if key in data:
                    raise ValueError(
                        f"Field {key!r} of node {node.node!r} collides with a reserved key"
                    )
                data[key] = self._value_to_data(value)
            return data
        raise _invalid(
            f"Invalid AST node: expected an AST node, got {type(node).__name__}"
        )

    def _value_to_data(self, value: Any) -> Any:
        if is_node(value):
            return self.to_dict(value)
        if isinstance(value, (list, tuple)):
            return [self._value_to_data(v) for v in value]
        if isinstance(value, Mapping):
            return {k: self._value_to_data(v) for k, v in value.items()}
        if value is UNDEFINED:
            return None
        return value

    # ------------------------------------------------------------------
    # Deserialization (dict → AST)
    # ------------------------------------------------------------------

    def from_dict(self, data: object) -> ASTNode:
        """Deserialize an AST node, validating its shape.

        Raises
        ------
        InvalidNodeError
            If ``data`` is not a mapping, has no string ``node`` key, or
            lacks a field its node type requires.
        """
        if is_node(data):
            return data  # type: ignore[return-value]
        if not isinstance(data, Mapping):
            raise _invalid(
                f"Invalid AST node: expected mapping, got {type(data).__name__}"
            )
        node_type = data.get(_NODE_KEY)
        if not isinstance(node_type, str):
            raise _invalid("Invalid AST node: missing 'node' key")
        schema = data.get(_SCHEMA_KEY, UNKNOWN_SCHEMA)

        if node_type == "literal":
            if "value" in data:
                value = data["value"]
            elif schema == "undefined":
                value = UNDEFINED
            else:
                raise _invalid("Literal node missing 'value' key")
            raw = data.get("raw")
            return LiteralNode(
                raw=str(raw) if raw is not None else _raw_text(value),
                value=value,
                output_schema=schema,
            )
        if node_type == "identifier":
            name = data.get("name")
            if not isinstance(name, str):
                raise _invalid("Identifier node missing 'name' key")
            return IdentifierNode(name=name, output_schema=schema)
        if node_type == "const":
            return ConstNode(output_schema=schema)

        fields = {
            key: self._value_from_data(value)
            for key, value in data.items()
            if key not in (_NODE_KEY, _SCHEMA_KEY)
        }
        return CompositeNode(node=node_type, output_schema=schema, fields=fields)

    def _value_from_data(self, value: Any) -> Any:
        if isinstance(value, Mapping) and _NODE_KEY in value:
            return self.from_dict(value)
        if isinstance(value, list):
            return [self._value_from_data(v) for v in value]
        return value

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def to_json(self, node: ASTNode, indent: int = 2) -> str:
        """Serialize an AST node to a JSON string."""
        return json.dumps(self.to_dict(node), indent=indent, ensure_ascii=False)

    def from_json(self, text: str) -> ASTNode:
        """Deserialize an AST node from a JSON string."""
        return self.from_dict(json.loads(text))

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------

    def to_yaml(self, node: ASTNode) -> str:
        """Serialize an AST node to a YAML string."""
        return yaml.safe_dump(
            self.to_dict(node), default_flow_style=False, allow_unicode=True, sort_keys=False
        )

    def from_yaml(self, text: str) -> ASTNode:
        """Deserialize an AST node from a YAML string."""
        return self.from_dict(yaml.safe_load(text))
