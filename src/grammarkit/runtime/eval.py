"""Tree-walking evaluator for grammarkit ASTs.

Evaluation dispatches on the node kind:

``literal``      the stored value
``identifier``   the value bound in ``data``, checked against the
                 node's ``output_schema`` unless it is ``unknown``
``const``        never evaluated; raises ``ConstEvaluationError``
``parentheses``  the value of ``inner``
anything else    the rule of that name: its named bindings are
                 evaluated and passed to the rule's ``eval`` function

The bindings passed to ``eval`` are re-derived from the rule's pattern,
so a rule whose ``configure`` function renamed or dropped fields only
sees the bound names that are still present on the node.

Every failure raises a subclass of ``EvaluationError`` and propagates to
the caller.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from grammarkit.ast.nodes import CompositeNode, ConstNode, IdentifierNode, LiteralNode, is_node
from grammarkit.ast.serializer import AstSerializer
from grammarkit.runtime.errors import (
    ConstEvaluationError,
    InvalidNodeError,
    MissingEvalError,
    SchemaValidationError,
    UndefinedVariableError,
    UnknownNodeTypeError,
)
from grammarkit.schema.nodes import Bound, NodeSchema
from grammarkit.validator.validator import SchemaValidator


@dataclass(frozen=True)
class EvalContext:
    """Everything an evaluation needs besides the tree.

    Parameters
    ----------
    data:
        Variable name to runtime value.
    nodes:
        The rules the tree was parsed with; looked up by name.
    validator:
        Checks identifier values against their declared schema.
    """

    data: Mapping[str, Any]
    nodes: Sequence[NodeSchema]
    validator: SchemaValidator = field(default_factory=SchemaValidator)


def _find_rule(nodes: Sequence[NodeSchema], name: str) -> NodeSchema | None:
    for schema in nodes:
        if schema.name == name:
            return schema
    return None


def _eval_identifier(node: IdentifierNode, ctx: EvalContext) -> Any:
    if node.name not in ctx.data:
        raise UndefinedVariableError(node.name)
    value = ctx.data[node.name]
    result = ctx.validator.validate(value, node.output_schema)
    if not result.ok:
        raise SchemaValidationError(node.name, node.output_schema, result.reason)
    return value


def _eval_composite(node: CompositeNode, ctx: EvalContext) -> Any:
    if node.node == "parentheses":
        if "inner" not in node:
            raise InvalidNodeError("Parentheses node missing 'inner' field")
        return _eval(node["inner"], ctx)

    schema = _find_rule(ctx.nodes, node.node)
    if schema is None:
        raise UnknownNodeTypeError(node.node)
    if schema.eval is None:
        raise MissingEvalError(node.node)

    bindings = {
        element.name: _eval(node[element.name], ctx)
        for element in schema.pattern
        if isinstance(element, Bound) and element.name in node
    }
    return schema.eval(bindings, ctx.data)


def _eval(node: Any, ctx: EvalContext) -> Any:
    if isinstance(node, LiteralNode):
        return node.value
    if isinstance(node, IdentifierNode):
        return _eval_identifier(node, ctx)
    if isinstance(node, ConstNode):
        raise ConstEvaluationError()
    if isinstance(node, CompositeNode):
        return _eval_composite(node, ctx)
    raise InvalidNodeError(f"Invalid AST node: expected an AST node, got {type(node).__name__}")


def evaluate(ast: Any, ctx: EvalContext) -> Any:
    """Evaluate ``ast`` and return its runtime value.

    Parameters
    ----------
    ast:
        A node returned by the parser, or its plain-dict form (see
        ``AstSerializer``), which is shape-checked first.
    ctx:
        Data, rules and validator for this evaluation.

    Raises
    ------
    EvaluationError
        For an invalid tree, an unknown or eval-less rule, a missing
        variable, a variable failing its schema, or a ``const`` node.
    """
    if not is_node(ast):
        ast = AstSerializer().from_dict(ast)
    return _eval(ast, ctx)


def create_evaluator(
    nodes: Sequence[NodeSchema], validator: SchemaValidator | None = None
) -> Callable[[Any, Mapping[str, Any]], Any]:
    """Return ``evaluator(ast, data)`` bound to ``nodes``.

    All calls share one ``SchemaValidator`` and therefore one compiled
    descriptor cache.
    """
    rules = tuple(nodes)
    shared = validator if validator is not None else SchemaValidator()

    def evaluator(ast: Any, data: Mapping[str, Any]) -> Any:
        return evaluate(ast, EvalContext(data=data, nodes=rules, validator=shared))

    return evaluator
