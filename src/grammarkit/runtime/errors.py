"""Evaluation error types for grammarkit.

Evaluation failures are contract violations and are never recovered
internally: they propagate to the caller of ``evaluate``.  Every error
derives from ``EvaluationError`` so callers can catch the whole family.
"""
from __future__ import annotations


class EvaluationError(Exception):
    """Base class for all errors raised while evaluating an AST."""


class InvalidNodeError(EvaluationError):
    """Raised when a value is not a well-formed AST node.

    Parameters
    ----------
    message:
        Description of the shape problem.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class UnknownNodeTypeError(EvaluationError):
    """Raised when no rule in the registry has the node's name."""

    def __init__(self, node_type: str) -> None:
        super().__init__(
            f"Unknown node type: {node_type}. "
            "Make sure to pass all node schemas to evaluate()."
        )
        self.node_type = node_type


class MissingEvalError(EvaluationError):
    """Raised when the rule for a node defines no ``eval`` function."""

    def __init__(self, node_type: str) -> None:
        super().__init__(f"Node type {node_type!r} has no eval function defined")
        self.node_type = node_type


class ConstEvaluationError(EvaluationError):
    """Raised when a ``const`` node is evaluated directly."""

    def __init__(self) -> None:
        super().__init__("Cannot evaluate const node directly")


class UndefinedVariableError(EvaluationError):
    """Raised when an identifier has no value in the data mapping."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Undefined variable: {name}")
        self.name = name


class SchemaValidationError(EvaluationError):
    """Raised when a variable's value fails its declared schema.

    Parameters
    ----------
    name:
        The variable name.
    schema:
        The schema descriptor the value was checked against.
    reason:
        The validator's failure detail.
    """

    def __init__(self, name: str, schema: str, reason: str) -> None:
        super().__init__(
            f"Variable {name!r} failed validation for schema {schema!r}: {reason}"
        )
        self.name = name
        self.schema = schema
        self.reason = reason
