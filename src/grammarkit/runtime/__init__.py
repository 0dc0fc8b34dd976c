"""grammarkit runtime: evaluation and type inference of parsed trees."""
from __future__ import annotations

from grammarkit.runtime.errors import (
    ConstEvaluationError,
    EvaluationError,
    InvalidNodeError,
    MissingEvalError,
    SchemaValidationError,
    UndefinedVariableError,
    UnknownNodeTypeError,
)
from grammarkit.runtime.eval import EvalContext, create_evaluator, evaluate
from grammarkit.runtime.infer import infer

__all__ = [
    "EvaluationError",
    "InvalidNodeError",
    "UnknownNodeTypeError",
    "MissingEvalError",
    "ConstEvaluationError",
    "UndefinedVariableError",
    "SchemaValidationError",
    "EvalContext",
    "evaluate",
    "create_evaluator",
    "infer",
]
