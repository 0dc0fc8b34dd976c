"""grammarkit schema validator.

Checks runtime values against schema descriptor strings such as
``"number >= 0"`` or ``"string.email | null"``.
"""
from __future__ import annotations

from grammarkit.validator.cache import ValidatorCache
from grammarkit.validator.descriptors import (
    SchemaDescriptorError,
    compile_descriptor,
    descriptor_type,
)
from grammarkit.validator.validator import SchemaValidator, ValidationResult

__all__ = [
    "SchemaDescriptorError",
    "SchemaValidator",
    "ValidationResult",
    "ValidatorCache",
    "compile_descriptor",
    "descriptor_type",
]
