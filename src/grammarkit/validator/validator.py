"""Runtime value validation against schema descriptors.

``SchemaValidator`` is what the evaluator calls when an identifier
carries a declared schema::

    validator = SchemaValidator()
    validator.validate(5, "number >= 0")    # ValidationResult(ok=True)
    validator.validate(-5, "number >= 0")   # ok=False, reason="..."

``unknown`` and a missing descriptor always pass without compiling
anything.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter, ValidationError

from grammarkit.schema.nodes import UNKNOWN_SCHEMA
from grammarkit.validator.cache import ValidatorCache
from grammarkit.validator.descriptors import compile_descriptor


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of one validation.

    Parameters
    ----------
    ok:
        Whether the value satisfied the descriptor.
    reason:
        Failure detail; empty when ``ok`` is True.
    """

    ok: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.ok


_PASSED = ValidationResult(ok=True)


def _describe(exc: ValidationError) -> str:
    messages: list[str] = []
    for error in exc.errors(include_url=False):
        message = error["msg"]
        if message not in messages:
            messages.append(message)
    return "; ".join(messages)


class SchemaValidator:
    """Validates values against descriptor strings.

    Parameters
    ----------
    cache:
        Where compiled descriptors are kept.  A fresh cache is created
        when omitted; pass one explicitly to share it between validators.
    """

    def __init__(self, cache: ValidatorCache | None = None) -> None:
        self.cache = cache if cache is not None else ValidatorCache()

    @staticmethod
    def always_passes(descriptor: str | None) -> bool:
        """Return True for descriptors that accept every value."""
        return descriptor is None or descriptor.strip() in ("", UNKNOWN_SCHEMA)

    def compile(self, descriptor: str) -> TypeAdapter[Any]:
        """Return the compiled adapter for ``descriptor``.

        Raises
        ------
        SchemaDescriptorError
            If ``descriptor`` is malformed.
        """
        return self.cache.get_or_compile(descriptor, compile_descriptor)

    def validate(self, value: Any, descriptor: str | None) -> ValidationResult:
        """Check ``value`` against ``descriptor``.

        Raises
        ------
        SchemaDescriptorError
            If ``descriptor`` is malformed.  A value that does not match
            is reported through the result, not raised.
        """
        if self.always_passes(descriptor):
            return _PASSED
        assert descriptor is not None
        adapter = self.compile(descriptor)
        try:
            adapter.validate_python(value)
        except ValidationError as exc:
            return ValidationResult(ok=False, reason=_describe(exc))
        return _PASSED
