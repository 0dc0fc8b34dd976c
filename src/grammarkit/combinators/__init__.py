"""grammarkit parser combinators."""
from __future__ import annotations

from grammarkit.combinators.combinators import (
    Choice,
    CombinatorResult,
    ConstToken,
    IdentToken,
    Many,
    Maybe,
    NumberToken,
    Sequence,
    StringToken,
    TextParser,
)

__all__ = [
    "CombinatorResult",
    "TextParser",
    "NumberToken",
    "StringToken",
    "IdentToken",
    "ConstToken",
    "Choice",
    "Sequence",
    "Maybe",
    "Many",
]
