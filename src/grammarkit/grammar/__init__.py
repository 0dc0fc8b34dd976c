"""grammarkit grammar module.

Exports the grammar builder and the built-in atom rules.
"""
from __future__ import annotations

from grammarkit.grammar.grammar import (
    ATOM_LEVEL,
    BUILT_IN_ATOMS,
    Grammar,
    Level,
    build_grammar,
)

__all__ = [
    "Grammar",
    "Level",
    "ATOM_LEVEL",
    "BUILT_IN_ATOMS",
    "build_grammar",
]
