"""Built-in grammars and the grammar registry.

``default_registry`` holds the ``arithmetic`` and ``standard`` grammars.
Installed packages can add grammars through the ``grammarkit.grammars``
entry-point group; call ``default_registry.load_entrypoints()`` to pick
them up.
"""
from __future__ import annotations

from grammarkit.grammars.builtin import arithmetic, standard
from grammarkit.grammars.registry import (
    ENTRY_POINT_GROUP,
    GrammarAlreadyRegisteredError,
    GrammarFactory,
    GrammarNotFoundError,
    GrammarRegistry,
)

default_registry = GrammarRegistry()
default_registry.register_factory("arithmetic", arithmetic)
default_registry.register_factory("standard", standard)

__all__ = [
    "ENTRY_POINT_GROUP",
    "GrammarAlreadyRegisteredError",
    "GrammarFactory",
    "GrammarNotFoundError",
    "GrammarRegistry",
    "arithmetic",
    "standard",
    "default_registry",
]
