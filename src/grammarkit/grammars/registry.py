"""Grammar registry for grammarkit.

A grammar is published as a *factory*: a zero-argument callable that
returns the rule list.  Factories are registered under a name either
with the ``@register`` decorator at import time, or lazily from the
``grammarkit.grammars`` entry-point group of installed packages.

Example
-------
Register a grammar::

    from grammarkit.grammars import default_registry

    @default_registry.register("boolean")
    def boolean_grammar():
        return [and_rule, or_rule]

Declare one from another package's ``pyproject.toml``::

    [project.entry-points."grammarkit.grammars"]
    money = "my_package.grammars:money"

Then look it up::

    nodes = default_registry.build("money")
"""
from __future__ import annotations

import importlib
import importlib.metadata
import logging
from collections.abc import Callable, Iterable

from grammarkit.schema.nodes import NodeSchema

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "grammarkit.grammars"

GrammarFactory = Callable[[], Iterable[NodeSchema]]


class GrammarNotFoundError(KeyError):
    """Raised when a requested grammar name is not in the registry."""

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        self.grammar_name = name
        names = ", ".join(sorted(available)) or "none"
        super().__init__(
            f"Grammar {name!r} is not registered. Available grammars: {names}. "
            "Check that the package is installed and its entry-points are declared."
        )


class GrammarAlreadyRegisteredError(ValueError):
    """Raised when attempting to register a name that already exists."""

    def __init__(self, name: str) -> None:
        self.grammar_name = name
        super().__init__(
            f"Grammar {name!r} is already registered. "
            "Use a unique name or explicitly deregister the existing entry first."
        )


class GrammarRegistry:
    """Named grammar factories."""

    def __init__(self) -> None:
        self._factories: dict[str, GrammarFactory] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, name: str) -> Callable[[GrammarFactory], GrammarFactory]:
        """Return a decorator that registers a grammar factory under ``name``.

        Raises
        ------
        GrammarAlreadyRegisteredError
            If ``name`` is already in use.
        TypeError
            If the decorated object is not callable.
        """

        def decorator(factory: GrammarFactory) -> GrammarFactory:
            self.register_factory(name, factory)
            return factory

        return decorator

    def register_factory(self, name: str, factory: GrammarFactory) -> None:
        """Register ``factory`` under ``name`` without decorator syntax."""
        if name in self._factories:
            raise GrammarAlreadyRegisteredError(name)
        if not callable(factory):
            raise TypeError(f"Cannot register {factory!r} under {name!r}: it is not callable.")
        self._factories[name] = factory
        logger.debug("Registered grammar %r -> %r", name, factory)

    def deregister(self, name: str) -> None:
        """Remove the grammar registered under ``name``."""
        if name not in self._factories:
            raise GrammarNotFoundError(name, self._factories)
        del self._factories[name]
        logger.debug("Deregistered grammar %r", name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> GrammarFactory:
        """Return the factory registered under ``name``."""
        try:
            return self._factories[name]
        except KeyError:
            raise GrammarNotFoundError(name, self._factories) from None

    def build(self, name: str) -> tuple[NodeSchema, ...]:
        """Call the factory registered under ``name`` and return its rules."""
        return tuple(self.get(name)())

    def resolve(self, reference: str) -> tuple[NodeSchema, ...]:
        """Return rules for a registered name or a ``module:attribute`` path.

        The attribute may be a factory or the rule sequence itself.
        """
        if reference in self._factories or ":" not in reference:
            return self.build(reference)
        module_name, _, attribute = reference.partition(":")
        target = getattr(importlib.import_module(module_name), attribute)
        rules = target() if callable(target) else target
        return tuple(rules)

    def list_grammars(self) -> list[str]:
        """Return registered grammar names in alphabetical order."""
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def __repr__(self) -> str:
        return f"GrammarRegistry(grammars={self.list_grammars()})"

    # ------------------------------------------------------------------
    # Entry-point loading
    # ------------------------------------------------------------------

    def load_entrypoints(self, group: str = ENTRY_POINT_GROUP) -> None:
        """Register grammar factories declared as package entry-points.

        Names that are already registered are skipped, so repeated calls
        are idempotent.  Entry-points that fail to import are logged and
        skipped.
        """
        for ep in importlib.metadata.entry_points(group=group):
            if ep.name in self._factories:
                logger.debug("Entry-point %r already registered; skipping.", ep.name)
                continue
            try:
                factory = ep.load()
            except Exception:
                logger.exception(
                    "Failed to load entry-point %r from group %r; skipping.", ep.name, group
                )
                continue
            try:
                self.register_factory(ep.name, factory)
            except (GrammarAlreadyRegisteredError, TypeError):
                logger.warning(
                    "Entry-point %r loaded but could not be registered; skipping.", ep.name
                )
