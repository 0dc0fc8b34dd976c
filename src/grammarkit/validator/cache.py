"""Read-through cache of compiled schema descriptors.

Compiling a descriptor into a ``TypeAdapter`` builds a pydantic core
schema, which is far more expensive than validating a value with it.
``ValidatorCache`` keeps one adapter per descriptor string.  Compiled
adapters are stateless, so lookups need no lock; insertions are guarded
so that one thread's miss cannot clobber another's entry.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from pydantic import TypeAdapter

logger = logging.getLogger(__name__)


class ValidatorCache:
    """Thread-safe mapping of descriptor string to compiled ``TypeAdapter``."""

    def __init__(self) -> None:
        self._entries: dict[str, TypeAdapter[Any]] = {}
        self._lock = threading.Lock()

    def get_or_compile(
        self, descriptor: str, compile_fn: Callable[[str], TypeAdapter[Any]]
    ) -> TypeAdapter[Any]:
        """Return the adapter for ``descriptor``, compiling it on a miss.

        Errors raised by ``compile_fn`` propagate and nothing is cached.
        """
        adapter = self._entries.get(descriptor)
        if adapter is not None:
            return adapter
        with self._lock:
            adapter = self._entries.get(descriptor)
            if adapter is None:
                logger.debug("Compiling schema descriptor %r", descriptor)
                adapter = compile_fn(descriptor)
                self._entries[descriptor] = adapter
        return adapter

    def clear(self) -> None:
        """Drop every cached adapter."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, descriptor: object) -> bool:
        return descriptor in self._entries
