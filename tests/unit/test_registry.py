"""Unit tests for grammarkit.grammars.registry — GrammarRegistry, error
types, entry-point loading and reference resolution.
"""
from __future__ import annotations

import logging
from unittest.mock import MagicMock, patch

import pytest

from grammarkit.grammars import arithmetic, default_registry
from grammarkit.grammars.registry import (
    ENTRY_POINT_GROUP,
    GrammarAlreadyRegisteredError,
    GrammarNotFoundError,
    GrammarRegistry,
)
from grammarkit.schema.nodes import NodeSchema, const, define_node, lhs, rhs

_ENTRY_POINTS = "grammarkit.grammars.registry.importlib.metadata.entry_points"


def _tilde() -> list[NodeSchema]:
    return [
        define_node(
            name="tilde",
            pattern=[lhs().bind("left"), const("~"), rhs().bind("right")],
            precedence=1,
            result_type="unknown",
        )
    ]


TILDE_RULES = _tilde()


def _entry_point(name: str, loaded: object = _tilde) -> MagicMock:
    ep = MagicMock()
    ep.name = name
    ep.load.return_value = loaded
    return ep


# ===========================================================================
# Error types
# ===========================================================================


class TestGrammarNotFoundError:
    def test_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            raise GrammarNotFoundError("money")

    def test_has_grammar_name_attribute(self) -> None:
        assert GrammarNotFoundError("money").grammar_name == "money"

    def test_message_lists_available(self) -> None:
        error = GrammarNotFoundError("money", ["standard", "arithmetic"])
        assert "arithmetic, standard" in str(error)

    def test_message_when_nothing_available(self) -> None:
        assert "Available grammars: none" in str(GrammarNotFoundError("money"))


class TestGrammarAlreadyRegisteredError:
    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            raise GrammarAlreadyRegisteredError("dup")

    def test_message_contains_name(self) -> None:
        error = GrammarAlreadyRegisteredError("dup")
        assert error.grammar_name == "dup"
        assert "'dup'" in str(error)


# ===========================================================================
# Registration and lookup
# ===========================================================================


class TestRegistration:
    def test_empty_registry(self) -> None:
        registry = GrammarRegistry()
        assert len(registry) == 0
        assert registry.list_grammars() == []
        assert repr(registry) == "GrammarRegistry(grammars=[])"

    def test_decorator_returns_factory_unchanged(self) -> None:
        registry = GrammarRegistry()
        decorated = registry.register("tilde")(_tilde)
        assert decorated is _tilde
        assert registry.get("tilde") is _tilde

    def test_decorator_logs_debug_message(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = GrammarRegistry()
        with caplog.at_level(logging.DEBUG, logger="grammarkit.grammars.registry"):
            registry.register("logged")(_tilde)
        assert "logged" in caplog.text

    def test_duplicate_name_rejected(self) -> None:
        registry = GrammarRegistry()
        registry.register_factory("tilde", _tilde)
        with pytest.raises(GrammarAlreadyRegisteredError):
            registry.register_factory("tilde", _tilde)

    def test_non_callable_rejected(self) -> None:
        registry = GrammarRegistry()
        with pytest.raises(TypeError, match="not callable"):
            registry.register_factory("rules", TILDE_RULES)  # type: ignore[arg-type]

    def test_deregister(self) -> None:
        registry = GrammarRegistry()
        registry.register_factory("tilde", _tilde)
        registry.deregister("tilde")
        assert "tilde" not in registry

    def test_deregister_unknown(self) -> None:
        with pytest.raises(GrammarNotFoundError):
            GrammarRegistry().deregister("missing")

    def test_list_is_sorted(self) -> None:
        registry = GrammarRegistry()
        registry.register_factory("zeta", _tilde)
        registry.register_factory("alpha", _tilde)
        assert registry.list_grammars() == ["alpha", "zeta"]
        assert len(registry) == 2


class TestLookup:
    def test_get_unknown(self) -> None:
        registry = GrammarRegistry()
        registry.register_factory("tilde", _tilde)
        with pytest.raises(GrammarNotFoundError) as exc_info:
            registry.get("missing")
        assert "tilde" in str(exc_info.value)

    def test_build_returns_tuple(self) -> None:
        registry = GrammarRegistry()
        registry.register_factory("tilde", _tilde)
        rules = registry.build("tilde")
        assert isinstance(rules, tuple)
        assert [rule.name for rule in rules] == ["tilde"]

    def test_resolve_registered_name(self) -> None:
        registry = GrammarRegistry()
        registry.register_factory("tilde", _tilde)
        assert registry.resolve("tilde") == tuple(TILDE_RULES)

    def test_resolve_unknown_plain_name(self) -> None:
        with pytest.raises(GrammarNotFoundError):
            GrammarRegistry().resolve("missing")

    def test_resolve_module_path_to_factory(self) -> None:
        rules = GrammarRegistry().resolve("grammarkit.grammars.builtin:arithmetic")
        assert [rule.name for rule in rules] == [rule.name for rule in arithmetic()]

    def test_resolve_module_path_to_rule_list(self) -> None:
        rules = GrammarRegistry().resolve(f"{__name__}:TILDE_RULES")
        assert rules == tuple(TILDE_RULES)

    def test_resolve_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            GrammarRegistry().resolve("no_such_module_here:rules")

    def test_resolve_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            GrammarRegistry().resolve("grammarkit.grammars.builtin:nothing")


class TestDefaultRegistry:
    def test_builtins_registered(self) -> None:
        assert "arithmetic" in default_registry
        assert "standard" in default_registry

    def test_entry_point_group(self) -> None:
        assert ENTRY_POINT_GROUP == "grammarkit.grammars"


# ===========================================================================
# load_entrypoints
# ===========================================================================


class TestLoadEntrypoints:
    def test_empty_group_does_nothing(self) -> None:
        registry = GrammarRegistry()
        with patch(_ENTRY_POINTS, return_value=[]):
            registry.load_entrypoints()
        assert len(registry) == 0

    def test_uses_requested_group(self) -> None:
        with patch(_ENTRY_POINTS, return_value=[]) as entry_points:
            GrammarRegistry().load_entrypoints("custom.group")
        entry_points.assert_called_once_with(group="custom.group")

    def test_registers_factory(self) -> None:
        registry = GrammarRegistry()
        with patch(_ENTRY_POINTS, return_value=[_entry_point("dynamic")]):
            registry.load_entrypoints()
        assert registry.get("dynamic") is _tilde

    def test_skips_already_registered(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = GrammarRegistry()
        registry.register_factory("existing", _tilde)
        ep = _entry_point("existing")
        with patch(_ENTRY_POINTS, return_value=[ep]):
            with caplog.at_level(logging.DEBUG, logger="grammarkit.grammars.registry"):
                registry.load_entrypoints()
        assert "existing" in caplog.text
        ep.load.assert_not_called()
        assert len(registry) == 1

    def test_load_failure_logged_and_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = GrammarRegistry()
        ep = _entry_point("broken")
        ep.load.side_effect = ImportError("no module named broken_thing")
        with patch(_ENTRY_POINTS, return_value=[ep]):
            with caplog.at_level(logging.ERROR, logger="grammarkit.grammars.registry"):
                registry.load_entrypoints()
        assert len(registry) == 0
        assert "broken" in caplog.text

    def test_non_callable_logged_and_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = GrammarRegistry()
        with patch(_ENTRY_POINTS, return_value=[_entry_point("plain", loaded=42)]):
            with caplog.at_level(logging.WARNING, logger="grammarkit.grammars.registry"):
                registry.load_entrypoints()
        assert len(registry) == 0
        assert "could not be registered" in caplog.text

    def test_is_idempotent(self) -> None:
        registry = GrammarRegistry()
        with patch(_ENTRY_POINTS, return_value=[_entry_point("stable")]):
            registry.load_entrypoints()
            registry.load_entrypoints()
        assert len(registry) == 1
