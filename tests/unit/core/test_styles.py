from __future__ import annotations

from folio.core.styles import StyleRegistry, StyleSheet


def test_register_is_idempotent_by_id() -> None:
    registry = StyleRegistry()

    first = registry.register("tables", ".table { border: 0 }", nonce="n1")
    second = registry.register("tables", ".table { border: 1px }")

    assert second is first
    assert registry.get("tables") == StyleSheet("tables", ".table { border: 0 }", "n1")
    assert registry.ids() == ["tables"]


def test_registries_are_independent() -> None:
    one = StyleRegistry()
    two = StyleRegistry()

    one.register("a", "")

    assert "a" in one
    assert "a" not in two


def test_clear() -> None:
    registry = StyleRegistry()
    registry.register("a", "x")
    registry.register("b", "y")

    registry.clear()

    assert len(registry) == 0
    assert registry.get("a") is None
