from __future__ import annotations

import logging

import pytest

from folio.core.config import ExtensionsConfig
from folio.core.exceptions import ExtensionResolutionError
from folio.core.extensions import Extension, Mark, Node
from folio.core.resolution import (
    find_duplicates,
    flatten_extensions,
    resolve_extensions,
    sort_extensions,
    split_extensions,
)


def _names(extensions) -> list:
    return [ext.name for ext in extensions]


def _nested_chain(depth: int) -> Extension:
    """Build level0 > level1 > ... > leaf with ``depth`` levels of nesting."""
    ext = Extension.create(name="leaf")
    for level in reversed(range(depth)):
        ext = Extension.create(name=f"level{level}", add_extensions=lambda ctx, inner=ext: [inner])
    return ext


def test_flatten_is_pre_order() -> None:
    child_a = Extension.create(name="a1")
    child_b = Extension.create(name="b1", add_extensions=lambda ctx: [Extension.create(name="b2")])
    kit = Extension.create(name="kit", add_extensions=lambda ctx: [child_a, child_b])
    tail = Extension.create(name="tail")

    assert _names(flatten_extensions([kit, tail])) == ["kit", "a1", "b1", "b2", "tail"]


def test_flatten_nested_extensions_see_options() -> None:
    kit = Extension.create(
        name="kit",
        add_options=lambda ctx: {"bold": True},
        add_extensions=lambda ctx: [Mark.create(name="bold")] if ctx.options["bold"] else [],
    )

    assert _names(flatten_extensions([kit])) == ["kit", "bold"]
    assert _names(flatten_extensions([kit.configure(bold=False)])) == ["kit"]


def test_flatten_allows_nesting_up_to_max_depth() -> None:
    flat = flatten_extensions([_nested_chain(3)], max_depth=3)

    assert _names(flat) == ["level0", "level1", "level2", "leaf"]


def test_flatten_depth_cap_names_the_chain() -> None:
    with pytest.raises(ExtensionResolutionError) as excinfo:
        flatten_extensions([_nested_chain(3)], max_depth=2)

    assert excinfo.value.chain == ("level0", "level1", "level2")
    assert "level0 > level1 > level2" in str(excinfo.value)
    assert excinfo.value.context["max_depth"] == 2


def test_flatten_stops_self_recursion() -> None:
    loop = Extension.create(name="loop", add_extensions=lambda ctx: [loop])

    with pytest.raises(ExtensionResolutionError) as excinfo:
        flatten_extensions([loop])

    assert set(excinfo.value.chain) == {"loop"}


def test_sort_by_descending_priority_regardless_of_input_order() -> None:
    high = Extension.create(name="high", priority=200)
    default = Extension.create(name="default")
    low = Extension.create(name="low", priority=50)

    for order in ([low, default, high], [default, high, low], [high, low, default]):
        assert _names(sort_extensions(order)) == ["high", "default", "low"]


def test_sort_is_stable_on_ties() -> None:
    items = [Extension.create(name=f"e{i}") for i in range(6)]

    assert _names(sort_extensions(items)) == [f"e{i}" for i in range(6)]


def test_sort_treats_zero_priority_as_default() -> None:
    low = Extension.create(name="low", priority=50)
    zero = Extension.create(name="zero", priority=0)
    unset = Extension.create(name="unset")

    assert _names(sort_extensions([low, zero, unset])) == ["zero", "unset", "low"]


def test_sort_uses_configured_default() -> None:
    unset = Extension.create(name="unset")
    mid = Extension.create(name="mid", priority=60)

    assert _names(sort_extensions([mid, unset], default_priority=50)) == ["mid", "unset"]


def test_split_preserves_order() -> None:
    items = [
        Mark.create(name="bold"),
        Extension.create(name="history"),
        Node.create(name="doc"),
        Mark.create(name="italic"),
        Node.create(name="paragraph"),
    ]

    split = split_extensions(items)

    assert _names(split.base) == ["history"]
    assert _names(split.nodes) == ["doc", "paragraph"]
    assert _names(split.marks) == ["bold", "italic"]
    assert _names(split.structural) == ["doc", "paragraph", "bold", "italic"]


def test_find_duplicates() -> None:
    assert find_duplicates(["a", "b", "a", "c", "b", "a"]) == ["a", "b"]
    assert find_duplicates([]) == []


def test_resolve_warns_on_duplicate_names_without_dropping(caplog: pytest.LogCaptureFixture) -> None:
    first = Mark.create(name="bold")
    second = Mark.create(name="bold")

    with caplog.at_level(logging.WARNING, logger="folio"):
        ordered = resolve_extensions([first, second])

    assert ordered == (first, second)
    assert "Duplicate extension names" in caplog.text
    assert "'bold'" in caplog.text


def test_resolve_duplicate_warning_can_be_disabled(caplog: pytest.LogCaptureFixture) -> None:
    config = ExtensionsConfig(config={"extensions": {"warn_on_duplicate_names": False}})

    with caplog.at_level(logging.WARNING, logger="folio"):
        resolve_extensions([Mark.create(name="bold"), Mark.create(name="bold")], config)

    assert "Duplicate" not in caplog.text


def test_resolve_is_deterministic() -> None:
    kit = Extension.create(
        name="kit",
        add_extensions=lambda ctx: [Extension.create(name="n1", priority=300), Extension.create(name="n2")],
    )
    roots = [Extension.create(name="low", priority=10), kit, Node.create(name="doc", priority=1000)]

    first = _names(resolve_extensions(roots))
    second = _names(resolve_extensions(roots))

    assert first == second == ["doc", "n1", "kit", "n2", "low"]
