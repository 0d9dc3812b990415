from __future__ import annotations

import pytest

from folio.core.exceptions import ExtensionConfigError
from folio.core.extensions import (
    Extension,
    ExtensionContext,
    ExtensionKind,
    Mark,
    Node,
    is_extension_rules_enabled,
)


def _options_ext() -> Extension:
    return Extension.create(
        name="link",
        add_options=lambda ctx: {"open_on_click": True, "html": {"rel": "noopener", "target": "_blank"}},
    )


def test_create_requires_a_name() -> None:
    with pytest.raises(ExtensionConfigError):
        Extension.create(priority=10)

    with pytest.raises(ExtensionConfigError):
        Node.create({"name": "  "})


def test_create_accepts_mapping_callable_and_keywords() -> None:
    from_mapping = Node.create({"name": "paragraph", "group": "block"})
    from_callable = Node.create(lambda: {"name": "paragraph", "group": "block"})
    from_keywords = Node.create(name="paragraph", group="block")

    for ext in (from_mapping, from_callable, from_keywords):
        assert ext.name == "paragraph"
        assert ext.kind is ExtensionKind.NODE
        assert ext.parent is None
        assert ext.get_field("group") == "block"


def test_kinds_differ_only_by_constructor() -> None:
    assert Extension.create(name="a").kind is ExtensionKind.EXTENSION
    assert Node.create(name="b").kind is ExtensionKind.NODE
    assert Mark.create(name="c").kind is ExtensionKind.MARK
    assert ExtensionKind.MARK.is_structural
    assert not ExtensionKind.EXTENSION.is_structural


def test_configure_keeps_name_kind_and_parent() -> None:
    base = Mark.create(name="bold")
    child = base.extend(priority=150)

    configured = child.configure(html_attributes={"class": "b"})

    assert configured.name == child.name == "bold"
    assert configured.kind is ExtensionKind.MARK
    assert configured.parent is base
    assert configured.get_field("priority") == 150


def test_configure_deep_merges_over_prior_options() -> None:
    configured = _options_ext().configure(html={"target": None})

    assert configured.options == {
        "open_on_click": True,
        "html": {"rel": "noopener", "target": None},
    }


def test_repeated_configure_wraps_linearly() -> None:
    ext = _options_ext().configure(open_on_click=False).configure({"html": {"rel": "nofollow"}})

    assert ext.options == {
        "open_on_click": False,
        "html": {"rel": "nofollow", "target": "_blank"},
    }


def test_configure_does_not_touch_the_original() -> None:
    original = _options_ext()
    original.configure(open_on_click=False)

    assert original.options["open_on_click"] is True


def test_extend_falls_through_to_parent_fields() -> None:
    parent = Node.create(name="heading", group="block", content="inline*")
    child = parent.extend(content="text*")

    assert child.parent is parent
    assert child.name == "heading"
    assert child.get_field("content") == "text*"
    assert child.get_field("group") == "block"
    assert "group" not in child.config


def test_extend_may_rename() -> None:
    child = Node.create(name="heading").extend(name="title")

    assert child.name == "title"
    assert child.parent.name == "heading"


def test_extended_configured_extension_keeps_options() -> None:
    ext = _options_ext().configure(open_on_click=False).extend(priority=1)

    assert ext.options["open_on_click"] is False


def test_parent_thunk_exposes_previous_generation() -> None:
    def cmd_a(props) -> bool:
        return True

    def cmd_b(props) -> bool:
        return True

    e1 = Extension.create(name="history", add_commands=lambda ctx: {"undo": cmd_a})
    e2 = e1.extend(add_commands=lambda ctx: {**(ctx.parent() or {}), "redo": cmd_b})

    commands = e2.resolve_field("add_commands", ExtensionContext(name=e2.name))

    assert commands == {"undo": cmd_a, "redo": cmd_b}


def test_parent_thunk_is_none_at_root() -> None:
    seen = []
    ext = Extension.create(name="root", add_storage=lambda ctx: seen.append(ctx.parent()) or {})

    ext.storage

    assert seen == [None]


def test_parent_thunk_walks_several_generations() -> None:
    base = Extension.create(name="x", add_options=lambda ctx: {"levels": [1]})
    middle = base.extend(add_options=lambda ctx: {"levels": ctx.parent()["levels"] + [2]})
    top = middle.extend(add_options=lambda ctx: {"levels": ctx.parent()["levels"] + [3]})

    assert top.options == {"levels": [1, 2, 3]}


def test_parent_thunk_forwards_arguments() -> None:
    base = Extension.create(name="x", extend_node_schema=lambda ctx, ext: {"seen": ext})
    child = base.extend(extend_node_schema=lambda ctx, ext: {**ctx.parent(ext), "child": True})

    hook = child.get_field("extend_node_schema")

    assert hook("paragraph") == {"seen": "paragraph", "child": True}


def test_absent_field_yields_none() -> None:
    ext = Extension.create(name="plain")

    assert ext.get_field("add_commands") is None
    assert ext.resolve_field("add_commands") is None
    assert ext.options == {}


def test_static_field_is_returned_unchanged() -> None:
    ext = Node.create(name="doc", top_node=True, content="block+")

    assert ext.get_field("top_node") is True
    assert ext.resolve_field("content") == "block+"


def test_storage_receives_resolved_options() -> None:
    ext = Extension.create(
        name="counter",
        add_options=lambda ctx: {"start": 3},
        add_storage=lambda ctx: {"count": ctx.options["start"]},
    ).configure(start=7)

    assert ext.storage == {"count": 7}
    assert ext.storage is not ext.storage


def test_priority_defaults_and_zero() -> None:
    assert Extension.create(name="a").priority() == 100
    assert Extension.create(name="a").priority(default=40) == 40
    assert Extension.create(name="a", priority=0).priority() == 100


def test_make_context_carries_handles() -> None:
    ext = _options_ext()
    ctx = ext.make_context(storage={"s": 1}, editor="editor")

    assert ctx.name == "link"
    assert ctx.options["open_on_click"] is True
    assert ctx.storage == {"s": 1}
    assert ctx.editor == "editor"
    assert ctx.parent() is None


def test_extension_rules_gating() -> None:
    link = Extension.create(name="link")
    bold = Mark.create(name="bold")

    assert is_extension_rules_enabled(link, True)
    assert not is_extension_rules_enabled(link, False)
    assert is_extension_rules_enabled(link, ["link"])
    assert is_extension_rules_enabled(bold, [bold])
    assert not is_extension_rules_enabled(bold, ["link"])
