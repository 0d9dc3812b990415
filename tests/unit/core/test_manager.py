from __future__ import annotations

import pytest

from folio.core.config import ConfigManager
from folio.core.exceptions import ExtensionResolutionError
from folio.core.extensions import Extension, Mark, Node
from folio.core.manager import ExtensionManager, resolve_document


def toggle_bold(props) -> bool:
    return True


def _starter_kit() -> list:
    doc = Node.create(name="doc", top_node=True, content="block+")
    paragraph = Node.create(name="paragraph", group="block", content="inline*", priority=1000)
    heading = Node.create(
        name="heading",
        group="block",
        add_attributes=lambda ctx: {"level": {"default": 1}},
    )
    bold = Mark.create(
        name="bold",
        add_commands=lambda ctx: {"toggle_bold": toggle_bold},
        add_keyboard_shortcuts=lambda ctx: {"Mod-b": lambda editor: True},
    )
    text_align = Extension.create(
        name="text_align",
        priority=50,
        add_global_attributes=lambda ctx: [
            {"types": ["heading", "paragraph"], "attributes": {"align": {"default": "left"}}},
        ],
    )
    return [doc, paragraph, heading, bold, text_align]


def test_resolution_is_deterministic(config_manager: ConfigManager) -> None:
    first = resolve_document(_starter_kit(), config=config_manager)
    second = resolve_document(_starter_kit(), config=config_manager)

    assert first.names == second.names == ["paragraph", "doc", "heading", "bold", "text_align"]
    assert first.to_dict() == second.to_dict()


def test_resolved_tables(config_manager: ConfigManager) -> None:
    resolved = resolve_document(_starter_kit(), config=config_manager)

    assert resolved.top_node == "doc"
    assert [e.name for e in resolved.split.structural] == ["paragraph", "doc", "heading", "bold"]
    assert resolved.attribute_table()["heading"]["align"].default == "left"
    assert resolved.attribute_table()["paragraph"]["align"].default == "left"
    assert resolved.get_type("heading").attributes["level"].default == 1
    assert resolved.commands.get("toggle_bold").extension == "bold"
    assert resolved.shortcuts.get("Mod-b").extension == "bold"
    assert resolved.splittable_marks == ("bold",)


def test_resolved_document_is_read_only(config_manager: ConfigManager) -> None:
    resolved = resolve_document(_starter_kit(), config=config_manager)

    with pytest.raises(AttributeError):
        resolved.schema = None  # type: ignore[misc]
    with pytest.raises(TypeError):
        resolved.storage["bold"] = {}  # type: ignore[index]
    with pytest.raises(TypeError):
        resolved.schema.nodes["new"] = None  # type: ignore[index]


def test_storage_is_created_once_per_resolution(config_manager: ConfigManager) -> None:
    created = []

    def add_storage(ctx):
        created.append(ctx.name)
        return {"seen": []}

    def add_commands(ctx):
        ctx.storage["seen"].append("commands")
        return {}

    def add_keyboard_shortcuts(ctx):
        ctx.storage["seen"].append("shortcuts")
        return {}

    ext = Extension.create(
        name="tracker",
        add_storage=add_storage,
        add_commands=add_commands,
        add_keyboard_shortcuts=add_keyboard_shortcuts,
    )

    resolved = resolve_document([ext], config=config_manager)

    assert created == ["tracker"]
    assert resolved.storage["tracker"] == {"seen": ["commands", "shortcuts"]}


def test_add_extensions_shares_the_resolution_storage(config_manager: ConfigManager) -> None:
    created = []

    def add_storage(ctx):
        created.append(ctx.name)
        return {"seen": []}

    def add_extensions(ctx):
        ctx.storage["seen"].append("extensions")
        return [Mark.create(name="bold")]

    def add_commands(ctx):
        ctx.storage["seen"].append("commands")
        return {}

    kit = Extension.create(
        name="kit",
        add_storage=add_storage,
        add_extensions=add_extensions,
        add_commands=add_commands,
    )

    resolved = resolve_document([kit], config=config_manager)

    assert created == ["kit"]
    assert resolved.storage["kit"] == {"seen": ["extensions", "commands"]}
    assert resolved.names == ["kit", "bold"]


def test_configured_priority_default(write_config) -> None:
    path = write_config("folio.yaml", {"extensions": {"default_priority": 10}})
    manager = ConfigManager([path], environ={})
    unset = Extension.create(name="unset")
    mid = Extension.create(name="mid", priority=50)

    assert resolve_document([unset, mid], config=manager).names == ["mid", "unset"]


def test_configured_nesting_depth(write_config) -> None:
    path = write_config("folio.yaml", {"extensions": {"max_nesting_depth": 1}})
    manager = ConfigManager([path], environ={})
    inner = Extension.create(name="inner", add_extensions=lambda ctx: [Extension.create(name="leaf")])
    outer = Extension.create(name="outer", add_extensions=lambda ctx: [inner])

    with pytest.raises(ExtensionResolutionError) as excinfo:
        resolve_document([outer], config=manager)

    assert excinfo.value.chain == ("outer", "inner")


def test_configured_attribute_defaults(write_config) -> None:
    path = write_config("folio.yaml", {"attributes": {"defaults": {"rendered": False}}})
    manager = ConfigManager([path], environ={})
    heading = Node.create(name="heading", add_attributes=lambda ctx: {"id": {}, "level": {"rendered": True}})

    attributes = resolve_document([heading], config=manager).get_type("heading").attributes

    assert attributes["id"].rendered is False
    assert attributes["level"].rendered is True


def test_reconfigure_replaces_the_resolved_document(config_manager: ConfigManager) -> None:
    manager = ExtensionManager(_starter_kit(), config=config_manager)
    before = manager.resolved

    after = manager.reconfigure([Node.create(name="doc")])

    assert manager.resolved is after
    assert after is not before
    assert after.names == ["doc"]
    assert before.commands.get("toggle_bold") is not None
    assert after.commands.get("toggle_bold") is None


def test_reconfigure_without_arguments_re_resolves(config_manager: ConfigManager) -> None:
    manager = ExtensionManager(_starter_kit(), config=config_manager)
    before = manager.resolved

    after = manager.reconfigure()

    assert after is not before
    assert after.names == before.names
