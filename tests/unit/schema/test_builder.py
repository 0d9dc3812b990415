from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

import pytest

from folio.core.exceptions import AttributeValidationError, RequiredAttributeError
from folio.core.extensions import Extension, ExtensionKind, Mark, Node
from folio.core.schema import DocumentMark, DocumentNode, build_schema


def _paragraph(**fields) -> Node:
    return Node.create(name="paragraph", group="block", content="inline*", **fields)


def test_node_and_mark_definitions_take_structural_fields() -> None:
    doc = Node.create(name="doc", top_node=True, content="block+")
    bold = Mark.create(name="bold", inclusive=lambda ctx: True, excludes="italic")

    schema = build_schema([doc, _paragraph(), bold])

    assert list(schema.nodes) == ["doc", "paragraph"]
    assert schema.nodes["paragraph"].spec == {"group": "block", "content": "inline*"}
    assert schema.nodes["paragraph"].kind is ExtensionKind.NODE
    assert schema.marks["bold"].spec == {"inclusive": True, "excludes": "italic"}
    assert schema.get_type("bold").is_mark


def test_fields_resolve_through_the_override_chain() -> None:
    custom = _paragraph().extend(content=lambda ctx: "text*")

    assert build_schema([custom]).nodes["paragraph"].spec["content"] == "text*"


def test_misspelled_attribute_key_does_not_abort_schema_build(caplog: pytest.LogCaptureFixture) -> None:
    bold = Mark.create(
        name="bold",
        add_attributes=lambda ctx: {"weight": {"default": 700, "keepOnSplit": False}},
    )

    with caplog.at_level(logging.WARNING, logger="folio"):
        schema = build_schema([Node.create(name="doc", top_node=True), bold])

    assert schema.marks["bold"].attributes["weight"].default == 700
    assert schema.marks["bold"].attributes["weight"].keep_on_split is True
    assert "keepOnSplit" in caplog.text


def test_same_type_name_is_replaced_wholesale() -> None:
    first = Node.create(name="heading", content="inline*", group="block", defining=True)
    second = Node.create(name="heading", content="text*")

    spec = build_schema([first, second]).nodes["heading"].spec

    assert spec == {"content": "text*"}


def test_schema_extension_hooks_add_fields_owner_wins() -> None:
    ext = Extension.create(
        name="tables",
        extend_node_schema=lambda ctx, extension: {
            "table_role": extension.get_field("table_role"),
            "group": "overridden",
        },
    )
    cell = Node.create(name="table_cell", table_role="cell", group="cells")
    paragraph = Node.create(name="paragraph")

    schema = build_schema([ext, cell, paragraph])

    assert schema.nodes["table_cell"].spec["table_role"] == "cell"
    assert schema.nodes["table_cell"].spec["group"] == "cells"
    assert schema.nodes["paragraph"].spec["group"] == "overridden"


def test_mark_schema_extension_hook() -> None:
    ext = Extension.create(name="spanning", extend_mark_schema=lambda ctx, extension: {"spanning": False})

    assert build_schema([ext, Mark.create(name="code")]).marks["code"].spec == {"spanning": False}


def test_top_node_prefers_flag_then_first_node() -> None:
    assert build_schema([_paragraph(), Node.create(name="doc", top_node=True)]).top_node == "doc"
    assert build_schema([_paragraph(), Node.create(name="doc")]).top_node == "paragraph"
    assert build_schema([Mark.create(name="bold")]).top_node is None


def test_splittable_marks_default_to_true() -> None:
    schema = build_schema(
        [
            Mark.create(name="bold"),
            Mark.create(name="link", keep_on_split=False),
            Mark.create(name="code", keep_on_split=lambda ctx: True),
        ]
    )

    assert schema.splittable_marks == ("bold", "code")


def test_required_attribute_fails_only_at_instance_construction() -> None:
    image = Node.create(
        name="image",
        add_attributes=lambda ctx: {"src": {"is_required": True}, "alt": {"default": ""}},
    )
    schema = build_schema([image])
    image_type = schema.nodes["image"]

    with pytest.raises(RequiredAttributeError) as excinfo:
        image_type.create()
    assert excinfo.value.attribute == "src"
    assert excinfo.value.context["type"] == "image"

    node = image_type.create({"src": "a.png", "unknown": 1})
    assert isinstance(node, DocumentNode)
    assert dict(node.attrs) == {"src": "a.png", "alt": ""}


def test_validators_reject_bad_values() -> None:
    heading = Node.create(
        name="heading",
        add_attributes=lambda ctx: {
            "level": {"default": 1, "validate": "number"},
            "id": {"default": None, "validate": "string|null"},
            "anchor": {"default": "a", "validate": lambda value: value.startswith("a")},
        },
    )
    heading_type = build_schema([heading]).nodes["heading"]

    assert heading_type.create({"level": 2, "id": None})
    with pytest.raises(AttributeValidationError):
        heading_type.create({"level": "2"})
    with pytest.raises(AttributeValidationError):
        heading_type.create({"id": 5})
    with pytest.raises(AttributeValidationError):
        heading_type.create({"anchor": "zzz"})
    with pytest.raises(AttributeValidationError):
        heading_type.create({"anchor": 3})


def test_mark_instances() -> None:
    link = Mark.create(name="link", add_attributes=lambda ctx: {"href": {"default": None}})

    mark = build_schema([link]).marks["link"].create({"href": "https://example.com"})

    assert mark == DocumentMark(type="link", attrs=mark.attrs)
    assert mark.attrs["href"] == "https://example.com"


def test_rendered_attributes_merge_class_and_style() -> None:
    paragraph = _paragraph(
        add_attributes=lambda ctx: {
            "align": {
                "default": "left",
                "render_html": lambda attrs: {"style": f"text-align: {attrs['align']}", "class": "aligned"},
            },
            "indent": {
                "default": 0,
                "render_html": lambda attrs: {"style": f"margin-left: {attrs['indent']}em", "class": "aligned indent"},
            },
            "id": {"default": "p1"},
            "internal": {"default": "x", "rendered": False},
        }
    )
    paragraph_type = build_schema([paragraph]).nodes["paragraph"]

    rendered = paragraph_type.rendered_attributes(paragraph_type.create())

    assert rendered == {
        "style": "text-align: left; margin-left: 0em",
        "class": "aligned indent",
        "id": "p1",
    }


def test_render_html_gets_node_and_rendered_attributes() -> None:
    paragraph = _paragraph(
        add_attributes=lambda ctx: {"id": {"default": "p1"}},
        render_html=lambda ctx, node, attrs: ["p", attrs, 0],
        render_text=lambda ctx, node: node.text_content,
    )
    paragraph_type = build_schema([paragraph]).nodes["paragraph"]
    node = paragraph_type.create(content=[DocumentNode(type="text", text="hi")])

    assert paragraph_type.render(node) == ["p", {"id": "p1"}, 0]
    assert paragraph_type.text(node) == "hi"


def test_parse_rules_get_attribute_injection() -> None:
    heading = Node.create(
        name="heading",
        add_attributes=lambda ctx: {
            "level": {"default": 1, "parse_html": lambda el: int(el.tag[1])},
            "data_id": {"default": None},
        },
        parse_html=lambda ctx: [
            {"tag": "h1", "attrs": {"source": "h1"}},
            {"tag": "h2", "get_attrs": lambda el: False if el.get("hidden") else {"source": "h2"}},
            {"style": "font-weight", "get_attrs": "untouched"},
        ],
    )
    rules = build_schema([heading]).nodes["heading"].parse_rules

    h1 = ET.fromstring('<h1 data_id="7">Title</h1>')
    h2 = ET.fromstring("<h2>Sub</h2>")
    hidden = ET.fromstring('<h2 hidden="true">Sub</h2>')

    assert rules[0]["get_attrs"](h1) == {"source": "h1", "level": 1, "data_id": 7}
    assert rules[1]["get_attrs"](h2) == {"source": "h2", "level": 2}
    assert rules[1]["get_attrs"](hidden) is False
    assert rules[2]["get_attrs"] == "untouched"


def test_field_functions_receive_storage_and_editor() -> None:
    seen = {}

    def content(ctx):
        seen["storage"] = ctx.storage
        seen["editor"] = ctx.editor
        return "inline*"

    paragraph = Node.create(name="paragraph", content=content)
    storage = {"shared": True}

    build_schema([paragraph], storages={"paragraph": storage}, editor="host")

    assert seen["storage"] is storage
    assert seen["editor"] == "host"


def test_schema_summary_is_serializable() -> None:
    image = Node.create(name="image", add_attributes=lambda ctx: {"src": {"is_required": True}})

    summary = build_schema([image]).to_dict()

    assert summary["top_node"] == "image"
    assert summary["nodes"]["image"]["attributes"]["src"] == {
        "default": None,
        "required": True,
        "rendered": True,
        "keep_on_split": True,
    }
