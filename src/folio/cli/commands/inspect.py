"""
folio inspect command.

SUMMARY: Resolve an extension list and show the assembled tables

Imports MODULE:ATTR (a list of extensions, or a callable returning one),
runs one resolution pass and prints the sorted order, node and mark types
with their attributes, commands, shortcuts and lifecycle hooks.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from typing import Any, List

from folio.cli import OutputFormatter, add_standard_flags
from folio.core.config import ConfigManager
from folio.core.exceptions import ExtensionConfigError
from folio.core.extensions import Extendable
from folio.core.manager import resolve_document
from folio.core.resolved import ResolvedDocument

SUMMARY = "Resolve an extension list and show the assembled tables"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "target",
        help="Extension list to resolve, as 'package.module:attribute'",
    )
    add_standard_flags(parser)


def load_extensions(target: str) -> List[Extendable]:
    """Import ``module:attr`` and return the extension list it names."""
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ExtensionConfigError(
            f"Expected 'module:attribute', got '{target}'",
            context={"target": target},
        )

    value: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        value = getattr(value, part)

    if callable(value) and not isinstance(value, Extendable):
        value = value()
    if isinstance(value, Extendable):
        value = [value]

    items = list(value)
    for item in items:
        if not isinstance(item, Extendable):
            raise ExtensionConfigError(
                f"'{target}' contains a non-extension: {item!r}",
                context={"target": target},
            )
    return items


def _print_text(formatter: OutputFormatter, resolved: ResolvedDocument) -> None:
    formatter.text(f"Extensions ({len(resolved.extensions)}):")
    for ext in resolved.extensions:
        formatter.text(f"  {ext.priority():>5}  {ext.kind.value:<9} {ext.name}")

    formatter.text("")
    formatter.text(f"Top node: {resolved.top_node or '-'}")
    for label, types in (("Nodes", resolved.schema.nodes), ("Marks", resolved.schema.marks)):
        formatter.text(f"{label}:")
        for name, definition in types.items():
            formatter.text(f"  {name}")
            for attr_name, spec in definition.attributes.items():
                default = spec.default if spec.has_default else "<required>"
                formatter.text_kv(attr_name, default, prefix="    - ")

    formatter.text("")
    formatter.text("Commands:")
    for name, command in resolved.commands.as_mapping().items():
        formatter.text_kv(name, command.extension)

    formatter.text("Shortcuts:")
    for key, shortcut in resolved.shortcuts.as_mapping().items():
        formatter.text_kv(key, shortcut.extension)

    formatter.text("Lifecycle:")
    for event, names in resolved.lifecycle.to_dict().items():
        if names:
            formatter.text_kv(event, ", ".join(names))


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        extensions = load_extensions(args.target)
        resolved = resolve_document(extensions, config=ConfigManager(args.config_files))
    except Exception as e:
        formatter.error(e, error_code="inspect_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(resolved.to_dict())
    else:
        _print_text(formatter, resolved)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
