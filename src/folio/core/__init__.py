"""Extension composition engine.

Typical use:

    from folio.core import Editor, Extension, Mark, Node

    Paragraph = Node.create(name="paragraph", group="block", content="inline*")
    Bold = Mark.create(
        name="bold",
        add_commands=lambda ctx: {"toggle_bold": toggle_bold},
        add_keyboard_shortcuts=lambda ctx: {"Mod-b": lambda editor: editor.commands.toggle_bold()},
    )

    editor = Editor([Paragraph, Bold])
    editor.handle_key("Mod-b")
"""
from __future__ import annotations

from .editor import Editor
from .extensions import Extendable, Extension, ExtensionContext, ExtensionKind, Mark, Node
from .manager import ExtensionManager, resolve_document
from .resolved import ResolvedDocument
from .styles import StyleRegistry

__all__ = [
    "Editor",
    "Extendable",
    "Extension",
    "ExtensionContext",
    "ExtensionKind",
    "ExtensionManager",
    "Mark",
    "Node",
    "ResolvedDocument",
    "StyleRegistry",
    "resolve_document",
]
