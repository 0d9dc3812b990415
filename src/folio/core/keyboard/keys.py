"""Key combination normalization."""
from __future__ import annotations

import re

from folio.core.exceptions import ExtensionConfigError

_SPLIT = re.compile(r"-(?!$)")

_ALT = re.compile(r"^a(lt)?$", re.IGNORECASE)
_CTRL = re.compile(r"^(c|ctrl|control)$", re.IGNORECASE)
_META = re.compile(r"^(cmd|meta|m)$", re.IGNORECASE)
_SHIFT = re.compile(r"^s(hift)?$", re.IGNORECASE)
_MOD = re.compile(r"^mod$", re.IGNORECASE)


def normalize_key_name(name: str, *, mac: bool = False) -> str:
    """Normalize a key combination to ``Alt-Ctrl-Meta-Shift-<key>`` order.

    ``Mod`` means Meta on mac and Ctrl elsewhere. A literal space is spelled
    ``Space``.

    Examples:
        >>> normalize_key_name("shift-Mod-z")
        'Ctrl-Shift-z'
        >>> normalize_key_name("Mod-b", mac=True)
        'Meta-b'
        >>> normalize_key_name("Ctrl- ")
        'Ctrl-Space'
    """
    parts = _SPLIT.split(name)
    key = parts[-1]
    if key == " ":
        key = "Space"

    alt = ctrl = meta = shift = False
    for modifier in parts[:-1]:
        if _META.match(modifier):
            meta = True
        elif _ALT.match(modifier):
            alt = True
        elif _CTRL.match(modifier):
            ctrl = True
        elif _SHIFT.match(modifier):
            shift = True
        elif _MOD.match(modifier):
            if mac:
                meta = True
            else:
                ctrl = True
        else:
            raise ExtensionConfigError(
                f"Unrecognized modifier name: {modifier}",
                context={"shortcut": name},
            )

    prefix = "".join(
        label for flag, label in ((alt, "Alt-"), (ctrl, "Ctrl-"), (meta, "Meta-"), (shift, "Shift-")) if flag
    )
    return prefix + key


__all__ = ["normalize_key_name"]
