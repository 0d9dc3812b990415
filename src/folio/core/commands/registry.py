"""Merged command namespace."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence

from folio.core.exceptions import ExtensionConfigError
from folio.core.extensions import Extendable

logger = logging.getLogger(__name__)

CommandFunc = Callable[..., bool]

# Method names of the chain builder; a command with one of these names could
# never be queued through attribute access.
RESERVED_COMMAND_NAMES = frozenset({"run", "command"})


@dataclass(frozen=True)
class RegisteredCommand:
    name: str
    extension: str
    func: CommandFunc


class CommandRegistry:
    """Commands contributed through ``add_commands``, later registration wins."""

    def __init__(self, commands: Mapping[str, RegisteredCommand]) -> None:
        self._commands = MappingProxyType(dict(commands))

    @classmethod
    def from_extensions(
        cls,
        extensions: Sequence[Extendable],
        *,
        storages: Optional[Mapping[str, Any]] = None,
        editor: Any = None,
        schema: Any = None,
    ) -> "CommandRegistry":
        storages = storages or {}
        commands: Dict[str, RegisteredCommand] = {}

        for extension in extensions:
            context = extension.make_context(
                storage=storages.get(extension.name),
                editor=editor,
                type=schema.get_type(extension.name) if schema is not None else None,
            )
            contributed = extension.resolve_field("add_commands", context) or {}

            for name, func in contributed.items():
                if name in RESERVED_COMMAND_NAMES or name.startswith("_"):
                    raise ExtensionConfigError(
                        f"Extension '{extension.name}' registers reserved command name '{name}'",
                        context={"extension": extension.name, "command": name},
                    )
                previous = commands.get(name)
                if previous is not None and previous.extension != extension.name:
                    logger.debug(
                        "Command '%s' from '%s' replaces the one from '%s'",
                        name,
                        extension.name,
                        previous.extension,
                    )
                commands[name] = RegisteredCommand(name=name, extension=extension.name, func=func)

        return cls(commands)

    def get(self, name: str) -> Optional[RegisteredCommand]:
        return self._commands.get(name)

    def names(self) -> List[str]:
        return list(self._commands)

    def as_mapping(self) -> Mapping[str, RegisteredCommand]:
        return self._commands

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)


__all__ = ["CommandFunc", "CommandRegistry", "RESERVED_COMMAND_NAMES", "RegisteredCommand"]
