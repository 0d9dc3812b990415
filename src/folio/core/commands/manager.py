"""Command execution: single commands, atomic chains and dry runs.

Every command has the signature ``command(props, *args, **kwargs) -> bool``.
``props.dispatch`` is False during dry runs; commands must then leave
``props.tr`` untouched and only report whether they could apply.

    manager.commands.toggle_bold()                 # run and commit
    manager.chain().focus().toggle_bold().run()    # all or nothing
    manager.can().toggle_bold()                    # dry run
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from folio.core.exceptions import CommandNotFoundError

from .registry import CommandRegistry, RegisteredCommand
from .state import DocumentState, DocumentView, Transaction

logger = logging.getLogger(__name__)

PREVENT_DISPATCH = "prevent_dispatch"


@dataclass(frozen=True)
class CommandProps:
    """Everything a command can act on."""

    editor: Any
    tr: Transaction
    dispatch: bool
    commands: "BoundCommands"
    chain: Callable[[], "ChainedCommands"]
    can: Callable[[], "CanCommands"]

    @property
    def state(self) -> DocumentState:
        return self.tr.state


class CommandManager:
    def __init__(
        self,
        registry: CommandRegistry,
        *,
        view: Optional[DocumentView] = None,
        editor: Any = None,
    ) -> None:
        self.registry = registry
        self.view = view or DocumentView()
        self.editor = editor

    @property
    def state(self) -> DocumentState:
        return self.view.state

    # =========================================================================
    # Invocation core
    # =========================================================================

    def build_props(self, tr: Transaction, *, dispatch: bool) -> CommandProps:
        return CommandProps(
            editor=self.editor,
            tr=tr,
            dispatch=dispatch,
            commands=BoundCommands(self, tr, dispatch=dispatch),
            chain=lambda: ChainedCommands(self, tr=tr, dispatch=dispatch),
            can=lambda: CanCommands(self, tr=tr),
        )

    def invoke(
        self,
        command: RegisteredCommand,
        tr: Transaction,
        *,
        dispatch: bool,
        args: Tuple[Any, ...] = (),
        kwargs: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Run one command against ``tr``; failures are reported as False."""
        props = self.build_props(tr, dispatch=dispatch)
        try:
            return bool(command.func(props, *args, **(kwargs or {})))
        except Exception:
            logger.exception(
                "Command '%s' of extension '%s' raised",
                command.name,
                command.extension,
            )
            return False

    def commit(self, tr: Transaction) -> None:
        if tr.get_meta(PREVENT_DISPATCH):
            return
        self.view.dispatch(tr)

    # =========================================================================
    # Public surface
    # =========================================================================

    @property
    def commands(self) -> "SingleCommands":
        return SingleCommands(self)

    def execute(self, name: str, *args: Any, **kwargs: Any) -> Optional[bool]:
        """Run ``name`` on a fresh transaction and commit it on success.

        Returns None when no such command is registered.
        """
        command = self.registry.get(name)
        if command is None:
            return None
        tr = self.state.tr
        ok = self.invoke(command, tr, dispatch=True, args=args, kwargs=kwargs)
        if ok:
            self.commit(tr)
        return ok

    def chain(self) -> "ChainedCommands":
        return ChainedCommands(self, tr=None, dispatch=True)

    def can(self) -> "CanCommands":
        return CanCommands(self, tr=None)


class _CommandAccessor:
    """Attribute-style access to registered commands."""

    def __init__(self, manager: CommandManager) -> None:
        self._manager = manager

    def _lookup(self, name: str) -> RegisteredCommand:
        if name.startswith("_"):
            raise AttributeError(name)
        command = self._manager.registry.get(name)
        if command is None:
            raise CommandNotFoundError(name)
        return command

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self._manager.registry.names()))


class SingleCommands(_CommandAccessor):
    """``manager.commands.name(*args)`` runs and commits one command."""

    def __getattr__(self, name: str) -> Callable[..., bool]:
        self._lookup(name)

        def run(*args: Any, **kwargs: Any) -> bool:
            return bool(self._manager.execute(name, *args, **kwargs))

        return run


class BoundCommands(_CommandAccessor):
    """Commands bound to an in-flight transaction (``props.commands``)."""

    def __init__(self, manager: CommandManager, tr: Transaction, *, dispatch: bool) -> None:
        super().__init__(manager)
        self._tr = tr
        self._dispatch = dispatch

    def __getattr__(self, name: str) -> Callable[..., bool]:
        command = self._lookup(name)

        def run(*args: Any, **kwargs: Any) -> bool:
            return self._manager.invoke(command, self._tr, dispatch=self._dispatch, args=args, kwargs=kwargs)

        return run


class ChainedCommands:
    """Queue of commands applied to one shared transaction on ``run()``.

    The first command returning False aborts the chain; the scratch
    transaction is then discarded. A chain started from a command's props
    shares the outer transaction and leaves committing to the outer caller.
    """

    def __init__(self, manager: CommandManager, *, tr: Optional[Transaction], dispatch: bool) -> None:
        self._manager = manager
        self._tr = tr
        self._dispatch = dispatch
        self._queue: List[Tuple[Optional[RegisteredCommand], str, Tuple[Any, ...], Dict[str, Any]]] = []

    def __getattr__(self, name: str) -> Callable[..., "ChainedCommands"]:
        if name.startswith("_"):
            raise AttributeError(name)

        def enqueue(*args: Any, **kwargs: Any) -> "ChainedCommands":
            command = self._manager.registry.get(name)
            if command is None:
                logger.warning("Unknown command '%s' in chain", name)
            self._queue.append((command, name, args, kwargs))
            return self

        return enqueue

    def command(self, func: Callable[..., bool], *args: Any, **kwargs: Any) -> "ChainedCommands":
        """Queue an ad-hoc ``func(props, *args, **kwargs)`` command."""
        self._queue.append((RegisteredCommand(name="<inline>", extension="", func=func), "<inline>", args, kwargs))
        return self

    def run(self) -> bool:
        owns_tr = self._tr is None
        tr = self._tr if self._tr is not None else self._manager.state.tr

        for command, name, args, kwargs in self._queue:
            if command is None:
                return False
            ok = self._manager.invoke(command, tr, dispatch=self._dispatch, args=args, kwargs=kwargs)
            if not ok:
                logger.debug("Chain aborted at '%s'; %d queued steps discarded", name, len(tr.steps))
                return False

        if owns_tr and self._dispatch and self._queue:
            self._manager.commit(tr)
        return True


class CanCommands(_CommandAccessor):
    """Dry-run access: ``manager.can().name(*args)`` never commits."""

    def __init__(self, manager: CommandManager, *, tr: Optional[Transaction]) -> None:
        super().__init__(manager)
        self._tr = tr

    def _scratch(self) -> Transaction:
        return self._tr if self._tr is not None else self._manager.state.tr

    def __getattr__(self, name: str) -> Callable[..., bool]:
        command = self._lookup(name)

        def check(*args: Any, **kwargs: Any) -> bool:
            return self._manager.invoke(command, self._scratch(), dispatch=False, args=args, kwargs=kwargs)

        return check

    def chain(self) -> ChainedCommands:
        return ChainedCommands(self._manager, tr=self._scratch(), dispatch=False)


__all__ = [
    "BoundCommands",
    "CanCommands",
    "ChainedCommands",
    "CommandManager",
    "CommandProps",
    "PREVENT_DISPATCH",
    "SingleCommands",
]
