"""Command registration and execution."""
from __future__ import annotations

from .manager import (
    PREVENT_DISPATCH,
    BoundCommands,
    CanCommands,
    ChainedCommands,
    CommandManager,
    CommandProps,
    SingleCommands,
)
from .registry import RESERVED_COMMAND_NAMES, CommandFunc, CommandRegistry, RegisteredCommand
from .state import DocumentState, DocumentView, Step, Transaction

__all__ = [
    "BoundCommands",
    "CanCommands",
    "ChainedCommands",
    "CommandFunc",
    "CommandManager",
    "CommandProps",
    "CommandRegistry",
    "DocumentState",
    "DocumentView",
    "PREVENT_DISPATCH",
    "RESERVED_COMMAND_NAMES",
    "RegisteredCommand",
    "SingleCommands",
    "Step",
    "Transaction",
]
