"""
Folio CLI package.

Commands are discovered from subfolders (config/) and from commands/ for
top-level commands. Each command module exposes SUMMARY, register_args()
and main(args).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
"""
from ._args import add_config_flag, add_json_flag, add_standard_flags
from ._output import OutputFormatter, format_json, print_error

__all__ = [
    "OutputFormatter",
    "add_config_flag",
    "add_json_flag",
    "add_standard_flags",
    "format_json",
    "print_error",
]
