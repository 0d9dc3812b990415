"""
Auto-discovery CLI dispatcher for folio.

Scans subfolders for commands and registers them automatically:
- cli/commands/<name>.py      => `folio <name>`
- cli/<domain>/<name>.py      => `folio <domain> <name>`
"""

from __future__ import annotations

import argparse
import importlib
import sys
from contextlib import nullcontext
from functools import lru_cache
from pathlib import Path
from typing import Any

from folio.core.logging_setup import configure_logging
from folio.core.utils.profiling import Profiler, enable_profiler, span


def _load_module(module_name: str, label: str) -> dict[str, Any] | None:
    try:
        with span("cli.discover.import", module=module_name):
            module = importlib.import_module(module_name)
    except ImportError as e:
        print(f"Warning: Could not import {label}: {e}", file=sys.stderr)
        return None
    return {
        "module": module,
        "summary": getattr(module, "SUMMARY", label),
        "register_args": getattr(module, "register_args", None),
        "main": getattr(module, "main", None),
    }


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """Discover CLI domain subfolders (every folder with a command module)."""
    cli_dir = Path(__file__).parent
    domains = {}
    for item in cli_dir.iterdir():
        if item.name == "commands" or not item.is_dir() or item.name.startswith("_"):
            continue
        has_commands = any(
            f.suffix == ".py" and not f.name.startswith("_")
            for f in item.iterdir()
        )
        if has_commands:
            domains[item.name] = item
    return domains


@lru_cache(maxsize=1)
def discover_root_commands() -> dict[str, dict[str, Any]]:
    """Discover top-level commands under cli/commands (no domain prefix)."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}
    if not commands_dir.exists():
        return commands

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        info = _load_module(f"folio.cli.commands.{item.stem}", item.stem)
        if info is not None:
            commands[item.stem] = info
    return commands


@lru_cache(maxsize=32)
def discover_commands(domain: str) -> dict[str, dict[str, Any]]:
    """Discover all commands in a domain subfolder."""
    domain_dir = Path(__file__).parent / domain
    commands: dict[str, dict[str, Any]] = {}

    for item in sorted(domain_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        info = _load_module(f"folio.cli.{domain}.{item.stem}", f"{domain} {item.stem}")
        if info is not None:
            commands[item.stem] = info
    return commands


def _register(subparsers: Any, name: str, info: dict[str, Any]) -> None:
    primary_name = name.replace("_", "-")
    aliases = [name] if primary_name != name else []
    cmd_parser = subparsers.add_parser(primary_name, aliases=aliases, help=info["summary"])
    if info["register_args"]:
        info["register_args"](cmd_parser)
    if info["main"]:
        cmd_parser.set_defaults(_func=info["main"])


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered domains and commands."""
    parser = argparse.ArgumentParser(
        prog="folio",
        description="folio - extension composition engine for rich-document editors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for folio loggers (default: from logging config)",
    )

    subparsers = parser.add_subparsers(
        dest="domain",
        title="domains",
        description="Available command domains",
        metavar="<domain>",
    )

    for cmd_name, cmd_info in sorted(discover_root_commands().items()):
        _register(subparsers, cmd_name, cmd_info)

    for domain_name in sorted(discover_domains()):
        domain_commands = discover_commands(domain_name)
        if not domain_commands:
            continue

        domain_parser = subparsers.add_parser(
            domain_name,
            help=f"{domain_name.title()} commands",
        )
        cmd_subparsers = domain_parser.add_subparsers(
            dest="command",
            title="commands",
            description=f"Available {domain_name} commands",
            metavar="<command>",
        )
        for cmd_name, cmd_info in sorted(domain_commands.items()):
            _register(cmd_subparsers, cmd_name, cmd_info)

    return parser


def _get_version() -> str:
    from folio import __version__

    return __version__


def _strip_profile_flag(argv: list[str]) -> tuple[list[str], bool]:
    """Strip the global ``--profile`` flag when it appears before the domain."""
    domain_index: int | None = None
    for i, a in enumerate(argv):
        if not a.startswith("-"):
            domain_index = i
            break

    enabled = False
    out: list[str] = []
    for i, a in enumerate(argv):
        if a == "--profile" and (domain_index is None or i < domain_index):
            enabled = True
            continue
        out.append(a)
    return out, enabled


def _configure_logging(level: str | None) -> None:
    from folio.core.config import ConfigManager, LoggingConfig

    try:
        logging_config = LoggingConfig(ConfigManager())
        configure_logging(level=level or logging_config.level, fmt=logging_config.format)
    except Exception as e:
        configure_logging(level=level or "WARNING")
        print(f"Warning: Could not load logging config: {e}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the folio CLI.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    argv, profile_enabled = _strip_profile_flag(list(argv))
    profiler = Profiler() if profile_enabled else None
    ctx = enable_profiler(profiler) if profiler else nullcontext()

    with ctx:
        with span("cli.total"):
            with span("cli.parser.build"):
                parser = build_parser()
            args = parser.parse_args(argv)

            if not args.domain:
                parser.print_help()
                return 0

            func = getattr(args, "_func", None)
            if func is None:
                domain_parser = parser._subparsers._group_actions[0].choices.get(args.domain)
                if domain_parser:
                    domain_parser.print_help()
                return 0

            _configure_logging(args.log_level)

            try:
                with span("cli.command", command=args.domain):
                    result = int(func(args) or 0)
            except KeyboardInterrupt:
                print("\nInterrupted", file=sys.stderr)
                result = 130

    if profiler is not None:
        from folio.cli._output import format_json

        print(format_json(profiler.to_dict()), file=sys.stderr)

    return result


if __name__ == "__main__":
    sys.exit(main())
