"""
folio config show command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, extra config files
and FOLIO_* environment variables.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

import yaml

from folio.cli import OutputFormatter, add_standard_flags
from folio.core.config import ConfigManager

SUMMARY = "Show current configuration"


def _nest_key(key: str, value: Any) -> Any:
    """Nest a dot-notation key into a YAML/JSON-friendly mapping."""
    parts = [p for p in str(key).split(".") if p]
    out = value
    for part in reversed(parts):
        out = {part: out}
    return out


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'extensions.default_priority')",
    )
    parser.add_argument(
        "--format",
        choices=["json", "yaml", "table"],
        default="table",
        help="Output format (default: table)",
    )
    add_standard_flags(parser)


def _format_value(value: Any, indent: int = 0) -> str:
    """Format a value for table display."""
    prefix = "  " * indent
    if isinstance(value, dict):
        lines = []
        for k, v in value.items():
            formatted = _format_value(v, indent + 1)
            if "\n" in formatted or isinstance(v, dict):
                lines.append(f"{prefix}{k}:")
                lines.append(formatted)
            else:
                lines.append(f"{prefix}{k}: {formatted}")
        return "\n".join(lines)
    if isinstance(value, list):
        if not value:
            return "[]"
        return f"[{', '.join(str(v) for v in value)}]"
    return str(value)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config_manager = ConfigManager(args.config_files)
        output_format = "json" if args.json else args.format

        if args.key:
            value = config_manager.get(args.key)
            if value is None:
                formatter.text(f"Key not found: {args.key}")
                return 1
            data: Any = _nest_key(args.key, value)
        else:
            data = config_manager.get_all()

        if output_format == "json":
            formatter.json_output(data)
        elif output_format == "yaml":
            formatter.text(
                yaml.safe_dump(data, default_flow_style=False, sort_keys=True, allow_unicode=True).rstrip()
            )
        else:
            for section in sorted(data):
                formatter.text(f"[{section}]")
                value = data[section]
                formatter.text(_format_value(value, 1) if isinstance(value, dict) else f"  {value}")
                formatter.text("")
        return 0

    except Exception as e:
        formatter.error(e, error_code="config_show_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
