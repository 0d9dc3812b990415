"""Common CLI argument registration helpers."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    """Add a repeatable --config flag for extra YAML config layers."""
    parser.add_argument(
        "--config",
        dest="config_files",
        action="append",
        default=[],
        metavar="FILE",
        help="Extra YAML config file (repeatable; later files win)",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add --json and --config."""
    add_json_flag(parser)
    add_config_flag(parser)


__all__ = ["add_config_flag", "add_json_flag", "add_standard_flags"]
