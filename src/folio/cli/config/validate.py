"""
folio config validate command.

SUMMARY: Validate merged configuration against the bundled schema
"""

from __future__ import annotations

import argparse
import sys

import yaml

from folio.cli import OutputFormatter, add_standard_flags
from folio.core.config import ConfigManager
from folio.core.exceptions import ConfigValidationError

SUMMARY = "Validate merged configuration against the bundled schema"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        ConfigManager(args.config_files).load_config(validate=True)
    except (ConfigValidationError, FileNotFoundError, yaml.YAMLError) as e:
        formatter.error(e, error_code="config_invalid")
        return 1

    formatter.success({"valid": True}, "Configuration is valid")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
