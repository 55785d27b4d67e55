"""
tagcheck.commands.config_cmd - Show configuration.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import tomlkit

from tagcheck.commands.check import load_configuration
from tagcheck.config import find_config_file


def run(args: argparse.Namespace) -> int:
    """Run ``config path`` or ``config show``."""
    if args.config_action == "path":
        config_path = args.config or find_config_file(Path.cwd())
        if config_path is None:
            print("No config file found (using defaults)", file=sys.stderr)
            return 1
        print(config_path)
        return 0

    config = load_configuration(args)
    if config is None:
        return 2
    print(tomlkit.dumps(config), end="")
    return 0
