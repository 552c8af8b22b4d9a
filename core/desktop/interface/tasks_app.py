#!/usr/bin/env python3
"""
tasks.py: inline task list (TUI + CLI).

All tasks live in one YAML snapshot; the TUI edits them in place.
This module is the facade wiring the parser to the command functions.
"""

import argparse
import sys
from importlib.metadata import version as pkg_version, PackageNotFoundError
from typing import List, Optional

from core.desktop.interface.cli_parser import build_parser as build_cli_parser
from core.desktop.interface.cli_commands import cmd_add, cmd_list
from core.desktop.interface.logging_setup import configure_logging
from core.desktop.interface.task_list_app import TaskListTUI, cmd_tui
from core.desktop.interface.tui_themes import DEFAULT_THEME, THEMES


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = build_cli_parser(commands=sys.modules[__name__], themes=THEMES, default_theme=DEFAULT_THEME)
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "version", False):
        try:
            print(pkg_version("task-item"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    # The TUI owns the terminal: log to the file only.
    configure_logging(console=args.func is not cmd_tui)
    return args.func(args)


__all__ = ["build_parser", "main", "cmd_add", "cmd_list", "cmd_tui", "TaskListTUI"]


if __name__ == "__main__":
    sys.exit(main())
