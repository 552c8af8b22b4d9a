"""CLI parser construction for the task list CLI/TUI."""

import argparse
from typing import Any, Mapping

from application.browse import Availability, OrderType


def _add_browse_args(sp: argparse.ArgumentParser) -> argparse.ArgumentParser:
    sp.add_argument("--store", help="path to the YAML task store")
    sp.add_argument("--availability", choices=[a.value for a in Availability], help="which tasks to show")
    sp.add_argument("--order", choices=[o.value for o in OrderType], help="sort key")
    sp.add_argument("--descending", action="store_true", help="reverse the sort order")
    sp.add_argument("--tag", action="append", help="only tasks carrying this tag (repeatable)")
    sp.add_argument("--query", help="regular expression matched against task content")
    sp.add_argument("--text", dest="text_filter", help="case-insensitive substring of task content")
    return sp


def build_parser(commands: Any, themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="tasks.py: inline task list (TUI + CLI)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.set_defaults(func=commands.cmd_tui, command=None)

    sub = parser.add_subparsers(dest="command", help="Commands")

    # tui
    tui_p = sub.add_parser("tui", help="Run the TUI (default)")
    tui_p.add_argument("--theme", choices=list(themes.keys()), default=default_theme, help="interface palette")
    _add_browse_args(tui_p)
    tui_p.set_defaults(func=commands.cmd_tui)

    # list
    lp = sub.add_parser("list", help="Print tasks")
    _add_browse_args(lp)
    lp.add_argument("--json", action="store_true", help="print task records as JSON")
    lp.set_defaults(func=commands.cmd_list)

    # add
    ap = sub.add_parser("add", help="Capture a task")
    ap.add_argument("text", help="task content")
    ap.add_argument("--store", help="path to the YAML task store")
    ap.add_argument("--tag", action="append", help="tag to attach (repeatable)")
    ap.add_argument("--schedule", help="schedule date, e.g. tomorrow or +2d")
    ap.add_argument("--start", help="start (defer-until) date")
    ap.add_argument("--due", help="due date")
    ap.set_defaults(func=commands.cmd_add)

    return parser


__all__ = ["build_parser"]
