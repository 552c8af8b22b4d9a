"""Non-interactive commands: ``list`` and ``add``."""

import argparse
import json
import logging
import re
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import yaml

from application.browse import Availability, BrowseRequest, OrderType
from config import get_store_path
from core import Task, utc_now
from core.desktop.interface.constants import SHORT_DATE_FORMAT
from core.desktop.interface.i18n import translate
from infrastructure.file_repository import FileTaskRepository
from util.textwidth import pad_display
from util.timefmt import format_instant
from util.timeparse import parse_instant

logger = logging.getLogger("task_item.cli")

CONTENT_COLUMNS = 48


def structured_response(command: str, *, status: str = "OK", message: str = "",
                        payload: Optional[Dict] = None, exit_code: int = 0) -> int:
    """Unified JSON response for non-interactive commands."""
    body: Dict[str, object] = {
        "command": command,
        "status": status,
        "message": message,
        "timestamp": utc_now().isoformat(),
        "payload": payload or {},
    }
    print(json.dumps(body, ensure_ascii=False, indent=2))
    return exit_code


def structured_error(command: str, message: str, *, payload: Optional[Dict] = None) -> int:
    return structured_response(command, status="ERROR", message=message, payload=payload, exit_code=1)


def _repository(args: argparse.Namespace) -> FileTaskRepository:
    store = getattr(args, "store", None)
    repo = FileTaskRepository(Path(store) if store else get_store_path())
    repo.bootstrap()
    return repo


def browse_from_args(args: argparse.Namespace) -> BrowseRequest:
    browse = BrowseRequest()
    if getattr(args, "availability", None):
        browse.availability = Availability(args.availability)
    if getattr(args, "order", None):
        browse.order = OrderType(args.order)
    browse.ascending = not getattr(args, "descending", False)
    browse.tags = tuple(getattr(args, "tag", None) or ())
    browse.query_regexp = getattr(args, "query", None) or None
    browse.query_text = getattr(args, "text_filter", None) or None
    return browse


def format_task_line(task: Task) -> str:
    parts = ["[x]" if task.completed else "[ ]", pad_display(task.content or "…", CONTENT_COLUMNS)]
    if task.tags:
        parts.append(" ".join(f"#{tag}" for tag in sorted(task.tags)))
    if task.start:
        parts.append(f"start {format_instant(task.start, SHORT_DATE_FORMAT)}")
    if task.due:
        parts.append(f"due {format_instant(task.due, SHORT_DATE_FORMAT)}")
    return "  ".join(parts).rstrip()


def cmd_list(args: argparse.Namespace) -> int:
    try:
        repo = _repository(args)
        tasks = repo.load()
    except (OSError, yaml.YAMLError) as exc:
        logger.error("Cannot read store: %s", exc)
        return structured_error("list", str(exc))
    try:
        visible = browse_from_args(args).execute(tasks, utc_now())
    except re.error as exc:
        return structured_error("list", translate("STATUS_BAD_QUERY", error=exc))
    if getattr(args, "json", False):
        return structured_response(
            "list",
            message=translate("LIST_COUNT", shown=len(visible), total=len(tasks)),
            payload={"tasks": [task.to_dict() for task in visible]},
        )
    if not visible:
        print(translate("CLI_EMPTY"))
        return 0
    for task in visible:
        print(format_task_line(task))
    return 0


def _parse_dates(args: argparse.Namespace, now: datetime) -> Dict[str, Optional[datetime]]:
    values: Dict[str, Optional[datetime]] = {}
    for name in ("schedule", "start", "due"):
        raw = getattr(args, name, None)
        if raw:
            values[name] = parse_instant(raw, now)
    return values


def cmd_add(args: argparse.Namespace) -> int:
    text = (args.text or "").strip()
    if not text:
        return structured_error("add", "empty task text")
    try:
        dates = _parse_dates(args, utc_now())
    except ValueError as exc:
        return structured_error("add", translate("OVERLAY_INVALID", error=exc))
    task = Task.new(text, tags=getattr(args, "tag", None) or ())
    if dates:
        changes = dict(dates)
        if "schedule" in dates:
            changes["locked"] = dates["schedule"] is not None
        task = replace(task, **changes)
    try:
        repo = _repository(args)
        repo.upsert(task)
    except (OSError, yaml.YAMLError) as exc:
        logger.error("Cannot write store: %s", exc)
        return structured_error("add", str(exc))
    logger.info("Added task %s", task.id)
    return structured_response("add", message=translate("CLI_ADDED", id=task.id), payload={"task": task.to_dict()})


__all__ = [
    "browse_from_args",
    "cmd_add",
    "cmd_list",
    "format_task_line",
    "structured_error",
    "structured_response",
]
