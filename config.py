from __future__ import annotations

import logging
import os
import yaml
from pathlib import Path
from typing import Dict, Any

USER_CONFIG_PATH = Path.home() / ".task_item_config.yaml"
DEFAULT_STORE_PATH = Path.home() / ".task_item" / "tasks.yaml"
DEFAULT_LOG_FILE = Path.home() / ".task_item" / "task_item.log"


def _load_config() -> Dict[str, Any]:
    if not USER_CONFIG_PATH.exists():
        return {}
    try:
        data = yaml.safe_load(USER_CONFIG_PATH.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logging.getLogger("task_item.config").warning("Ignoring unreadable config %s: %s", USER_CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any]) -> None:
    if not data:
        if USER_CONFIG_PATH.exists():
            USER_CONFIG_PATH.unlink()
        return
    USER_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    USER_CONFIG_PATH.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def get_user_lang() -> str:
    return str(_load_config().get("lang", "") or "").strip()


def set_user_lang(value: str) -> None:
    data = _load_config()
    value = (value or "").strip()
    if value:
        data["lang"] = value
    else:
        data.pop("lang", None)
    _save_config(data)


def get_theme() -> str:
    return str(_load_config().get("theme", "") or "").strip()


def get_store_path() -> Path:
    env_path = os.getenv("TASK_ITEM_STORE")
    if env_path:
        return Path(env_path).expanduser()
    raw = str(_load_config().get("store_path", "") or "").strip()
    return Path(raw).expanduser() if raw else DEFAULT_STORE_PATH


def get_log_settings() -> tuple[Path, int]:
    data = _load_config()
    raw_file = str(data.get("log_file", "") or "").strip()
    level_name = str(data.get("log_level", "INFO") or "INFO").strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    return (Path(raw_file).expanduser() if raw_file else DEFAULT_LOG_FILE), level


def get_tui_ttimeoutlen() -> float:
    try:
        return max(0.0, float(os.getenv("TASK_ITEM_TUI_TTIMEOUTLEN", "0.05")))
    except ValueError:
        return 0.05
