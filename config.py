from __future__ import annotations

import logging
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

USER_CONFIG_PATH = Path.home() / ".fate_config.yaml"

DEFAULT_LOCK_TIMEOUT = 0.2
DEFAULT_LOG_LEVEL = "INFO"


def _load_config() -> Dict[str, Any]:
    if not USER_CONFIG_PATH.exists():
        return {}
    try:
        data = yaml.safe_load(USER_CONFIG_PATH.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def get_user_theme() -> str:
    return str(_load_config().get("theme", "") or "").strip()


def get_user_data_dir() -> Optional[Path]:
    value = str(_load_config().get("data_dir", "") or "").strip()
    return Path(value).expanduser() if value else None


def get_lock_timeout() -> float:
    raw = _load_config().get("lock_timeout", DEFAULT_LOCK_TIMEOUT)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_LOCK_TIMEOUT
    return value if value > 0 else DEFAULT_LOCK_TIMEOUT


def get_log_level() -> int:
    name = str(_load_config().get("log_level", DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
