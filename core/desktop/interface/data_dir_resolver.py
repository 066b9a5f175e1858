from pathlib import Path
import os

from core import StorageError

APP_DIR_NAME = "fate"
DB_FILE_NAME = "fate.db"
LOG_FILE_NAME = "fate.log"


def get_data_dir(data_dir: Path | None = None) -> Path:
    """Unified resolver for the per-user data directory.

    Priority:
    1. FATE_DATA_DIR env variable (for tests).
    2. Explicit data_dir if provided (CLI flag or config).
    3. $XDG_DATA_HOME/fate.
    4. ~/.local/share/fate.
    """
    env_dir = os.environ.get("FATE_DATA_DIR")
    if env_dir:
        target = Path(env_dir).expanduser()
    elif data_dir:
        target = Path(data_dir).expanduser()
    else:
        xdg = os.environ.get("XDG_DATA_HOME")
        base = Path(xdg).expanduser() if xdg else Path.home() / ".local" / "share"
        target = base / APP_DIR_NAME
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(f"could not create data directory {target}: {exc}") from exc
    return target.resolve()


def get_db_path(data_dir: Path) -> Path:
    return data_dir / DB_FILE_NAME


__all__ = ["get_data_dir", "get_db_path", "DB_FILE_NAME", "LOG_FILE_NAME"]
