#!/usr/bin/env python3
"""
fate: random task picker (terminal UI).

Bootstrap only: resolve the data directory, configure logging, open the
store exactly once, run the TUI, close the store on the way out.
"""

import logging
import sys
from importlib.metadata import version as pkg_version, PackageNotFoundError
from typing import List, Optional

from config import get_lock_timeout, get_log_level, get_user_data_dir, get_user_theme
from core import StorageError, StoreLockedError
from core.desktop.application.session import FateSession
from core.desktop.application.task_repository import BucketTaskRepository
from core.desktop.interface.cli_parser import build_parser
from core.desktop.interface.data_dir_resolver import LOG_FILE_NAME, get_data_dir, get_db_path
from core.desktop.interface.logging_setup import setup_logging
from core.desktop.interface.tui_app import cmd_tui
from core.desktop.interface.tui_themes import DEFAULT_THEME, THEMES
from infrastructure.sqlite_store import SqliteBucketStore

logger = logging.getLogger("fate.app")


def _resolve_theme(cli_theme: Optional[str]) -> str:
    theme = cli_theme or get_user_theme()
    return theme if theme in THEMES else DEFAULT_THEME


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser(THEMES)
    args = parser.parse_args(argv)
    if args.version:
        try:
            print(pkg_version("fate-tasks"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0

    try:
        data_dir = get_data_dir(args.data_dir or get_user_data_dir())
    except StorageError as exc:
        print(f"fate: {exc}", file=sys.stderr)
        return 1
    setup_logging(data_dir / LOG_FILE_NAME, get_log_level())

    try:
        store = SqliteBucketStore.open(get_db_path(data_dir), timeout=get_lock_timeout())
    except StoreLockedError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except StorageError as exc:
        logger.error("cannot open store: %s", exc)
        print(f"fate: cannot open task store: {exc}", file=sys.stderr)
        return 1

    try:
        session = FateSession.load(BucketTaskRepository(store))
        return cmd_tui(session, theme=_resolve_theme(args.theme))
    except StorageError as exc:
        logger.error("storage failure: %s", exc)
        print(f"fate: storage failure: {exc}", file=sys.stderr)
        return 1
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(main())
