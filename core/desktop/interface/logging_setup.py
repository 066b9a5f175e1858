from __future__ import annotations

import logging
from pathlib import Path


def setup_logging(log_file: Path, level: int = logging.INFO) -> None:
    """Send all records to a log file.

    The TUI owns the terminal, so nothing is attached to stderr. Call this
    once, before the store is opened.
    """
    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    root.addHandler(fh)
    logging.captureWarnings(True)
