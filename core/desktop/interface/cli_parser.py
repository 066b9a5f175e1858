"""CLI parser construction for fate."""

import argparse
from typing import Any, Mapping


def build_parser(themes: Mapping[str, Any]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fate",
        description="fate: let chance pick your next task and commit to it until it is done",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data-dir", dest="data_dir", help="directory holding fate.db and fate.log")
    parser.add_argument("--theme", choices=list(themes.keys()), default=None, help="palette for the interface")
    parser.add_argument("--version", action="store_true", help="print version and exit")
    return parser
