"""Footer help line for the current mode."""

from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core import Mode
from core.desktop.application.session import SessionState

SEP = " • "


def footer_hints(state: SessionState) -> List[Tuple[str, bool]]:
    """Return (hint, enabled) pairs for the current mode."""
    mode = state.mode
    blocked = state.selected_id is not None
    if mode is Mode.CONFIRM_CLEAR:
        return [("y: yes, clear pending", True), ("n: cancel", True)]
    if mode is Mode.HISTORY:
        return [
            ("h: back", True),
            ("j/k: nav", True),
            ("a: re-add", True),
            ("d: delete", True),
            ("Esc: quit", True),
        ]
    if mode is Mode.EDITING:
        return [("Enter: save", True), ("Esc: cancel edit", True)]
    if mode is Mode.ADDING:
        if blocked:
            return [("Enter: add", True), ("Tab: confirm", True), ("Esc: quit", True)]
        return [("Enter: add", True), ("Esc: back", True)]
    if mode is Mode.FOCUS:
        return [("Type 'done' & Enter: finish", True), ("Tab: add tasks", True), ("Esc: quit", True)]
    return [
        ("j/k: nav", True),
        ("r: pick", not blocked),
        ("a: add", True),
        ("e: edit", True),
        ("d: delete", True),
        ("c: clear", True),
        ("h: history", True),
        ("Tab: done", blocked),
        ("Esc: quit", True),
    ]


def build_footer_text(state: SessionState) -> FormattedText:
    parts: List[Tuple[str, str]] = [("class:text.dim", "(")]
    for idx, (hint, enabled) in enumerate(footer_hints(state)):
        if idx:
            parts.append(("class:text.dim", SEP))
        parts.append(("class:text.dim" if enabled else "class:text.strike", hint))
    parts.append(("class:text.dim", ")"))
    return FormattedText(parts)


__all__ = ["build_footer_text", "footer_hints"]
