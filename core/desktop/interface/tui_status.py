"""Status bar builder: mode, counts and the last storage error."""

from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core.desktop.application.session import SessionState
from core.desktop.interface.tui_display import display_width, ellipsize


def build_status_text(state: SessionState, width: int = 80) -> FormattedText:
    parts: List[Tuple[str, str]] = [
        ("class:status.mode", f" {state.mode.label.upper()} "),
        ("class:status", f" pending {len(state.pending)} · done {len(state.history)} "),
    ]
    if state.error:
        used = sum(display_width(text) for _, text in parts)
        parts.append(("class:status.error", " " + ellipsize(state.error, max(10, width - used - 2)) + " "))
    return FormattedText(parts)


__all__ = ["build_status_text"]
