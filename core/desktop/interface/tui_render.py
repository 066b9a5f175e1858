"""Body renderer: SessionState -> FormattedText.

Pure functions only; the Application calls render_session() on every
redraw and styles the fragments through the active theme.
"""

from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core import Mode, Task
from core.desktop.application.session import SessionState
from core.desktop.interface.tui_display import display_width, ellipsize, pad_display
from util.durations import format_duration

TITLE = "Random Task Picker"
ADD_PLACEHOLDER = "Enter a task..."
CONFIRM_PLACEHOLDER = "Type 'done' to finish..."
CLEAR_PROMPT = "Are you sure you want to clear? y/N"
READD_MARK = "↺ re-added"
CARET = "█"
CONTENT_WIDTH = 60

Fragments = List[Tuple[str, str]]


def _input_line(parts: Fragments, value: str, placeholder: str, focused: bool, width: int) -> None:
    parts.append(("class:cursor", "> "))
    if value:
        parts.append(("class:input", ellipsize(value, width - 4)))
    elif not focused:
        parts.append(("class:input.placeholder", placeholder))
    if focused:
        parts.append(("class:cursor", CARET))
    parts.append(("", "\n"))


def _winner_box(parts: Fragments, task: Task, width: int) -> None:
    inner = max(10, width - 4)
    label = ellipsize(f"DO THIS: {task.name}", inner)
    parts.append(("class:winner.border", "╭" + "─" * (inner + 2) + "╮\n"))
    parts.append(("class:winner.border", "│ "))
    parts.append(("class:winner", pad_display(label, inner)))
    parts.append(("class:winner.border", " │\n"))
    parts.append(("class:winner.border", "╰" + "─" * (inner + 2) + "╯\n"))


def _render_history(state: SessionState, parts: Fragments, width: int) -> None:
    parts.append(("class:header", "Completed Tasks:\n"))
    if not state.history:
        parts.append(("class:text.dim", "No history yet.\n"))
        return
    flash = state.flash_index()
    for i, task in enumerate(state.history):
        current = i == state.cursor
        duration = f"({format_duration(task.duration())})"
        name_width = max(4, width - display_width(duration) - 3)
        parts.append(("class:cursor", "> " if current else "  "))
        parts.append(("class:selected" if current else "class:text", ellipsize(task.name, name_width)))
        parts.append(("class:selected" if current else "class:text.dim", f" {duration}"))
        if flash == i:
            parts.append(("class:flash", f"  {READD_MARK}"))
        parts.append(("", "\n"))


def _render_pending(state: SessionState, parts: Fragments, width: int) -> None:
    mode = state.mode
    editing_id = state.editing_id
    selected_id = state.selected_id

    if mode is Mode.EDITING:
        parts.append(("class:banner", "EDITING MODE\n"))
    if mode is Mode.CONFIRM_CLEAR:
        parts.append(("class:warning", CLEAR_PROMPT + "\n"))
    if mode in (Mode.ADDING, Mode.EDITING):
        _input_line(parts, state.text_buffer, ADD_PLACEHOLDER, True, width)
    elif mode is Mode.BROWSING and selected_id is None:
        _input_line(parts, "", ADD_PLACEHOLDER, False, width)

    parts.append(("", "\n"))
    parts.append(("class:header", "Tasks:\n"))
    if not state.pending:
        parts.append(("class:text.dim", "No tasks yet. Press 'a' to add one.\n"))
    for i, task in enumerate(state.pending):
        current = i == state.cursor
        style = "class:selected" if current else "class:text"
        if task.id == editing_id:
            style = "class:editing"
        marker = " ★" if task.id == selected_id else ""
        parts.append(("class:cursor", "> " if current else "  "))
        parts.append((style, ellipsize(task.name, width - 4) + marker))
        parts.append(("", "\n"))

    selected = state.selected
    if selected is not None:
        parts.append(("", "\n"))
        _winner_box(parts, selected, width)
        _input_line(parts, state.confirm_buffer, CONFIRM_PLACEHOLDER, mode is Mode.FOCUS, width)


def render_session(state: SessionState, width: int = CONTENT_WIDTH) -> FormattedText:
    """Render the main body for the current mode."""
    width = max(20, min(width, CONTENT_WIDTH))
    parts: Fragments = [("class:title", f" {TITLE} "), ("", "\n\n")]
    if state.mode is Mode.HISTORY:
        _render_history(state, parts, width)
    else:
        _render_pending(state, parts, width)
    return FormattedText(parts)


def fragments_to_text(fragments: Fragments) -> str:
    return "".join(text for _, text in fragments)


__all__ = ["render_session", "fragments_to_text", "READD_MARK", "CLEAR_PROMPT", "CONFIRM_PLACEHOLDER"]
