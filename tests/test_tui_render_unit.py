#!/usr/bin/env python3
"""Unit tests for the body renderer."""

from datetime import datetime, timedelta, timezone

from core import Mode, Task
from core.desktop.application.session import ReaddFlash, SessionState
from core.desktop.interface.tui_render import (
    CLEAR_PROMPT,
    CONFIRM_PLACEHOLDER,
    READD_MARK,
    fragments_to_text,
    render_session,
)

T = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)


def render_text(state, width=60):
    return fragments_to_text(render_session(state, width))


def test_empty_browsing_shows_title_and_call_to_action():
    text = render_text(SessionState())
    assert "Random Task Picker" in text
    assert "Enter a task..." in text
    assert "No tasks yet" in text


def test_cursor_marks_current_row():
    state = SessionState(pending=[Task(1, "alpha"), Task(2, "beta")], cursor=1)
    lines = render_text(state).splitlines()
    assert "  alpha" in lines
    assert "> beta" in lines


def test_selected_task_shows_winner_box_and_confirm_input():
    state = SessionState(
        mode=Mode.FOCUS,
        pending=[Task(1, "alpha"), Task(2, "beta", picked_at=T)],
        selected_id=2,
        cursor=1,
    )
    text = render_text(state)
    assert "DO THIS: beta" in text
    assert "beta ★" in text
    assert "╭" in text and "╰" in text
    assert CONFIRM_PLACEHOLDER not in text


def test_confirm_placeholder_shown_outside_focus():
    state = SessionState(mode=Mode.BROWSING, pending=[Task(1, "a", picked_at=T)], selected_id=1)
    assert CONFIRM_PLACEHOLDER in render_text(state)


def test_adding_shows_buffer_with_caret():
    state = SessionState(mode=Mode.ADDING, text_buffer="wash car")
    assert "> wash car█" in render_text(state)


def test_editing_banner_and_highlight():
    state = SessionState(mode=Mode.EDITING, pending=[Task(1, "a"), Task(2, "b")], editing_id=2, text_buffer="b")
    fragments = render_session(state)
    assert "EDITING MODE" in fragments_to_text(fragments)
    assert ("class:editing", "b") in fragments


def test_confirm_clear_prompt():
    state = SessionState(mode=Mode.CONFIRM_CLEAR, pending=[Task(1, "a")])
    assert CLEAR_PROMPT in render_text(state)


def test_history_rows_show_duration_and_flash():
    done = Task(1, "write report", picked_at=T, completed_at=T + timedelta(minutes=25))
    quick = Task(2, "reply", completed_at=T)
    state = SessionState(mode=Mode.HISTORY, history=[done, quick], readd_flash=ReaddFlash(0, 2))
    lines = render_text(state).splitlines()
    assert "Completed Tasks:" in lines
    assert any("write report (25m)" in line and READD_MARK in line for line in lines)
    assert any("reply (0m)" in line and READD_MARK not in line for line in lines)


def test_empty_history():
    assert "No history yet." in render_text(SessionState(mode=Mode.HISTORY))


def test_long_names_are_ellipsized_to_width():
    state = SessionState(pending=[Task(1, "x" * 200)])
    lines = render_text(state, width=30).splitlines()
    row = next(line for line in lines if "x" in line)
    assert row.endswith("…")
    assert len(row) <= 30
