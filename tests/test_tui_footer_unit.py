from core import Mode, Task
from core.desktop.application.session import SessionState
from core.desktop.interface.tui_footer import build_footer_text, footer_hints


def _text(state):
    return "".join(fragment for _, fragment in build_footer_text(state))


def test_browsing_hints():
    text = _text(SessionState())
    assert "r: pick" in text
    assert "h: history" in text
    assert text.startswith("(") and text.endswith(")")


def test_pick_hint_disabled_when_task_selected():
    state = SessionState(pending=[Task(1, "a")], selected_id=1)
    hints = dict(footer_hints(state))
    assert hints["r: pick"] is False
    assert hints["Tab: done"] is True
    assert ("class:text.strike", "r: pick") in build_footer_text(state)


def test_focus_hints():
    assert "Type 'done' & Enter: finish" in _text(SessionState(mode=Mode.FOCUS))


def test_adding_escape_hint_depends_on_selection():
    assert "Esc: back" in _text(SessionState(mode=Mode.ADDING))
    assert "Esc: quit" in _text(SessionState(mode=Mode.ADDING, selected_id=1))


def test_history_and_clear_hints():
    assert "a: re-add" in _text(SessionState(mode=Mode.HISTORY))
    assert "y: yes, clear pending" in _text(SessionState(mode=Mode.CONFIRM_CLEAR))
    assert "Esc: cancel edit" in _text(SessionState(mode=Mode.EDITING))
