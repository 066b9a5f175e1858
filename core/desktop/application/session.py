"""Interactive session state machine.

The session owns the in-memory view of the task list (pending/history
partitions, cursor, input buffers) and turns key presses and timer ticks
into state changes. Every change with a persisted half goes through the
repository first; when that call fails the in-memory half is not applied
and the error is kept on the state for display.

Dispatch is mode-first: each Mode has its own key table, so the same key
means different things depending on where the user is.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from application.ports import TaskRepository
from core import Mode, StorageError, Task, TaskValidationError, utc_now
from core.desktop.application.task_repository import partition_tasks

logger = logging.getLogger("fate.session")

# Canonical key names fed to FateSession.handle_key().
KEY_UP = "up"
KEY_DOWN = "down"
KEY_ENTER = "enter"
KEY_TAB = "tab"
KEY_ESCAPE = "escape"
KEY_BACKSPACE = "backspace"
KEY_DELETE = "delete"
KEY_CTRL_C = "c-c"

CONFIRM_WORD = "done"
READD_FLASH_TICKS = 2
TEXT_LIMIT = 156
CONFIRM_LIMIT = 20

_FAILED = object()

Handler = Callable[[], Optional[bool]]


@dataclass
class ReaddFlash:
    """Transient "re-added" marker on a History row."""

    index: int
    ticks_remaining: int


@dataclass
class SessionState:
    mode: Mode = Mode.BROWSING
    pending: List[Task] = field(default_factory=list)
    history: List[Task] = field(default_factory=list)
    selected_id: Optional[int] = None
    editing_id: Optional[int] = None
    cursor: int = 0
    text_buffer: str = ""
    confirm_buffer: str = ""
    readd_flash: Optional[ReaddFlash] = None
    error: Optional[str] = None

    def find_pending(self, task_id: Optional[int]) -> Optional[Task]:
        if task_id is None:
            return None
        for task in self.pending:
            if task.id == task_id:
                return task
        return None

    @property
    def selected(self) -> Optional[Task]:
        return self.find_pending(self.selected_id)

    @property
    def editing(self) -> Optional[Task]:
        return self.find_pending(self.editing_id)

    @property
    def active_list(self) -> List[Task]:
        return self.history if self.mode is Mode.HISTORY else self.pending

    def flash_index(self) -> Optional[int]:
        return self.readd_flash.index if self.readd_flash else None


class FateSession:
    """Consumes key/tick events and keeps SessionState in sync with storage."""

    def __init__(
        self,
        repository: TaskRepository,
        state: Optional[SessionState] = None,
        *,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repository = repository
        self.state = state or SessionState()
        self.rng = rng or random.Random()
        self.clock = clock
        self._tables: Dict[Mode, Dict[str, Handler]] = self._build_tables()

    @classmethod
    def load(cls, repository: TaskRepository, **kwargs: Any) -> "FateSession":
        """Build a session from the store, resuming an in-progress pick."""
        pending, history = partition_tasks(repository.load_all())
        state = SessionState(pending=pending, history=history)
        for index, task in enumerate(pending):
            if task.picked:
                state.mode = Mode.FOCUS
                state.selected_id = task.id
                state.cursor = index
                logger.info("resuming picked task id=%s", task.id)
                break
        return cls(repository, state, **kwargs)

    def _build_tables(self) -> Dict[Mode, Dict[str, Handler]]:
        return {
            Mode.BROWSING: {
                KEY_UP: self._cursor_up,
                "k": self._cursor_up,
                KEY_DOWN: self._cursor_down,
                "j": self._cursor_down,
                "r": self._pick_random,
                "d": self.delete_at_cursor,
                KEY_DELETE: self.delete_at_cursor,
                KEY_BACKSPACE: self.delete_at_cursor,
                "c": self._open_confirm_clear,
                "e": self._start_editing,
                "h": self._open_history,
                "a": self._start_adding,
                KEY_TAB: self._focus_selected,
                KEY_ESCAPE: self._quit,
            },
            Mode.ADDING: {
                KEY_ENTER: self._submit_new_task,
                KEY_ESCAPE: self._cancel_adding,
                KEY_TAB: self._focus_selected,
            },
            Mode.EDITING: {
                KEY_ENTER: self._submit_edit,
                KEY_ESCAPE: self._cancel_editing,
            },
            Mode.FOCUS: {
                KEY_ENTER: self._confirm_done,
                KEY_TAB: self._start_adding,
                KEY_ESCAPE: self._quit,
            },
            Mode.HISTORY: {
                KEY_UP: self._cursor_up,
                "k": self._cursor_up,
                KEY_DOWN: self._cursor_down,
                "j": self._cursor_down,
                "a": self._readd_from_history,
                "d": self.delete_at_cursor,
                KEY_DELETE: self.delete_at_cursor,
                KEY_BACKSPACE: self.delete_at_cursor,
                "h": self._close_history,
                KEY_ESCAPE: self._quit,
            },
            Mode.CONFIRM_CLEAR: {
                "y": self._clear_pending,
                "Y": self._clear_pending,
                "n": self._dismiss_confirm_clear,
                "N": self._dismiss_confirm_clear,
                KEY_ESCAPE: self._dismiss_confirm_clear,
            },
        }

    # ------------------------------------------------------------------ events

    def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns True when the process should quit."""
        if key == KEY_CTRL_C:
            return True
        mode = self.state.mode
        handler = self._tables[mode].get(key)
        if handler is not None:
            return bool(handler())
        if mode.has_text_input:
            self._edit_buffer(key)
        return False

    def tick(self) -> None:
        """Once-per-second timer: age the re-add flash."""
        flash = self.state.readd_flash
        if flash is None:
            return
        flash.ticks_remaining -= 1
        if flash.ticks_remaining <= 0:
            self.state.readd_flash = None

    # ------------------------------------------------------------------ helpers

    def _attempt(self, action: str, func: Callable[..., Any], *args: Any) -> Any:
        try:
            result = func(*args)
        except StorageError as exc:
            logger.warning("%s failed: %s", action, exc)
            self.state.error = f"{action} failed: {exc}"
            return _FAILED
        self.state.error = None
        return result

    def _edit_buffer(self, key: str) -> None:
        state = self.state
        focus = state.mode is Mode.FOCUS
        current = state.confirm_buffer if focus else state.text_buffer
        limit = CONFIRM_LIMIT if focus else TEXT_LIMIT
        if key == KEY_BACKSPACE:
            current = current[:-1]
        elif len(key) == 1 and key.isprintable():
            if len(current) >= limit:
                return
            current += key
        else:
            return
        if focus:
            state.confirm_buffer = current
        else:
            state.text_buffer = current

    def _clamp_cursor(self) -> None:
        items = self.state.active_list
        if not items:
            self.state.cursor = 0
        elif self.state.cursor >= len(items):
            self.state.cursor = len(items) - 1

    def _quit(self) -> bool:
        return True

    # ------------------------------------------------------------------ navigation

    def _cursor_up(self) -> None:
        if self.state.cursor > 0:
            self.state.cursor -= 1

    def _cursor_down(self) -> None:
        if self.state.cursor < len(self.state.active_list) - 1:
            self.state.cursor += 1

    def _open_history(self) -> None:
        self.state.mode = Mode.HISTORY
        self.state.cursor = 0

    def _close_history(self) -> None:
        self.state.mode = Mode.BROWSING
        self.state.cursor = 0

    def _open_confirm_clear(self) -> None:
        self.state.mode = Mode.CONFIRM_CLEAR

    def _dismiss_confirm_clear(self) -> None:
        self.state.mode = Mode.BROWSING

    def _focus_selected(self) -> None:
        if self.state.selected_id is not None:
            self.state.mode = Mode.FOCUS

    # ------------------------------------------------------------------ adding / editing

    def _start_adding(self) -> None:
        self.state.mode = Mode.ADDING

    def _submit_new_task(self) -> None:
        state = self.state
        name = state.text_buffer.strip()
        if not name:
            return
        try:
            task = self._attempt("add", self.repository.create, name)
        except TaskValidationError:
            return
        if task is _FAILED:
            return
        state.pending.append(task)
        state.cursor = len(state.pending) - 1
        state.text_buffer = ""

    def _cancel_adding(self) -> Optional[bool]:
        self.state.text_buffer = ""
        if self.state.selected_id is not None:
            # Selected task: Esc leaves the app, as it does in Focus.
            return True
        self.state.mode = Mode.BROWSING
        return None

    def _start_editing(self) -> None:
        state = self.state
        if not state.pending or not 0 <= state.cursor < len(state.pending):
            return
        task = state.pending[state.cursor]
        state.editing_id = task.id
        state.text_buffer = task.name
        state.mode = Mode.EDITING

    def _submit_edit(self) -> None:
        state = self.state
        name = state.text_buffer.strip()
        if not name:
            return
        task = state.editing
        if task is not None:
            updated = task.renamed(name)
            if self._attempt("rename", self.repository.save, updated) is _FAILED:
                return
            state.pending = [updated if t.id == updated.id else t for t in state.pending]
        self._cancel_editing()

    def _cancel_editing(self) -> None:
        self.state.editing_id = None
        self.state.text_buffer = ""
        self.state.mode = Mode.BROWSING

    # ------------------------------------------------------------------ pick / complete

    def _pick_random(self) -> None:
        state = self.state
        if not state.pending or state.selected_id is not None:
            return
        index = self.rng.randrange(len(state.pending))
        picked = state.pending[index].mark_picked(self.clock())
        if self._attempt("pick", self.repository.save, picked) is _FAILED:
            return
        state.pending[index] = picked
        state.selected_id = picked.id
        state.cursor = index
        state.confirm_buffer = ""
        state.mode = Mode.FOCUS
        logger.info("picked task id=%s", picked.id)

    def _confirm_done(self) -> None:
        state = self.state
        if state.confirm_buffer != CONFIRM_WORD:
            return
        task = state.selected
        if task is not None:
            finished = task.mark_completed(self.clock())
            if self._attempt("complete", self.repository.save, finished) is _FAILED:
                return
            state.pending = [t for t in state.pending if t.id != finished.id]
            state.history.append(finished)
            logger.info("completed task id=%s", finished.id)
        state.selected_id = None
        state.confirm_buffer = ""
        state.mode = Mode.BROWSING
        self._clamp_cursor()

    # ------------------------------------------------------------------ history

    def _readd_from_history(self) -> None:
        state = self.state
        if not 0 <= state.cursor < len(state.history):
            return
        source = state.history[state.cursor]
        try:
            task = self._attempt("re-add", self.repository.create, source.name)
        except TaskValidationError:
            return
        if task is _FAILED:
            return
        state.pending.append(task)
        state.readd_flash = ReaddFlash(index=state.cursor, ticks_remaining=READD_FLASH_TICKS)

    # ------------------------------------------------------------------ deletion

    def delete_at_cursor(self) -> None:
        """Delete the task under the cursor from the list the current mode shows."""
        state = self.state
        items = state.active_list
        if not 0 <= state.cursor < len(items):
            return
        task = items[state.cursor]
        if self._attempt("delete", self.repository.delete, task.id) is _FAILED:
            return
        del items[state.cursor]
        if state.cursor == len(items) and items:
            state.cursor -= 1
        if state.selected_id == task.id:
            state.selected_id = None
        if state.mode is Mode.HISTORY:
            state.readd_flash = None

    def _clear_pending(self) -> None:
        state = self.state
        ids = [task.id for task in state.pending]
        if self._attempt("clear", self.repository.clear_pending, ids) is _FAILED:
            return
        state.pending = []
        state.selected_id = None
        state.cursor = 0
        state.mode = Mode.BROWSING


__all__ = [
    "FateSession",
    "SessionState",
    "ReaddFlash",
    "KEY_UP",
    "KEY_DOWN",
    "KEY_ENTER",
    "KEY_TAB",
    "KEY_ESCAPE",
    "KEY_BACKSPACE",
    "KEY_DELETE",
    "KEY_CTRL_C",
    "CONFIRM_WORD",
    "READD_FLASH_TICKS",
]
