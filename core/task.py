"""Task record: the only persisted entity."""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Task:
    """A single task.

    Attributes:
        id: Store-assigned sequence number (never reused)
        name: Non-empty task text
        picked_at: When fate picked this task, if ever
        completed_at: When the task was confirmed done; set means History
    """

    id: int
    name: str
    picked_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def completed(self) -> bool:
        return self.completed_at is not None

    @property
    def picked(self) -> bool:
        """True for the in-progress pick (picked but not yet completed)."""
        return self.picked_at is not None and self.completed_at is None

    def duration(self) -> timedelta:
        if self.picked_at is None or self.completed_at is None:
            return timedelta(0)
        return self.completed_at - self.picked_at

    def renamed(self, name: str) -> "Task":
        return replace(self, name=name)

    def mark_picked(self, when: Optional[datetime] = None) -> "Task":
        return replace(self, picked_at=when or utc_now())

    def mark_completed(self, when: Optional[datetime] = None) -> "Task":
        return replace(self, completed_at=when or utc_now())

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with unset timestamps omitted."""
        data: Dict[str, Any] = {"id": self.id, "name": self.name}
        if self.picked_at is not None:
            data["picked_at"] = self.picked_at.isoformat()
        if self.completed_at is not None:
            data["completed_at"] = self.completed_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Inverse of to_dict; raises ValueError/TypeError/KeyError on bad input."""
        if not isinstance(data, dict):
            raise TypeError(f"task record must be an object, got {type(data).__name__}")
        task_id = data["id"]
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise TypeError(f"task id must be an integer: {task_id!r}")
        name = data["name"]
        if not isinstance(name, str):
            raise TypeError(f"task name must be a string: {name!r}")
        if not name.strip():
            raise ValueError("task name must not be empty")
        return cls(
            id=task_id,
            name=name,
            picked_at=_parse_timestamp(data.get("picked_at")),
            completed_at=_parse_timestamp(data.get("completed_at")),
        )


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value in (None, ""):
        return None
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string: {value!r}")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    # Zero times written by older builds mean "unset".
    if parsed.year <= 1:
        return None
    return parsed


__all__ = ["Task", "utc_now"]
