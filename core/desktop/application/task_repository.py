"""Task lifecycle operations on top of an ordered bucket store."""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from application.ports import BucketStore, TaskRepository
from core import Task, TaskValidationError
from infrastructure.task_codec import decode_key, decode_task, encode_key, encode_task

logger = logging.getLogger("fate.repository")


def normalize_task_name(name: str) -> str:
    """Trim a task name, rejecting names that are empty afterwards."""
    value = (name or "").strip()
    if not value:
        raise TaskValidationError("task name must not be empty")
    return value


def partition_tasks(tasks: Iterable[Task]) -> Tuple[List[Task], List[Task]]:
    """Split tasks into (pending, history), preserving order within each."""
    pending: List[Task] = []
    history: List[Task] = []
    for task in tasks:
        (history if task.completed else pending).append(task)
    return pending, history


class BucketTaskRepository(TaskRepository):
    """Every public method is exactly one store transaction."""

    def __init__(self, store: BucketStore):
        self.store = store

    def create(self, name: str) -> Task:
        clean = normalize_task_name(name)
        with self.store.transaction(write=True) as tx:
            task = Task(id=tx.next_sequence(), name=clean)
            tx.put(encode_key(task.id), encode_task(task))
        logger.debug("created task id=%s", task.id)
        return task

    def save(self, task: Task) -> None:
        with self.store.transaction(write=True) as tx:
            tx.put(encode_key(task.id), encode_task(task))

    def delete(self, task_id: int) -> None:
        with self.store.transaction(write=True) as tx:
            tx.delete(encode_key(task_id))
        logger.debug("deleted task id=%s", task_id)

    def load_all(self) -> List[Task]:
        tasks: List[Task] = []
        with self.store.transaction() as tx:
            for key, raw in tx.scan():
                try:
                    task = decode_task(raw)
                    if decode_key(key) != task.id:
                        raise ValueError(f"record id {task.id} does not match its key")
                except (ValueError, TypeError, KeyError) as exc:
                    logger.warning("skipping malformed record key=%s: %s", key.hex(), exc)
                    continue
                tasks.append(task)
        return tasks

    def clear_pending(self, task_ids: Iterable[int]) -> None:
        """Delete the given (pending) ids; the bucket itself is never dropped."""
        ids = list(task_ids)
        with self.store.transaction(write=True) as tx:
            for task_id in ids:
                tx.delete(encode_key(task_id))
        logger.info("cleared %s pending task(s)", len(ids))

    def get(self, task_id: int) -> Task | None:
        with self.store.transaction() as tx:
            raw = tx.get(encode_key(task_id))
        return decode_task(raw) if raw is not None else None


__all__ = ["BucketTaskRepository", "normalize_task_name", "partition_tasks"]
