"""Shared fixtures: in-memory repository doubles and a real SQLite store."""

import random
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, Iterable, List

import pytest

from core import StorageError, Task
from core.desktop.application.session import FateSession
from core.desktop.application.task_repository import BucketTaskRepository, normalize_task_name
from infrastructure.sqlite_store import SqliteBucketStore

T0 = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


class FakeRepository:
    """Dict-backed TaskRepository; records every mutating call."""

    def __init__(self, tasks: Iterable[Task] = ()):
        self.records: Dict[int, Task] = {}
        self.sequence = 0
        self.calls: List[tuple] = []
        for task in tasks:
            self.records[task.id] = task
            self.sequence = max(self.sequence, task.id)

    def create(self, name: str) -> Task:
        clean = normalize_task_name(name)
        self.sequence += 1
        task = Task(id=self.sequence, name=clean)
        self.records[task.id] = task
        self.calls.append(("create", clean))
        return task

    def save(self, task: Task) -> None:
        self.records[task.id] = task
        self.calls.append(("save", task.id))

    def delete(self, task_id: int) -> None:
        self.records.pop(task_id, None)
        self.calls.append(("delete", task_id))

    def load_all(self) -> List[Task]:
        return [self.records[key] for key in sorted(self.records)]

    def clear_pending(self, task_ids: Iterable[int]) -> None:
        ids = list(task_ids)
        for task_id in ids:
            self.records.pop(task_id, None)
        self.calls.append(("clear_pending", ids))


class FailingRepository(FakeRepository):
    """Every write raises StorageError; reads still work."""

    def _fail(self, *args, **kwargs):
        raise StorageError("disk full")

    create = _fail
    save = _fail
    delete = _fail
    clear_pending = _fail


class FixedClock:
    """Deterministic clock advancing one minute per call."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(minutes=1)
        return current


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def make_session(clock):
    """Build a FateSession over a FakeRepository seeded with named tasks."""

    def factory(*names: str, repo: FakeRepository | None = None, seed: int = 7) -> FateSession:
        repository = repo or FakeRepository()
        for name in names:
            repository.create(name)
        repository.calls.clear()
        return FateSession.load(repository, rng=random.Random(seed), clock=clock)

    return factory


@pytest.fixture()
def fake_repo() -> FakeRepository:
    return FakeRepository()


@pytest.fixture()
def failing_repo_cls():
    return FailingRepository


@pytest.fixture()
def store(tmp_path: Path):
    store = SqliteBucketStore.open(tmp_path / "fate.db")
    yield store
    store.close()


@pytest.fixture()
def repository(store) -> BucketTaskRepository:
    return BucketTaskRepository(store)
