from typing import ContextManager, Iterable, Iterator, List, Optional, Protocol, Tuple

from core import Task


class BucketTransaction(Protocol):
    """One atomic unit of work against a single ordered bucket."""

    def next_sequence(self) -> int:
        ...

    def get(self, key: bytes) -> Optional[bytes]:
        ...

    def put(self, key: bytes, value: bytes) -> None:
        ...

    def delete(self, key: bytes) -> None:
        ...

    def scan(self) -> Iterator[Tuple[bytes, bytes]]:
        ...


class BucketStore(Protocol):
    def transaction(self, write: bool = False) -> ContextManager[BucketTransaction]:
        ...

    def close(self) -> None:
        ...


class TaskRepository(Protocol):
    def create(self, name: str) -> Task:
        ...

    def save(self, task: Task) -> None:
        ...

    def delete(self, task_id: int) -> None:
        ...

    def load_all(self) -> List[Task]:
        ...

    def clear_pending(self, task_ids: Iterable[int]) -> None:
        ...
