from .errors import FateError, StorageError, StoreLockedError, TaskValidationError
from .mode import Mode
from .task import Task, utc_now

__all__ = [
    "Task",
    "utc_now",
    "Mode",
    # Errors
    "FateError",
    "StorageError",
    "StoreLockedError",
    "TaskValidationError",
]
