"""Exception hierarchy shared by the store, repository and session layers."""


class FateError(Exception):
    """Base class for all fate errors."""


class StorageError(FateError):
    """The task store could not complete a read or write."""


class StoreLockedError(StorageError):
    """Another fate process already holds the store lock."""

    def __init__(self, path: str = ""):
        self.path = path
        super().__init__("fate is already running. Please close the other instance.")


class TaskValidationError(FateError, ValueError):
    """Task input rejected before any storage call (e.g. empty name)."""


__all__ = ["FateError", "StorageError", "StoreLockedError", "TaskValidationError"]
