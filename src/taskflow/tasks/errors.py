# src/taskflow/tasks/errors.py

"""
Failure taxonomy shared by the engine, the store and their callers.

`retryable` tells a caller whether re-enqueueing the same move makes sense.
Nothing in the core retries on its own.
"""

from __future__ import annotations


class WorkflowError(Exception):
    retryable = False

    def __init__(self, task_id: str, message: str) -> None:
        super().__init__(message)
        self.task_id = task_id


class LockedError(WorkflowError):
    """Another transition attempt on the same task is still in flight."""

    def __init__(self, task_id: str) -> None:
        super().__init__(task_id, f"Task {task_id} is currently locked by another operation.")


class TransitionFailedError(WorkflowError):
    """Simulated transient fault (network). The task was left untouched."""

    retryable = True

    def __init__(self, task_id: str, target: str) -> None:
        super().__init__(task_id, "Network Error: Failed to process state transition.")
        self.target = target


class IllegalTransitionError(WorkflowError):
    """Raised only when the engine runs with rule enforcement switched on."""

    def __init__(self, task_id: str, current: str, target: str) -> None:
        super().__init__(task_id, f"Task {task_id}: {current} -> {target} is not allowed.")
        self.current = current
        self.target = target


class StorageError(Exception):
    pass


class StorageReadError(StorageError):
    pass


class StorageWriteError(StorageError):
    pass
