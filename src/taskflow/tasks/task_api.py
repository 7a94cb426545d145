# src/taskflow/tasks/task_api.py

"""
Board service: the caller that sits between a UI and the core.

It keeps the in-memory task list, turns user intents into queued units and
owns failure reporting for those units (the queue itself cannot).
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass

from ..core.ports import Notifier
from .errors import StorageError, StorageReadError, TransitionFailedError, WorkflowError
from .job_queue import JobQueue
from .task_models import Priority, Task, WorkflowState
from .task_store import TaskStore
from .workflow import WorkflowEngine

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ErrorEntry:
    context: str
    message: str
    timestamp: float


class TaskBoard:
    def __init__(
        self,
        engine: WorkflowEngine,
        queue: JobQueue,
        store: TaskStore,
        *,
        retry_limit: int = 0,
        error_log_size: int = 50,
        notify: Notifier | None = None,
    ) -> None:
        self.engine = engine
        self.queue = queue
        self.store = store
        self.notify = notify
        self._retry_limit = max(0, int(retry_limit))
        self._tasks: list[Task] = []
        self._errors: deque[ErrorEntry] = deque(maxlen=max(1, int(error_log_size)))

    # ---- read side ----

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def errors(self) -> list[ErrorEntry]:
        return list(self._errors)

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def resolve(self, ref: str) -> Task | None:
        """Find a task by full id or by an unambiguous id prefix."""
        ref = (ref or "").strip()
        if not ref:
            return None
        exact = self.get(ref)
        if exact is not None:
            return exact
        matches = [t for t in self._tasks if t.id.startswith(ref)]
        return matches[0] if len(matches) == 1 else None

    def next_states(self, task_id: str) -> frozenset[WorkflowState]:
        task = self.get(task_id)
        if task is None:
            return frozenset()
        return self.engine.get_next_states(task.state)

    def find_tasks(self, term: str = "", priority: Priority | str | None = None) -> list[Task]:
        needle = (term or "").strip().lower()
        wanted = Priority(priority) if priority else None
        return [
            t
            for t in self._tasks
            if needle in t.title.lower() and (wanted is None or t.priority == wanted)
        ]

    # ---- load ----

    async def load(self) -> int:
        try:
            blob = await self.store.load()
        except StorageReadError as exc:
            logger.exception("Failed to load initial data")
            self._record("System Error", f"Failed to load initial data: {exc}")
            return 0
        self._tasks = list(blob.tasks)
        logger.info("Board loaded tasks=%s", len(self._tasks))
        return len(self._tasks)

    # ---- write side ----

    def create_task(self, title: str, priority: Priority | str = Priority.MEDIUM) -> Task:
        """Add a DRAFT task immediately and queue its first save."""
        task = Task.new(title, priority)
        self._tasks.append(task)

        async def persist() -> None:
            try:
                await self.store.update_task(task)
            except StorageError as exc:
                logger.warning("Persisting new task %s failed: %s", task.id, exc)
                self._record(task.id, str(exc))
                return
            self._emit(f"Task {task.id[:8]} saved.")

        self.queue.enqueue(persist, "Creating new task")
        logger.info("Task created id=%s priority=%s", task.id, task.priority.value)
        return task

    def request_move(self, task_id: str, target: WorkflowState | str) -> bool:
        """
        Queue a transition. Returns False if the task is unknown.

        Legality is not checked here; UIs offer only next_states() targets.
        """
        task = self.get(task_id)
        if task is None:
            return False
        target_state = WorkflowState(target)
        self.queue.enqueue(
            lambda: self._move(task, target_state),
            f"Moving task {task.id} to {target_state.value}",
        )
        return True

    async def _attempt_with_retries(self, task: Task, target: WorkflowState) -> Task:
        """
        Retries transient failures inside the same queued unit, so moves queued
        later for the same task cannot overtake the retry.
        """
        attempt = 0
        while True:
            try:
                return await self.engine.attempt_transition(task, target)
            except TransitionFailedError:
                if attempt >= self._retry_limit:
                    raise
                attempt += 1
                logger.info(
                    "Retrying move task=%s -> %s (attempt %s/%s)",
                    task.id,
                    target.value,
                    attempt,
                    self._retry_limit,
                )

    async def _move(self, task: Task, target: WorkflowState) -> None:
        try:
            updated = await self._attempt_with_retries(task, target)
            await self.store.update_task(updated)
        except (WorkflowError, StorageError) as exc:
            logger.warning("Operation failed for %s: %s", task.id, exc)
            self._record(task.id, str(exc))
            return

        self._replace(updated)
        self._emit(f"Task {task.id[:8]} moved to {target.value}.")

    def _replace(self, task: Task) -> None:
        for i, t in enumerate(self._tasks):
            if t.id == task.id:
                self._tasks[i] = task
                return
        self._tasks.append(task)

    # ---- reporting ----

    def _record(self, context: str, message: str) -> None:
        self._errors.appendleft(ErrorEntry(context=context, message=message, timestamp=time.time()))
        self._emit(f"{context}: {message}")

    def _emit(self, text: str) -> None:
        if self.notify is None:
            return
        try:
            self.notify(text)
        except Exception:
            logger.debug("Board notify failed.", exc_info=True)
