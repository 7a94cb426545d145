# src/taskflow/tasks/job_queue.py

from __future__ import annotations

"""
Background job queue.

A FIFO sequencer for async units of work:
- enqueue() never blocks and never fails,
- exactly one unit runs at a time, in submission order,
- a unit's exception is logged and swallowed so the loop keeps going.

The queue cannot report a unit's failure back to whoever enqueued it.
Units are expected to handle their own errors before returning.
"""

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from ..core.ports import JobRunner

logger = logging.getLogger(__name__)

IDLE = "Idle"


@dataclass(slots=True, frozen=True)
class Job:
    """A deferred async operation with a human-readable label."""

    run: JobRunner
    description: str


@dataclass(slots=True, frozen=True)
class QueueStatus:
    pending: int
    active: str


QueueListener = Callable[[QueueStatus], None]


class JobQueue:
    def __init__(self) -> None:
        self._backlog: deque[Job] = deque()
        self._active: Job | None = None
        self._runner: asyncio.Task[None] | None = None
        self._listeners: list[QueueListener] = []
        self._idle = asyncio.Event()
        self._idle.set()

    # ---- telemetry ----

    @property
    def pending(self) -> int:
        return len(self._backlog)

    @property
    def active_description(self) -> str:
        return self._active.description if self._active is not None else IDLE

    @property
    def is_processing(self) -> bool:
        return self._active is not None

    def status(self) -> QueueStatus:
        return QueueStatus(pending=self.pending, active=self.active_description)

    def add_listener(self, listener: QueueListener) -> None:
        """Register a callback fired whenever the backlog or the active job changes."""
        self._listeners.append(listener)

    def _publish(self) -> None:
        snapshot = self.status()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Queue listener failed")

    # ---- public API ----

    def enqueue(self, run: JobRunner, description: str) -> None:
        """
        Append a unit to the back of the backlog and start processing if idle.

        Must be called from inside a running event loop.
        """
        self._backlog.append(Job(run=run, description=description))
        self._idle.clear()
        logger.debug("Enqueued job %r (pending=%s)", description, len(self._backlog))
        self._publish()
        self._kick()

    async def join(self) -> None:
        """Wait until the backlog is drained and no unit is running."""
        await self._idle.wait()

    # ---- processing loop ----

    def _kick(self) -> None:
        if self._runner is not None and not self._runner.done():
            return
        if not self._backlog:
            return
        self._runner = asyncio.get_running_loop().create_task(self._process())

    async def _process(self) -> None:
        try:
            while self._backlog:
                job = self._backlog.popleft()
                self._active = job
                self._publish()
                logger.debug("Job started: %s", job.description)

                try:
                    await job.run()
                except Exception:
                    # Advisory only: the unit owns reporting to its caller.
                    logger.exception("Background job failed: %s", job.description)
                finally:
                    self._active = None
                    logger.debug("Job finished: %s (pending=%s)", job.description, len(self._backlog))
                    self._publish()
        finally:
            if self._backlog:
                # Runner died on a BaseException mid-backlog; a fresh runner takes the rest.
                logger.warning("Queue runner stopped with %s job(s) pending, restarting", len(self._backlog))
                asyncio.get_running_loop().call_soon(self._kick)
            else:
                self._idle.set()
