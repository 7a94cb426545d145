# src/taskflow/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The engine, queue and store depend on Protocols and plain callables instead of
concrete implementations, so simulators can be swapped for real I/O and tests
can force deterministic outcomes.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from ..tasks.latency import Outcome

OutcomePolicy = Callable[[], Outcome]
# Draws (delay, ok) for one remote transition call.

DelayPolicy = Callable[[], float]
# Draws a delay in seconds for one storage round-trip.

JobRunner = Callable[[], Awaitable[None]]
# A deferred asynchronous unit of work.

Notifier = Callable[[str], None]
# UI-side sink for human-readable progress/failure lines.


class BlobBackend(Protocol):
    """Key-value medium holding serialized blobs (a browser-storage stand-in)."""

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, raw: str) -> None: ...
