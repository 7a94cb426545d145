# src/taskflow/tasks/task_store.py

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path

from ..core.ports import BlobBackend, DelayPolicy
from .errors import StorageReadError, StorageWriteError
from .latency import UniformDelay
from .task_models import Task, TaskBlob

logger = logging.getLogger(__name__)

DEFAULT_KEY = "workflow_sim_data"


class MemoryBackend:
    """
    In-process key-value medium.

    `capacity` (characters, across all keys) emulates a storage quota:
    a write that would exceed it is rejected with StorageWriteError.
    """

    def __init__(self, capacity: int | None = None) -> None:
        self._data: dict[str, str] = {}
        self._capacity = capacity

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, raw: str) -> None:
        if self._capacity is not None:
            used = sum(len(v) for k, v in self._data.items() if k != key)
            if used + len(raw) > self._capacity:
                raise StorageWriteError(f"Storage quota exceeded ({used + len(raw)} > {self._capacity})")
        self._data[key] = raw


class JsonFileBackend:
    """
    One JSON file per key under `data_dir`.

    Writes go to a temp file first and are moved into place with os.replace,
    so a reader never sees a half-written blob.
    """

    def __init__(self, data_dir: str | Path) -> None:
        self._dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageReadError(f"Failed to read {path}") from exc

    def write(self, key: str, raw: str) -> None:
        path = self.path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".tmp")
            tmp_path.write_text(raw, "utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            raise StorageWriteError(f"Disk Write Failed: {path}") from exc


class TaskStore:
    """
    Async blob store for all tasks.

    The whole collection lives in one serialized blob under `key`.
    update_task is a plain load-modify-save: it is NOT atomic with respect to
    other overlapping load/save/update_task calls (last writer wins). Callers
    serialize writes through the JobQueue.
    """

    def __init__(
        self,
        backend: BlobBackend,
        *,
        key: str = DEFAULT_KEY,
        latency: DelayPolicy | None = None,
    ) -> None:
        self._backend = backend
        self._key = key
        self._latency: DelayPolicy = latency or UniformDelay()

    @property
    def key(self) -> str:
        return self._key

    async def _delay(self) -> None:
        await asyncio.sleep(max(0.0, float(self._latency())))

    async def load(self) -> TaskBlob:
        await self._delay()

        raw = self._backend.read(self._key)
        if raw is None:
            return TaskBlob()

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("blob root must be an object")
            blob = TaskBlob.from_dict(data)
        except (ValueError, KeyError, TypeError) as exc:
            raise StorageReadError(f"Corrupt blob under key {self._key!r}") from exc

        logger.debug("Loaded %s tasks from %s", len(blob.tasks), self._key)
        return blob

    async def save(self, blob: TaskBlob) -> bool:
        await self._delay()

        raw = json.dumps(blob.to_dict(), ensure_ascii=False)
        try:
            self._backend.write(self._key, raw)
        except StorageWriteError:
            logger.error("Storage limit reached or error (key=%s)", self._key)
            raise

        logger.debug("Saved %s tasks to %s", len(blob.tasks), self._key)
        return True

    async def update_task(self, task: Task) -> Task:
        blob = await self.load()

        for i, existing in enumerate(blob.tasks):
            if existing.id == task.id:
                blob.tasks[i] = task
                break
        else:
            blob.tasks.append(task)

        await self.save(blob)
        return task
