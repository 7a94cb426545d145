# src/taskflow/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.job_queue import JobQueue
from ..tasks.task_api import TaskBoard
from ..tasks.task_store import TaskStore
from ..tasks.workflow import WorkflowEngine


@dataclass
class AppState:
    # Settings are kept on the state so commands can report them.
    settings: object

    engine: WorkflowEngine
    queue: JobQueue
    store: TaskStore
    board: TaskBoard
