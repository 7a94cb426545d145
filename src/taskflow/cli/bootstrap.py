# src/taskflow/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- builds the engine, queue, store and board and wires them into AppState.

Nothing else constructs these objects; they live as long as the process.
"""

from __future__ import annotations

import logging
import random

from ..config import get_settings
from ..core.ports import Notifier
from ..core.state import AppState
from ..tasks.job_queue import JobQueue
from ..tasks.latency import SimulatedNetwork, UniformDelay
from ..tasks.task_api import TaskBoard
from ..tasks.task_store import JsonFileBackend, TaskStore
from ..tasks.workflow import WorkflowEngine

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, notify: Notifier | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    seed = getattr(settings, "random_seed", None)
    rng = random.Random(seed)

    engine = WorkflowEngine(
        SimulatedNetwork(
            settings.transition_delay_min,
            settings.transition_delay_max,
            failure_rate=settings.transition_failure_rate,
            rng=rng,
        ),
        enforce_rules=settings.enforce_transition_rules,
    )
    queue = JobQueue()
    store = TaskStore(
        JsonFileBackend(settings.data_dir),
        key=settings.store_key,
        latency=UniformDelay(settings.store_delay_min, settings.store_delay_max, rng=rng),
    )
    board = TaskBoard(
        engine,
        queue,
        store,
        retry_limit=settings.retry_limit,
        error_log_size=settings.error_log_size,
        notify=notify,
    )

    logger.info(
        "State ready data_dir=%s key=%s enforce_rules=%s seed=%s",
        settings.data_dir,
        settings.store_key,
        settings.enforce_transition_rules,
        seed,
    )
    return AppState(settings=settings, engine=engine, queue=queue, store=store, board=board)
