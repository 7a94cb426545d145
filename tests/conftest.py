# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskflow.core.state import AppState
from taskflow.tasks.job_queue import JobQueue
from taskflow.tasks.task_api import TaskBoard
from taskflow.tasks.task_store import TaskStore
from taskflow.tasks.workflow import WorkflowEngine

from .fakes import FlakyBackend, ScriptedNetwork, no_delay


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the commands.

    A SimpleNamespace rather than the real config keeps tests isolated from
    the environment and any local .env file.
    """
    return SimpleNamespace(
        app_name="taskflow-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        store_key="workflow_sim_data",
        transition_delay_min=0.0,
        transition_delay_max=0.0,
        transition_failure_rate=0.0,
        enforce_transition_rules=False,
        store_delay_min=0.0,
        store_delay_max=0.0,
        retry_limit=0,
        error_log_size=50,
        random_seed=1,
    )


@pytest.fixture()
def network() -> ScriptedNetwork:
    return ScriptedNetwork()


@pytest.fixture()
def engine(network: ScriptedNetwork) -> WorkflowEngine:
    return WorkflowEngine(network)


@pytest.fixture()
def backend() -> FlakyBackend:
    return FlakyBackend()


@pytest.fixture()
def store(backend: FlakyBackend) -> TaskStore:
    return TaskStore(backend, latency=no_delay)


@pytest.fixture()
def queue() -> JobQueue:
    return JobQueue()


@pytest.fixture()
def board(engine: WorkflowEngine, queue: JobQueue, store: TaskStore) -> TaskBoard:
    return TaskBoard(engine, queue, store)


@pytest.fixture()
def state(settings, engine, queue, store, board) -> AppState:
    """AppState wired with deterministic fakes (zero latency, scripted outcomes)."""
    return AppState(settings=settings, engine=engine, queue=queue, store=store, board=board)
