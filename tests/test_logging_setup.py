# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from taskflow.logging_setup import LOG_FILE_NAME, BoardConsoleFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_console_filter_quiets_per_job_components() -> None:
    f = BoardConsoleFilter()

    assert not f.filter(_record("taskflow.tasks.job_queue", logging.INFO))
    assert not f.filter(_record("taskflow.tasks.task_store", logging.DEBUG))
    assert f.filter(_record("taskflow.tasks.job_queue", logging.WARNING))
    assert f.filter(_record("taskflow.tasks.workflow", logging.INFO))
    assert f.filter(_record("taskflow.tasks.task_api", logging.DEBUG))


def test_console_filter_lets_only_errors_from_outside_through() -> None:
    f = BoardConsoleFilter()

    assert not f.filter(_record("asyncio", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert f.filter(_record("asyncio", logging.ERROR))
    # prefix match is per dotted segment
    assert not f.filter(_record("taskflowx", logging.INFO))


def test_console_filter_longest_prefix_wins() -> None:
    f = BoardConsoleFilter({"taskflow.tasks": logging.ERROR, "taskflow.tasks.workflow": logging.DEBUG})

    assert f.filter(_record("taskflow.tasks.workflow", logging.DEBUG))
    assert not f.filter(_record("taskflow.tasks.job_queue", logging.WARNING))
    assert f.filter(_record("taskflow.cli.main", logging.DEBUG))


def test_setup_logging_writes_everything_to_file(tmp_path: Path, restore_root_logger) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", console_level=logging.WARNING)

    assert log_file == tmp_path / "logs" / LOG_FILE_NAME
    logging.getLogger("taskflow.tasks.job_queue").debug("Job started: %s", "Creating new task")
    for h in restore_root_logger.handlers:
        h.flush()

    text = log_file.read_text("utf-8")
    assert "DEBUG taskflow.tasks.job_queue: Job started: Creating new task" in text


def test_setup_logging_replaces_previous_handlers(tmp_path: Path, restore_root_logger) -> None:
    setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)

    assert len(restore_root_logger.handlers) == 2
    console = [h for h in restore_root_logger.handlers if not isinstance(h, logging.FileHandler)]
    assert len(console) == 1
    assert any(isinstance(flt, BoardConsoleFilter) for flt in console[0].filters)
