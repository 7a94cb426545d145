# src/taskflow/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "taskflow.log"

# The REPL prints its own board notifications, so background components that
# run once per queued job stay off the console below these levels.
CONSOLE_FLOORS: dict[str, int] = {
    "taskflow.tasks.job_queue": logging.WARNING,
    "taskflow.tasks.task_store": logging.WARNING,
    "taskflow.connectors.console_connector": logging.WARNING,
}


class BoardConsoleFilter(logging.Filter):
    """
    Console filter for the interactive board.

    taskflow loggers pass unless a floor in `floors` applies to them (the
    longest matching logger-name prefix wins). Everything else, captured
    warnings included, only reaches the console at ERROR.
    """

    def __init__(self, floors: dict[str, int] | None = None) -> None:
        super().__init__()
        self.floors = dict(CONSOLE_FLOORS if floors is None else floors)

    def _floor_for(self, name: str) -> int:
        best = ""
        for prefix in self.floors:
            if (name == prefix or name.startswith(prefix + ".")) and len(prefix) > len(best):
                best = prefix
        return self.floors[best] if best else logging.NOTSET

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == "taskflow" or name.startswith("taskflow."):
            return record.levelno >= self._floor_for(name)
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskflow",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route logs to stderr (short lines, filtered by BoardConsoleFilter) and to
    <log_dir>/taskflow.log (full timestamps, every lock/unlock and job step).

    Replaces whatever handlers the root logger had. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S"))
    console.addFilter(BoardConsoleFilter())
    root.addHandler(console)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(fh)

    # warnings.warn(...) arrives as 'py.warnings'.
    logging.captureWarnings(True)
    return log_file
