# src/taskflow/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState inside the event loop, loads the board,
runs the console REPL and drains the job queue before exiting (queued jobs
are never cancelled).
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import print_ts, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    state = create_initial_state(settings=settings, notify=print_ts)
    await state.board.load()

    try:
        await run_console_loop(state)
    finally:
        if state.queue.pending or state.queue.is_processing:
            logger.info("Waiting for queued jobs to finish (pending=%s)...", state.queue.pending)
        await state.queue.join()


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
