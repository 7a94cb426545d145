# src/taskflow/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.job_queue import QueueStatus

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def _on_queue_change(status: QueueStatus) -> None:
    logger.debug("Queue pending=%s active=%s", status.pending, status.active)


async def run_console_loop(state: AppState) -> None:
    """
    Interactive REPL.

    input() runs in a worker thread so queued jobs keep making progress on the
    event loop while the prompt waits.
    """
    logger.info("Console connector started.")
    print_ts("[CONSOLE] Type /help for commands. Use /exit to quit.\n")

    state.queue.add_listener(_on_queue_change)

    while True:
        try:
            user_input = (await asyncio.to_thread(input, ">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input, emit=print_ts)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            response = "Commands start with '/'. Use /help to list them."

        print_ts(response)
