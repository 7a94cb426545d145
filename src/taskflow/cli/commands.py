# src/taskflow/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import datetime
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import Priority, Task, WorkflowState

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /move, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _fmt_ts(ts: float) -> str:
    return datetime.fromtimestamp(ts).astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _label(state: WorkflowState) -> str:
    return state.value.replace("_", " ").title()


def _task_line(state: AppState, task: Task) -> str:
    nxt = sorted(state.engine.get_next_states(task.state))
    actions = ", ".join(_label(s) for s in nxt) if nxt else "-"
    busy = " [busy]" if state.engine.is_locked(task.id) else ""
    return f"{task.id[:8]}  {task.state.value:<10} {task.priority.value:<6} {task.title}{busy}  (next: {actions})"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    s = state.settings
    return (
        "Status:\n"
        f"  Tasks: {len(state.board.tasks)}\n"
        f"  Queue: {state.queue.pending} pending, active: {state.queue.active_description}\n"
        f"  Transition delay: {getattr(s, 'transition_delay_min', '?')}-"
        f"{getattr(s, 'transition_delay_max', '?')}s, "
        f"failure rate: {getattr(s, 'transition_failure_rate', '?')}\n"
        f"  Enforce rules: {'ON' if state.engine.enforce_rules else 'OFF'}"
    )


def cmd_new(state: AppState, args: list[str]) -> str:
    """
    /new <title...>                 -> MEDIUM priority
    /new <low|medium|high> <title>  -> explicit priority
    """
    if not args:
        return "Usage: /new [low|medium|high] <title>"

    priority = Priority.MEDIUM
    if args[0].upper() in Priority.__members__:
        priority = Priority(args[0].upper())
        args = args[1:]

    title = " ".join(args).strip()
    if not title:
        return "Title required."

    task = state.board.create_task(title, priority)
    return f"Created {task.id[:8]} ({priority.value}) in {task.state.value}. Saving in background."


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list                   -> all tasks
    /list <term>            -> title search
    /list <priority> [term] -> filtered by priority
    """
    priority = None
    if args and args[0].upper() in Priority.__members__:
        priority = Priority(args[0].upper())
        args = args[1:]

    tasks = state.board.find_tasks(" ".join(args), priority)
    if not tasks:
        return "No tasks."
    return "\n".join(_task_line(state, t) for t in tasks)


def cmd_show(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /show <task id>"
    task = state.board.resolve(args[0])
    if task is None:
        return f"No task matches {args[0]!r}."

    lines = [
        _task_line(state, task),
        f"  created: {_fmt_ts(task.created_at)}",
    ]
    if not task.history:
        lines.append("  history: (empty)")
    for h in task.history:
        lines.append(f"  {_fmt_ts(h.timestamp)}  {h.action}")
    return "\n".join(lines)


def cmd_next(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /next <task id>"
    task = state.board.resolve(args[0])
    if task is None:
        return f"No task matches {args[0]!r}."
    nxt = sorted(state.engine.get_next_states(task.state))
    if not nxt:
        return f"{task.id[:8]} is {task.state.value}: no further actions."
    return f"{task.id[:8]} is {task.state.value}: " + ", ".join(s.value for s in nxt)


def cmd_move(state: AppState, args: list[str]) -> str:
    """
    /move <task id> <state>

    Only targets listed by /next are offered; anything else is refused here,
    the engine itself is not asked.
    """
    if len(args) < 2:
        return "Usage: /move <task id> <state>"

    task = state.board.resolve(args[0])
    if task is None:
        return f"No task matches {args[0]!r}."

    target = WorkflowState.parse(" ".join(args[1:]))
    if target is None:
        return f"Unknown state: {' '.join(args[1:])}"

    allowed = state.engine.get_next_states(task.state)
    if target not in allowed:
        options = ", ".join(sorted(s.value for s in allowed)) or "none"
        return f"Cannot move {task.id[:8]} from {task.state.value} to {target.value} (allowed: {options})."

    state.board.request_move(task.id, target)
    logger.debug("Move requested task=%s target=%s", task.id, target.value)
    return f"Queued: {task.id[:8]} -> {target.value} (pending jobs: {state.queue.pending})."


def cmd_queue(state: AppState, args: list[str]) -> str:
    st = state.queue.status()
    return f"Queue: {st.pending} pending, active: {st.active}"


def cmd_errors(state: AppState, args: list[str]) -> str:
    entries = state.board.errors
    if not entries:
        return "No errors."
    return "\n".join(f"[{_fmt_ts(e.timestamp)}] {e.context}: {e.message}" for e in entries)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show board/queue/simulation settings.")
registry.register("new", cmd_new, help_text="Create a task: /new [low|medium|high] <title>.")
registry.register("list", cmd_list, help_text="List tasks: /list [priority] [search term].", aliases=["ls"])
registry.register("show", cmd_show, help_text="Show a task and its history: /show <id>.")
registry.register("next", cmd_next, help_text="List allowed next states: /next <id>.")
registry.register("move", cmd_move, help_text="Queue a transition: /move <id> <state>.", aliases=["mv"])
registry.register("queue", cmd_queue, help_text="Show background queue progress.", aliases=["q"])
registry.register("errors", cmd_errors, help_text="Show recent failures.")
