# tests/test_commands.py

from __future__ import annotations

import pytest

from taskflow.cli.commands import CommandRegistry, cmd_move, cmd_new, registry
from taskflow.tasks.task_models import Priority, WorkflowState


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BEE y", emit=lambda _: None) == "h3"
    assert called == {"h2": 1, "h3": 1}


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_help_lists_workflow_commands(state) -> None:
    text = registry.handle(state, "/help") or ""
    for name in ("/new", "/list", "/move", "/next", "/queue", "/errors"):
        assert name in text


@pytest.mark.asyncio
async def test_new_list_and_move_flow(state) -> None:
    reply = registry.handle(state, "/new high Approve travel budget") or ""
    assert "Created" in reply

    task = state.board.tasks[0]
    assert task.priority == Priority.HIGH
    assert task.title == "Approve travel budget"

    assert task.id[:8] in (registry.handle(state, "/list travel") or "")
    assert registry.handle(state, "/list low") == "No tasks."

    assert "SUBMITTED" in (registry.handle(state, f"/next {task.id}") or "")

    refused = registry.handle(state, f"/move {task.id} approved") or ""
    assert "Cannot move" in refused

    queued = registry.handle(state, f"/move {task.id} submitted") or ""
    assert "Queued" in queued

    await state.queue.join()

    assert task.state == WorkflowState.SUBMITTED
    shown = registry.handle(state, f"/show {task.id}") or ""
    assert "MOVED_TO_SUBMITTED" in shown
    assert "Idle" in (registry.handle(state, "/queue") or "")
    assert registry.handle(state, "/errors") == "No errors."


def test_move_and_show_unknown_task(state) -> None:
    assert "No task matches" in (registry.handle(state, "/move zzz submitted") or "")
    assert "No task matches" in (registry.handle(state, "/show zzz") or "")
    assert "Usage" in (registry.handle(state, "/move") or "")


@pytest.mark.asyncio
async def test_next_for_completed_task_offers_nothing(state) -> None:
    task = state.board.create_task("Done deal")
    task.state = WorkflowState.COMPLETED
    await state.queue.join()

    assert "no further actions" in (registry.handle(state, f"/next {task.id}") or "")


@pytest.mark.asyncio
async def test_new_and_move_reply_without_an_emitter(state) -> None:
    emitted: list[str] = []

    reply = registry.handle(state, "/new low Order chairs", emitted.append) or ""
    assert "Created" in reply
    task = state.board.tasks[0]

    assert "Queued" in cmd_move(state, [task.id[:8], "submitted"])
    assert "Created" in cmd_new(state, ["Second", "task"])
    await state.queue.join()

    assert emitted == []
    assert task.state == WorkflowState.SUBMITTED
