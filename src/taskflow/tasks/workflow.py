# src/taskflow/tasks/workflow.py

from __future__ import annotations

"""
Workflow engine.

Owns the transition table and the per-task lock set:
- get_next_states / can_transition are pure table lookups,
- attempt_transition simulates a remote call (latency + possible failure)
  and mutates the task only on success.

The engine does not serialize with a queue. Its only guard is the lock set:
a second attempt on a task id that is already in flight is rejected.

By default attempt_transition does NOT consult the table (callers are expected
to offer only get_next_states results). Pass enforce_rules=True to reject
illegal targets up front.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from ..core.ports import OutcomePolicy
from .errors import IllegalTransitionError, LockedError, TransitionFailedError
from .latency import SimulatedNetwork
from .task_models import HistoryEntry, Task, WorkflowState

logger = logging.getLogger(__name__)

S = WorkflowState

TRANSITIONS: MappingProxyType[WorkflowState, frozenset[WorkflowState]] = MappingProxyType(
    {
        S.DRAFT: frozenset({S.SUBMITTED}),
        S.SUBMITTED: frozenset({S.IN_REVIEW}),
        S.IN_REVIEW: frozenset({S.APPROVED, S.REJECTED}),
        S.APPROVED: frozenset({S.COMPLETED}),
        S.COMPLETED: frozenset(),  # terminal
        S.REJECTED: frozenset({S.DRAFT}),  # restart loop
    }
)

_EMPTY: frozenset[WorkflowState] = frozenset()


def history_action(target: WorkflowState) -> str:
    return f"MOVED_TO_{target.value}"


class WorkflowEngine:
    def __init__(
        self,
        policy: OutcomePolicy | None = None,
        *,
        clock: Callable[[], float] = time.time,
        enforce_rules: bool = False,
    ) -> None:
        self._policy: OutcomePolicy = policy or SimulatedNetwork()
        self._clock = clock
        self._enforce_rules = bool(enforce_rules)
        self._locked: set[str] = set()

    # ---- pure rule lookups ----

    def get_next_states(self, state: Any) -> frozenset[WorkflowState]:
        parsed = WorkflowState.parse(state)
        if parsed is None:
            return _EMPTY
        return TRANSITIONS.get(parsed, _EMPTY)

    def can_transition(self, from_state: Any, to_state: Any) -> bool:
        target = WorkflowState.parse(to_state)
        if target is None:
            return False
        return target in self.get_next_states(from_state)

    # ---- lock telemetry ----

    def is_locked(self, task_id: str) -> bool:
        return task_id in self._locked

    @property
    def locked_ids(self) -> frozenset[str]:
        return frozenset(self._locked)

    @property
    def enforce_rules(self) -> bool:
        return self._enforce_rules

    # ---- async transition ----

    async def attempt_transition(self, task: Task, target: WorkflowState | str) -> Task:
        """
        Try to move `task` to `target`.

        Raises:
          LockedError            - an attempt on task.id is already in flight
          IllegalTransitionError - only with enforce_rules=True
          TransitionFailedError  - simulated transient fault; task untouched

        On success the same task object is mutated and returned.
        """
        # Checked before anything else: an overlapping attempt is a caller bug,
        # not an illegal move.
        if task.id in self._locked:
            logger.warning("Transition rejected, task %s is locked", task.id)
            raise LockedError(task.id)

        target_state = WorkflowState(target)

        if self._enforce_rules and not self.can_transition(task.state, target_state):
            raise IllegalTransitionError(task.id, task.state.value, target_state.value)

        self._locked.add(task.id)
        logger.debug("Locked task %s (%s -> %s)", task.id, task.state.value, target_state.value)

        try:
            outcome = self._policy()
            await asyncio.sleep(max(0.0, float(outcome.delay)))

            if not outcome.ok:
                logger.warning("Transition failed for %s (-> %s)", task.id, target_state.value)
                raise TransitionFailedError(task.id, target_state.value)

            task.state = target_state
            task.history.append(HistoryEntry(action=history_action(target_state), timestamp=self._clock()))
            logger.info("Task %s -> %s", task.id, target_state.value)
            return task
        finally:
            self._locked.discard(task.id)
            logger.debug("Unlocked task %s", task.id)
