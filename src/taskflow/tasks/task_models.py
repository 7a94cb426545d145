# src/taskflow/tasks/task_models.py

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class WorkflowState(StrEnum):
    """Task lifecycle position. Legal moves live in workflow.TRANSITIONS."""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    IN_REVIEW = "IN_REVIEW"
    APPROVED = "APPROVED"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, raw: Any) -> WorkflowState | None:
        """Lenient parse: accepts members, exact values and 'in review' style labels."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        norm = raw.strip().upper().replace(" ", "_").replace("-", "_")
        try:
            return cls(norm)
        except ValueError:
            return None


class Priority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(slots=True, frozen=True)
class HistoryEntry:
    action: str
    timestamp: float

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.action, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> HistoryEntry:
        return cls(action=str(raw["action"]), timestamp=float(raw["timestamp"]))


@dataclass(slots=True)
class Task:
    """
    A single workflow item.

    Only WorkflowEngine.attempt_transition mutates `state` and `history`,
    and only on success. `id` and `created_at` never change.
    """

    id: str
    title: str
    priority: Priority
    state: WorkflowState = WorkflowState.DRAFT
    history: list[HistoryEntry] = field(default_factory=list)
    created_at: float = field(default_factory=time.time)

    @classmethod
    def new(cls, title: str, priority: Priority | str = Priority.MEDIUM) -> Task:
        clean = (title or "").strip()
        if not clean:
            raise ValueError("title is required")
        return cls(id=uuid.uuid4().hex, title=clean, priority=Priority(priority))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "priority": self.priority.value,
            "state": self.state.value,
            "history": [h.to_dict() for h in self.history],
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        return cls(
            id=str(raw["id"]),
            title=str(raw["title"]),
            priority=Priority(raw["priority"]),
            state=WorkflowState(raw["state"]),
            history=[HistoryEntry.from_dict(h) for h in raw.get("history") or []],
            created_at=float(raw["createdAt"]),
        )


@dataclass(slots=True)
class TaskBlob:
    """The single persisted collection: {"tasks": [...]}."""

    tasks: list[Task] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"tasks": [t.to_dict() for t in self.tasks]}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> TaskBlob:
        # Extra top-level keys (older blobs carried "logs") are ignored.
        return cls(tasks=[Task.from_dict(t) for t in raw.get("tasks") or []])
