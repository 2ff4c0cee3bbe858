"""
Task Registry
-------------

Every background asyncio task (animation runs, rain overlay queries, the
scheduler loop, the API server) is created through create_tracked_task()
so it can be listed, counted and cancelled at shutdown.

Failures of tracked tasks are logged when the task finishes, so an
animation run that dies is never silent.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Dict, Optional, List, Any

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TASK)


# ---------------------------------------------------------------------------
# TASK CATEGORY ENUM
# ---------------------------------------------------------------------------

class TaskCategory(Enum):
    """Logical grouping of asynchronous tasks."""
    API = auto()
    ANIMATION = auto()
    WEATHER = auto()
    SCHEDULER = auto()
    SYSTEM = auto()


# ---------------------------------------------------------------------------
# TASK METADATA
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaskInfo:
    """Immutable metadata captured at task creation time."""
    id: int
    category: TaskCategory
    description: str
    created_at: str  # ISO UTC string


@dataclass
class TaskRecord:
    """Internal structure tracking task state."""
    task: asyncio.Task
    info: TaskInfo
    cancelled: bool = False
    finished_with_error: Optional[BaseException] = None
    finished_at: Optional[str] = None

    @property
    def state(self) -> str:
        if not self.task.done():
            return "running"
        if self.cancelled:
            return "cancelled"
        if self.finished_with_error is not None:
            return "failed"
        return "done"


# ---------------------------------------------------------------------------
# TASK REGISTRY SINGLETON
# ---------------------------------------------------------------------------

class TaskRegistry:
    """
    Registry for all tracked asyncio tasks in the application.

    Finished records are kept up to `history_limit` so the status endpoint
    can report recent failures; running tasks are never evicted.
    """

    _instance: Optional["TaskRegistry"] = None

    def __init__(self, history_limit: int = 200) -> None:
        self._records: Dict[int, TaskRecord] = {}
        self._by_task: Dict[asyncio.Task, int] = {}
        self._next_id: int = 1
        self.history_limit = history_limit

    # -----------------------------
    # Singleton accessor
    # -----------------------------
    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton (tests)."""
        cls._instance = None

    # -----------------------------
    # Register new task
    # -----------------------------
    def register(self, task: asyncio.Task, category: TaskCategory, description: str) -> int:
        task_id = self._next_id
        self._next_id += 1

        info = TaskInfo(
            id=task_id,
            category=category,
            description=description,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self._records[task_id] = TaskRecord(task=task, info=info)
        self._by_task[task] = task_id

        log.debug(f"[Task {task_id}] Registered ({category.name}) - {description}")

        task.add_done_callback(self._on_task_done)
        self._evict_finished()
        return task_id

    # -----------------------------
    # Internal completion handler
    # -----------------------------
    def _on_task_done(self, task: asyncio.Task) -> None:
        task_id = self._by_task.pop(task, None)
        record = self._records.get(task_id) if task_id is not None else None
        if record is None:
            return

        record.finished_at = datetime.now(timezone.utc).isoformat()

        if task.cancelled():
            record.cancelled = True
            log.debug(f"[Task {task_id}] Cancelled")
            return

        exc = task.exception()
        if exc:
            record.finished_with_error = exc
            log.error(
                f"[Task {task_id}] FAILED: {exc!r}",
                description=record.info.description,
            )
        else:
            log.debug(f"[Task {task_id}] Completed")

    def _evict_finished(self) -> None:
        overflow = len(self._records) - self.history_limit
        if overflow <= 0:
            return
        for task_id in [tid for tid, r in self._records.items() if r.task.done()][:overflow]:
            del self._records[task_id]

    # -----------------------------
    # Public API
    # -----------------------------

    def list_all(self) -> List[TaskRecord]:
        return list(self._records.values())

    def active(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if not r.task.done()]

    def failed(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if r.finished_with_error is not None]

    def cancelled(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if r.cancelled]

    def summary(self) -> str:
        """Return human-readable summary for logs."""
        counts = self.summary_dict()
        return (
            f"Tasks: total={counts['total']}, running={counts['running']}, "
            f"failed={counts['failed']}, cancelled={counts['cancelled']}"
        )

    def summary_dict(self) -> Dict[str, Any]:
        by_category: Dict[str, int] = {}
        for r in self.active():
            by_category[r.info.category.name] = by_category.get(r.info.category.name, 0) + 1
        return {
            "total": len(self._records),
            "running": len(self.active()),
            "failed": len(self.failed()),
            "cancelled": len(self.cancelled()),
            "running_by_category": by_category,
        }

    # -----------------------------
    # Shutdown helpers
    # -----------------------------

    def get_tasks_for_shutdown(self, exclude: Optional[List[asyncio.Task]] = None) -> List[asyncio.Task]:
        """Return all tasks that should be cancelled during shutdown."""
        exclude = exclude or []
        tasks = [
            r.task for r in self._records.values()
            if not r.task.done() and r.task not in exclude
        ]
        log.debug(f"Shutdown: {len(tasks)} tasks to cancel")
        return tasks


# ---------------------------------------------------------------------------
# Convenience wrapper function
# ---------------------------------------------------------------------------

def create_tracked_task(
    coro,
    *,
    category: TaskCategory,
    description: str,
) -> asyncio.Task:
    """Create and register a task in a single call. Needs a running loop."""
    task = asyncio.get_running_loop().create_task(coro)
    TaskRegistry.instance().register(task=task, category=category, description=description)
    return task
