"""
Mission board — in-memory tasks broken into point-carrying subtasks.
"""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SubTask:
    id: str
    title: str
    points: int
    completed: bool = False
    rewarded: bool = False     # points are paid once per subtask


@dataclass
class Task:
    id: str
    title: str
    subtasks: List[SubTask] = field(default_factory=list)
    created_at: float = field(default_factory=time.time)

    @property
    def points(self) -> int:
        return sum(s.points for s in self.subtasks)

    @property
    def completed(self) -> bool:
        return bool(self.subtasks) and all(s.completed for s in self.subtasks)


class TaskBoard:

    def __init__(self):
        self._tasks: List[Task] = []
        self._ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Board management
    # ------------------------------------------------------------------

    def add_task(self, title: str, subtasks: List[tuple]) -> Task:
        """subtasks: [(title, points), ...]. Newest tasks go first."""
        task_id = f"task-{next(self._ids)}"
        task = Task(
            id=task_id,
            title=title,
            subtasks=[
                SubTask(id=f"{task_id}-sub-{i}", title=t, points=max(0, int(p)))
                for i, (t, p) in enumerate(subtasks)
            ],
        )
        self._tasks.insert(0, task)
        return task

    def remove_task(self, task_id: str) -> bool:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        return len(self._tasks) < before

    def get(self, task_id: str) -> Task:
        task = self._find(task_id)
        if task is None:
            raise KeyError(task_id)
        return task

    def all_tasks(self) -> List[Task]:
        return list(self._tasks)

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    def toggle_subtask(self, task_id: str, subtask_id: str) -> int:
        """Flip a subtask's completion. Returns the points earned by this toggle."""
        task = self.get(task_id)
        for sub in task.subtasks:
            if sub.id == subtask_id:
                sub.completed = not sub.completed
                if sub.completed and not sub.rewarded:
                    sub.rewarded = True
                    return sub.points
                return 0
        raise KeyError(subtask_id)

    def _find(self, task_id: str) -> Optional[Task]:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None
