# -*- coding: utf-8 -*-

from dataclasses import dataclass
from typing import List, Optional

from tasktally.core.clock import Clock
from tasktally.core.durations import round_seconds
from tasktally.domain.models import BreakdownEntry, Task
from tasktally.services.task_service import TaskService


def elapsed_of(task: Task, at: int) -> int:
    extra = at - task.running_since if task.running_since is not None else 0
    return task.total + extra


def breakdown_of(tasks: List[Task], at: int) -> List[BreakdownEntry]:
    out: List[BreakdownEntry] = []
    for t in tasks:
        secs = round_seconds(elapsed_of(t, at))
        if secs > 0:
            out.append(BreakdownEntry(name=t.name, seconds=secs))
    return out


@dataclass(frozen=True)
class StatsSnapshot:
    at: int
    tasks: List[Task]
    total_ms: int
    breakdown: List[BreakdownEntry]


class StatsService:
    """Read-only totals derived from the task collection at a given instant."""

    def __init__(self, task_service: TaskService, clock: Clock):
        self.task_service = task_service
        self.clock = clock

    def _at(self, at: Optional[int]) -> int:
        return self.clock.now() if at is None else int(at)

    def elapsed_of(self, task: Task, at: Optional[int] = None) -> int:
        return elapsed_of(task, self._at(at))

    def total_all(self, at: Optional[int] = None) -> int:
        ts = self._at(at)
        return sum(elapsed_of(t, ts) for t in self.task_service.list_tasks())

    def breakdown(self, at: Optional[int] = None) -> List[BreakdownEntry]:
        return breakdown_of(self.task_service.list_tasks(), self._at(at))

    def snapshot(self, at: Optional[int] = None) -> StatsSnapshot:
        ts = self._at(at)
        tasks = self.task_service.list_tasks()
        return StatsSnapshot(
            at=ts,
            tasks=tasks,
            total_ms=sum(elapsed_of(t, ts) for t in tasks),
            breakdown=breakdown_of(tasks, ts),
        )
