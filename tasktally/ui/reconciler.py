# -*- coding: utf-8 -*-

from bisect import bisect_left
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Protocol

from tasktally.core.durations import format_ms
from tasktally.domain.models import RowState, Task
from tasktally.services.stats_service import elapsed_of

ACTION_START = "start"
ACTION_STOP = "stop"


class RowContainer(Protocol):
    """Widget side of the task list. Handles are opaque to the reconciler."""

    def create_row(self, task_id: int) -> Any: ...

    def insert_row(self, handle: Any, index: int) -> None: ...

    def update_row(self, handle: Any, state: RowState) -> None: ...

    def remove_row(self, handle: Any) -> None: ...


@dataclass(frozen=True)
class RenderStats:
    created: int = 0
    updated: int = 0
    removed: int = 0


def row_state(task: Task, at: int) -> RowState:
    running = task.is_running
    return RowState(
        task_id=task.id,
        name=task.name,
        id_text=f"ID {task.id}",
        time_text=format_ms(elapsed_of(task, at)),
        running=running,
        action=ACTION_STOP if running else ACTION_START,
    )


class TaskListReconciler:
    """
    Keeps a container of rows in sync with the task list, keyed by task id.

    Rows are shown newest first (highest id on top). A row is created once
    per id and kept until that id disappears; existing rows are never
    recreated or moved, and only receive an update when their state changed.
    """

    def __init__(self, container: RowContainer):
        self.container = container
        self._handles: Dict[int, Any] = {}
        self._states: Dict[int, RowState] = {}
        # ascending ids of rendered rows; display order is the reverse
        self._order: List[int] = []

    def rendered_ids(self) -> List[int]:
        return list(reversed(self._order))

    def handle_for(self, task_id: int) -> Any:
        return self._handles.get(task_id)

    def render(self, tasks: Iterable[Task], at: int) -> RenderStats:
        created = updated = removed = 0
        seen = set()

        for t in tasks:
            seen.add(t.id)
            state = row_state(t, at)

            handle = self._handles.get(t.id)
            if handle is None:
                handle = self.container.create_row(t.id)
                pos = bisect_left(self._order, t.id)
                self.container.insert_row(handle, len(self._order) - pos)
                self._order.insert(pos, t.id)
                self._handles[t.id] = handle
                created += 1

            if self._states.get(t.id) != state:
                self.container.update_row(handle, state)
                self._states[t.id] = state
                updated += 1

        for task_id in [i for i in self._order if i not in seen]:
            self.container.remove_row(self._handles.pop(task_id))
            self._states.pop(task_id, None)
            self._order.remove(task_id)
            removed += 1

        return RenderStats(created=created, updated=updated, removed=removed)
