# services/task_service.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List, Optional

from tasktally.core.clock import Clock
from tasktally.domain.errors import InvalidName, NotFound, PersistenceFailure
from tasktally.domain.models import Task
from tasktally.storage.repos import SnapshotRepo

logger = logging.getLogger(__name__)

FIRST_ID = 1


class TaskService:
    """
    Owns the task collection and the id counter.

    - newest task first while the app is running
    - at most one task running at any time (starting one stops the others)
    - every mutation is persisted, then listeners are notified
    """

    def __init__(self, repo: SnapshotRepo, clock: Clock):
        self.repo = repo
        self.clock = clock

        self._tasks: List[Task] = []
        self._next_id = FIRST_ID

        self.last_persist_error: Optional[PersistenceFailure] = None
        self._on_change: Optional[Callable[[], None]] = None

    # ----- Callbacks -----
    def set_on_change(self, fn: Optional[Callable[[], None]]) -> None:
        self._on_change = fn

    def _emit_change(self) -> None:
        if self._on_change:
            self._on_change()

    # ----- Queries -----
    @property
    def next_id(self) -> int:
        return self._next_id

    def list_tasks(self) -> List[Task]:
        return [replace(t) for t in self._tasks]

    def get(self, task_id: int) -> Optional[Task]:
        t = self._find(task_id)
        return replace(t) if t else None

    def running_task(self) -> Optional[Task]:
        for t in self._tasks:
            if t.is_running:
                return replace(t)
        return None

    def _find(self, task_id: int) -> Optional[Task]:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    # ----- Mutations -----
    def create(self, name: str) -> int:
        name = (name or "").strip()
        if not name:
            raise InvalidName("Task name cannot be empty.")

        task = Task(id=self._next_id, name=name)
        self._next_id += 1
        self._tasks.insert(0, task)
        logger.info("Created task %d (%s)", task.id, name)

        self._persist()
        self._emit_change()
        return task.id

    def toggle(self, task_id: int) -> None:
        target = self._find(task_id)
        if target is None:
            raise NotFound(f"Task {task_id} not found.")

        now = self.clock.now()
        if target.is_running:
            self._close_interval(target, now)
            logger.info("Stopped task %d", target.id)
        else:
            target.running_since = now
            logger.info("Started task %d", target.id)

        for t in self._tasks:
            if t is not target and t.is_running:
                self._close_interval(t, now)
                logger.info("Stopped task %d (another task started)", t.id)

        self._persist()
        self._emit_change()

    def reset_all(self) -> None:
        self._tasks = []
        self._next_id = FIRST_ID
        logger.info("All tasks reset")

        self._persist()
        self._emit_change()

    def load(self) -> None:
        try:
            snapshot = self.repo.load()
        except PersistenceFailure:
            logger.warning("Stored snapshot unreadable, starting empty.", exc_info=True)
            snapshot = None

        if snapshot is None:
            self._tasks = []
            self._next_id = FIRST_ID
        else:
            stored, counter = snapshot
            tasks = self._drop_invalid(stored)
            # reloaded lists are shown in id order, unlike the live newest-first order
            tasks.sort(key=lambda t: t.id)
            self._tasks = tasks
            max_id = max((t.id for t in tasks), default=0)
            self._next_id = max(counter or FIRST_ID, max_id + 1)
            repaired = self._repair_running(tasks)
            if repaired or len(tasks) != len(stored) or counter != self._next_id:
                logger.info("Writing back repaired snapshot")
                self._persist()

        logger.info("Loaded %d task(s), next id %d", len(self._tasks), self._next_id)
        self._emit_change()

    # ----- Internals -----
    @staticmethod
    def _close_interval(task: Task, now: int) -> None:
        task.total += max(0, now - task.running_since)
        task.running_since = None

    @staticmethod
    def _drop_invalid(tasks: List[Task]) -> List[Task]:
        kept: List[Task] = []
        seen = set()
        for t in tasks:
            if not t.name.strip():
                logger.warning("Skipping stored task %d with a blank name", t.id)
                continue
            if t.id in seen:
                logger.warning("Skipping stored task with duplicate id %d", t.id)
                continue
            seen.add(t.id)
            kept.append(t)
        return kept

    def _repair_running(self, tasks: List[Task]) -> bool:
        running = [t for t in tasks if t.is_running]
        if len(running) <= 1:
            return False
        keep = max(running, key=lambda t: (t.running_since, t.id))
        for t in running:
            if t is not keep:
                self._close_interval(t, keep.running_since)
        logger.warning(
            "Snapshot had %d running tasks; kept task %d running", len(running), keep.id
        )
        return True

    def _persist(self) -> None:
        try:
            self.repo.save(self._tasks, self._next_id)
        except PersistenceFailure as e:
            # in-memory state is kept; the next successful write catches up
            self.last_persist_error = e
            logger.error("Saving tasks failed: %s", e)
        else:
            self.last_persist_error = None
