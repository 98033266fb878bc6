# storage/repos.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import json
import logging
import sqlite3
from typing import List, Optional, Sequence, Tuple

from tasktally.domain.errors import PersistenceFailure
from tasktally.domain.models import Task
from tasktally.storage.db import Database

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
ID_COUNTER_KEY = "idCounter"
DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024


class AppStateRepo:
    """Key/value access to the app_state table with a size quota on writes."""

    def __init__(self, db: Database, quota_bytes: int = DEFAULT_QUOTA_BYTES):
        self.db = db
        self.quota_bytes = int(quota_bytes)

    def get(self, key: str) -> Optional[str]:
        try:
            row = self.db.conn.execute(
                "SELECT value FROM app_state WHERE key=?",
                (key,),
            ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceFailure(f"Cannot read '{key}': {e}") from e
        return row["value"] if row else None

    def set_many(self, items: Sequence[Tuple[str, str]]) -> None:
        size = sum(len(k) + len(v.encode("utf-8")) for k, v in items)
        if size > self.quota_bytes:
            raise PersistenceFailure(
                f"Snapshot of {size} bytes exceeds the {self.quota_bytes} byte quota."
            )
        try:
            with self.db.conn:
                self.db.conn.executemany(
                    """
                    INSERT INTO app_state(key, value) VALUES(?, ?)
                    ON CONFLICT(key) DO UPDATE SET value=excluded.value
                    """,
                    list(items),
                )
        except sqlite3.Error as e:
            raise PersistenceFailure(f"Cannot write snapshot: {e}") from e

    def set(self, key: str, value: str) -> None:
        self.set_many([(key, value)])

    def delete(self, key: str) -> None:
        try:
            with self.db.conn:
                self.db.conn.execute("DELETE FROM app_state WHERE key=?", (key,))
        except sqlite3.Error as e:
            raise PersistenceFailure(f"Cannot delete '{key}': {e}") from e


class SnapshotRepo:
    """
    Persists the task list and id counter under the `tasks` / `idCounter` keys.
    Task records use the {id, name, total, runningSince} shape.
    """

    def __init__(self, state: AppStateRepo):
        self.state = state

    def save(self, tasks: List[Task], id_counter: int) -> None:
        payload = json.dumps([t.to_record() for t in tasks], ensure_ascii=False)
        self.state.set_many([(TASKS_KEY, payload), (ID_COUNTER_KEY, str(int(id_counter)))])
        logger.debug("Saved %d task(s), idCounter=%d", len(tasks), id_counter)

    def load(self) -> Optional[Tuple[List[Task], Optional[int]]]:
        """
        Returns None when nothing was ever saved.
        Raises PersistenceFailure when the stored data cannot be decoded.
        """
        raw_tasks = self.state.get(TASKS_KEY)
        raw_counter = self.state.get(ID_COUNTER_KEY)
        if raw_tasks is None and raw_counter is None:
            return None

        tasks: List[Task] = []
        if raw_tasks:
            try:
                records = json.loads(raw_tasks)
                if not isinstance(records, list):
                    raise TypeError(f"expected a list, got {type(records).__name__}")
                tasks = [Task.from_record(r) for r in records]
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                raise PersistenceFailure(f"Malformed '{TASKS_KEY}' entry: {e}") from e

        counter: Optional[int] = None
        if raw_counter:
            try:
                counter = int(raw_counter)
            except ValueError as e:
                raise PersistenceFailure(f"Malformed '{ID_COUNTER_KEY}' entry: {e}") from e

        return tasks, counter
