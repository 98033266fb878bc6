# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Tuple

import pytest

from tasktally.domain.models import RowState
from tasktally.services.export_service import ExportService
from tasktally.services.stats_service import StatsService
from tasktally.services.task_service import TaskService
from tasktally.storage.db import Database
from tasktally.storage.repos import AppStateRepo, SnapshotRepo


class FakeClock:
    """Manually driven clock (epoch ms)."""

    def __init__(self, start: int = 0) -> None:
        self.ts = start

    def now(self) -> int:
        return self.ts

    def set(self, ts: int) -> None:
        self.ts = ts

    def advance(self, ms: int) -> None:
        self.ts += ms


class FakeRow:
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        self.state: RowState | None = None


class FakeContainer:
    """
    In-memory RowContainer that records every call, so tests can assert
    on node identity and on how much work a render did.
    """

    def __init__(self) -> None:
        self.rows: List[FakeRow] = []
        self.calls: List[Tuple[str, Any]] = []

    def create_row(self, task_id: int) -> FakeRow:
        self.calls.append(("create", task_id))
        return FakeRow(task_id)

    def insert_row(self, handle: FakeRow, index: int) -> None:
        self.calls.append(("insert", (handle.task_id, index)))
        self.rows.insert(index, handle)

    def update_row(self, handle: FakeRow, state: RowState) -> None:
        self.calls.append(("update", handle.task_id))
        handle.state = state

    def remove_row(self, handle: FakeRow) -> None:
        self.calls.append(("remove", handle.task_id))
        self.rows.remove(handle)

    def ids(self) -> List[int]:
        return [r.task_id for r in self.rows]


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def db(tmp_path: Path):
    database = Database(tmp_path / "tasktally.db")
    database.init_schema()
    yield database
    database.close()


@pytest.fixture()
def state_repo(db: Database) -> AppStateRepo:
    return AppStateRepo(db)


@pytest.fixture()
def repo(state_repo: AppStateRepo) -> SnapshotRepo:
    return SnapshotRepo(state_repo)


@pytest.fixture()
def tasks(repo: SnapshotRepo, clock: FakeClock) -> TaskService:
    service = TaskService(repo, clock)
    service.load()
    return service


@pytest.fixture()
def stats(tasks: TaskService, clock: FakeClock) -> StatsService:
    return StatsService(tasks, clock)


@pytest.fixture()
def exporter(stats: StatsService) -> ExportService:
    return ExportService(stats)


@pytest.fixture()
def container() -> FakeContainer:
    return FakeContainer()
