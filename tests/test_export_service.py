# tests/test_export_service.py

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import openpyxl
import pytest

from tasktally.domain.errors import ExportUnavailable
from tasktally.services.export_service import HEADER, ExportService, encode_csv, export_stamp


def _ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def test_rows_for_61_seconds(tasks, exporter, clock) -> None:
    tid = tasks.create("Reading")
    clock.set(0)
    tasks.toggle(tid)
    clock.set(61_000)
    tasks.toggle(tid)

    rows = exporter.to_rows()
    assert rows[0] == ["id", "name", "time_seconds", "time_hh:mm:ss"]
    assert rows[1] == [tid, "Reading", 61, "00:01:01"]


def test_rows_follow_collection_order_and_include_zero(tasks, exporter, clock) -> None:
    tasks.create("old")
    b = tasks.create("new")
    clock.set(0)
    tasks.toggle(b)
    clock.set(1_600)

    rows = exporter.to_rows()
    assert [r[0] for r in rows[1:]] == [2, 1]
    assert rows[1][2:] == [2, "00:00:02"]
    assert rows[2][2:] == [0, "00:00:00"]


def test_rows_use_a_single_timestamp(tasks, exporter, clock) -> None:
    tid = tasks.create("A")
    clock.set(0)
    tasks.toggle(tid)
    rows = exporter.to_rows(at=10_400)
    assert rows[1][2] == 10


def test_encode_csv_quotes_everything() -> None:
    text = encode_csv([list(HEADER), [1, 'say "hi", ok', 3, "00:00:03"]])
    assert text.splitlines() == [
        '"id","name","time_seconds","time_hh:mm:ss"',
        '"1","say ""hi"", ok","3","00:00:03"',
    ]
    assert not text.endswith("\n")


def test_export_stamp_is_filename_safe() -> None:
    ts = _ms(datetime(2026, 10, 18, 9, 5, 30, 789000, tzinfo=timezone.utc))
    assert export_stamp(ts) == "2026-10-18T09-05-30"


def test_export_csv_writes_file(tasks, exporter, clock, tmp_path: Path) -> None:
    clock.set(_ms(datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)))
    tasks.create("Plan")

    path = exporter.export_csv(tmp_path / "out")

    assert path.name == "timetracker_2026-01-02T03-04-05.csv"
    assert path.read_text(encoding="utf-8").splitlines() == [
        '"id","name","time_seconds","time_hh:mm:ss"',
        '"1","Plan","0","00:00:00"',
    ]


def test_export_xlsx_writes_single_tasks_sheet(tasks, exporter, clock, tmp_path: Path) -> None:
    clock.set(_ms(datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)))
    tid = tasks.create("Plan")
    tasks.toggle(tid)
    clock.advance(61_000)

    path = exporter.export_xlsx(tmp_path)

    assert path.name == "timetracker_2026-01-02T03-05-06.xlsx"
    wb = openpyxl.load_workbook(path)
    assert wb.sheetnames == ["Tasks"]
    values = [list(r) for r in wb["Tasks"].iter_rows(values_only=True)]
    assert values == [list(HEADER), [1, "Plan", 61, "00:01:01"]]


def test_export_xlsx_without_openpyxl(exporter, tmp_path: Path, monkeypatch) -> None:
    out = tmp_path / "exports"
    monkeypatch.setitem(sys.modules, "openpyxl", None)
    with pytest.raises(ExportUnavailable):
        exporter.export_xlsx(out)
    assert not out.exists()

    # csv path has no such dependency
    assert exporter.export_csv(out).exists()


def test_custom_prefix(stats, clock) -> None:
    clock.set(0)
    assert ExportService(stats, prefix="mytime").filename("csv") == "mytime_1970-01-01T00-00-00.csv"
