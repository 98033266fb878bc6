# -*- coding: utf-8 -*-

import csv
import io
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from tasktally.core.durations import format_ms, round_seconds
from tasktally.domain.errors import ExportUnavailable
from tasktally.domain.models import ExportRow
from tasktally.services.stats_service import StatsService, elapsed_of

logger = logging.getLogger(__name__)

HEADER = ("id", "name", "time_seconds", "time_hh:mm:ss")
SHEET_NAME = "Tasks"
DEFAULT_PREFIX = "timetracker"


def export_stamp(ms: int) -> str:
    """UTC instant truncated to seconds, filename safe: 2026-10-18T09-05-30."""
    dt = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S").replace(":", "-")


def encode_csv(rows: Sequence[Sequence[Any]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(rows)
    return buf.getvalue().rstrip("\n")


def _load_openpyxl():
    try:
        import openpyxl
    except ImportError as e:
        raise ExportUnavailable(
            "openpyxl is not installed, spreadsheet export is unavailable."
        ) from e
    return openpyxl


class ExportService:
    def __init__(self, stats_service: StatsService, prefix: str = DEFAULT_PREFIX):
        self.stats = stats_service
        self.prefix = prefix

    def export_rows(self, at: Optional[int] = None) -> List[ExportRow]:
        snap = self.stats.snapshot(at)
        out: List[ExportRow] = []
        for t in snap.tasks:
            secs = round_seconds(elapsed_of(t, snap.at))
            out.append(ExportRow(id=t.id, name=t.name, seconds=secs, hms=format_ms(secs * 1000)))
        return out

    def to_rows(self, at: Optional[int] = None) -> List[List[Any]]:
        """Header row first, then one row per task in collection order."""
        return [list(HEADER)] + [r.as_list() for r in self.export_rows(at)]

    def filename(self, ext: str, at: Optional[int] = None) -> str:
        ts = self.stats.clock.now() if at is None else at
        return f"{self.prefix}_{export_stamp(ts)}.{ext}"

    def export_csv(self, directory: Union[str, Path]) -> Path:
        at = self.stats.clock.now()
        path = Path(directory) / self.filename("csv", at)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(encode_csv(self.to_rows(at)), encoding="utf-8")
        logger.info("Exported CSV to %s", path)
        return path

    def export_xlsx(self, directory: Union[str, Path]) -> Path:
        openpyxl = _load_openpyxl()
        at = self.stats.clock.now()
        path = Path(directory) / self.filename("xlsx", at)
        path.parent.mkdir(parents=True, exist_ok=True)

        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = SHEET_NAME
        for row in self.to_rows(at):
            ws.append(row)
        wb.save(path)
        wb.close()
        logger.info("Exported XLSX to %s", path)
        return path
