# -*- coding: utf-8 -*-

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class Task:
    id: int
    name: str
    total: int = 0  # ms of closed intervals
    running_since: Optional[int] = None  # epoch ms, None when idle

    @property
    def is_running(self) -> bool:
        return self.running_since is not None

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "total": self.total,
            "runningSince": self.running_since,
        }

    @classmethod
    def from_record(cls, raw: Dict[str, Any]) -> "Task":
        since = raw.get("runningSince")
        return cls(
            id=int(raw["id"]),
            name=str(raw["name"]),
            total=max(0, int(raw.get("total") or 0)),
            running_since=int(since) if since is not None else None,
        )


@dataclass(frozen=True)
class BreakdownEntry:
    name: str
    seconds: int


@dataclass(frozen=True)
class ExportRow:
    id: int
    name: str
    seconds: int
    hms: str

    def as_list(self) -> List[Any]:
        return [self.id, self.name, self.seconds, self.hms]


@dataclass(frozen=True)
class RowState:
    task_id: int
    name: str
    id_text: str
    time_text: str
    running: bool
    action: str  # "start" | "stop"


@dataclass(frozen=True)
class Sector:
    name: str
    value: int
    start: float  # degrees, Tk convention (counter-clockwise from 3 o'clock)
    extent: float
    color: str
