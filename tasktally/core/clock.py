# -*- coding: utf-8 -*-

import time
from typing import Optional, Protocol


def _now_ms() -> int:
    return int(time.time() * 1000)


class Clock(Protocol):
    def now(self) -> int: ...


class SystemClock:
    """
    Wall clock in epoch milliseconds.
    Readings never go backwards, even if the system time is adjusted.
    """

    def __init__(self):
        self._last: Optional[int] = None

    def now(self) -> int:
        ts = _now_ms()
        if self._last is not None and ts < self._last:
            ts = self._last
        self._last = ts
        return ts
