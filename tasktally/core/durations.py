# -*- coding: utf-8 -*-

import math


def round_seconds(ms: int) -> int:
    # half-up, so 1500 ms -> 2 and 2500 ms -> 3 (no banker's rounding)
    return int(math.floor(ms / 1000 + 0.5))


def format_ms(ms: int) -> str:
    """HH:MM:SS, hours are not wrapped at 24."""
    ms = max(0, int(ms))
    sec = ms // 1000
    h = sec // 3600
    m = (sec % 3600) // 60
    s = sec % 60
    return f"{h:02d}:{m:02d}:{s:02d}"
