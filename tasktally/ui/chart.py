# -*- coding: utf-8 -*-

from typing import List, Sequence

from tasktally.core.durations import format_ms
from tasktally.domain.models import BreakdownEntry, Sector

PALETTE = (
    "#4F46E5",
    "#06B6D4",
    "#F59E0B",
    "#EF4444",
    "#10B981",
    "#8B5CF6",
    "#F472B6",
)

# 12 o'clock in Tk's angle convention
TOP_ANGLE = 90.0


def layout_sectors(
    breakdown: Sequence[BreakdownEntry], start_angle: float = TOP_ANGLE
) -> List[Sector]:
    """
    One sector per entry, proportional to its share of the total, laid out
    clockwise from start_angle. Extents are negative (Tk measures angles
    counter-clockwise).
    """
    total = sum(e.seconds for e in breakdown)
    if total <= 0:
        return []

    out: List[Sector] = []
    start = float(start_angle)
    for i, e in enumerate(breakdown):
        extent = -360.0 * e.seconds / total
        out.append(
            Sector(
                name=e.name,
                value=e.seconds,
                start=start,
                extent=extent,
                color=PALETTE[i % len(PALETTE)],
            )
        )
        start += extent
    return out


def legend_lines(breakdown: Sequence[BreakdownEntry]) -> List[str]:
    return [f"{e.name}: {e.seconds}s" for e in breakdown]


def center_label(breakdown: Sequence[BreakdownEntry]) -> str:
    return format_ms(sum(e.seconds for e in breakdown) * 1000)
