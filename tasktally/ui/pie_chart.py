# -*- coding: utf-8 -*-

import tkinter as tk
from typing import List, Sequence

from tasktally.domain.models import BreakdownEntry
from tasktally.ui.chart import center_label, layout_sectors, legend_lines

PANEL = "#FFFFFF"
PLACEHOLDER_BG = "#F3F4F6"
PLACEHOLDER_FG = "#9CA3AF"
TEXT = "#111827"

# Tk refuses a full-turn arc, so a single slice is drawn just short of it
_MAX_EXTENT = 359.999


class PieChart(tk.Frame):
    """Donut chart of the breakdown plus a name/seconds legend."""

    def __init__(self, master, size: int = 220):
        super().__init__(master, bg=PANEL)
        self.canvas = tk.Canvas(
            self, width=size, height=size, bg=PANEL, highlightthickness=0
        )
        self.canvas.pack(fill="both", expand=True)
        self.legend = tk.Frame(self, bg=PANEL)
        self.legend.pack(fill="x", pady=(8, 0))

        self._last: List[BreakdownEntry] = []
        self.canvas.bind("<Configure>", lambda e: self.draw(self._last))

    def draw(self, breakdown: Sequence[BreakdownEntry]) -> None:
        self._last = list(breakdown)
        c = self.canvas
        c.delete("all")
        for w in self.legend.winfo_children():
            w.destroy()

        w = max(1, c.winfo_width())
        h = max(1, c.winfo_height())

        sectors = layout_sectors(self._last)
        if not sectors:
            c.create_rectangle(0, 0, w, h, fill=PLACEHOLDER_BG, outline="")
            c.create_text(
                w / 2,
                h / 2,
                text="No data",
                fill=PLACEHOLDER_FG,
                font=("Montserrat", 10),
            )
            return

        cx, cy = w / 2, h / 2
        r = min(w, h) / 3
        for s in sectors:
            extent = max(-_MAX_EXTENT, min(_MAX_EXTENT, s.extent))
            c.create_arc(
                cx - r,
                cy - r,
                cx + r,
                cy + r,
                start=s.start,
                extent=extent,
                fill=s.color,
                outline="",
                style="pieslice",
            )

        # donut hole
        hole = r * 0.5
        c.create_oval(cx - hole, cy - hole, cx + hole, cy + hole, fill=PANEL, outline="")
        c.create_text(
            cx, cy, text=center_label(self._last), fill=TEXT, font=("Montserrat", 10)
        )

        for s, line in zip(sectors, legend_lines(self._last)):
            item = tk.Frame(self.legend, bg=PANEL)
            item.pack(anchor="w")
            tk.Frame(item, bg=s.color, width=12, height=12).pack(side="left", padx=(0, 6))
            tk.Label(item, text=line, bg=PANEL, fg=TEXT, font=("Montserrat", 9)).pack(
                side="left"
            )
