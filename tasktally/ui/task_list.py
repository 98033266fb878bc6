# -*- coding: utf-8 -*-

import tkinter as tk
from typing import Callable, List

from tasktally.domain.models import RowState

BG = "#F4F6FA"
PANEL = "#FFFFFF"
ACTIVE = "#ECFDF5"
BORDER = "#E6EAF2"
TEXT = "#111827"
MUTED = "#6B7280"
GREEN = "#10B981"
DANGER = "#EF4444"


class _TaskRow:
    def __init__(self, master, task_id: int, on_toggle: Callable[[int], None]):
        self.task_id = task_id

        self.frame = tk.Frame(
            master, bg=PANEL, highlightthickness=1, highlightbackground=BORDER
        )

        left = tk.Frame(self.frame, bg=PANEL)
        left.pack(side="left", fill="x", expand=True, padx=10, pady=8)
        self.title = tk.Label(
            left, bg=PANEL, fg=TEXT, font=("Montserrat", 11, "bold"), anchor="w"
        )
        self.title.pack(fill="x")
        self.time = tk.Label(
            left, bg=PANEL, fg=MUTED, font=("Montserrat", 10), anchor="w"
        )
        self.time.pack(fill="x")

        right = tk.Frame(self.frame, bg=PANEL)
        right.pack(side="right", padx=10)
        self.id_label = tk.Label(right, bg=PANEL, fg=MUTED, font=("Montserrat", 9))
        self.id_label.pack(side="left", padx=(0, 8))
        self.button = tk.Button(
            right,
            width=6,
            relief="flat",
            fg="#FFFFFF",
            command=lambda: on_toggle(self.task_id),
        )
        self.button.pack(side="left")

    def apply(self, state: RowState) -> None:
        bg = ACTIVE if state.running else PANEL
        for w in (self.frame, self.title, self.time, self.id_label):
            w.config(bg=bg)
        for w in self.frame.winfo_children():
            w.config(bg=bg)
        self.title.config(text=state.name)
        self.time.config(text=state.time_text)
        self.id_label.config(text=state.id_text)
        self.button.config(
            text=state.action.capitalize(),
            bg=DANGER if state.running else GREEN,
        )


class TaskListFrame(tk.Frame):
    """Row container for TaskListReconciler; rows are packed top to bottom."""

    def __init__(self, master, on_toggle: Callable[[int], None]):
        super().__init__(master, bg=BG)
        self.on_toggle = on_toggle
        self._rows: List[_TaskRow] = []

    def create_row(self, task_id: int) -> _TaskRow:
        return _TaskRow(self, task_id, self.on_toggle)

    def insert_row(self, handle: _TaskRow, index: int) -> None:
        if index < len(self._rows):
            handle.frame.pack(fill="x", pady=(0, 6), before=self._rows[index].frame)
        else:
            handle.frame.pack(fill="x", pady=(0, 6))
        self._rows.insert(index, handle)

    def update_row(self, handle: _TaskRow, state: RowState) -> None:
        handle.apply(state)

    def remove_row(self, handle: _TaskRow) -> None:
        self._rows.remove(handle)
        handle.frame.destroy()

    def row_count(self) -> int:
        return len(self._rows)
