# -*- coding: utf-8 -*-

import logging
import tkinter as tk
from pathlib import Path
from tkinter import messagebox

from tasktally.core.durations import format_ms
from tasktally.domain.errors import ExportUnavailable, InvalidName, NotFound
from tasktally.services.export_service import ExportService
from tasktally.services.stats_service import StatsService
from tasktally.services.task_service import TaskService
from tasktally.ui.pie_chart import PieChart
from tasktally.ui.reconciler import TaskListReconciler
from tasktally.ui.task_list import TaskListFrame

logger = logging.getLogger(__name__)


class MainWindow:
    def __init__(
        self,
        task_service: TaskService,
        stats_service: StatsService,
        export_service: ExportService,
        export_dir: Path,
        tick_ms: int = 1000,
        title: str = "Time Tracker",
    ):
        self.task_service = task_service
        self.stats_service = stats_service
        self.export_service = export_service
        self.export_dir = Path(export_dir)
        self.tick_ms = int(tick_ms)

        self.root = tk.Tk()
        self.root.title(title)
        self.root.geometry("900x560")

        self.bg = "#F4F6FA"
        self.panel = "#FFFFFF"
        self.border = "#E6EAF2"
        self.text = "#111827"
        self.muted = "#6B7280"
        self.blue = "#3B82F6"
        self.graybtn = "#EEF2F7"
        self.danger = "#EF4444"
        self.root.configure(bg=self.bg)

        self._tick_job = None
        self._persist_error_shown = False

        self._build_ui()
        self.reconciler = TaskListReconciler(self.task_list)

        self.task_service.set_on_change(self._render)
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

        self._render()
        self._ensure_tick_loop()

    # ---------- UI ----------
    def _build_ui(self):
        top = tk.Frame(self.root, bg=self.bg)
        top.pack(fill="x", padx=18, pady=(16, 10))

        tk.Label(
            top,
            text="Time Tracker",
            bg=self.bg,
            fg=self.text,
            font=("Montserrat", 18, "bold"),
        ).pack(side="left")

        self.total_label = tk.Label(
            top, text="Total: 00:00:00", bg=self.bg, fg=self.muted, font=("Montserrat", 10)
        )
        self.total_label.pack(side="left", padx=(14, 0))

        actions = tk.Frame(top, bg=self.bg)
        actions.pack(side="right")
        for text, cmd in (
            ("Export CSV", self._export_csv),
            ("Export XLSX", self._export_xlsx),
        ):
            tk.Button(
                actions, text=text, relief="flat", bg=self.graybtn, command=cmd
            ).pack(side="left", padx=(0, 6))
        tk.Button(
            actions,
            text="Reset",
            relief="flat",
            bg=self.danger,
            fg="#FFFFFF",
            command=self._reset_all,
        ).pack(side="left")

        body = tk.Frame(self.root, bg=self.bg)
        body.pack(fill="both", expand=True, padx=18, pady=(0, 16))
        body.columnconfigure(0, weight=3)
        body.columnconfigure(1, weight=2)
        body.rowconfigure(0, weight=1)

        # LEFT: entry + task rows
        left = tk.Frame(body, bg=self.bg)
        left.grid(row=0, column=0, sticky="nsew", padx=(0, 12))

        add_row = tk.Frame(left, bg=self.bg)
        add_row.pack(fill="x", pady=(0, 10))
        self.task_entry = tk.Entry(
            add_row,
            font=("Montserrat", 11),
            relief="flat",
            highlightthickness=1,
            highlightbackground=self.border,
        )
        self.task_entry.pack(side="left", fill="x", expand=True, ipady=4)
        self.task_entry.bind("<Return>", lambda e: self._add_task())
        self.task_entry.bind("<KeyRelease>", lambda e: self._update_add_button())
        self.add_btn = tk.Button(
            add_row, text="Add", relief="flat", bg=self.graybtn, command=self._add_task
        )
        self.add_btn.pack(side="left", padx=(6, 0))

        self.empty_hint = tk.Label(
            left,
            text="No tasks yet. Type a name and press Enter.",
            bg=self.bg,
            fg=self.muted,
            font=("Montserrat", 10),
        )

        self.task_list = TaskListFrame(left, on_toggle=self._toggle)
        self.task_list.pack(fill="both", expand=True)

        self.status_label = tk.Label(
            left, text="", bg=self.bg, fg=self.danger, font=("Montserrat", 9), anchor="w"
        )
        self.status_label.pack(fill="x", side="bottom")

        # RIGHT: chart
        right = tk.Frame(
            body, bg=self.panel, highlightthickness=1, highlightbackground=self.border
        )
        right.grid(row=0, column=1, sticky="nsew")
        self.chart = PieChart(right)
        self.chart.pack(fill="both", expand=True, padx=10, pady=10)

    def _update_add_button(self):
        has_text = bool(self.task_entry.get().strip())
        self.add_btn.config(
            bg=self.blue if has_text else self.graybtn,
            fg="#FFFFFF" if has_text else self.text,
        )

    def run(self):
        self.root.mainloop()

    # ---------- actions ----------
    def _add_task(self):
        try:
            self.task_service.create(self.task_entry.get())
        except InvalidName:
            return
        self.task_entry.delete(0, tk.END)
        self._update_add_button()

    def _toggle(self, task_id: int):
        try:
            self.task_service.toggle(task_id)
        except NotFound:
            logger.warning("Toggle for unknown task %s ignored", task_id)

    def _reset_all(self):
        ok = messagebox.askyesno("Reset everything?", "Reset all tasks and statistics?")
        if not ok:
            return
        self.task_service.reset_all()

    def _export_csv(self):
        try:
            path = self.export_service.export_csv(self.export_dir)
        except OSError as e:
            self._export_failed(e)
            return
        self.status_label.config(text=f"Saved {path}", fg=self.muted)

    def _export_xlsx(self):
        try:
            path = self.export_service.export_xlsx(self.export_dir)
        except ExportUnavailable as e:
            messagebox.showerror("Export unavailable", str(e))
            return
        except OSError as e:
            self._export_failed(e)
            return
        self.status_label.config(text=f"Saved {path}", fg=self.muted)

    def _export_failed(self, e: OSError):
        logger.error("Export to %s failed: %s", self.export_dir, e)
        self.status_label.config(text=f"Export failed: {e}", fg=self.danger)

    # ---------- render ----------
    def _render(self):
        snap = self.stats_service.snapshot()
        self.reconciler.render(snap.tasks, snap.at)

        if snap.tasks:
            self.empty_hint.pack_forget()
        else:
            self.empty_hint.pack(before=self.task_list, anchor="w", pady=(0, 8))

        self.total_label.config(text=f"Total: {format_ms(snap.total_ms)}")
        self.chart.draw(snap.breakdown)

        err = self.task_service.last_persist_error
        if err is not None:
            self.status_label.config(text=f"Not saved: {err}", fg=self.danger)
            self._persist_error_shown = True
        elif self._persist_error_shown:
            self.status_label.config(text="")
            self._persist_error_shown = False

    # ---- Tick loop ----
    def _ensure_tick_loop(self):
        if self._tick_job is None:
            self._tick_job = self.root.after(self.tick_ms, self._tick_once)

    def _tick_once(self):
        self._tick_job = None
        self._render()
        self._tick_job = self.root.after(self.tick_ms, self._tick_once)

    def _stop_tick_loop(self):
        if self._tick_job is not None:
            self.root.after_cancel(self._tick_job)
            self._tick_job = None

    def _on_close(self):
        self._stop_tick_loop()
        self.task_service.set_on_change(None)
        self.root.destroy()
