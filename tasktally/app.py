#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging

from tasktally.config import get_settings
from tasktally.core.clock import SystemClock
from tasktally.logging_setup import setup_logging
from tasktally.services.export_service import ExportService
from tasktally.services.stats_service import StatsService
from tasktally.services.task_service import TaskService
from tasktally.storage.db import Database
from tasktally.storage.repos import AppStateRepo, SnapshotRepo
from tasktally.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def main():
    settings = get_settings()

    console_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logger.info("Starting %s (db: %s)", settings.app_name, settings.db_path)

    db = Database(db_path=settings.db_path)
    db.init_schema()

    repo = SnapshotRepo(AppStateRepo(db, quota_bytes=settings.store_quota_bytes))
    clock = SystemClock()

    task_service = TaskService(repo, clock)
    task_service.load()
    stats_service = StatsService(task_service, clock)
    export_service = ExportService(stats_service, prefix=settings.export_prefix)

    app = MainWindow(
        task_service,
        stats_service,
        export_service,
        export_dir=settings.export_dir,
        tick_ms=settings.tick_ms,
    )
    try:
        app.run()
    finally:
        db.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
