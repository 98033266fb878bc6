#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging
import sqlite3
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, db_path: Union[str, Path] = "tasktally.db"):
        self.db_path = str(db_path)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row

    def init_schema(self):
        cur = self.conn.cursor()

        # snapshot lives as plain key/value pairs
        cur.execute("""
            CREATE TABLE IF NOT EXISTS app_state (
                key TEXT PRIMARY KEY,
                value TEXT
            );
        """)

        self.conn.commit()
        logger.debug("Schema ready at %s", self.db_path)

    def close(self):
        try:
            self.conn.close()
        except sqlite3.Error:
            logger.debug("Database close failed.", exc_info=True)
