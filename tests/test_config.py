# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasktally.config import DEFAULT_QUOTA_BYTES, DEFAULT_TICK_MS, Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in (
        "APP_NAME",
        "LOG_LEVEL",
        "DATA_DIR",
        "DB_PATH",
        "EXPORT_DIR",
        "EXPORT_PREFIX",
        "TICK_MS",
        "STORE_QUOTA_BYTES",
    ):
        monkeypatch.delenv(f"TASKTALLY_{name}", raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s.app_name == "tasktally"
    assert s.log_level == "INFO"
    assert s.data_dir == Path(".local/tasktally")
    assert s.db_path == Path(".local/tasktally/tasktally.db")
    assert s.export_dir == Path(".local/tasktally/exports")
    assert s.export_prefix == "timetracker"
    assert s.tick_ms == DEFAULT_TICK_MS
    assert s.store_quota_bytes == DEFAULT_QUOTA_BYTES


def test_paths_follow_data_dir(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKTALLY_DATA_DIR", str(tmp_path))
    s = Settings.from_env()
    assert s.db_path == tmp_path / "tasktally.db"
    assert s.export_dir == tmp_path / "exports"


def test_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKTALLY_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("TASKTALLY_EXPORT_PREFIX", "hours")
    monkeypatch.setenv("TASKTALLY_TICK_MS", "250")
    monkeypatch.setenv("TASKTALLY_STORE_QUOTA_BYTES", "1024")
    s = Settings.from_env()
    assert s.db_path == tmp_path / "x.db"
    assert s.export_prefix == "hours"
    assert s.tick_ms == 250
    assert s.store_quota_bytes == 1024


@pytest.mark.parametrize("raw", ["abc", "0", "-5", ""])
def test_bad_numbers_fall_back(monkeypatch, raw: str) -> None:
    monkeypatch.setenv("TASKTALLY_TICK_MS", raw)
    monkeypatch.setenv("TASKTALLY_STORE_QUOTA_BYTES", raw)
    s = Settings.from_env()
    assert s.tick_ms == DEFAULT_TICK_MS
    assert s.store_quota_bytes == DEFAULT_QUOTA_BYTES
