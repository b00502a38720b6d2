"""Tests for logger naming and path resolution."""

from __future__ import annotations

import logging
from pathlib import Path

from _pytest.monkeypatch import MonkeyPatch
from freshkeeper.runtime.logging import LOGGER_NAMESPACE, _level_from_env, get_logger, set_log_level
from freshkeeper.runtime.paths import get_paths, reset_paths


def test_package_loggers_keep_their_name() -> None:
    assert get_logger("freshkeeper.label.label_parser").name == "freshkeeper.label.label_parser"


def test_foreign_loggers_are_nested_under_namespace() -> None:
    assert get_logger("scripts.import_labels").name == f"{LOGGER_NAMESPACE}.scripts.import_labels"


def test_log_level_env_names(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv("FRESHKEEPER_LOG_LEVEL", " debug ")
    assert _level_from_env() == logging.DEBUG

    monkeypatch.setenv("FRESHKEEPER_LOG_LEVEL", "warn")
    assert _level_from_env() == logging.WARNING

    monkeypatch.setenv("FRESHKEEPER_LOG_LEVEL", "chatty")
    assert _level_from_env() == logging.INFO

    monkeypatch.delenv("FRESHKEEPER_LOG_LEVEL")
    assert _level_from_env() == logging.INFO


def test_set_log_level_switches_handler_format() -> None:
    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    previous = namespace_logger.level
    try:
        set_log_level(logging.DEBUG)
        assert all("%(lineno)d" in h.formatter._fmt for h in namespace_logger.handlers if h.formatter)
        set_log_level(logging.INFO)
        assert all("%(lineno)d" not in h.formatter._fmt for h in namespace_logger.handlers if h.formatter)
    finally:
        set_log_level(previous)


def test_freshkeeper_home_env_sets_project_root(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv("FRESHKEEPER_HOME", str(tmp_path / "home"))
    reset_paths()

    paths = get_paths()

    assert paths.root == (tmp_path / "home").resolve()
    assert paths.pantry == paths.root / "data" / "pantry.json"
    assert paths.scan_settings == paths.root / "config" / "scan_settings.toml"


def test_ensure_data_directories(tmp_path: Path) -> None:
    paths = get_paths()

    paths.ensure_data_directories()

    assert paths.labels_ocr_text.is_dir()
    assert paths.root == tmp_path.resolve()
