"""Shared pytest fixtures for FreshKeeper tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from freshkeeper.runtime.nutrition_client import clear_nutrition_cache
from freshkeeper.runtime.paths import ProjectPaths, reset_paths, set_project_root
from freshkeeper.runtime.scan_settings import load_scan_settings


@pytest.fixture(autouse=True)
def project_home(tmp_path: Path) -> Iterator[ProjectPaths]:
    """Point every test at an empty project home so no real pantry is touched."""
    paths = set_project_root(tmp_path)
    load_scan_settings.cache_clear()
    clear_nutrition_cache()
    yield paths
    reset_paths()
    load_scan_settings.cache_clear()
    clear_nutrition_cache()
