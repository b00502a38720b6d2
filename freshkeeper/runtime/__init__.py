"""Runtime infrastructure for FreshKeeper.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Scan settings via load_scan_settings()

Usage:
    from freshkeeper.runtime import get_logger, get_paths

    logger = get_logger(__name__)
    paths = get_paths()
    print(paths.root, paths.pantry)
"""

from freshkeeper.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from freshkeeper.runtime.paths import (
    ProjectPaths,
    get_paths,
    reset_paths,
    set_project_root,
)
from freshkeeper.runtime.scan_settings import load_scan_settings

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Settings
    "load_scan_settings",
    # Paths
    "get_paths",
    "set_project_root",
    "reset_paths",
    "ProjectPaths",
]
