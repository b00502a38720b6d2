"""Runtime loader for label scanning settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from freshkeeper.label.settings import DEFAULT_SCAN_SETTINGS, ScanSettings, build_scan_settings
from freshkeeper.runtime.logging import get_logger
from freshkeeper.runtime.paths import get_paths

logger = get_logger(__name__)


@lru_cache(maxsize=4)
def load_scan_settings(config_path: str | None = None) -> ScanSettings:
    """
    Load scan settings from the ``[scan]`` table of scan_settings.toml.

    Args:
        config_path: Optional TOML path override. If None, uses default project path.

    Returns:
        ScanSettings; defaults when the file does not exist.
    """
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    path = Path(config_path) if config_path is not None else get_paths().scan_settings
    if not path.exists():
        logger.debug("Scan settings not found at %s, using defaults", path)
        return DEFAULT_SCAN_SETTINGS

    with open(path, "rb") as f:
        config = tomllib.load(f)

    table = config.get("scan", {})
    if not isinstance(table, dict):
        raise ValueError(f"[scan] in {path} must be a table")

    settings = build_scan_settings(table)
    logger.debug("Loaded scan settings from %s: %s", path, settings)
    return settings
