"""Centralized path management for FreshKeeper.

All on-disk locations (configuration, pantry data, scanned label images,
raw OCR text) are derived from one project home directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Determine the project home directory."""
    env_home = os.environ.get("FRESHKEEPER_HOME", "").strip()
    if env_home:
        return Path(env_home).expanduser()
    # freshkeeper/runtime/paths.py -> freshkeeper/runtime -> freshkeeper -> project root
    return Path(__file__).parent.parent.parent


@dataclass
class ProjectPaths:
    """Container for all project-related paths."""

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def scan_settings(self) -> Path:
        """Label scanning tunables TOML file."""
        return self.config / "scan_settings.toml"

    # --- Data paths ---
    @property
    def data(self) -> Path:
        """Data directory (data/)."""
        return self.root / "data"

    @property
    def pantry(self) -> Path:
        """Pantry item store (JSON)."""
        return self.data / "pantry.json"

    # --- Label scan paths ---
    @property
    def labels(self) -> Path:
        """Root directory for uploaded label photos."""
        return self.data / "labels"

    @property
    def labels_ocr_text(self) -> Path:
        """Merged OCR text per scanned label, kept for debugging."""
        return self.labels / "ocr_text"

    def ensure_data_directories(self) -> None:
        """Create all data directories if they don't exist."""
        self.data.mkdir(parents=True, exist_ok=True)
        self.labels.mkdir(parents=True, exist_ok=True)
        self.labels_ocr_text.mkdir(parents=True, exist_ok=True)


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def set_project_root(root: Path) -> ProjectPaths:
    """Point the singleton at a different project home (tests, CLI overrides)."""
    global _paths
    _paths = ProjectPaths(root=root)
    return _paths


def reset_paths() -> None:
    """Drop the singleton so the next get_paths() re-reads FRESHKEEPER_HOME."""
    global _paths
    _paths = None
