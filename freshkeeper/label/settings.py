"""Tunables for label date parsing and expiry classification."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

RECENCY_WINDOW_DAYS = 30
MANUFACTURE_SHELF_LIFE_YEARS = 1
USE_SOON_DAYS = 3
MIN_YEAR = 2000  # exclusive
MAX_YEAR = 2100  # exclusive
DISCOUNT_WINDOW_DAYS = 5
DISCOUNT_PERCENT = 20


@dataclass(frozen=True)
class ScanSettings:
    """Policy knobs shared by the label parser and the pantry workflows."""

    recency_window_days: int = RECENCY_WINDOW_DAYS
    manufacture_shelf_life_years: int = MANUFACTURE_SHELF_LIFE_YEARS
    use_soon_days: int = USE_SOON_DAYS
    min_year: int = MIN_YEAR
    max_year: int = MAX_YEAR
    discount_window_days: int = DISCOUNT_WINDOW_DAYS
    discount_percent: int = DISCOUNT_PERCENT


DEFAULT_SCAN_SETTINGS = ScanSettings()


def build_scan_settings(config: dict[str, Any]) -> ScanSettings:
    """
    Build ScanSettings from a parsed ``[scan]`` config table.

    Unknown keys, non-integer values and an empty year range raise ValueError.
    """
    known = {f.name for f in fields(ScanSettings)}
    unknown = sorted(set(config) - known)
    if unknown:
        raise ValueError(f"Unknown scan settings: {', '.join(unknown)}")

    values: dict[str, int] = {}
    for key, value in config.items():
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Scan setting {key!r} must be an integer, got {value!r}")
        if value < 0:
            raise ValueError(f"Scan setting {key!r} must not be negative, got {value}")
        values[key] = value

    settings = ScanSettings(**values)
    if settings.max_year - settings.min_year < 2:
        raise ValueError(
            f"Year bounds ({settings.min_year}, {settings.max_year}) leave no valid year"
        )
    if settings.discount_percent > 100:
        raise ValueError(f"discount_percent must be at most 100, got {settings.discount_percent}")
    return settings
