"""Expiry status rule shared by candidate display, pantry listing and alerts."""

from datetime import date

from freshkeeper.domain.label import ExpiryStatus

from .settings import USE_SOON_DAYS


def days_until(expiry_date: date, today: date) -> int:
    """Whole days from today to expiry (negative once expired)."""
    return (expiry_date - today).days


def classify_expiry(expiry_date: date, today: date, use_soon_days: int = USE_SOON_DAYS) -> ExpiryStatus:
    """Classify an expiry date as expired, use-soon or safe."""
    days_left = days_until(expiry_date, today)
    if days_left < 0:
        return "expired"
    if days_left <= use_soon_days:
        return "use-soon"
    return "safe"


def status_label(status: ExpiryStatus) -> str:
    """Human-readable label for CLI and API output."""
    return {
        "expired": "Expired",
        "use-soon": "Use Soon",
        "safe": "Safe",
    }[status]
