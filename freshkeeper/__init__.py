"""FreshKeeper: food expiry tracking with label OCR date extraction."""

__version__ = "0.1.0"
