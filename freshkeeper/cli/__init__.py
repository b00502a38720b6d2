"""Command-line entry points for FreshKeeper."""
