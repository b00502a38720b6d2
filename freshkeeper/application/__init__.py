"""Application workflows composing pure label logic with runtime services."""
