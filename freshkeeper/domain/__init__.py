"""Core domain models for FreshKeeper.

This module provides the data models used throughout the project:
- RawDateMatch, DateCandidate, LabelScanOutcome, ExpiryRecord: label scanning
- PantryItem, ProductInfo, NutritionFacts: pantry inventory

Usage:
    from freshkeeper.domain import DateCandidate, LabelScanOutcome, PantryItem
"""

from freshkeeper.domain.label import (
    CandidateChoice,
    DateCandidate,
    ExpiryRecord,
    ExpiryStatus,
    LabelScanOutcome,
    PatternKind,
    RawDateMatch,
    ResolutionState,
)
from freshkeeper.domain.pantry import HealthScore, NutritionFacts, PantryItem, ProductInfo

__all__ = [
    "CandidateChoice",
    "DateCandidate",
    "ExpiryRecord",
    "ExpiryStatus",
    "LabelScanOutcome",
    "PatternKind",
    "RawDateMatch",
    "ResolutionState",
    "HealthScore",
    "NutritionFacts",
    "PantryItem",
    "ProductInfo",
]
