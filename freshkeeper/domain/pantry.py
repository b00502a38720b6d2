"""Data models for pantry items, products and nutrition."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

from freshkeeper.domain.label import ExpiryStatus

HealthScore = Literal["good", "moderate", "high-risk"]


@dataclass(frozen=True)
class NutritionFacts:
    """Per-100g nutrition values; sodium is in milligrams."""

    health_score: HealthScore
    feedback: str
    calories: float | None = None
    sugar: float | None = None
    protein: float | None = None
    fat: float | None = None
    fiber: float | None = None
    carbohydrates: float | None = None
    sodium: float | None = None


@dataclass(frozen=True)
class ProductInfo:
    """Product metadata resolved from a barcode."""

    barcode: str
    name: str
    brand: str
    category: str
    suggested_action: ExpiryStatus
    estimated_shelf_life_days: int
    found: bool = True


@dataclass
class PantryItem:
    """A food item stored in the pantry."""

    id: str
    name: str
    expiry_date: date
    purchase_date: date
    barcode: str | None = None
    consumed: bool = False
    discount: int = 0  # percent, 0 means not discounted
    nutrition: NutritionFacts | None = None
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def discounted(self) -> bool:
        return self.discount > 0
