"""Domain models for analyzed meals and derived records."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from uuid import UUID

NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar")


@dataclass(frozen=True)
class Nutrients:
    """Nutrient totals for a food item."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, object] | None) -> "Nutrients":
        """Build nutrients from a stored JSON mapping, reading missing keys as 0."""
        values = data or {}
        return cls(**{name: float(values.get(name) or 0.0) for name in NUTRIENT_FIELDS})

    def to_dict(self) -> dict[str, float]:
        """Return the JSON mapping stored alongside items."""
        return {name: getattr(self, name) for name in NUTRIENT_FIELDS}


@dataclass(frozen=True)
class ItemComposition:
    """A food item without persistence identity."""

    name: str
    estimated_weight_grams: float
    original_weight_grams: float
    nutrients: Nutrients
    consumed_percentage: float = 100.0

    def to_dict(self) -> dict[str, object]:
        """Return the camelCase mapping used in stored JSON columns."""
        return {
            "name": self.name,
            "estimatedWeightGrams": self.estimated_weight_grams,
            "originalWeightGrams": self.original_weight_grams,
            "nutrients": self.nutrients.to_dict(),
            "consumedPercentage": self.consumed_percentage,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "ItemComposition":
        """Parse a camelCase mapping from a stored JSON column."""
        estimated = float(data.get("estimatedWeightGrams") or 0.0)
        original = data.get("originalWeightGrams")
        consumed = data.get("consumedPercentage")
        return cls(
            name=str(data.get("name", "")),
            estimated_weight_grams=estimated,
            original_weight_grams=(
                float(original) if original is not None else estimated
            ),
            nutrients=Nutrients.from_mapping(
                data.get("nutrients")  # type: ignore[arg-type]
            ),
            consumed_percentage=float(consumed) if consumed is not None else 100.0,
        )


@dataclass(frozen=True)
class FoodItem(ItemComposition):
    """A food item within a scan; id is assigned when first saved."""

    id: UUID | None = None


@dataclass(frozen=True)
class ScanAnalysis:
    """Sanitized result of analyzing a food photo."""

    items: list[FoodItem]
    description: str
    insight: str


@dataclass(frozen=True)
class FoodScan:
    """One analyzed meal. Timestamps are epoch milliseconds."""

    timestamp: int
    image_url: str
    description: str
    insight: str
    items: list[FoodItem] = field(default_factory=list)
    global_scale: float = 100.0
    id: UUID | None = None


@dataclass(frozen=True)
class CriticalSample:
    """Recorded deviation between the model's weight and the user's weight."""

    timestamp: int
    image_url: str
    food_name: str
    ai_weight: float
    user_weight: float
    deviation_percent: float
    id: UUID | None = None


@dataclass(frozen=True)
class StapleMeal:
    """Reusable meal template saved by a user."""

    name: str
    image_url: str
    items: list[ItemComposition]
    total_calories: float
    id: UUID | None = None
