"""Pydantic request and response models for the HTTP API.

Field names are camelCase on the wire to match the mobile client. Request
models validate what clients send; response models carry stored rows as they
are, since other clients write the same tables.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from meal_scan.domain.scans import (
    CriticalSample,
    FoodItem,
    FoodScan,
    ItemComposition,
    Nutrients,
    ScanAnalysis,
    StapleMeal,
)


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NutrientsInput(ApiModel):
    """Nutrient breakdown sent by a client."""

    calories: float = Field(default=0.0, ge=0)
    protein: float = Field(default=0.0, ge=0)
    carbs: float = Field(default=0.0, ge=0)
    fat: float = Field(default=0.0, ge=0)
    fiber: float = Field(default=0.0, ge=0)
    sugar: float = Field(default=0.0, ge=0)

    def to_domain(self) -> Nutrients:
        return Nutrients(**self.model_dump())


class ItemInput(ApiModel):
    """Food item sent by a client, without identity."""

    name: str = Field(min_length=1)
    estimated_weight_grams: float = Field(ge=0)
    original_weight_grams: float | None = Field(default=None, ge=0)
    nutrients: NutrientsInput = Field(default_factory=NutrientsInput)
    consumed_percentage: float = Field(default=100.0, ge=0, le=100)

    def to_composition(self) -> ItemComposition:
        return ItemComposition(
            name=self.name,
            estimated_weight_grams=self.estimated_weight_grams,
            original_weight_grams=self._original_weight(),
            nutrients=self.nutrients.to_domain(),
            consumed_percentage=self.consumed_percentage,
        )

    def _original_weight(self) -> float:
        if self.original_weight_grams is None:
            return self.estimated_weight_grams
        return self.original_weight_grams


class FoodItemInput(ItemInput):
    id: UUID | None = None

    def to_domain(self) -> FoodItem:
        return FoodItem(
            id=self.id,
            name=self.name,
            estimated_weight_grams=self.estimated_weight_grams,
            original_weight_grams=self._original_weight(),
            nutrients=self.nutrients.to_domain(),
            consumed_percentage=self.consumed_percentage,
        )


class FoodScanInput(ApiModel):
    """Reviewed meal sent for saving."""

    id: UUID | None = None
    timestamp: int
    image_url: str = ""
    description: str = ""
    insight: str = ""
    items: list[FoodItemInput] = Field(default_factory=list)
    global_scale: float = Field(default=100.0, ge=0, le=100)

    def to_domain(self) -> FoodScan:
        return FoodScan(
            id=self.id,
            timestamp=self.timestamp,
            image_url=self.image_url,
            description=self.description,
            insight=self.insight,
            items=[item.to_domain() for item in self.items],
            global_scale=self.global_scale,
        )


class CriticalSampleInput(ApiModel):
    """Critical sample sent by a client."""

    timestamp: int
    image_url: str = ""
    food_name: str = Field(min_length=1)
    ai_weight: float = Field(ge=0)
    user_weight: float = Field(ge=0)
    deviation_percent: float

    def to_domain(self) -> CriticalSample:
        return CriticalSample(
            timestamp=self.timestamp,
            image_url=self.image_url,
            food_name=self.food_name,
            ai_weight=self.ai_weight,
            user_weight=self.user_weight,
            deviation_percent=self.deviation_percent,
        )


class StapleMealInput(ApiModel):
    """Staple meal template sent by a client."""

    name: str = Field(min_length=1)
    image_url: str = ""
    items: list[ItemInput] = Field(default_factory=list)
    total_calories: float = Field(ge=0)

    def to_domain(self) -> StapleMeal:
        return StapleMeal(
            name=self.name,
            image_url=self.image_url,
            items=[item.to_composition() for item in self.items],
            total_calories=self.total_calories,
        )


class StapleFromMealRequest(ApiModel):
    """Create a staple template from a reviewed meal."""

    name: str = Field(min_length=1)
    meal: FoodScanInput


class AnalyzeRequest(ApiModel):
    """Photo analysis request."""

    image: str = Field(min_length=1)
    context: str = ""
    model: str | None = None


class ImageUploadRequest(ApiModel):
    """Base64 (optionally data URI) image upload."""

    image: str = Field(min_length=1)


class NutrientsModel(ApiModel):
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    sugar: float

    @classmethod
    def from_domain(cls, nutrients: Nutrients) -> "NutrientsModel":
        return cls(**nutrients.to_dict())


class ItemModel(ApiModel):
    name: str
    estimated_weight_grams: float
    original_weight_grams: float
    nutrients: NutrientsModel
    consumed_percentage: float

    @classmethod
    def from_composition(cls, item: ItemComposition) -> "ItemModel":
        return cls(
            name=item.name,
            estimated_weight_grams=item.estimated_weight_grams,
            original_weight_grams=item.original_weight_grams,
            nutrients=NutrientsModel.from_domain(item.nutrients),
            consumed_percentage=item.consumed_percentage,
        )


class FoodItemModel(ItemModel):
    id: UUID | None

    @classmethod
    def from_domain(cls, item: FoodItem) -> "FoodItemModel":
        return cls(
            id=item.id,
            name=item.name,
            estimated_weight_grams=item.estimated_weight_grams,
            original_weight_grams=item.original_weight_grams,
            nutrients=NutrientsModel.from_domain(item.nutrients),
            consumed_percentage=item.consumed_percentage,
        )


class AnalysisResponse(ApiModel):
    """Sanitized analysis result."""

    items: list[FoodItemModel]
    description: str
    insight: str

    @classmethod
    def from_domain(cls, analysis: ScanAnalysis) -> "AnalysisResponse":
        return cls(
            items=[FoodItemModel.from_domain(item) for item in analysis.items],
            description=analysis.description,
            insight=analysis.insight,
        )


class ImageUploadResponse(ApiModel):
    url: str


class FoodScanModel(ApiModel):
    """Stored meal."""

    id: UUID | None
    timestamp: int
    image_url: str
    description: str
    insight: str
    items: list[FoodItemModel]
    global_scale: float

    @classmethod
    def from_domain(cls, scan: FoodScan) -> "FoodScanModel":
        return cls(
            id=scan.id,
            timestamp=scan.timestamp,
            image_url=scan.image_url,
            description=scan.description,
            insight=scan.insight,
            items=[FoodItemModel.from_domain(item) for item in scan.items],
            global_scale=scan.global_scale,
        )


class CriticalSampleModel(ApiModel):
    """Stored critical sample."""

    id: UUID | None
    timestamp: int
    image_url: str
    food_name: str
    ai_weight: float
    user_weight: float
    deviation_percent: float

    @classmethod
    def from_domain(cls, sample: CriticalSample) -> "CriticalSampleModel":
        return cls(
            id=sample.id,
            timestamp=sample.timestamp,
            image_url=sample.image_url,
            food_name=sample.food_name,
            ai_weight=sample.ai_weight,
            user_weight=sample.user_weight,
            deviation_percent=sample.deviation_percent,
        )


class SaveMealResponse(ApiModel):
    id: UUID
    critical_samples: list[CriticalSampleModel]


class StapleMealModel(ApiModel):
    """Stored staple meal template."""

    id: UUID | None
    name: str
    image_url: str
    items: list[ItemModel]
    total_calories: float

    @classmethod
    def from_domain(cls, staple: StapleMeal) -> "StapleMealModel":
        return cls(
            id=staple.id,
            name=staple.name,
            image_url=staple.image_url,
            items=[ItemModel.from_composition(item) for item in staple.items],
            total_calories=staple.total_calories,
        )


class CreatedResponse(ApiModel):
    id: UUID


class DeleteResponse(ApiModel):
    deleted: int
