"""One reference serving of a food."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from nutrition_servings.domain.custom_size import CustomSizeDefinition
from nutrition_servings.domain.nutrients import NutrientProfile
from nutrition_servings.domain.records import PreparationRecord
from nutrition_servings.domain.resolution import (
    DEFAULT_MAX_DEPTH,
    ReferenceServing,
    resolve_scalar,
)
from nutrition_servings.domain.serving_size import Count, ServingSize
from nutrition_servings.domain.units import Quantity


@dataclass(frozen=True)
class Preparation:
    """Nutrition for one serving of a food prepared a particular way."""

    nutrition: NutrientProfile = field(default_factory=NutrientProfile)
    name: str = "Default"
    id: str | None = None
    mass: Quantity | None = None
    volume: Quantity | None = None
    custom_sizes: list[CustomSizeDefinition] = field(default_factory=list)
    serving_size_description: str | None = None
    notes: list[str] = field(default_factory=list)

    @property
    def calories(self) -> Quantity | None:
        return self.nutrition.calories

    def reference(self) -> ReferenceServing:
        return ReferenceServing(
            mass=self.mass,
            volume=self.volume,
            calories=self.calories,
            custom_sizes=self.custom_sizes,
        )

    def scalar(
        self, serving_size: ServingSize, *, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> float:
        """Return how many reference servings ``serving_size`` represents."""
        return resolve_scalar(
            self, serving_size, subject="preparation", max_depth=max_depth
        )

    def resolved_profile(
        self, serving_size: ServingSize, *, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> NutrientProfile:
        """Return the nutrition for ``serving_size``."""
        return self.nutrition.scaled(self.scalar(serving_size, max_depth=max_depth))

    def resolved_profile_for_servings(self, servings: float) -> NutrientProfile:
        return self.resolved_profile(Count(servings))

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "Preparation":
        """Validate and build a preparation from an API record."""
        return cls.from_model(PreparationRecord.model_validate(record))

    @classmethod
    def from_model(cls, record: PreparationRecord) -> "Preparation":
        return cls(
            id=record.id,
            name=record.name or "Default",
            nutrition=NutrientProfile.from_record(record.nutritional_information),
            mass=Quantity.from_record(record.mass),
            volume=Quantity.from_record(record.volume),
            custom_sizes=[
                CustomSizeDefinition.from_model(custom)
                for custom in record.custom_sizes
            ],
            serving_size_description=record.serving_size_description or None,
            notes=list(record.notes),
        )

    def to_record(self) -> dict[str, object]:
        record: dict[str, object] = {
            "name": self.name,
            "nutritionalInformation": self.nutrition.to_record(),
            "mass": self.mass.to_record() if self.mass is not None else None,
            "volume": self.volume.to_record() if self.volume is not None else None,
            "customSizes": [custom.to_record() for custom in self.custom_sizes],
            "servingSizeDescription": self.serving_size_description,
            "notes": list(self.notes),
        }
        if self.id is not None:
            record["id"] = self.id
        return record