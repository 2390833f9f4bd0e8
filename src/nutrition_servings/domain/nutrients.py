"""Nutrient profiles for one serving of a food."""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import ValidationError

from nutrition_servings.domain.records import QuantityRecord
from nutrition_servings.domain.units import Quantity

_logger = logging.getLogger(__name__)


class Nutrient(StrEnum):
    """Nutrients tracked on a label, valued by their record key."""

    CALORIES = "calories"
    CALORIES_FROM_FAT = "caloriesFromFat"
    TOTAL_FAT = "totalFat"
    SATURATED_FAT = "saturatedFat"
    TRANS_FAT = "transFat"
    POLYUNSATURATED_FAT = "polyunsaturatedFat"
    MONOUNSATURATED_FAT = "monounsaturatedFat"
    CHOLESTEROL = "cholesterol"
    SODIUM = "sodium"
    TOTAL_CARBOHYDRATE = "totalCarbohydrate"
    DIETARY_FIBER = "dietaryFiber"
    SOLUBLE_FIBER = "solubleFiber"
    INSOLUBLE_FIBER = "insolubleFiber"
    TOTAL_SUGARS = "totalSugars"
    ADDED_SUGARS = "addedSugars"
    SUGAR_ALCOHOL = "sugarAlcohol"
    PROTEIN = "protein"
    VITAMIN_A = "vitaminA"
    VITAMIN_C = "vitaminC"
    VITAMIN_D = "vitaminD"
    VITAMIN_E = "vitaminE"
    VITAMIN_K = "vitaminK"
    THIAMIN = "thiamin"
    RIBOFLAVIN = "riboflavin"
    NIACIN = "niacin"
    VITAMIN_B6 = "vitaminB6"
    FOLATE = "folate"
    VITAMIN_B12 = "vitaminB12"
    BIOTIN = "biotin"
    PANTOTHENIC_ACID = "pantothenicAcid"
    CHOLINE = "choline"
    CALCIUM = "calcium"
    IRON = "iron"
    PHOSPHORUS = "phosphorus"
    IODINE = "iodine"
    MAGNESIUM = "magnesium"
    ZINC = "zinc"
    SELENIUM = "selenium"
    COPPER = "copper"
    MANGANESE = "manganese"
    CHROMIUM = "chromium"
    MOLYBDENUM = "molybdenum"
    CHLORIDE = "chloride"
    POTASSIUM = "potassium"


@dataclass(frozen=True)
class NutrientProfile:
    """Sparse set of nutrient quantities; missing nutrients mean "no data"."""

    values: Mapping[Nutrient, Quantity] = field(default_factory=dict)

    @classmethod
    def zero(cls) -> "NutrientProfile":
        """Seed for sums: 0 kcal and no other data."""
        return cls({Nutrient.CALORIES: Quantity(0, "kcal")})

    @property
    def calories(self) -> Quantity | None:
        return self.values.get(Nutrient.CALORIES)

    def get(self, nutrient: Nutrient) -> Quantity | None:
        return self.values.get(nutrient)

    def present(self) -> Iterator[tuple[Nutrient, Quantity]]:
        """Yield nutrients with a value, in label order."""
        for nutrient in Nutrient:
            quantity = self.values.get(nutrient)
            if quantity is not None:
                yield nutrient, quantity

    def is_empty(self) -> bool:
        return not self.values

    def scaled(self, factor: float) -> "NutrientProfile":
        return NutrientProfile(
            {nutrient: quantity.scaled(factor) for nutrient, quantity in self.present()}
        )

    def add(self, other: "NutrientProfile") -> "NutrientProfile":
        """Sum nutrient by nutrient, converting ``other`` into this profile's units."""
        merged: dict[Nutrient, Quantity] = {}
        for nutrient in Nutrient:
            mine = self.values.get(nutrient)
            theirs = other.values.get(nutrient)
            if mine is not None and theirs is not None:
                merged[nutrient] = mine.add(theirs)
            elif mine is not None:
                merged[nutrient] = mine
            elif theirs is not None:
                merged[nutrient] = theirs
        return NutrientProfile(merged)

    def to_record(self) -> dict[str, dict[str, object]]:
        return {
            nutrient.value: quantity.to_record()
            for nutrient, quantity in self.present()
        }

    @classmethod
    def from_record(cls, record: Mapping[str, object] | None) -> "NutrientProfile":
        """Build a profile from a camelCase nutrient record.

        Unknown keys are ignored, and so are nulls and values that are not an
        ``{amount, unit}`` quantity.
        """
        if not record:
            return cls()
        values: dict[Nutrient, Quantity] = {}
        for nutrient in Nutrient:
            quantity = _quantity(nutrient, record.get(nutrient.value))
            if quantity is not None:
                values[nutrient] = quantity
        return cls(values)


def _quantity(nutrient: Nutrient, value: object) -> Quantity | None:
    if value is None or isinstance(value, QuantityRecord):
        return Quantity.from_record(value)
    try:
        return Quantity.from_record(QuantityRecord.model_validate(value))
    except ValidationError as exc:
        _logger.debug("Ignoring malformed %s value %r: %s", nutrient.value, value, exc)
        return None
