"""Tests for nutrient profiles."""

import pytest

from nutrition_servings.domain.nutrients import Nutrient, NutrientProfile
from nutrition_servings.domain.units import Quantity


def _profile(**values: tuple[float, str]) -> NutrientProfile:
    return NutrientProfile.from_record(
        {
            key: {"amount": amount, "unit": unit}
            for key, (amount, unit) in values.items()
        }
    )


def test_from_record_ignores_unknown_keys_and_nulls() -> None:
    profile = NutrientProfile.from_record(
        {
            "calories": {"amount": 200, "unit": "kcal"},
            "protein": None,
            "glitter": {"amount": 1, "unit": "g"},
        }
    )

    assert profile.calories == Quantity(200, "kcal")
    assert profile.get(Nutrient.PROTEIN) is None
    assert list(profile.values) == [Nutrient.CALORIES]


def test_from_record_skips_values_that_are_not_quantities() -> None:
    profile = NutrientProfile.from_record(
        {
            "calories": {"amount": 90, "unit": "kcal"},
            "source": "label",
            "sodium": 120,
            "protein": {"amount": 2},
        }
    )

    assert profile.calories == Quantity(90, "kcal")
    assert profile.get(Nutrient.SODIUM) is None
    assert profile.get(Nutrient.PROTEIN) is None


def test_from_record_of_nothing_is_empty() -> None:
    assert NutrientProfile.from_record(None).is_empty()
    assert NutrientProfile.from_record({}).is_empty()


def test_zero_has_only_zero_calories() -> None:
    zero = NutrientProfile.zero()

    assert zero.calories == Quantity(0, "kcal")
    assert len(zero.values) == 1


def test_scaled_multiplies_present_nutrients_only() -> None:
    profile = _profile(calories=(200, "kcal"), protein=(5, "g"))

    doubled = profile.scaled(2)

    assert doubled.calories == Quantity(400, "kcal")
    assert doubled.get(Nutrient.PROTEIN) == Quantity(10, "g")
    assert doubled.get(Nutrient.SODIUM) is None


def test_add_merges_one_sided_nutrients() -> None:
    left = _profile(calories=(100, "kcal"), protein=(3, "g"))
    right = _profile(calories=(50, "kcal"), sodium=(120, "mg"))

    total = left.add(right)

    assert total.calories == Quantity(150, "kcal")
    assert total.get(Nutrient.PROTEIN) == Quantity(3, "g")
    assert total.get(Nutrient.SODIUM) == Quantity(120, "mg")
    assert total.get(Nutrient.TOTAL_FAT) is None


def test_add_converts_into_left_units() -> None:
    left = _profile(protein=(1, "g"))
    right = _profile(protein=(500, "mg"))

    protein = left.add(right).get(Nutrient.PROTEIN)

    assert protein is not None
    assert protein.unit == "g"
    assert protein.amount == pytest.approx(1.5)


def test_adding_zero_keeps_calories() -> None:
    profile = _profile(calories=(200, "kcal"))

    assert profile.add(NutrientProfile.zero()).calories == profile.scaled(1).calories
    assert NutrientProfile.zero().add(NutrientProfile.zero()).calories == Quantity(
        0, "kcal"
    )


def test_present_yields_label_order() -> None:
    profile = _profile(potassium=(300, "mg"), calories=(90, "kcal"), protein=(2, "g"))

    nutrients = [nutrient for nutrient, _ in profile.present()]

    assert nutrients == [Nutrient.CALORIES, Nutrient.PROTEIN, Nutrient.POTASSIUM]


def test_record_round_trip() -> None:
    profile = _profile(calories=(90, "kcal"), vitaminB12=(2.4, "µg"))

    assert NutrientProfile.from_record(profile.to_record()) == profile
