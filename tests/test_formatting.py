"""Tests for serving size display formatting."""

import pytest

from nutrition_servings.domain.group import CompositeGroup
from nutrition_servings.domain.preparation import Preparation
from nutrition_servings.domain.serving_size import Count, CustomSize, Mass, Volume
from nutrition_servings.domain.units import Quantity
from nutrition_servings.services.formatting import (
    FormattedServingSize,
    format_serving_size,
)
from tests.conftest import preparation_record, product_item


@pytest.fixture
def cereal() -> Preparation:
    return Preparation.from_record(
        preparation_record(
            110,
            mass=(28, "g"),
            volume=(240, "mL"),
            custom_sizes=[{"name": "bowl", "servings": 2}],
        )
    )


def test_count(cereal: Preparation) -> None:
    formatted = format_serving_size(Count(2), cereal)

    assert formatted == FormattedServingSize(
        primary="2 servings", resolved="56g, 480mL"
    )


def test_mass_leaves_out_mass(cereal: Preparation) -> None:
    formatted = format_serving_size(Mass.of(14, "g"), cereal)

    assert formatted.primary == "14g"
    assert formatted.resolved == "0.5 servings, 120mL"


def test_volume_leaves_out_volume(cereal: Preparation) -> None:
    formatted = format_serving_size(Volume.of(240, "mL"), cereal)

    assert formatted.primary == "240mL"
    assert formatted.resolved == "1 serving, 28g"


def test_custom_size(cereal: Preparation) -> None:
    formatted = format_serving_size(CustomSize("bowl", 1), cereal)

    assert formatted.primary == "1 bowl"
    assert formatted.resolved == "2 servings, 56g, 480mL"


def test_count_without_reference_values() -> None:
    preparation = Preparation.from_record(preparation_record(90))

    formatted = format_serving_size(Count(1), preparation)

    assert formatted.primary == "1 serving"
    assert formatted.resolved == ""


def test_unresolvable_size_has_no_labels(cereal: Preparation) -> None:
    formatted = format_serving_size(CustomSize("cup", 1), cereal)

    assert formatted == FormattedServingSize(primary=None, resolved=None)


def test_missing_inputs_have_no_labels(cereal: Preparation) -> None:
    assert format_serving_size(None, cereal).primary is None
    assert format_serving_size(Count(1), None).resolved is None


def test_group_uses_summed_mass() -> None:
    group = CompositeGroup.from_record(
        {
            "items": [
                product_item(preparation_record(100, mass=(30, "g"))),
                product_item(preparation_record(100, mass=(20, "g"))),
            ]
        }
    )

    formatted = format_serving_size(Count(3), group)

    assert formatted.resolved == "150g"


def test_small_fractions_keep_two_significant_figures() -> None:
    preparation = Preparation(mass=Quantity(28, "g"))

    formatted = format_serving_size(Mass.of(100, "mg"), preparation)

    assert formatted.primary == "100mg"
    assert formatted.resolved == "0.0036 servings"
