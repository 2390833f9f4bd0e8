"""Tests for serving size variants and their records."""

import pytest

from nutrition_servings.domain.serving_size import (
    Count,
    CustomSize,
    Energy,
    Mass,
    ServingSize,
    Volume,
    serving_size_from_record,
    serving_size_or_default,
)


def test_amount_of_each_variant() -> None:
    assert Count(2).amount == 2
    assert Mass.of(56, "g").amount == 56
    assert Volume.of(1, "cup (US)").unit == "cup (US)"
    assert Energy.of(400, "kcal").amount == 400
    assert CustomSize("cookie", 3).amount == 3


@pytest.mark.parametrize(
    ("serving_size", "expected"),
    [
        (Count(2), Count(5)),
        (Mass.of(20, "g"), Mass.of(50, "g")),
        (CustomSize("cookie", 2), CustomSize("cookie", 5)),
    ],
)
def test_scaled_keeps_variant(serving_size: ServingSize, expected: ServingSize) -> None:
    assert serving_size.scaled(2.5) == expected


@pytest.mark.parametrize(
    ("serving_size", "label"),
    [
        (Count(1), "1 serving"),
        (Count(2), "2 servings"),
        (Count(0), "0 servings"),
        (Count(0.5), "0.5 servings"),
        (Mass.of(56, "g"), "56g"),
        (Volume.of(1.5, "cup (US)"), "1.5cup (US)"),
        (CustomSize("cookie", 1), "1 cookie"),
        (CustomSize("cookie", 2), "2 cookies"),
    ],
)
def test_str(serving_size: ServingSize, label: str) -> None:
    assert str(serving_size) == label


@pytest.mark.parametrize(
    "serving_size",
    [
        Count(2),
        Mass.of(56, "g"),
        Volume.of(240, "mL"),
        Energy.of(100, "kcal"),
        CustomSize("slice", 3),
    ],
)
def test_record_round_trip(serving_size: ServingSize) -> None:
    assert serving_size_from_record(serving_size.to_record()) == serving_size


def test_record_shapes() -> None:
    assert Count(2).to_record() == {"kind": "servings", "amount": 2}
    assert Mass.of(56, "g").to_record() == {
        "kind": "mass",
        "amount": {"amount": 56, "unit": "g"},
    }
    assert CustomSize("cookie", 1).to_record() == {
        "kind": "customSize",
        "name": "cookie",
        "amount": 1,
    }


def test_legacy_type_and_value_are_accepted() -> None:
    assert serving_size_from_record({"type": "servings", "value": 3}) == Count(3)
    assert serving_size_from_record(
        {"type": "mass", "value": {"amount": 10, "unit": "g"}}
    ) == Mass.of(10, "g")
    assert serving_size_from_record(
        {"type": "customSize", "name": "bar", "value": 2}
    ) == CustomSize("bar", 2)


def test_kind_takes_precedence_over_type() -> None:
    record = {"kind": "servings", "type": "mass", "amount": 2}

    assert serving_size_from_record(record) == Count(2)


def test_empty_kind_falls_back_to_type() -> None:
    assert serving_size_from_record({"kind": "", "type": "servings", "amount": 1}) == (
        Count(1)
    )


@pytest.mark.parametrize(
    "record",
    [
        None,
        "servings",
        {},
        {"kind": "bogus", "amount": 1},
        {"kind": "servings"},
        {"kind": "servings", "amount": "2"},
        {"kind": "servings", "amount": {"amount": 1, "unit": "g"}},
        {"kind": "mass", "amount": 56},
        {"kind": "volume", "amount": {"amount": 1}},
        {"kind": "customSize", "amount": 2},
        {"kind": "customSize", "name": "cookie"},
        {"kind": 3, "amount": 1},
    ],
)
def test_unusable_records_parse_to_none(record: object) -> None:
    assert serving_size_from_record(record) is None


def test_or_default_falls_back_to_one_serving() -> None:
    assert serving_size_or_default(None) == Count(1)
    assert serving_size_or_default({"kind": "bogus"}) == Count(1)
    assert serving_size_or_default({"kind": "servings", "amount": 4}) == Count(4)
