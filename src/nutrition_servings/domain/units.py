"""Measured quantities and unit conversion tables."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from nutrition_servings.domain.errors import UnitConversionError
from nutrition_servings.domain.records import QuantityRecord


class Dimension(StrEnum):
    """Physical dimension of a unit."""

    MASS = "mass"
    VOLUME = "volume"
    ENERGY = "energy"


# Joules per unit. Calories are kept out of the mass/volume table.
ENERGY_TO_JOULES: dict[str, float] = {
    "kcal": 4184.0,
    "cal": 4.184,
    "kJ": 1000.0,
    "J": 1.0,
    "Wh": 3600.0,
}

# Grams per mass unit and millilitres per volume unit.
_MEASURE_FACTORS: dict[str, tuple[Dimension, float]] = {
    "g": (Dimension.MASS, 1.0),
    "mg": (Dimension.MASS, 1e-3),
    "µg": (Dimension.MASS, 1e-6),
    "kg": (Dimension.MASS, 1000.0),
    "oz": (Dimension.MASS, 28.349523125),
    "lb": (Dimension.MASS, 453.59237),
    "mL": (Dimension.VOLUME, 1.0),
    "L": (Dimension.VOLUME, 1000.0),
    "cup": (Dimension.VOLUME, 236.5882365),
    "metric cup": (Dimension.VOLUME, 250.0),
    "tbsp": (Dimension.VOLUME, 14.78676478125),
    "tsp": (Dimension.VOLUME, 4.92892159375),
    "fl oz": (Dimension.VOLUME, 29.5735295625),
    "imp fl oz": (Dimension.VOLUME, 28.4130625),
    "pt": (Dimension.VOLUME, 473.176473),
    "qt": (Dimension.VOLUME, 946.352946),
    "gal": (Dimension.VOLUME, 3785.411784),
    "imp pt": (Dimension.VOLUME, 568.26125),
    "imp qt": (Dimension.VOLUME, 1136.5225),
    "imp gal": (Dimension.VOLUME, 4546.09),
}

# Stored spellings that differ from the table keys above.
_UNIT_ALIASES: dict[str, str] = {
    "fl oz (US)": "fl oz",
    "fl oz (Imperial)": "imp fl oz",
    "cup (US)": "cup",
    "cup (Metric)": "metric cup",
    "tbsp (US)": "tbsp",
    "tbsp  (US)": "tbsp",
    "tsp (US)": "tsp",
    "pt (US)": "pt",
    "qt (US)": "qt",
    "gal (US)": "gal",
    "pt (Imperial)": "imp pt",
    "qt (Imperial)": "imp qt",
    "gal (Imperial)": "imp gal",
    "ml": "mL",
    "l": "L",
    "μg": "µg",
    "mcg": "µg",
    "ug": "µg",
}


def normalize_unit(unit: str) -> str:
    """Return the conversion-table spelling of a unit."""
    return _UNIT_ALIASES.get(unit, unit)


def dimension_of(unit: str) -> Dimension | None:
    """Return the dimension a unit belongs to, if it is known."""
    if unit in ENERGY_TO_JOULES:
        return Dimension.ENERGY
    entry = _MEASURE_FACTORS.get(normalize_unit(unit))
    if entry is None:
        return None
    return entry[0]


def convert_amount(amount: float, from_unit: str, to_unit: str) -> float:
    """Convert an amount between two units of the same dimension."""
    source = dimension_of(from_unit)
    target = dimension_of(to_unit)
    if source is None or target is None:
        unknown = from_unit if source is None else to_unit
        raise UnitConversionError(f"Unknown unit: {unknown!r}")
    if source != target:
        raise UnitConversionError(
            f"Cannot convert {source} unit {from_unit!r} to {target} unit {to_unit!r}"
        )
    if source == Dimension.ENERGY:
        return amount * ENERGY_TO_JOULES[from_unit] / ENERGY_TO_JOULES[to_unit]
    from_factor = _MEASURE_FACTORS[normalize_unit(from_unit)][1]
    to_factor = _MEASURE_FACTORS[normalize_unit(to_unit)][1]
    return amount * from_factor / to_factor


def format_amount(value: float) -> str:
    """Render a number without a trailing ``.0`` for whole values."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _round_half_up(value: float) -> float:
    return math.floor(value + 0.5)


def _trim_fraction(text: str) -> str:
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


def format_significant(value: float) -> str:
    """Format a number for display with a magnitude-dependent precision.

    - >= 100: whole number with thousands separators (``1,234``)
    - >= 10: one decimal place (``23.5``)
    - >= 1: two decimal places (``2.35``)
    - < 1: two significant figures (``0.24``, ``0.024``)
    """
    if value == 0:
        return "0"
    size = abs(value)
    if size >= 100:
        return f"{int(_round_half_up(value)):,}"
    if size >= 10:
        return _trim_fraction(f"{_round_half_up(value * 10) / 10:,.1f}")
    if size >= 1:
        return _trim_fraction(f"{_round_half_up(value * 100) / 100:,.2f}")
    magnitude = math.floor(math.log10(size))
    scale = 10 ** (1 - magnitude)
    rounded = _round_half_up(value * scale) / scale
    return _trim_fraction(f"{rounded:,.{max(3, 1 - magnitude)}f}")


@dataclass(frozen=True)
class Quantity:
    """An amount of mass, volume or energy."""

    amount: float
    unit: str

    @property
    def dimension(self) -> Dimension | None:
        return dimension_of(self.unit)

    def converted(self, to_unit: str) -> "Quantity":
        """Return this quantity expressed in another unit of the same dimension."""
        if self.unit == to_unit:
            return Quantity(self.amount, self.unit)
        return Quantity(convert_amount(self.amount, self.unit, to_unit), to_unit)

    def scaled(self, factor: float) -> "Quantity":
        return Quantity(self.amount * factor, self.unit)

    def add(self, other: "Quantity") -> "Quantity":
        """Sum two quantities, keeping this quantity's unit."""
        return Quantity(self.amount + other.converted(self.unit).amount, self.unit)

    def to_record(self) -> dict[str, object]:
        return {"amount": self.amount, "unit": self.unit}

    @classmethod
    def from_record(
        cls, record: Mapping[str, object] | QuantityRecord | None
    ) -> "Quantity | None":
        """Build a quantity from an ``{amount, unit}`` record."""
        if record is None:
            return None
        if isinstance(record, QuantityRecord):
            return cls(amount=record.amount, unit=record.unit)
        return cls(amount=float(record["amount"]), unit=str(record["unit"]))

    def __str__(self) -> str:
        return f"{format_amount(self.amount)}{self.unit}"
