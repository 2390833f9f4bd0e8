"""Requested serving sizes.

A serving size says *how much* of a food is being asked about. It is one of:

* ``Count`` - a number of reference servings,
* ``Mass``, ``Volume``, ``Energy`` - a measured quantity,
* ``CustomSize`` - an amount of a food-specific named unit such as "cookie".

Every variant round-trips through the record shape used by the API:
``{"kind": ..., "amount": ..., "name": ...}``.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import ClassVar

from pydantic import ValidationError

from nutrition_servings.domain.records import QuantityRecord, ServingSizeRecord
from nutrition_servings.domain.units import Quantity, format_amount

_logger = logging.getLogger(__name__)


def _plural(amount: float) -> str:
    return "" if amount == 1 else "s"


@dataclass(frozen=True)
class Count:
    """``count`` reference servings."""

    kind: ClassVar[str] = "servings"

    count: float

    @property
    def amount(self) -> float:
        return self.count

    def scaled(self, factor: float) -> "Count":
        return Count(self.count * factor)

    def to_record(self) -> dict[str, object]:
        return {"kind": self.kind, "amount": self.count}

    def __str__(self) -> str:
        return f"{format_amount(self.count)} serving{_plural(self.count)}"


@dataclass(frozen=True)
class _Measured:
    kind: ClassVar[str]

    quantity: Quantity

    @classmethod
    def of(cls, amount: float, unit: str):
        return cls(Quantity(amount, unit))

    @property
    def amount(self) -> float:
        return self.quantity.amount

    @property
    def unit(self) -> str:
        return self.quantity.unit

    def scaled(self, factor: float):
        return type(self)(self.quantity.scaled(factor))

    def to_record(self) -> dict[str, object]:
        return {"kind": self.kind, "amount": self.quantity.to_record()}

    def __str__(self) -> str:
        return str(self.quantity)


@dataclass(frozen=True)
class Mass(_Measured):
    """A serving given by weight."""

    kind: ClassVar[str] = "mass"


@dataclass(frozen=True)
class Volume(_Measured):
    """A serving given by volume."""

    kind: ClassVar[str] = "volume"


@dataclass(frozen=True)
class Energy(_Measured):
    """A serving given by calories."""

    kind: ClassVar[str] = "energy"


@dataclass(frozen=True)
class CustomSize:
    """``amount`` of the custom size called ``name``."""

    kind: ClassVar[str] = "customSize"

    name: str
    amount: float

    def scaled(self, factor: float) -> "CustomSize":
        return CustomSize(self.name, self.amount * factor)

    def to_record(self) -> dict[str, object]:
        return {"kind": self.kind, "name": self.name, "amount": self.amount}

    def __str__(self) -> str:
        return f"{format_amount(self.amount)} {self.name}{_plural(self.amount)}"


ServingSize = Count | Mass | Volume | Energy | CustomSize

_MEASURED_KINDS: dict[str, type[_Measured]] = {
    Mass.kind: Mass,
    Volume.kind: Volume,
    Energy.kind: Energy,
}

SERVING_SIZE_KINDS: tuple[str, ...] = (
    Count.kind,
    Mass.kind,
    Volume.kind,
    Energy.kind,
    CustomSize.kind,
)


def serving_size_from_record(record: object) -> ServingSize | None:
    """Parse a serving size record, returning ``None`` for any unusable shape."""
    if not isinstance(record, Mapping):
        return None
    try:
        parsed = ServingSizeRecord.model_validate(record)
    except ValidationError as exc:
        _logger.debug("Unparseable serving size record %r: %s", record, exc)
        return None

    kind = parsed.kind or parsed.type
    amount = parsed.amount if parsed.amount is not None else parsed.value

    if kind == Count.kind:
        if isinstance(amount, QuantityRecord) or amount is None:
            return None
        return Count(amount)
    if kind in _MEASURED_KINDS:
        if not isinstance(amount, QuantityRecord):
            return None
        return _MEASURED_KINDS[kind].of(amount.amount, amount.unit)
    if kind == CustomSize.kind:
        if parsed.name is None or amount is None or isinstance(amount, QuantityRecord):
            return None
        return CustomSize(parsed.name, amount)
    return None


def serving_size_or_default(record: object) -> ServingSize:
    """Parse a serving size record, defaulting to one serving."""
    return serving_size_from_record(record) or Count(1)
