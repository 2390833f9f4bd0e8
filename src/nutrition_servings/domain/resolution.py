"""Resolution of a requested serving size into a multiple of a reference serving.

Preparations and groups share this algorithm; they only differ in where the
reference mass, volume, calories and custom sizes come from.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from nutrition_servings.domain.custom_size import CustomSizeDefinition
from nutrition_servings.domain.errors import (
    CyclicReferenceError,
    UnknownCustomSizeError,
    UnknownServingSizeError,
    UnsupportedDimensionError,
)
from nutrition_servings.domain.serving_size import (
    Count,
    CustomSize,
    Energy,
    Mass,
    ServingSize,
    Volume,
)
from nutrition_servings.domain.units import Quantity

DEFAULT_MAX_DEPTH = 16


class ServingReference(Protocol):
    """Reference values a serving size is resolved against."""

    @property
    def mass(self) -> Quantity | None:
        """Mass of one reference serving."""

    @property
    def volume(self) -> Quantity | None:
        """Volume of one reference serving."""

    @property
    def calories(self) -> Quantity | None:
        """Energy of one reference serving."""

    @property
    def custom_sizes(self) -> list[CustomSizeDefinition]:
        """Named sizes defined on the food."""


@dataclass(frozen=True)
class ReferenceServing:
    """Snapshot of reference values, used where they are derived."""

    mass: Quantity | None = None
    volume: Quantity | None = None
    calories: Quantity | None = None
    custom_sizes: list[CustomSizeDefinition] = field(default_factory=list)


def find_custom_size(
    custom_sizes: Iterable[CustomSizeDefinition], name: str
) -> CustomSizeDefinition | None:
    """Return the custom size with exactly this name."""
    for definition in custom_sizes:
        if definition.name == name:
            return definition
    return None


def resolve_scalar(
    reference: ServingReference,
    requested: ServingSize,
    *,
    subject: str = "preparation",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> float:
    """Return how many reference servings ``requested`` amounts to.

    Raises a ``ServingResolutionError`` subclass when the reference lacks the
    value needed for the requested dimension, when a custom size is unknown,
    or when custom sizes refer back to themselves.
    """
    return _resolve(reference, requested, subject, max_depth, frozenset())


def _resolve(
    reference: ServingReference,
    requested: ServingSize,
    subject: str,
    max_depth: int,
    seen: frozenset[str],
) -> float:
    if isinstance(requested, Count):
        return requested.count
    if isinstance(requested, Mass):
        return _ratio(requested.quantity, reference.mass, "mass", subject, "mass")
    if isinstance(requested, Volume):
        return _ratio(requested.quantity, reference.volume, "volume", subject, "volume")
    if isinstance(requested, Energy):
        return _ratio(
            requested.quantity, reference.calories, "energy", subject, "calories"
        )
    if isinstance(requested, CustomSize):
        if requested.name in seen:
            raise CyclicReferenceError(
                f"Custom size {requested.name!r} refers back to itself"
            )
        if len(seen) >= max_depth:
            raise CyclicReferenceError(
                f"Custom size {requested.name!r} nests deeper than {max_depth} levels"
            )
        definition = find_custom_size(reference.custom_sizes, requested.name)
        if definition is None:
            raise UnknownCustomSizeError(requested.name)
        return _resolve(
            reference,
            definition.serving_size.scaled(requested.amount),
            subject,
            max_depth,
            seen | {requested.name},
        )
    raise UnknownServingSizeError(getattr(requested, "kind", type(requested).__name__))


def _ratio(
    requested: Quantity,
    reference: Quantity | None,
    dimension: str,
    subject: str,
    missing: str,
) -> float:
    # A zero reference cannot be divided by; treat it like a missing one.
    if reference is None or reference.amount == 0:
        raise UnsupportedDimensionError(dimension, subject, missing)
    return requested.converted(reference.unit).amount / reference.amount
