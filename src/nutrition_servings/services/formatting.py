"""Display formatting for serving sizes."""

from dataclasses import dataclass

from nutrition_servings.domain.errors import ServingResolutionError, UnitConversionError
from nutrition_servings.domain.group import Servable
from nutrition_servings.domain.serving_size import (
    Count,
    CustomSize,
    Mass,
    ServingSize,
    Volume,
)
from nutrition_servings.domain.units import format_significant


@dataclass(frozen=True)
class FormattedServingSize:
    """Primary label for a serving size and what it resolves to."""

    primary: str | None
    resolved: str | None


def _servings_label(count: float) -> str:
    suffix = "" if count == 1 else "s"
    return f"{format_significant(count)} serving{suffix}"


def format_serving_size(
    serving_size: ServingSize | None, target: Servable | None
) -> FormattedServingSize:
    """Describe ``serving_size`` of ``target``, e.g. ``("56g", "2 servings, 1 cup")``.

    The resolved breakdown lists servings, mass and volume, leaving out the
    dimension the request was made in. Both parts are ``None`` when the size
    cannot be resolved against the target.
    """
    if serving_size is None or target is None:
        return FormattedServingSize(primary=None, resolved=None)
    try:
        scalar = target.scalar(serving_size)
    except (ServingResolutionError, UnitConversionError):
        return FormattedServingSize(primary=None, resolved=None)

    reference = target.reference()
    if isinstance(serving_size, Count):
        primary = _servings_label(serving_size.count)
    elif isinstance(serving_size, CustomSize):
        primary = f"{format_significant(serving_size.amount)} {serving_size.name}"
    else:
        primary = f"{format_significant(serving_size.amount)}{serving_size.unit}"

    resolved: list[str] = []
    if not isinstance(serving_size, Count):
        resolved.append(_servings_label(scalar))
    if reference.mass is not None and not isinstance(serving_size, Mass):
        mass = reference.mass.scaled(scalar)
        resolved.append(f"{format_significant(mass.amount)}{mass.unit}")
    if reference.volume is not None and not isinstance(serving_size, Volume):
        volume = reference.volume.scaled(scalar)
        resolved.append(f"{format_significant(volume.amount)}{volume.unit}")
    return FormattedServingSize(primary=primary, resolved=", ".join(resolved))
