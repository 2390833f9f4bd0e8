"""Serving sizes carried in URL query parameters.

``st`` holds the kind, ``sa`` the amount, ``su`` the unit of a measured size
and ``sn`` the name of a custom size.
"""

import math
from collections.abc import Mapping

from nutrition_servings.domain.serving_size import (
    Count,
    CustomSize,
    Energy,
    Mass,
    ServingSize,
    Volume,
)
from nutrition_servings.domain.units import format_amount

PARAM_TYPE = "st"
PARAM_AMOUNT = "sa"
PARAM_UNIT = "su"
PARAM_NAME = "sn"

SERVING_SIZE_PARAMS = (PARAM_TYPE, PARAM_AMOUNT, PARAM_UNIT, PARAM_NAME)

_MEASURED = {Mass.kind: Mass, Volume.kind: Volume, Energy.kind: Energy}


def _parse_amount(raw: str | None) -> float:
    if raw is None:
        return math.nan
    try:
        return float(raw)
    except ValueError:
        return math.nan


def serving_size_from_params(params: Mapping[str, str]) -> ServingSize:
    """Read a serving size from query parameters, defaulting to one serving."""
    kind = params.get(PARAM_TYPE)
    amount = _parse_amount(params.get(PARAM_AMOUNT))
    unit = params.get(PARAM_UNIT)
    name = params.get(PARAM_NAME)
    valid_amount = math.isfinite(amount)

    if kind == Count.kind:
        return Count(amount if valid_amount else 1)
    if kind in _MEASURED and valid_amount and unit:
        return _MEASURED[kind].of(amount, unit)
    if kind == CustomSize.kind and valid_amount and name:
        return CustomSize(name, amount)
    return Count(1)


def serving_size_to_params(
    serving_size: ServingSize, current: Mapping[str, str] | None = None
) -> dict[str, str]:
    """Return ``current`` with its serving size parameters replaced."""
    params = {
        key: value
        for key, value in (current or {}).items()
        if key not in SERVING_SIZE_PARAMS
    }
    params[PARAM_TYPE] = serving_size.kind
    params[PARAM_AMOUNT] = format_amount(serving_size.amount)
    if isinstance(serving_size, CustomSize):
        params[PARAM_NAME] = serving_size.name
    elif not isinstance(serving_size, Count):
        params[PARAM_UNIT] = serving_size.unit
    return params
