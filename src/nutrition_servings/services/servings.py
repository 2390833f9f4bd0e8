"""Serving size resolution for callers that need a displayable result."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from nutrition_servings.domain.errors import ServingResolutionError, UnitConversionError
from nutrition_servings.domain.group import CompositeGroup, Servable
from nutrition_servings.domain.nutrients import NutrientProfile
from nutrition_servings.domain.resolution import DEFAULT_MAX_DEPTH
from nutrition_servings.domain.serving_size import ServingSize, serving_size_or_default
from nutrition_servings.services.formatting import (
    FormattedServingSize,
    format_serving_size,
)
from nutrition_servings.services.serving_params import (
    serving_size_from_params,
    serving_size_to_params,
)
from nutrition_servings.services.unit_options import (
    OptionGroup,
    build_option_groups,
    filter_groups,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServingResult:
    """Outcome of resolving a serving size; ``error`` is set when it failed."""

    serving_size: ServingSize
    nutrition: NutrientProfile | None
    servings: float | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ServingService:
    """Application service wrapping the resolution engine."""

    max_depth: int = DEFAULT_MAX_DEPTH
    debug: bool = False

    def parse(self, record: object) -> ServingSize:
        """Parse a serving size record, defaulting to one serving."""
        return serving_size_or_default(record)

    def from_params(self, params: Mapping[str, str]) -> ServingSize:
        return serving_size_from_params(params)

    def to_params(
        self, serving_size: ServingSize, current: Mapping[str, str] | None = None
    ) -> dict[str, str]:
        return serving_size_to_params(serving_size, current)

    def resolve(self, target: Servable, serving_size: ServingSize) -> ServingResult:
        """Resolve nutrition for ``serving_size``, reporting failures as ``error``."""
        try:
            if isinstance(target, CompositeGroup):
                serving = target.serving(serving_size, max_depth=self.max_depth)
                nutrition, servings = serving.nutrition, serving.servings
            else:
                servings = target.scalar(serving_size, max_depth=self.max_depth)
                nutrition = target.nutrition.scaled(servings)
        except (ServingResolutionError, UnitConversionError) as exc:
            _logger.log(
                logging.WARNING if self.debug else logging.DEBUG,
                "Cannot resolve %s for %s: %s",
                serving_size,
                _label(target),
                exc,
            )
            return ServingResult(
                serving_size=serving_size, nutrition=None, servings=None, error=str(exc)
            )
        return ServingResult(
            serving_size=serving_size, nutrition=nutrition, servings=servings
        )

    def describe(
        self, target: Servable | None, serving_size: ServingSize | None
    ) -> FormattedServingSize:
        return format_serving_size(serving_size, target)

    def option_groups(
        self, target: Servable, query: str | None = None
    ) -> list[OptionGroup]:
        """Return serving size choices for ``target``, filtered by ``query``."""
        return filter_groups(build_option_groups(target), query)


def _label(target: Servable) -> str:
    return target.name or target.id or type(target).__name__
