"""Nutrition for food log entries and daily totals."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Protocol

from nutrition_servings.domain.errors import ServingResolutionError, UnitConversionError
from nutrition_servings.domain.group import CompositeGroup, Product
from nutrition_servings.domain.nutrients import NutrientProfile
from nutrition_servings.domain.records import LogEntryRecord
from nutrition_servings.domain.resolution import DEFAULT_MAX_DEPTH
from nutrition_servings.domain.serving_size import (
    serving_size_from_record,
    serving_size_or_default,
)
from nutrition_servings.services.cache import Cache

_logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Source of product and group records."""

    def get_product(self, product_id: str) -> Mapping[str, object] | None:
        """Return a product record by id, if present."""

    def get_group(self, group_id: str) -> Mapping[str, object] | None:
        """Return a group record by id, if present."""


@dataclass(frozen=True)
class DayNutrition:
    """Per-entry nutrition and the day's total."""

    entries: dict[str, NutrientProfile]
    total: NutrientProfile


@dataclass
class HistoryService:
    """Resolves logged entries against the catalog."""

    repository: CatalogRepository
    cache: Cache
    catalog_ttl_seconds: int = 300
    max_depth: int = DEFAULT_MAX_DEPTH
    debug: bool = False

    def entry_nutrition(
        self, entry: LogEntryRecord | Mapping[str, object]
    ) -> NutrientProfile | None:
        """Return nutrition for a log entry, or ``None`` if it cannot be resolved."""
        parsed = _entry(entry)
        item = parsed.item
        serving_size = serving_size_or_default(item.serving_size)
        try:
            if item.product_id:
                product = self._product(item.product_id)
                preparation = (
                    product.preparation(item.preparation_id) if product else None
                )
                if preparation is None:
                    return None
                return preparation.resolved_profile(
                    serving_size, max_depth=self.max_depth
                )
            if item.group_id:
                group = self._group(item.group_id)
                if group is None:
                    return None
                return group.resolved_profile(serving_size, max_depth=self.max_depth)
        except (ServingResolutionError, UnitConversionError) as exc:
            _logger.log(
                logging.WARNING if self.debug else logging.DEBUG,
                "Log entry %s has no nutrition: %s",
                parsed.id,
                exc,
            )
            return None
        return None

    def day_nutrition(
        self, entries: Iterable[LogEntryRecord | Mapping[str, object]]
    ) -> DayNutrition:
        """Resolve every entry and total the ones that resolved."""
        by_entry: dict[str, NutrientProfile] = {}
        total = NutrientProfile.zero()
        for entry in entries:
            parsed = _entry(entry)
            nutrition = self.entry_nutrition(parsed)
            if nutrition is None:
                continue
            by_entry[parsed.id] = nutrition
            total = total.add(nutrition)
        return DayNutrition(entries=by_entry, total=total)

    def describe_entry(self, entry: LogEntryRecord | Mapping[str, object]) -> str:
        """Label an entry's serving size, e.g. ``"2 servings"`` or ``"150g"``."""
        serving_size = serving_size_from_record(_entry(entry).item.serving_size)
        return str(serving_size) if serving_size is not None else ""

    def _product(self, product_id: str) -> Product | None:
        product = self.cache.get_or_set(
            f"catalog:product:{product_id}",
            lambda: self._load_product(product_id),
            self.catalog_ttl_seconds,
        )
        return product if isinstance(product, Product) else None

    def _group(self, group_id: str) -> CompositeGroup | None:
        group = self.cache.get_or_set(
            f"catalog:group:{group_id}",
            lambda: self._load_group(group_id),
            self.catalog_ttl_seconds,
        )
        return group if isinstance(group, CompositeGroup) else None

    def _load_product(self, product_id: str) -> Product | None:
        record = self.repository.get_product(product_id)
        return Product.from_record(record) if record is not None else None

    def _load_group(self, group_id: str) -> CompositeGroup | None:
        record = self.repository.get_group(group_id)
        return CompositeGroup.from_record(record) if record is not None else None


def _entry(entry: LogEntryRecord | Mapping[str, object]) -> LogEntryRecord:
    if isinstance(entry, LogEntryRecord):
        return entry
    return LogEntryRecord.model_validate(entry)
