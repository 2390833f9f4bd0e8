"""Shared test fixtures."""

from collections.abc import Mapping
from dataclasses import dataclass, field

import pytest

from nutrition_servings.config import Settings
from nutrition_servings.services.cache import InMemoryCache
from nutrition_servings.services.history import CatalogRepository, HistoryService
from nutrition_servings.services.servings import ServingService


def preparation_record(
    calories: float | None = 100,
    *,
    mass: tuple[float, str] | None = None,
    volume: tuple[float, str] | None = None,
    id: str | None = None,
    custom_sizes: list[dict[str, object]] | None = None,
    **nutrients: tuple[float, str],
) -> dict[str, object]:
    """Build a preparation record the way the API returns it."""
    nutrition: dict[str, object] = {}
    if calories is not None:
        nutrition["calories"] = {"amount": calories, "unit": "kcal"}
    for key, (amount, unit) in nutrients.items():
        nutrition[key] = {"amount": amount, "unit": unit}
    record: dict[str, object] = {"nutritionalInformation": nutrition}
    if id is not None:
        record["id"] = id
    if mass is not None:
        record["mass"] = {"amount": mass[0], "unit": mass[1]}
    if volume is not None:
        record["volume"] = {"amount": volume[0], "unit": volume[1]}
    if custom_sizes is not None:
        record["customSizes"] = custom_sizes
    return record


def product_item(
    *preparations: dict[str, object],
    serving_size: dict[str, object] | None = None,
    preparation_id: str | None = None,
) -> dict[str, object]:
    """Build a group item record referring to a product."""
    item: dict[str, object] = {
        "product": {"name": "Product", "preparations": list(preparations)}
    }
    if serving_size is not None:
        item["servingSize"] = serving_size
    if preparation_id is not None:
        item["preparationID"] = preparation_id
    return item


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory catalog for tests."""

    products: dict[str, Mapping[str, object]] = field(default_factory=dict)
    groups: dict[str, Mapping[str, object]] = field(default_factory=dict)
    product_calls: int = 0
    group_calls: int = 0

    def get_product(self, product_id: str) -> Mapping[str, object] | None:
        self.product_calls += 1
        return self.products.get(product_id)

    def get_group(self, group_id: str) -> Mapping[str, object] | None:
        self.group_calls += 1
        return self.groups.get(group_id)


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test", max_custom_size_depth=8)


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def serving_service() -> ServingService:
    return ServingService()


@pytest.fixture
def history_service(catalog_repository: InMemoryCatalogRepository) -> HistoryService:
    return HistoryService(repository=catalog_repository, cache=InMemoryCache())
