"""Tests for container wiring."""

from nutrition_servings.config import Settings
from nutrition_servings.containers import build_container
from tests.conftest import InMemoryCatalogRepository


def test_build_container_creates_services(
    settings: Settings, catalog_repository: InMemoryCatalogRepository
) -> None:
    container = build_container(catalog_repository, settings)

    assert container.settings is settings
    assert container.serving_service.max_depth == 8
    assert container.history_service.repository is catalog_repository
    assert container.history_service.max_depth == 8
    assert container.history_service.catalog_ttl_seconds == 300
