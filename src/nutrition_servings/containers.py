"""Dependency container wiring for the application."""

from dataclasses import dataclass

from nutrition_servings.app_logging import configure_logging
from nutrition_servings.config import Settings
from nutrition_servings.services.cache import InMemoryCache
from nutrition_servings.services.history import CatalogRepository, HistoryService
from nutrition_servings.services.servings import ServingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    serving_service: ServingService
    history_service: HistoryService


def build_container(
    catalog_repository: CatalogRepository, settings: Settings | None = None
) -> AppContainer:
    """Create the default dependency container around a catalog source."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    serving_service = ServingService(
        max_depth=resolved_settings.max_custom_size_depth,
        debug=resolved_settings.debug,
    )
    history_service = HistoryService(
        repository=catalog_repository,
        cache=InMemoryCache(),
        catalog_ttl_seconds=resolved_settings.catalog_ttl_seconds,
        max_depth=resolved_settings.max_custom_size_depth,
        debug=resolved_settings.debug,
    )
    return AppContainer(
        settings=resolved_settings,
        serving_service=serving_service,
        history_service=history_service,
    )
