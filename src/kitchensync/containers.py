"""Dependency Injection container for KitchenSync.

This module provides a centralized DI container using dependency-injector
to manage service dependencies and avoid circular imports.

The container manages:
- Settings (the process-wide ``get_config()`` instance)
- The process-wide RequestThrottle (Singleton)
- The cache store selected by ``cache.backend`` (Singleton)
- The Spoonacular client and the FoodDataBroker (Singleton)
"""

from __future__ import annotations

from dependency_injector import containers, providers

from kitchensync.config.loader import get_config
from kitchensync.services import (
    FoodDataBroker,
    RequestThrottle,
    SpoonacularClient,
    build_cache_store,
)


class Container(containers.DeclarativeContainer):
    """Dependency Injection container for KitchenSync services.

    Every service provider is a Singleton: one throttle must govern
    every provider call in the process.

    Example:
        >>> container = Container()
        >>> broker = container.broker()
        >>> response = broker.search_groceries("milk")
    """

    # Configuration
    config = providers.Callable(get_config)

    # Throttle shared by every provider call
    throttle = providers.Singleton(
        RequestThrottle,
        max_concurrent_requests=providers.Callable(
            lambda config: config.api.spoonacular.max_concurrent_requests,
            config=config,
        ),
        min_interval_millis=providers.Callable(
            lambda config: config.api.spoonacular.min_interval_millis,
            config=config,
        ),
    )

    # Cache store
    cache_store = providers.Singleton(
        build_cache_store,
        settings=providers.Callable(lambda config: config.cache, config=config),
    )

    # Provider client
    client = providers.Singleton(
        SpoonacularClient,
        settings=providers.Callable(lambda config: config.api.spoonacular, config=config),
        throttle=throttle,
    )

    # Broker facade
    broker = providers.Singleton(
        FoodDataBroker,
        client=client,
        cache_store=cache_store,
        default_ttl=providers.Callable(lambda config: config.cache.ttl_seconds, config=config),
    )
