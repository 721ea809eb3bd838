"""
Tests for the FoodDataBroker facade.
"""

from __future__ import annotations

import pytest

from kitchensync.config import CacheSettings, Settings
from kitchensync.services import (
    FoodDataBroker,
    MemoryCacheStore,
    SQLiteCacheDB,
    build_cache_store,
)
from kitchensync.shared.errors import ConfigurationError, DomainError, ProviderError

MILK = {"products": [{"id": 1, "title": "Whole Milk"}], "totalProducts": 1}


@pytest.fixture
def broker(client):
    store = MemoryCacheStore()
    broker = FoodDataBroker(client, store, default_ttl=3600)
    yield broker
    broker.close()


class TestBuildCacheStore:
    """Test backend selection."""

    def test_memory_backend(self):
        store = build_cache_store(CacheSettings(backend="memory", ttl_seconds=60))

        assert isinstance(store, MemoryCacheStore)
        assert store.default_ttl == 60

    def test_sqlite_backend(self, tmp_path):
        store = build_cache_store(CacheSettings(db_path=str(tmp_path / "c.db")))
        try:
            assert isinstance(store, SQLiteCacheDB)
            assert (tmp_path / "c.db").exists()
        finally:
            store.close()


class TestFoodDataBrokerGroceries:
    """The grocery search scenario end to end, with a mocked session."""

    def test_milk_search_then_cached(self, broker, fake_session, make_response):
        # Given
        fake_session.request.return_value = make_response(payload=MILK)

        # When
        first = broker.search_groceries("milk")
        second = broker.search_groceries("Milk")

        # Then
        assert first.to_payload()["results"] == [{"id": 1, "title": "Whole Milk", "image": None}]
        assert first.total_results == 1
        assert first.cached is False
        assert second.cached is True
        assert second.results == first.results
        assert fake_session.request.call_count == 1

    def test_different_number_is_a_different_request(self, broker, fake_session, make_response):
        fake_session.request.return_value = make_response(payload=MILK)

        broker.search_groceries("milk", number=5)
        broker.search_groceries("milk", number=6)

        assert fake_session.request.call_count == 2

    def test_provider_error_not_cached(self, broker, fake_session, make_response):
        fake_session.request.side_effect = [
            make_response(status_code=402, payload={"message": "quota"}),
            make_response(payload=MILK),
        ]

        with pytest.raises(ProviderError):
            broker.search_groceries("milk")
        response = broker.search_groceries("milk")

        assert response.cached is False
        assert fake_session.request.call_count == 2

    def test_upc_and_product_lookups(self, broker, fake_session, make_response):
        fake_session.request.return_value = make_response(payload={"id": 9, "title": "Oat Milk"})

        by_id = broker.get_grocery_product(9)
        by_upc = broker.get_grocery_product_by_upc("012345")

        assert by_id.results[0].title == "Oat Milk"
        assert by_upc.results[0].upc == "012345"
        urls = [call.args[1] for call in fake_session.request.call_args_list]
        assert urls == [
            "https://api.spoonacular.com/food/products/9",
            "https://api.spoonacular.com/food/products/upc/012345",
        ]


class TestFoodDataBrokerOtherDomains:
    """Each domain goes through the same read-through path."""

    def test_search_ingredients_accepts_comma_string(self, broker, fake_session, make_response):
        fake_session.request.return_value = make_response(payload={"results": [{"id": 9003, "name": "apple"}]})

        response = broker.search_ingredients("apple", intolerances="dairy, gluten")

        assert response.applied_intolerances == ["dairy", "gluten"]
        assert fake_session.request.call_args.kwargs["params"]["intolerances"] == "dairy,gluten"

    def test_ingredient_info(self, broker, fake_session, make_response):
        fake_session.request.return_value = make_response(payload={"id": 9003, "name": "apple"})

        response = broker.get_ingredient_info(9003, amount=100, unit="g")

        assert response.results[0].name == "apple"
        assert fake_session.request.call_args.kwargs["params"]["unit"] == "g"

    def test_map_ingredients(self, broker, fake_session, make_response):
        fake_session.request.return_value = make_response(payload=[{"original": "milk", "products": []}])

        first = broker.map_ingredients_to_products(["milk"], servings=2)
        second = broker.map_ingredients_to_products("Milk", servings=2)

        assert first.results[0].original == "milk"
        assert second.cached is True
        assert fake_session.request.call_args.args[0] == "POST"

    def test_search_recipes_requires_input(self, broker, fake_session):
        with pytest.raises(DomainError):
            broker.search_recipes()

        fake_session.request.assert_not_called()

    def test_search_recipes_by_ingredients(self, broker, fake_session, make_response):
        fake_session.request.return_value = make_response(payload=[{"id": 1, "title": "Cheese Toast"}])

        response = broker.search_recipes(include_ingredients=["cheese", "bread"])

        assert response.endpoint == "findByIngredients"
        assert fake_session.request.call_args.args[1].endswith("/recipes/findByIngredients")

    def test_recipe_info(self, broker, fake_session, make_response):
        fake_session.request.return_value = make_response(payload={"id": 42, "title": "Pasta Bake"})

        response = broker.get_recipe_info(42)

        assert response.results[0].source_url == "https://spoonacular.com/recipes/pasta-bake-42"


class TestFoodDataBrokerMaintenance:
    """Test cache maintenance and stats."""

    def test_cache_info_and_clear(self, broker, fake_session, make_response):
        fake_session.request.return_value = make_response(payload=MILK)
        broker.search_groceries("milk")

        assert broker.cache_info()["namespaces"] == {"groceries": 1}
        assert broker.purge_expired() == 0
        assert broker.clear_cache("groceries") == 1

    def test_stats(self, broker, fake_session, make_response):
        fake_session.request.return_value = make_response(payload=MILK)
        broker.search_groceries("milk")
        broker.search_groceries("milk")

        stats = broker.get_stats()

        assert stats["lookups"]["cache_hits"] == 1
        assert stats["client"]["request_count"] == 1


class TestFoodDataBrokerFromSettings:
    """Test construction from settings."""

    def test_missing_credentials(self):
        with pytest.raises(ConfigurationError, match="Spoonacular API key missing"):
            FoodDataBroker.from_settings(Settings(cache={"backend": "memory"}))

    def test_from_settings(self, settings, throttle):
        broker = FoodDataBroker.from_settings(settings, throttle=throttle)
        try:
            assert broker.client.throttle is throttle
            assert isinstance(broker.cache_store, MemoryCacheStore)
            assert broker.read_through.default_ttl == settings.cache.ttl_seconds
        finally:
            broker.close()
