"""Tests for the ingredient-to-product mapping lookup."""

import pytest

from kitchensync.services.lookups import IngredientMapLookup, IngredientMapParams
from kitchensync.shared.errors import DomainError, NormalizationError


class TestIngredientMapLookup:
    """Test validation, keys, the POST request and normalization."""

    def setup_method(self):
        self.lookup = IngredientMapLookup()

    @pytest.mark.parametrize(
        "params",
        [
            IngredientMapParams(ingredients=()),
            IngredientMapParams(ingredients=("  ",)),
            IngredientMapParams(ingredients=("milk",), servings=0),
        ],
    )
    def test_invalid_params(self, params):
        with pytest.raises(DomainError):
            self.lookup.validate(params)

    def test_ingredient_order_does_not_matter(self):
        first = IngredientMapParams(ingredients=("2 cups Milk", "1 egg"), servings=2)
        second = IngredientMapParams(ingredients=("1 egg", "2 cups milk"), servings=2)

        assert self.lookup.cache_key(first) == self.lookup.cache_key(second)
        assert self.lookup.cache_key(first).startswith("map:")

    def test_servings_are_part_of_key(self):
        first = IngredientMapParams(ingredients=("milk",), servings=2)
        second = IngredientMapParams(ingredients=("milk",), servings=4)

        assert self.lookup.cache_key(first) != self.lookup.cache_key(second)

    def test_build_request_is_post(self):
        request = self.lookup.build_request(IngredientMapParams(ingredients=("Milk", "egg"), servings=2))

        assert request.method == "POST"
        assert request.path == "/food/ingredients/map"
        assert request.json_body == {"ingredients": ["egg", "milk"], "servings": 2}
        assert request.params == {}

    def test_build_request_without_servings(self):
        request = self.lookup.build_request(IngredientMapParams(ingredients=("milk",)))

        assert request.json_body == {"ingredients": ["milk"]}

    def test_normalize(self):
        # Given
        raw = [
            {
                "original": "2 cups milk",
                "originalName": "milk",
                "ingredientImage": "milk.png",
                "products": [
                    {"id": 1, "title": "Whole Milk", "upc": 1234},
                    {"title": "No id"},
                ],
            },
            {"original": "1 egg"},
        ]

        # When
        response = self.lookup.normalize(raw, IngredientMapParams(ingredients=("2 cups milk", "1 egg")), "map:k")

        # Then
        assert response.total_results == 2
        first, second = response.to_payload()["results"]
        assert first == {
            "original": "2 cups milk",
            "originalName": "milk",
            "ingredientImage": "https://img.spoonacular.com/ingredients_250x250/milk.png",
            "products": [{"id": 1, "title": "Whole Milk", "upc": "1234"}],
        }
        assert second["products"] == []

    def test_normalize_accepts_results_envelope(self):
        response = self.lookup.normalize(
            {"results": [{"original": "milk"}]},
            IngredientMapParams(ingredients=("milk",)),
            "map:k",
        )

        assert response.results[0].original == "milk"

    def test_row_without_original_fails(self):
        with pytest.raises(NormalizationError):
            self.lookup.normalize([{"originalName": "milk"}], IngredientMapParams(ingredients=("milk",)), "map:k")
