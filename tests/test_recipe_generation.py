"""
Unit tests for the recipe generation service.

Covers prompt construction, response parsing and error handling of the
OpenAI chat completion call.
"""
import json

import pytest
from unittest.mock import MagicMock

from app.core.config import Settings
from app.services.recipe.errors import RecipeAIError
from app.services.recipe.recipe_generation import (
    GeneratedRecipe,
    RecipeGenerationService,
    normalize_difficulty,
    parse_recipe,
)


def _completion(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


SAMPLE_RECIPES = {
    "recipes": [
        {
            "name": "Egg Noodles",
            "description": "Fresh homemade noodles",
            "ingredients": ["2 eggs", "200g flour"],
            "instructions": ["Make dough", "Roll and cut", "Boil"],
            "cookingTime": 40,
            "difficulty": "Medium",
            "cuisine": "italian",
            "servings": 2,
        },
        {
            "name": "Crepes",
            "description": "Thin pancakes",
            "ingredients": ["1 egg", "100g flour", "250ml milk"],
            "instructions": ["Whisk", "Fry"],
            "cookingTime": 15,
            "difficulty": "easy",
            "cuisine": "french",
            "servings": 4,
        },
    ]
}


class TestRecipeGenerationService:
    """Tests for generating recipes from ingredients."""

    def setup_method(self):
        self.mock_client = MagicMock()
        self.service = RecipeGenerationService(Settings(openai_api_key="sk-test"))
        self.service._client = self.mock_client  # Inject mock

    def test_build_prompt_embeds_ingredients_and_filters(self):
        """Every supplied filter should be mentioned in the prompt."""
        prompt = self.service.build_prompt(
            ["egg", "flour"], cuisine="italian", difficulty="easy", cooking_time=30, count=2
        )

        assert "Create 2 delicious recipes" in prompt
        assert "egg, flour" in prompt
        assert "Focus on italian cuisine." in prompt
        assert "Make the recipes easy difficulty." in prompt
        assert "under 30 minutes" in prompt

    def test_build_prompt_without_filters(self):
        """Unset filters should not leak into the prompt."""
        prompt = self.service.build_prompt(["rice"])

        assert "Focus on" not in prompt
        assert "difficulty." not in prompt
        assert "minutes." not in prompt.split("For each recipe")[0]

    def test_generate_recipes_success(self):
        """A well-formed response should be parsed into GeneratedRecipe objects."""
        self.mock_client.chat.completions.create.return_value = _completion(json.dumps(SAMPLE_RECIPES))

        result = self.service.generate_recipes(["egg", "flour"], count=2, temperature=0.3)

        assert len(result) == 2
        assert result[0].name == "Egg Noodles"
        assert result[0].cooking_time == 40
        assert result[0].difficulty == "medium"
        assert result[1].ingredients == ["1 egg", "100g flour", "250ml milk"]

        kwargs = self.mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["temperature"] == 0.3
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["model"] == "gpt-4o-mini"

    def test_generate_recipes_accepts_bare_array(self):
        """Some responses are a JSON array instead of an object."""
        self.mock_client.chat.completions.create.return_value = _completion(
            json.dumps(SAMPLE_RECIPES["recipes"])
        )

        result = self.service.generate_recipes(["egg"])

        assert [r.name for r in result] == ["Egg Noodles", "Crepes"]

    def test_generate_recipes_api_error(self):
        """API errors should raise RecipeAIError."""
        self.mock_client.chat.completions.create.side_effect = Exception("API Error")

        with pytest.raises(RecipeAIError) as exc_info:
            self.service.generate_recipes(["egg"])

        assert "OpenAI API error" in str(exc_info.value)

    def test_generate_recipes_empty_content(self):
        self.mock_client.chat.completions.create.return_value = _completion(None)

        with pytest.raises(RecipeAIError):
            self.service.generate_recipes(["egg"])

    def test_generate_recipes_invalid_json(self):
        self.mock_client.chat.completions.create.return_value = _completion("not json")

        with pytest.raises(RecipeAIError) as exc_info:
            self.service.generate_recipes(["egg"])

        assert "Failed to parse response" in str(exc_info.value)

    def test_generate_recipes_without_recipe_list(self):
        """An object without a recipes list is unusable."""
        self.mock_client.chat.completions.create.return_value = _completion('{"message": "sorry"}')

        with pytest.raises(RecipeAIError):
            self.service.generate_recipes(["egg"])

    def test_missing_api_key_raises_recipe_ai_error(self, monkeypatch):
        """Without a key the client cannot be built and the call fails cleanly."""
        monkeypatch.setattr(
            "app.services.recipe.openai_client.get_openai_api_key",
            MagicMock(side_effect=RuntimeError("OPENAI_API_KEY is not set")),
        )
        service = RecipeGenerationService(Settings(openai_api_key=None))

        with pytest.raises(RecipeAIError):
            service.generate_recipes(["egg"])


class TestParseRecipe:
    """Tests for tolerant parsing of a single recipe object."""

    def test_snake_case_keys(self):
        recipe = parse_recipe({"name": "Soup", "cooking_time": "25", "servings": 3})

        assert recipe.cooking_time == 25
        assert recipe.servings == 3

    def test_defaults_for_missing_fields(self):
        recipe = parse_recipe({})

        assert recipe == GeneratedRecipe(name="Untitled Recipe")

    def test_non_numeric_time_becomes_none(self):
        assert parse_recipe({"name": "x", "cookingTime": "about an hour"}).cooking_time is None

    def test_blank_list_entries_are_dropped(self):
        recipe = parse_recipe({"name": "x", "ingredients": ["salt", "", None, "  pepper "]})

        assert recipe.ingredients == ["salt", "pepper"]

    def test_non_string_cuisine_is_dropped(self):
        assert parse_recipe({"name": "x", "cuisine": ["italian"]}).cuisine is None
        assert parse_recipe({"name": "x", "cuisine": {"name": "thai"}}).cuisine is None
        assert parse_recipe({"name": "x", "cuisine": "  "}).cuisine is None

    def test_cuisine_is_trimmed_to_column_width(self):
        recipe = parse_recipe({"name": "x", "cuisine": " Italian " + "x" * 200})

        assert recipe.cuisine.startswith("Italian")
        assert len(recipe.cuisine) == 100

    def test_to_record_matches_recipe_columns(self):
        record = parse_recipe({"name": "Soup", "difficulty": "hard"}).to_record()

        assert record["name"] == "Soup"
        assert record["difficulty"] == "hard"
        assert "image_url" not in record


class TestNormalizeDifficulty:

    def test_known_values_are_lowercased(self):
        assert normalize_difficulty("EASY") == "easy"
        assert normalize_difficulty(" hard ") == "hard"

    def test_unknown_values_fall_back_to_medium(self):
        assert normalize_difficulty("impossible") == "medium"
        assert normalize_difficulty(None) == "medium"
