from unittest.mock import MagicMock

from app.core.config import Settings
from app.services.recipe.image_generation import RecipeImageService


class TestRecipeImageService:
    """Image generation degrades to "" instead of raising."""

    def setup_method(self):
        self.mock_client = MagicMock()
        self.service = RecipeImageService(Settings(openai_api_key="sk-test"))
        self.service._client = self.mock_client

    def test_returns_generated_url(self):
        response = MagicMock()
        response.data = [MagicMock(url="https://images.example.com/1.png")]
        self.mock_client.images.generate.return_value = response

        url = self.service.generate_image("Pancakes", "Fluffy and golden")

        assert url == "https://images.example.com/1.png"
        kwargs = self.mock_client.images.generate.call_args.kwargs
        assert "Pancakes" in kwargs["prompt"]
        assert "Fluffy and golden" in kwargs["prompt"]
        assert kwargs["n"] == 1
        assert kwargs["model"] == "dall-e-3"

    def test_api_error_returns_empty_reference(self):
        self.mock_client.images.generate.side_effect = Exception("content policy")

        assert self.service.generate_image("Pancakes", "") == ""

    def test_missing_url_returns_empty_reference(self):
        response = MagicMock()
        response.data = [MagicMock(url=None)]
        self.mock_client.images.generate.return_value = response

        assert self.service.generate_image("Pancakes", "desc") == ""
