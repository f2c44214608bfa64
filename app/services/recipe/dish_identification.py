"""
GPT-4o Vision client for dish identification.

Uses a multimodal OpenAI model to recognise the dish in a photo and describe
a recipe for it, including a confidence score in [0, 1].
"""
import base64
import json
from dataclasses import dataclass
from typing import Any, Dict

from app.services.recipe.errors import RecipeAIError
from app.services.recipe.openai_client import OpenAIClientMixin
from app.services.recipe.recipe_generation import GeneratedRecipe, parse_recipe


SYSTEM_PROMPT = (
    "You are a professional chef and food expert. "
    "Analyze food images and provide detailed recipe information."
)

IDENTIFICATION_PROMPT = """Analyze this food image and identify the dish. Provide:
- name: Dish name
- description: Brief description
- ingredients: List of ingredients with quantities (array of strings)
- instructions: Step-by-step cooking instructions (array of strings)
- cookingTime: Total time in minutes (integer)
- difficulty: easy, medium, or hard
- cuisine: Type of cuisine
- servings: Number of servings (integer)
- confidence: How confident you are in the identification (0-1)

Respond with a JSON object containing this information."""


@dataclass
class IdentifiedDish:
    recipe: GeneratedRecipe
    confidence: float


IMAGE_SIGNATURES = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def sniff_image_mime(image_bytes: bytes) -> str:
    """MIME type from the file header; unrecognised data is sent as JPEG."""
    for magic, mime_type in IMAGE_SIGNATURES:
        if image_bytes.startswith(magic):
            return mime_type
    # RIFF container with a WEBP fourcc
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"


def clamp_confidence(value: Any) -> float:
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return 0.0
    return min(max(confidence, 0.0), 1.0)


class DishIdentificationService(OpenAIClientMixin):
    """
    Client for GPT-4o Vision API.

    Handles image encoding, API calls, and response parsing
    for dish identification.
    """

    def identify_dish(self, image_bytes: bytes) -> IdentifiedDish:
        """
        Identify the dish shown in an image.

        Args:
            image_bytes: Raw image bytes (JPEG, PNG, etc.)

        Returns:
            The identified dish as a recipe plus a confidence score

        Raises:
            RecipeAIError: If the API call fails or the response is unusable
        """
        base64_image = base64.b64encode(image_bytes).decode("utf-8")
        mime_type = sniff_image_mime(image_bytes)

        try:
            response = self.client.chat.completions.create(
                model=self.settings.openai_vision_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": IDENTIFICATION_PROMPT},
                            {
                                "type": "image_url",
                                "image_url": {
                                    "url": f"data:{mime_type};base64,{base64_image}"
                                }
                            }
                        ]
                    }
                ],
                response_format={"type": "json_object"},
                max_tokens=2000
            )
        except Exception as e:
            raise RecipeAIError(f"GPT-4o API error: {str(e)}") from e

        content = response.choices[0].message.content
        if not content:
            raise RecipeAIError("Empty response from OpenAI")

        try:
            result: Dict[str, Any] = json.loads(content)
        except json.JSONDecodeError as e:
            raise RecipeAIError(f"Failed to parse GPT-4o response: {str(e)}") from e

        if not isinstance(result, dict):
            raise RecipeAIError("GPT-4o response was not a JSON object")

        return IdentifiedDish(
            recipe=parse_recipe(result),
            confidence=clamp_confidence(result.get("confidence")),
        )

