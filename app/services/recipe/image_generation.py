import logging

from app.services.recipe.openai_client import OpenAIClientMixin


logger = logging.getLogger(__name__)

IMAGE_PROMPT = (
    "A professional, appetizing photo of {name}. {description}. "
    "Shot in natural lighting with beautiful presentation, high quality food photography style."
)


class RecipeImageService(OpenAIClientMixin):
    """Generates a dish photo for a recipe; never raises."""

    def generate_image(self, name: str, description: str) -> str:
        """Return an image URL, or "" when no image could be generated."""
        prompt = IMAGE_PROMPT.format(name=name, description=description or "")
        try:
            response = self.client.images.generate(
                model=self.settings.openai_image_model,
                prompt=prompt,
                n=1,
                size="1024x1024",
                quality="standard",
            )
            return response.data[0].url or ""
        except Exception as e:
            logger.warning("Image generation failed for %r: %s", name, e)
            return ""
