"""
Recipe generation service using OpenAI LLM.

Turns a list of ingredients (plus optional cuisine, difficulty and time
filters) into complete recipe suggestions. The caller decides what to persist.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.services.recipe.errors import RecipeAIError
from app.services.recipe.openai_client import OpenAIClientMixin


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a professional chef and recipe creator. "
    "Create detailed, delicious recipes that are easy to follow."
)

RECIPE_GENERATION_PROMPT = """Create {count} delicious recipes using these ingredients: {ingredients}.{filters}

For each recipe, provide:
- name: Descriptive recipe name
- description: Brief appetizing description
- ingredients: Complete list with quantities (array of strings)
- instructions: Step-by-step cooking instructions (array of strings)
- cookingTime: Total time in minutes (integer)
- difficulty: easy, medium, or hard
- cuisine: Type of cuisine
- servings: Number of servings (integer)

OUTPUT FORMAT - Return a JSON object with this exact structure:
{{"recipes": [{{"name": "...", "description": "...", "ingredients": ["..."], "instructions": ["..."], "cookingTime": 30, "difficulty": "easy", "cuisine": "...", "servings": 2}}]}}
"""

VALID_DIFFICULTIES = ("easy", "medium", "hard")
CUISINE_MAX_LENGTH = 100  # recipes.cuisine column width


@dataclass
class GeneratedRecipe:
    """Recipe as produced by the model, ready to be persisted."""
    name: str
    description: str = ""
    ingredients: List[str] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)
    cooking_time: Optional[int] = None
    difficulty: str = "medium"
    cuisine: Optional[str] = None
    servings: Optional[int] = None

    def to_record(self) -> Dict[str, Any]:
        """Column values for a Recipe row."""
        return {
            "name": self.name,
            "description": self.description,
            "ingredients": self.ingredients,
            "instructions": self.instructions,
            "cooking_time": self.cooking_time,
            "difficulty": self.difficulty,
            "cuisine": self.cuisine,
            "servings": self.servings,
        }


def normalize_difficulty(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in VALID_DIFFICULTIES:
        return value.strip().lower()
    return "medium"


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def _as_optional_str(value: Any, max_length: int) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()[:max_length]


def parse_recipe(data: Dict[str, Any]) -> GeneratedRecipe:
    """Parse one raw recipe object, tolerating camelCase and snake_case keys."""
    return GeneratedRecipe(
        name=str(data.get("name") or data.get("title") or "Untitled Recipe"),
        description=str(data.get("description") or ""),
        ingredients=_as_str_list(data.get("ingredients")),
        instructions=_as_str_list(data.get("instructions")),
        cooking_time=_as_int(data.get("cookingTime", data.get("cooking_time"))),
        difficulty=normalize_difficulty(data.get("difficulty")),
        cuisine=_as_optional_str(data.get("cuisine"), CUISINE_MAX_LENGTH),
        servings=_as_int(data.get("servings")),
    )


class RecipeGenerationService(OpenAIClientMixin):
    """
    Service for generating recipes from ingredients using OpenAI.

    A single blocking call per request; there is no retry.
    """

    def build_prompt(
        self,
        ingredients: List[str],
        cuisine: Optional[str] = None,
        difficulty: Optional[str] = None,
        cooking_time: Optional[int] = None,
        count: int = 3,
    ) -> str:
        filters = ""
        if cuisine:
            filters += f" Focus on {cuisine} cuisine."
        if difficulty:
            filters += f" Make the recipes {difficulty} difficulty."
        if cooking_time:
            filters += f" Keep cooking time under {cooking_time} minutes."

        return RECIPE_GENERATION_PROMPT.format(
            count=count,
            ingredients=", ".join(ingredients),
            filters=filters,
        )

    def generate_recipes(
        self,
        ingredients: List[str],
        cuisine: Optional[str] = None,
        difficulty: Optional[str] = None,
        cooking_time: Optional[int] = None,
        count: int = 3,
        temperature: float = 0.7,
    ) -> List[GeneratedRecipe]:
        """
        Generate recipes from the given ingredients.

        Args:
            ingredients: Ingredient names supplied by the user
            cuisine: Optional cuisine to focus on
            difficulty: Optional target difficulty (easy/medium/hard)
            cooking_time: Optional upper bound in minutes
            count: Number of recipes requested
            temperature: Sampling temperature (site setting)

        Returns:
            Parsed recipes, in the order the model returned them

        Raises:
            RecipeAIError: If the API call fails or the response is unusable
        """
        prompt = self.build_prompt(ingredients, cuisine, difficulty, cooking_time, count)

        try:
            response = self.client.chat.completions.create(
                model=self.settings.openai_text_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                max_tokens=4000,
                temperature=temperature,
            )
        except Exception as e:
            raise RecipeAIError(f"OpenAI API error: {str(e)}") from e

        content = response.choices[0].message.content
        if not content:
            raise RecipeAIError("Empty response from OpenAI")

        try:
            result = json.loads(content)
        except json.JSONDecodeError as e:
            raise RecipeAIError(f"Failed to parse response: {str(e)}") from e

        return self._parse_response(result)

    def _parse_response(self, data: Any) -> List[GeneratedRecipe]:
        """Accept {"recipes": [...]} or a bare array of recipe objects."""
        if isinstance(data, dict):
            items = data.get("recipes")
        else:
            items = data

        if not isinstance(items, list):
            raise RecipeAIError("Response did not contain a list of recipes")

        recipes = [parse_recipe(item) for item in items if isinstance(item, dict)]
        logger.info("Generated %d recipe(s)", len(recipes))
        return recipes
