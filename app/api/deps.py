"""FastAPI providers for the services constructed at application startup."""
from fastapi import Request

from app.core.config import Settings
from app.services.recipe.dish_identification import DishIdentificationService
from app.services.recipe.image_generation import RecipeImageService
from app.services.recipe.recipe_generation import RecipeGenerationService


def get_recipe_generator(request: Request) -> RecipeGenerationService:
    return request.app.state.recipe_generator


def get_dish_identifier(request: Request) -> DishIdentificationService:
    return request.app.state.dish_identifier


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_image_generator(request: Request) -> RecipeImageService:
    return request.app.state.image_generator
