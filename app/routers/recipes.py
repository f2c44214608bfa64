import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.api.deps import get_app_settings, get_dish_identifier, get_image_generator, get_recipe_generator
from app.core.config import Settings
from app.core.database import get_db
from app.core.errors import ForbiddenError, NotFoundError, UpstreamError, ValidationFailed
from app.core.security import can_modify, get_current_user
from app.crud import recipes as recipes_crud
from app.crud import reviews as reviews_crud
from app.crud import site_settings as site_settings_crud
from app.crud.recipes import RecipeDetail
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.recipe import (
    Difficulty,
    IdentifiedRecipeResponse,
    RecipeCreate,
    RecipeDetailResponse,
    RecipeGenerationRequest,
    RecipeResponse,
    RecipeUpdate,
)
from app.schemas.review import ReviewCreate, ReviewResponse
from app.services.recipe.dish_identification import DishIdentificationService
from app.services.recipe.errors import RecipeAIError
from app.services.recipe.image_generation import RecipeImageService
from app.services.recipe.recipe_generation import RecipeGenerationService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])

# Columns that may not be cleared through a partial update
REQUIRED_RECIPE_FIELDS = ("name", "ingredients", "instructions")


def _to_detail_response(detail: RecipeDetail) -> RecipeDetailResponse:
    base = RecipeResponse.model_validate(detail.recipe)
    return RecipeDetailResponse(
        **base.model_dump(),
        reviews=[ReviewResponse.model_validate(r) for r in detail.reviews],
        average_rating=detail.average_rating,
        review_count=detail.review_count,
    )


def _get_recipe_or_404(db: Session, recipe_id: str):
    recipe = recipes_crud.get_recipe(db, recipe_id)
    if not recipe:
        raise NotFoundError("Recipe not found")
    return recipe


@router.post("/generate-from-ingredients", response_model=List[RecipeResponse])
def generate_from_ingredients(
    request: RecipeGenerationRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    generator: RecipeGenerationService = Depends(get_recipe_generator),
    image_generator: RecipeImageService = Depends(get_image_generator),
):
    """
    Generate recipes from a list of ingredients and save them for the caller.

    Each generated recipe gets its own image; when image generation fails for
    one recipe it is saved without an image and the others are unaffected.
    """
    ingredients = [i.strip() for i in request.ingredients if i and i.strip()]
    if not ingredients:
        raise ValidationFailed(
            "Ingredients are required",
            errors=[{"field": "ingredients", "message": "At least one ingredient is required", "type": "value_error"}],
        )

    site_settings = site_settings_crud.get_site_settings(db)
    count = request.count or site_settings.max_recipe_results

    try:
        generated = generator.generate_recipes(
            ingredients=ingredients,
            cuisine=request.cuisine,
            difficulty=request.difficulty,
            cooking_time=request.cooking_time,
            count=count,
            temperature=site_settings.ai_temperature,
        )
    except RecipeAIError as e:
        raise UpstreamError("Failed to generate recipes") from e

    saved = []
    for candidate in generated:
        image_url = image_generator.generate_image(candidate.name, candidate.description)
        recipe = recipes_crud.create_recipe(
            db,
            {**candidate.to_record(), "image_url": image_url, "is_generated": True},
            user_id=user.id,
        )
        saved.append(recipe)

    return saved


@router.post("/identify-from-photo", response_model=IdentifiedRecipeResponse)
async def identify_from_photo(
    photo: UploadFile = File(..., description="Photo of the dish"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    identifier: DishIdentificationService = Depends(get_dish_identifier),
    image_generator: RecipeImageService = Depends(get_image_generator),
    settings: Settings = Depends(get_app_settings),
):
    """Identify the dish in an uploaded photo and save it as a recipe."""
    # Validate file type
    if not photo.content_type or not photo.content_type.startswith("image/"):
        raise ValidationFailed(
            "Only image files are allowed",
            errors=[{"field": "photo", "message": "File must be an image", "type": "value_error"}],
        )

    max_bytes = settings.max_upload_bytes
    image_bytes = await photo.read(max_bytes + 1)
    if len(image_bytes) > max_bytes:
        raise ValidationFailed(
            "Photo is too large",
            errors=[{"field": "photo", "message": f"File must be at most {max_bytes} bytes", "type": "value_error"}],
        )
    if not image_bytes:
        raise ValidationFailed(
            "Photo is required",
            errors=[{"field": "photo", "message": "File is empty", "type": "value_error"}],
        )

    try:
        dish = await run_in_threadpool(identifier.identify_dish, image_bytes)
    except RecipeAIError as e:
        raise UpstreamError("Failed to identify dish from photo") from e

    image_url = await run_in_threadpool(
        image_generator.generate_image, dish.recipe.name, dish.recipe.description
    )
    recipe = await run_in_threadpool(
        recipes_crud.create_recipe,
        db,
        {**dish.recipe.to_record(), "image_url": image_url, "is_generated": True},
        user_id=user.id,
    )
    return IdentifiedRecipeResponse(
        recipe=RecipeResponse.model_validate(recipe),
        confidence=dish.confidence,
    )


@router.post("", response_model=RecipeResponse, status_code=201)
def create_recipe(
    recipe: RecipeCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Create a recipe written by the caller"""
    return recipes_crud.create_recipe(
        db,
        {**recipe.model_dump(), "is_generated": False},
        user_id=user.id,
    )


@router.get("", response_model=List[RecipeResponse])
def list_recipes(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    user_id: Optional[str] = Query(None, alias="userId"),
    cuisine: Optional[str] = None,
    difficulty: Optional[Difficulty] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """List approved recipes, newest first, with optional filters."""
    return recipes_crud.list_recipes(
        db,
        limit=limit,
        offset=(page - 1) * limit,
        user_id=user_id,
        cuisine=cuisine,
        difficulty=difficulty,
        search=search,
    )


@router.get("/featured", response_model=List[RecipeResponse])
def list_featured_recipes(db: Session = Depends(get_db)):
    return recipes_crud.list_featured_recipes(db)


@router.get("/{recipe_id}", response_model=RecipeDetailResponse)
def get_recipe(recipe_id: str, db: Session = Depends(get_db)):
    """Single recipe with approved reviews and rating aggregate"""
    detail = recipes_crud.get_recipe_with_reviews(db, recipe_id)
    if not detail:
        raise NotFoundError("Recipe not found")
    return _to_detail_response(detail)


@router.patch("/{recipe_id}", response_model=RecipeResponse)
def update_recipe(
    recipe_id: str,
    updates: RecipeUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Update only the provided fields; owner or admin only."""
    recipe = _get_recipe_or_404(db, recipe_id)
    if not can_modify(user, recipe.user_id):
        raise ForbiddenError("Not authorized to update this recipe")

    update_data = updates.model_dump(exclude_unset=True)
    cleared = [f for f in REQUIRED_RECIPE_FIELDS if f in update_data and update_data[f] is None]
    if cleared:
        raise ValidationFailed(
            "Invalid recipe data",
            errors=[{"field": f, "message": "Field cannot be null", "type": "value_error"} for f in cleared],
        )

    updated = recipes_crud.update_recipe(db, recipe_id, update_data)
    if not updated:
        raise NotFoundError("Recipe not found")
    return updated


@router.delete("/{recipe_id}", response_model=MessageResponse)
def delete_recipe(
    recipe_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    recipe = _get_recipe_or_404(db, recipe_id)
    if not can_modify(user, recipe.user_id):
        raise ForbiddenError("Not authorized to delete this recipe")

    if not recipes_crud.delete_recipe(db, recipe_id):
        raise NotFoundError("Recipe not found")
    return {"message": "Recipe deleted successfully"}


@router.get("/{recipe_id}/reviews", response_model=List[ReviewResponse])
def list_reviews(recipe_id: str, db: Session = Depends(get_db)):
    _get_recipe_or_404(db, recipe_id)
    return reviews_crud.list_reviews_for_recipe(db, recipe_id)


@router.post("/{recipe_id}/reviews", response_model=ReviewResponse, status_code=201)
def create_review(
    recipe_id: str,
    review: ReviewCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    _get_recipe_or_404(db, recipe_id)
    return reviews_crud.create_review(
        db,
        recipe_id=recipe_id,
        user_id=user.id,
        rating=review.rating,
        comment=review.comment,
    )
