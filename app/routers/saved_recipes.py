from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import NotFoundError
from app.core.security import get_current_user
from app.crud import recipes as recipes_crud
from app.crud import saved_recipes as saved_crud
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.recipe import RecipeResponse
from app.schemas.saved_recipe import SaveRecipeRequest, SavedRecipeResponse, SavedStatusResponse


router = APIRouter(prefix="/saved-recipes", tags=["saved-recipes"])


@router.post("", response_model=SavedRecipeResponse)
def save_recipe(
    request: SaveRecipeRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """
    Save a recipe to favorites.

    Saving a recipe that is already saved returns the existing entry.
    """
    if not recipes_crud.get_recipe(db, request.recipe_id):
        raise NotFoundError("Recipe not found")
    return saved_crud.save_recipe(db, user.id, request.recipe_id)


@router.get("", response_model=List[RecipeResponse])
def get_saved_recipes(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """
    Get all saved/favorited recipes.

    Returns recipes ordered by most recently saved.
    """
    return saved_crud.list_saved_recipes(db, user.id)


@router.get("/{recipe_id}/status", response_model=SavedStatusResponse)
def get_saved_status(
    recipe_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return {"is_saved": saved_crud.is_recipe_saved(db, user.id, recipe_id)}


@router.delete("/{recipe_id}", response_model=MessageResponse)
def unsave_recipe(
    recipe_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """
    Remove a recipe from favorites (unsave).
    """
    if not saved_crud.unsave_recipe(db, user.id, recipe_id):
        raise NotFoundError("Saved recipe not found")
    return {"message": "Recipe removed from favorites"}
