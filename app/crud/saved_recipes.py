from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.models.recipe import Recipe
from app.models.saved_recipe import SavedRecipe


def _find(db: Session, user_id: str, recipe_id: str):
    return db.query(SavedRecipe).filter(
        SavedRecipe.user_id == user_id,
        SavedRecipe.recipe_id == recipe_id
    ).first()


def save_recipe(db: Session, user_id: str, recipe_id: str) -> SavedRecipe:
    """Save a recipe for a user. Saving an already saved recipe is a no-op."""
    existing = _find(db, user_id, recipe_id)
    if existing:
        return existing

    saved = SavedRecipe(user_id=user_id, recipe_id=recipe_id)
    db.add(saved)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent save of the same pair
        db.rollback()
        existing = _find(db, user_id, recipe_id)
        if existing is None:
            raise
        return existing

    db.refresh(saved)
    return saved


def unsave_recipe(db: Session, user_id: str, recipe_id: str) -> bool:
    saved = _find(db, user_id, recipe_id)
    if not saved:
        return False
    db.delete(saved)
    db.commit()
    return True


def list_saved_recipes(db: Session, user_id: str) -> List[Recipe]:
    """Recipes saved by the user, most recently saved first."""
    return (
        db.query(Recipe)
        .join(SavedRecipe, SavedRecipe.recipe_id == Recipe.id)
        .options(joinedload(Recipe.user))
        .filter(SavedRecipe.user_id == user_id)
        .order_by(SavedRecipe.created_at.desc(), SavedRecipe.id)
        .all()
    )


def is_recipe_saved(db: Session, user_id: str, recipe_id: str) -> bool:
    return _find(db, user_id, recipe_id) is not None
