"""
Recipe persistence.

Public listings only ever contain approved recipes. Rating aggregates are
derived from approved reviews on every read, never stored.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from app.crud.reviews import get_rating_summary, list_reviews_for_recipe
from app.models.recipe import Recipe
from app.models.review import Review


FEATURED_LIMIT = 10


@dataclass
class RecipeDetail:
    """A recipe together with its approved reviews and rating aggregate."""
    recipe: Recipe
    reviews: List[Review]
    average_rating: float
    review_count: int


def create_recipe(db: Session, data: Dict[str, Any], user_id: Optional[str]) -> Recipe:
    recipe = Recipe(user_id=user_id, **data)
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return recipe


def get_recipe(db: Session, recipe_id: str) -> Optional[Recipe]:
    return (
        db.query(Recipe)
        .options(joinedload(Recipe.user))
        .filter(Recipe.id == recipe_id)
        .first()
    )


def get_recipe_with_reviews(db: Session, recipe_id: str) -> Optional[RecipeDetail]:
    recipe = get_recipe(db, recipe_id)
    if not recipe:
        return None

    reviews = list_reviews_for_recipe(db, recipe_id)
    average_rating, review_count = get_rating_summary(db, recipe_id)
    return RecipeDetail(
        recipe=recipe,
        reviews=reviews,
        average_rating=average_rating,
        review_count=review_count,
    )


def list_recipes(
    db: Session,
    limit: int = 20,
    offset: int = 0,
    user_id: Optional[str] = None,
    cuisine: Optional[str] = None,
    difficulty: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Recipe]:
    query = (
        db.query(Recipe)
        .options(joinedload(Recipe.user))
        .filter(Recipe.is_approved.is_(True))
    )

    if user_id:
        query = query.filter(Recipe.user_id == user_id)
    if cuisine:
        query = query.filter(Recipe.cuisine == cuisine)
    if difficulty:
        query = query.filter(Recipe.difficulty == difficulty)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(Recipe.name.ilike(pattern), Recipe.description.ilike(pattern))
        )

    return (
        query.order_by(Recipe.created_at.desc(), Recipe.id)
        .offset(offset)
        .limit(limit)
        .all()
    )


def list_featured_recipes(db: Session) -> List[Recipe]:
    return (
        db.query(Recipe)
        .options(joinedload(Recipe.user))
        .filter(Recipe.is_featured.is_(True), Recipe.is_approved.is_(True))
        .order_by(Recipe.created_at.desc(), Recipe.id)
        .limit(FEATURED_LIMIT)
        .all()
    )


def update_recipe(db: Session, recipe_id: str, updates: Dict[str, Any]) -> Optional[Recipe]:
    recipe = get_recipe(db, recipe_id)
    if not recipe:
        return None

    for field, value in updates.items():
        setattr(recipe, field, value)

    db.commit()
    db.refresh(recipe)
    return recipe


def delete_recipe(db: Session, recipe_id: str) -> bool:
    recipe = db.query(Recipe).filter(Recipe.id == recipe_id).first()
    if not recipe:
        return False
    db.delete(recipe)
    db.commit()
    return True
