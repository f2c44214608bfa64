from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.models.review import Review


def _approved_for_recipe(db: Session, recipe_id: str):
    return db.query(Review).filter(
        Review.recipe_id == recipe_id,
        Review.is_approved.is_(True)
    )


def create_review(
    db: Session,
    recipe_id: str,
    user_id: str,
    rating: int,
    comment: Optional[str] = None,
) -> Review:
    review = Review(recipe_id=recipe_id, user_id=user_id, rating=rating, comment=comment)
    db.add(review)
    db.commit()
    db.refresh(review)
    return review


def get_review(db: Session, review_id: str) -> Optional[Review]:
    return db.query(Review).filter(Review.id == review_id).first()


def list_reviews_for_recipe(db: Session, recipe_id: str) -> List[Review]:
    """Approved reviews with their authors, newest first."""
    return (
        _approved_for_recipe(db, recipe_id)
        .options(joinedload(Review.user))
        .order_by(Review.created_at.desc(), Review.id)
        .all()
    )


def get_rating_summary(db: Session, recipe_id: str) -> Tuple[float, int]:
    """(average rating, review count) over approved reviews; average is 0 when there are none."""
    average, count = (
        db.query(func.avg(Review.rating), func.count(Review.id))
        .filter(Review.recipe_id == recipe_id, Review.is_approved.is_(True))
        .one()
    )
    return (float(average) if average is not None else 0.0), int(count or 0)


def update_review(
    db: Session,
    review_id: str,
    user_id: str,
    updates: Dict[str, Any],
) -> Optional[Review]:
    """Update a review only if it belongs to user_id."""
    review = db.query(Review).filter(
        Review.id == review_id,
        Review.user_id == user_id
    ).first()
    if not review:
        return None

    for field, value in updates.items():
        setattr(review, field, value)

    db.commit()
    db.refresh(review)
    return review


def delete_review(db: Session, review_id: str, user_id: str) -> bool:
    """Delete a review only if it belongs to user_id."""
    review = db.query(Review).filter(
        Review.id == review_id,
        Review.user_id == user_id
    ).first()
    if not review:
        return False
    db.delete(review)
    db.commit()
    return True
