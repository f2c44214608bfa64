from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import ForbiddenError, NotFoundError, ValidationFailed
from app.core.security import can_modify, get_current_user
from app.crud import reviews as reviews_crud
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.review import ReviewResponse, ReviewUpdate


router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.put("/{review_id}", response_model=ReviewResponse)
def update_review(
    review_id: str,
    updates: ReviewUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Edit your own review"""
    review = reviews_crud.get_review(db, review_id)
    if not review:
        raise NotFoundError("Review not found")
    if review.user_id != user.id:
        raise ForbiddenError("Not authorized to update this review")

    update_data = updates.model_dump(exclude_unset=True)
    if "rating" in update_data and update_data["rating"] is None:
        raise ValidationFailed(
            "Invalid review data",
            errors=[{"field": "rating", "message": "Field cannot be null", "type": "value_error"}],
        )

    updated = reviews_crud.update_review(db, review_id, user.id, update_data)
    if not updated:
        raise NotFoundError("Review not found")
    return updated


@router.delete("/{review_id}", response_model=MessageResponse)
def delete_review(
    review_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Delete a review; its author or an admin only"""
    review = reviews_crud.get_review(db, review_id)
    if not review:
        raise NotFoundError("Review not found")
    if not can_modify(user, review.user_id):
        raise ForbiddenError("Not authorized to delete this review")

    # Deletion stays scoped to the review's author, also when an admin acts
    if not reviews_crud.delete_review(db, review_id, review.user_id):
        raise NotFoundError("Review not found")
    return {"message": "Review deleted successfully"}
