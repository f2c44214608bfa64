from typing import Dict

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.recipe import Recipe
from app.models.review import Review
from app.models.user import User


def get_stats(db: Session) -> Dict[str, int]:
    total_users = db.query(func.count(User.id)).scalar() or 0
    total_recipes = db.query(func.count(Recipe.id)).scalar() or 0
    total_reviews = db.query(func.count(Review.id)).scalar() or 0

    return {
        "total_users": total_users,
        "total_recipes": total_recipes,
        "total_reviews": total_reviews,
        # Not a real AI call counter; recipe count stands in for it
        "ai_requests": total_recipes,
    }
