from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

from app.schemas.user import UserSummary


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5, strict=True)
    comment: Optional[str] = Field(default=None, max_length=5000)


class ReviewUpdate(BaseModel):
    """Partial update; a supplied rating must still be 1-5"""
    rating: Optional[int] = Field(default=None, ge=1, le=5, strict=True)
    comment: Optional[str] = Field(default=None, max_length=5000)


class ReviewResponse(BaseModel):
    id: str
    recipe_id: str
    user_id: str
    rating: int
    comment: Optional[str] = None
    is_approved: bool
    user: Optional[UserSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
