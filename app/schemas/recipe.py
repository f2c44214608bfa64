from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional, Literal

from app.schemas.review import ReviewResponse
from app.schemas.user import UserSummary


Difficulty = Literal["easy", "medium", "hard"]


class RecipeGenerationRequest(BaseModel):
    """Request payload for generating recipes from ingredients"""
    ingredients: List[str] = Field(..., min_length=1)
    cuisine: Optional[str] = Field(default=None, max_length=100)
    difficulty: Optional[Difficulty] = None
    cooking_time: Optional[int] = Field(default=None, ge=1, le=24 * 60)  # upper bound in minutes
    count: Optional[int] = Field(default=None, ge=1, le=10)  # defaults to site settings


class RecipeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=300)
    description: Optional[str] = None
    ingredients: List[str] = Field(..., min_length=1)
    instructions: List[str] = Field(..., min_length=1)
    cooking_time: Optional[int] = Field(default=None, ge=0)
    difficulty: Optional[Difficulty] = None
    cuisine: Optional[str] = Field(default=None, max_length=100)
    image_url: Optional[str] = None
    servings: Optional[int] = Field(default=None, ge=1)


class RecipeCreate(RecipeBase):
    """Manually written recipe"""
    pass


class RecipeUpdate(BaseModel):
    """Partial update: every field optional, same constraints as creation"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=300)
    description: Optional[str] = None
    ingredients: Optional[List[str]] = Field(default=None, min_length=1)
    instructions: Optional[List[str]] = Field(default=None, min_length=1)
    cooking_time: Optional[int] = Field(default=None, ge=0)
    difficulty: Optional[Difficulty] = None
    cuisine: Optional[str] = Field(default=None, max_length=100)
    image_url: Optional[str] = None
    servings: Optional[int] = Field(default=None, ge=1)


class RecipeResponse(BaseModel):
    """Stored recipe with its author"""
    id: str
    name: str
    description: Optional[str] = None
    ingredients: List[str] = []
    instructions: List[str] = []
    cooking_time: Optional[int] = None
    difficulty: Optional[str] = None
    cuisine: Optional[str] = None
    image_url: Optional[str] = None
    servings: Optional[int] = None
    user_id: Optional[str] = None
    user: Optional[UserSummary] = None
    is_generated: bool
    is_featured: bool
    is_approved: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RecipeDetailResponse(RecipeResponse):
    """Single recipe with approved reviews and the derived rating aggregate"""
    reviews: List[ReviewResponse] = []
    average_rating: float = 0
    review_count: int = 0


class IdentifiedRecipeResponse(BaseModel):
    recipe: RecipeResponse
    confidence: float


class FeatureRequest(BaseModel):
    featured: bool


class ApproveRequest(BaseModel):
    approved: bool
