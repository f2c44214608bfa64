from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class SaveRecipeRequest(BaseModel):
    """Request to save a recipe to favorites"""
    recipe_id: str = Field(..., min_length=1)


class SavedRecipeResponse(BaseModel):
    id: str
    user_id: str
    recipe_id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SavedStatusResponse(BaseModel):
    is_saved: bool
