from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class SiteSettingsUpdate(BaseModel):
    """Partial update of the singleton settings row"""
    hero_text: Optional[str] = Field(default=None, max_length=500)
    featured_recipe_id: Optional[str] = None
    ai_temperature: Optional[float] = Field(default=None, ge=0, le=1)
    max_recipe_results: Optional[int] = Field(default=None, ge=1, le=10)


class SiteSettingsResponse(BaseModel):
    id: str
    hero_text: Optional[str] = None
    featured_recipe_id: Optional[str] = None
    ai_temperature: float
    max_recipe_results: int
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
