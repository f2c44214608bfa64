from sqlalchemy import Column, String, Text, DateTime, Integer, Float
from sqlalchemy.sql import func

from app.core.database import Base


SETTINGS_ID = "settings"
DEFAULT_HERO_TEXT = "Transform Ingredients Into Culinary Magic"
DEFAULT_AI_TEMPERATURE = 0.7
DEFAULT_MAX_RECIPE_RESULTS = 3


class SiteSettings(Base):
    """Singleton row (id="settings") holding site-wide configuration."""
    __tablename__ = "site_settings"

    id = Column(String(32), primary_key=True, default=SETTINGS_ID)
    hero_text = Column(Text, nullable=True, default=DEFAULT_HERO_TEXT)
    featured_recipe_id = Column(String(36), nullable=True)
    ai_temperature = Column(Float, nullable=False, default=DEFAULT_AI_TEMPERATURE)
    max_recipe_results = Column(Integer, nullable=False, default=DEFAULT_MAX_RECIPE_RESULTS)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
