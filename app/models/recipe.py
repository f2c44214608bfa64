from sqlalchemy import Column, String, Text, DateTime, Integer, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base
from app.models.types import JSONList, new_id, utcnow


DIFFICULTIES = ("easy", "medium", "hard")


class Recipe(Base):
    """
    A recipe, either written by a user or generated/identified by the AI service.

    Only approved recipes are visible in public listings.
    """
    __tablename__ = "recipes"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    ingredients = Column(JSONList, nullable=False)  # ordered list of strings
    instructions = Column(JSONList, nullable=False)  # ordered list of strings
    cooking_time = Column(Integer, nullable=True)  # minutes
    difficulty = Column(String(16), nullable=True, index=True)
    cuisine = Column(String(100), nullable=True, index=True)
    image_url = Column(Text, nullable=True)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)

    is_generated = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_approved = Column(Boolean, nullable=False, default=True, index=True)
    servings = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="recipes")
    reviews = relationship("Review", back_populates="recipe", cascade="all, delete-orphan", passive_deletes=True)
    saved_by = relationship("SavedRecipe", back_populates="recipe", cascade="all, delete-orphan", passive_deletes=True)
