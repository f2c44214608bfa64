from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.core.database import Base
from app.models.types import new_id, utcnow


ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLE_BANNED = "banned"
ROLES = (ROLE_USER, ROLE_ADMIN, ROLE_BANNED)


class User(Base):
    """
    Account mirrored from the identity provider.

    The id is the provider's subject claim; the row is upserted on every login.
    """
    __tablename__ = "users"

    id = Column(String(255), primary_key=True, default=new_id)
    email = Column(String(320), unique=True, nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    profile_image_url = Column(String, nullable=True)
    role = Column(String(16), nullable=False, default=ROLE_USER, server_default=ROLE_USER)

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Rows are removed by the database's ON DELETE CASCADE
    recipes = relationship("Recipe", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    reviews = relationship("Review", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    saved_recipes = relationship("SavedRecipe", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
