from sqlalchemy import Column, String, Text, DateTime, Boolean
from sqlalchemy.sql import func

from app.core.database import Base
from app.models.types import new_id, utcnow


class ContactMessage(Base):
    """Message submitted through the public contact form (no owning user)."""
    __tablename__ = "contact_messages"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True)
