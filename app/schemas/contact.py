from pydantic import BaseModel, Field, EmailStr
from datetime import datetime
from typing import Optional


class ContactMessageCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    message: str = Field(..., min_length=1, max_length=10000)


class ContactMessageResponse(BaseModel):
    id: str
    name: str
    email: str
    message: str
    is_read: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
