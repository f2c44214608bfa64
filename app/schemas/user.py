from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, Literal


RoleName = Literal["user", "admin", "banned"]


class UserResponse(BaseModel):
    """Public profile of a user"""
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    """Author/reviewer details embedded in recipes and reviews"""
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None

    class Config:
        from_attributes = True


class RoleUpdateRequest(BaseModel):
    role: RoleName


class IdentityClaims(BaseModel):
    """Subset of identity-provider token claims used to upsert a user"""
    sub: str = Field(..., min_length=1)
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
