from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import ConflictError, ForbiddenError, ValidationFailed
from app.core.security import Identity, get_current_user, require_identity
from app.crud import users as users_crud
from app.models.user import User, ROLE_BANNED
from app.schemas.user import IdentityClaims, UserResponse


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=UserResponse)
def login(
    identity: Identity = Depends(require_identity),
    db: Session = Depends(get_db)
):
    """
    Record a successful identity-provider login.

    Inserts the user on first login and refreshes their profile fields on
    every later one. The stored role is never changed here.
    """
    claims = dict(identity.claims)
    claims.setdefault("first_name", claims.get("given_name"))
    claims.setdefault("last_name", claims.get("family_name"))
    claims.setdefault("profile_image_url", claims.get("picture"))
    try:
        profile = IdentityClaims.model_validate(claims)
    except ValueError:
        raise ValidationFailed("Token claims are malformed")

    try:
        user = users_crud.upsert_user(
            db,
            user_id=profile.sub,
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            profile_image_url=profile.profile_image_url,
        )
    except IntegrityError:
        raise ConflictError("Email is already used by another account")
    if user.role == ROLE_BANNED:
        raise ForbiddenError("Account is banned")
    return user


@router.get("/user", response_model=UserResponse)
def get_auth_user(user: User = Depends(get_current_user)):
    """Current caller's profile"""
    return user
