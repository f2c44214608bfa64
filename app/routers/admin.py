"""
Admin endpoints.

Every route here sits behind the admin guard (authenticated + role admin).
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import NotFoundError, ValidationFailed
from app.core.security import require_admin
from app.crud import contact_messages as contact_crud
from app.crud import recipes as recipes_crud
from app.crud import site_settings as site_settings_crud
from app.crud import stats as stats_crud
from app.crud import users as users_crud
from app.models.user import User, ROLE_ADMIN, ROLE_BANNED
from app.schemas.common import MessageResponse, StatsResponse
from app.schemas.contact import ContactMessageResponse
from app.schemas.recipe import ApproveRequest, FeatureRequest, RecipeResponse
from app.schemas.settings import SiteSettingsResponse, SiteSettingsUpdate
from app.schemas.user import RoleUpdateRequest, UserResponse


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _guard_last_admin(db: Session, target: User, new_role: str) -> None:
    """Refuse to leave the site without any admin."""
    if target.role == ROLE_ADMIN and new_role != ROLE_ADMIN and users_crud.count_admins(db) <= 1:
        raise ValidationFailed(
            "Cannot remove the last admin",
            errors=[{"field": "role", "message": "At least one admin must remain", "type": "value_error"}],
        )


@router.get("/stats", response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db)):
    return stats_crud.get_stats(db)


@router.get("/users", response_model=List[UserResponse])
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db)
):
    return users_crud.list_users(db, limit=limit, offset=(page - 1) * limit)


@router.put("/users/{user_id}/role", response_model=UserResponse)
def update_user_role(
    user_id: str,
    request: RoleUpdateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    target = users_crud.get_user(db, user_id)
    if not target:
        raise NotFoundError("User not found")
    _guard_last_admin(db, target, request.role)

    user = users_crud.update_user_role(db, user_id, request.role)
    if not user:
        raise NotFoundError("User not found")
    logger.info("Admin %s set role of %s to %s", admin.id, user_id, request.role)
    return user


@router.put("/users/{user_id}/ban", response_model=MessageResponse)
def ban_user(
    user_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    target = users_crud.get_user(db, user_id)
    if not target:
        raise NotFoundError("User not found")
    _guard_last_admin(db, target, ROLE_BANNED)

    if not users_crud.ban_user(db, user_id):
        raise NotFoundError("User not found")
    logger.info("Admin %s banned %s", admin.id, user_id)
    return {"message": "User banned"}


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Delete a user together with their recipes, reviews and saved recipes."""
    if user_id == admin.id:
        raise ValidationFailed(
            "Cannot delete your own account",
            errors=[{"field": "user_id", "message": "Admins cannot delete themselves", "type": "value_error"}],
        )
    if not users_crud.delete_user(db, user_id):
        raise NotFoundError("User not found")
    logger.info("Admin %s deleted user %s", admin.id, user_id)
    return {"message": "User deleted"}


@router.put("/recipes/{recipe_id}/feature", response_model=RecipeResponse)
def set_recipe_featured(
    recipe_id: str,
    request: FeatureRequest,
    db: Session = Depends(get_db)
):
    recipe = recipes_crud.update_recipe(db, recipe_id, {"is_featured": request.featured})
    if not recipe:
        raise NotFoundError("Recipe not found")
    return recipe


@router.put("/recipes/{recipe_id}/approve", response_model=RecipeResponse)
def set_recipe_approved(
    recipe_id: str,
    request: ApproveRequest,
    db: Session = Depends(get_db)
):
    """Moderation: unapproved recipes disappear from public listings"""
    recipe = recipes_crud.update_recipe(db, recipe_id, {"is_approved": request.approved})
    if not recipe:
        raise NotFoundError("Recipe not found")
    return recipe


@router.get("/contact-messages", response_model=List[ContactMessageResponse])
def list_contact_messages(
    is_read: Optional[bool] = None,
    db: Session = Depends(get_db)
):
    return contact_crud.list_contact_messages(db, is_read=is_read)


@router.put("/contact-messages/{message_id}/read", response_model=MessageResponse)
def mark_contact_message_read(message_id: str, db: Session = Depends(get_db)):
    if not contact_crud.mark_message_as_read(db, message_id):
        raise NotFoundError("Message not found")
    return {"message": "Message marked as read"}


@router.get("/settings", response_model=SiteSettingsResponse)
def get_site_settings(db: Session = Depends(get_db)):
    return site_settings_crud.get_site_settings(db)


@router.put("/settings", response_model=SiteSettingsResponse)
def update_site_settings(
    updates: SiteSettingsUpdate,
    db: Session = Depends(get_db)
):
    update_data = updates.model_dump(exclude_unset=True)
    nulls = [f for f in ("ai_temperature", "max_recipe_results") if f in update_data and update_data[f] is None]
    if nulls:
        raise ValidationFailed(
            "Invalid settings data",
            errors=[{"field": f, "message": "Field cannot be null", "type": "value_error"} for f in nulls],
        )
    return site_settings_crud.update_site_settings(db, update_data)
