from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.user import User, ROLE_ADMIN, ROLE_BANNED, ROLE_USER


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def upsert_user(
    db: Session,
    user_id: str,
    email: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    profile_image_url: Optional[str] = None,
) -> User:
    """
    Insert the user or refresh their profile fields; the role is left untouched.

    Raises IntegrityError (after rolling back) when the email belongs to
    another user.
    """
    user = get_user(db, user_id)
    if user is None:
        user = User(id=user_id, role=ROLE_USER)
        db.add(user)

    user.email = email
    user.first_name = first_name
    user.last_name = last_name
    user.profile_image_url = profile_image_url

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(user)
    return user


def list_users(db: Session, limit: int = 50, offset: int = 0) -> List[User]:
    return (
        db.query(User)
        .order_by(User.created_at.desc(), User.id)
        .offset(offset)
        .limit(limit)
        .all()
    )


def update_user_role(db: Session, user_id: str, role: str) -> Optional[User]:
    user = get_user(db, user_id)
    if not user:
        return None
    user.role = role
    db.commit()
    db.refresh(user)
    return user


def ban_user(db: Session, user_id: str) -> bool:
    return update_user_role(db, user_id, ROLE_BANNED) is not None


def delete_user(db: Session, user_id: str) -> bool:
    """Hard delete; recipes, reviews and saved rows go with the user."""
    user = get_user(db, user_id)
    if not user:
        return False
    db.delete(user)
    db.commit()
    return True


def count_admins(db: Session) -> int:
    return db.query(func.count(User.id)).filter(User.role == ROLE_ADMIN).scalar() or 0
