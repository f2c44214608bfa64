"""
Caller identity and the authentication/authorization guards.

Authentication itself is delegated to the external identity provider, which
issues a signed JWT. This module only verifies that token, turns it into a
RequestContext and exposes the guards that routers depend on.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Header, Request
from jwt import ExpiredSignatureError, InvalidTokenError
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import get_db
from app.core.errors import ForbiddenError, UnauthorizedError
from app.crud import users as users_crud
from app.models.user import User, ROLE_BANNED


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Verified caller identity taken from token claims."""
    subject: str
    claims: Dict[str, Any]


@dataclass(frozen=True)
class RequestContext:
    """Per-request caller information; identity is None for anonymous callers."""
    identity: Optional[Identity] = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


def decode_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Verify signature/expiry and return the token claims."""
    options = {"require": ["sub"]}
    kwargs: Dict[str, Any] = {}
    if settings.auth_jwt_audience:
        kwargs["audience"] = settings.auth_jwt_audience
    else:
        options["verify_aud"] = False
    return jwt.decode(
        token,
        settings.auth_jwt_secret,
        algorithms=[settings.auth_jwt_algorithm],
        options=options,
        **kwargs,
    )


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    return token or None


def get_request_context(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> RequestContext:
    token = _bearer_token(authorization)
    if token is None:
        return RequestContext()

    try:
        claims = decode_token(token, request.app.state.settings)
    except ExpiredSignatureError:
        logger.info("Rejected expired token")
        return RequestContext()
    except InvalidTokenError as e:
        logger.info("Rejected invalid token: %s", e)
        return RequestContext()

    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject:
        return RequestContext()
    return RequestContext(identity=Identity(subject=subject, claims=claims))


def require_identity(context: RequestContext = Depends(get_request_context)) -> Identity:
    """Valid token required; the user row need not exist yet (login)."""
    if context.identity is None:
        raise UnauthorizedError()
    return context.identity


def get_current_user(
    context: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db),
) -> User:
    """Authentication guard: resolves the caller to a stored, non-banned user."""
    if context.identity is None:
        raise UnauthorizedError()

    user = users_crud.get_user(db, context.identity.subject)
    if user is None:
        raise UnauthorizedError()
    if user.role == ROLE_BANNED:
        raise ForbiddenError("Account is banned")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Admin guard: authentication guard plus role == admin."""
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user


def can_modify(user: User, owner_id: Optional[str]) -> bool:
    """Owner-or-admin check used by recipe and review handlers."""
    return user.is_admin or (owner_id is not None and owner_id == user.id)
