import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from .config import IS_PRODUCTION, TOKEN_COOKIE_NAME, TOKEN_LIFETIME_DAYS
from .database import get_db
from .models import Role, User
from .security_utils import create_session_token, decode_session_token

logger = logging.getLogger(__name__)

TOKEN_MAX_AGE_SECONDS = int(timedelta(days=TOKEN_LIFETIME_DAYS).total_seconds())


@dataclass(frozen=True)
class TenantContext:
    """Who is calling and which organization their data is scoped to"""

    user_id: int
    username: str
    role: Role
    organization_id: Optional[int]

    @property
    def is_superadmin(self) -> bool:
        return self.role == Role.SUPERADMIN


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=IS_PRODUCTION,
        samesite="strict",
        max_age=TOKEN_MAX_AGE_SECONDS,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=TOKEN_COOKIE_NAME,
        httponly=True,
        secure=IS_PRODUCTION,
        samesite="strict",
        path="/",
    )


async def get_auth_context(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
) -> TenantContext:
    """
    Resolve the session cookie to the calling user.

    Every successful call reissues the cookie with a fresh expiry, giving
    sliding-session semantics.
    """
    token = request.cookies.get(TOKEN_COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="errors.noToken")

    payload = decode_session_token(token)
    if not payload or "id" not in payload:
        raise HTTPException(status_code=401, detail="errors.invalidToken")

    user = db.query(User).filter(User.id == payload["id"]).first()
    if not user:
        logger.warning(f"⚠️ Token references missing user id={payload['id']}")
        raise HTTPException(status_code=401, detail="errors.invalidToken")

    set_session_cookie(response, create_session_token(user.id))

    context = TenantContext(
        user_id=user.id,
        username=user.username,
        role=Role(user.role),
        organization_id=user.organization_id,
    )
    request.state.tenant = context
    return context


async def get_tenant_context(
    context: TenantContext = Depends(get_auth_context),
) -> TenantContext:
    """Authenticated context that is guaranteed to carry an organization id"""
    if context.organization_id is None:
        raise HTTPException(status_code=400, detail="validation.organizationRequired")
    return context


class RoleGuard:
    """
    Route dependency allowing only the declared roles.

    Usage: ``Depends(RoleGuard(Role.ADMIN))``
    """

    def __init__(self, *required_roles: Role, denied_detail: Optional[str] = None):
        self.required_roles = frozenset(required_roles)
        if denied_detail is None:
            denied_detail = (
                "errors.superadminOnly" if self.required_roles == {Role.SUPERADMIN} else "errors.adminOnly"
            )
        self.denied_detail = denied_detail

    async def __call__(self, context: TenantContext = Depends(get_auth_context)) -> TenantContext:
        if context.role not in self.required_roles:
            logger.warning(
                f"🚫 Access denied: user {context.user_id} ({context.role.value}) "
                f"needs one of {sorted(r.value for r in self.required_roles)}"
            )
            raise HTTPException(status_code=403, detail=self.denied_detail)
        return context


require_admin = RoleGuard(Role.ADMIN)
require_superadmin = RoleGuard(Role.SUPERADMIN)
