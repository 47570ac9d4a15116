"""Auth service - credential checks and session lookups"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import TenantContext
from ...models import EntityType, HistoryAction, Role, User
from ...security_utils import create_session_token, decode_session_token, verify_password
from ..history.service import HistoryRecorder
from .schemas import LoginRequest

logger = logging.getLogger(__name__)


class AuthService:
    """Service layer for login and session state"""

    def __init__(self, db: Session):
        self.db = db
        self.history = HistoryRecorder(db)

    def login(self, data: LoginRequest) -> str:
        """
        Check credentials and return a fresh session token.

        Unknown usernames and wrong passwords fail the same way.
        """
        username = data.username.strip()
        user = self.db.query(User).filter(User.username == username).first()

        if not user or not verify_password(data.password, user.password_hash):
            logger.warning(f"🔒 Failed login attempt for username '{username}'")
            raise HTTPException(status_code=401, detail="errors.invalidCredentials")

        if user.organization is not None and not user.organization.is_active:
            logger.warning(f"🔒 Login refused for {username}: organization {user.organization_id} inactive")
            raise HTTPException(status_code=403, detail="errors.organizationInactive")

        token = create_session_token(user.id)
        logger.info(f"🔑 User logged in: {user.username} ({Role(user.role).value})")

        context = TenantContext(
            user_id=user.id,
            username=user.username,
            role=Role(user.role),
            organization_id=user.organization_id,
        )
        self.history.record(context, HistoryAction.LOGIN, EntityType.SYSTEM, user.id)
        return token

    def has_valid_session(self, token: Optional[str]) -> bool:
        """True when ``token`` verifies and still names an existing user"""
        if not token:
            return False
        payload = decode_session_token(token)
        if not payload or "id" not in payload:
            return False
        return self.db.query(User.id).filter(User.id == payload["id"]).first() is not None

    def get_current_user(self, context: TenantContext) -> User:
        user = self.db.query(User).filter(User.id == context.user_id).first()
        if not user:
            raise HTTPException(status_code=404, detail="errors.userNotFound")
        return user
