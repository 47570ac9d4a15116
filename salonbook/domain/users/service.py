"""User service - Business logic for organization and superadmin user management"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import TenantContext
from ...models import EntityType, HistoryAction, Role, User
from ...security_utils import hash_password
from ...shared.pagination import build_pagination, clamp_page
from ..history.service import HistoryRecorder
from ..organizations.repository import OrganizationRepository
from .repository import UserRepository
from .schemas import SuperadminUserCreate, SuperadminUserUpdate, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


class UserService:
    """Service layer for user business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()
        self.history = HistoryRecorder(db)

    def _ensure_unique_username(self, username: str, exclude_id: Optional[int] = None) -> None:
        if self.repo.get_user_by_username(self.db, username, exclude_id=exclude_id):
            raise HTTPException(status_code=400, detail="errors.duplicateUsername")

    def _create(self, **user_data) -> User:
        try:
            return self.repo.create_user(self.db, **user_data)
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(status_code=400, detail="errors.duplicateUsername") from None

    def _update(self, user: User, **updates) -> User:
        try:
            return self.repo.update_user(self.db, user, **updates)
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(status_code=400, detail="errors.duplicateUsername") from None

    # ========================================================================
    # ORGANIZATION ADMIN
    # ========================================================================

    def get_users(self, context: TenantContext) -> list[User]:
        return self.repo.get_users(self.db, context.organization_id)

    def get_user(self, user_id: int, context: TenantContext) -> User:
        """Get a user of the caller's organization"""
        user = self.repo.get_user_by_id(self.db, user_id, organization_id=context.organization_id)
        if not user:
            raise HTTPException(status_code=404, detail="errors.userNotFound")
        return user

    def create_user(self, data: UserCreate, context: TenantContext) -> User:
        self._ensure_unique_username(data.username)

        user = self._create(
            username=data.username,
            password_hash=hash_password(data.password),
            role=data.role,
            organization_id=context.organization_id,
        )
        logger.info(f"👤 User created: {user.username} ({user.role.value}) in org {context.organization_id}")

        self.history.record(
            context,
            HistoryAction.CREATE,
            EntityType.USER,
            user.id,
            details={"username": user.username, "role": user.role.value},
        )
        return user

    def update_user(self, user_id: int, data: UserUpdate, context: TenantContext) -> User:
        user = self.get_user(user_id, context)
        before = {"username": user.username, "role": user.role.value}

        if data.username != user.username:
            self._ensure_unique_username(data.username, exclude_id=user.id)

        user = self._update(
            user,
            username=data.username,
            role=data.role,
            password_hash=hash_password(data.password) if data.password else None,
        )

        self.history.record(
            context,
            HistoryAction.UPDATE,
            EntityType.USER,
            user.id,
            details={
                "before": before,
                "after": {"username": user.username, "role": user.role.value},
                "passwordChanged": bool(data.password),
            },
        )
        return user

    def delete_user(self, user_id: int, context: TenantContext) -> None:
        if user_id == context.user_id:
            raise HTTPException(status_code=400, detail="errors.cannotDeleteSelf")

        user = self.get_user(user_id, context)
        username = user.username

        self.repo.delete_user(self.db, user)
        logger.info(f"🗑️ User deleted: {username} (org={context.organization_id})")

        self.history.record(
            context, HistoryAction.DELETE, EntityType.USER, user_id, details={"username": username}
        )

    # ========================================================================
    # SUPERADMIN
    # ========================================================================

    def list_all_users(
        self,
        organization_id: Optional[int] = None,
        page: Optional[int] = 1,
        limit: Optional[int] = DEFAULT_PAGE_SIZE,
    ) -> dict:
        """Users of every organization, newest first, one page at a time"""
        page_num, page_size = clamp_page(page, limit, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)
        users, total = self.repo.list_users(
            self.db,
            organization_id=organization_id,
            offset=(page_num - 1) * page_size,
            limit=page_size,
        )
        return {"users": users, "pagination": build_pagination(page_num, page_size, total)}

    def get_any_user(self, user_id: int) -> User:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="errors.userNotFound")
        return user

    def _resolve_organization(self, role: Role, organization_id: Optional[int]) -> Optional[int]:
        """Superadmins belong to no organization; everyone else needs an existing one"""
        if role == Role.SUPERADMIN:
            return None
        if organization_id is None:
            raise HTTPException(status_code=400, detail="validation.organizationRequired")
        if not OrganizationRepository.get_by_id(self.db, organization_id):
            raise HTTPException(status_code=404, detail="errors.organizationNotFound")
        return organization_id

    def create_any_user(self, data: SuperadminUserCreate, context: TenantContext) -> User:
        self._ensure_unique_username(data.username)
        organization_id = self._resolve_organization(data.role, data.organizationId)

        user = self._create(
            username=data.username,
            password_hash=hash_password(data.password),
            role=data.role,
            organization_id=organization_id,
        )
        logger.info(f"👤 Superadmin {context.username} created user {user.username} ({user.role.value})")

        self.history.record(
            context,
            HistoryAction.CREATE,
            EntityType.USER,
            user.id,
            details={"username": user.username, "role": user.role.value, "organizationId": organization_id},
            organization_id=organization_id,
        )
        return user

    def update_any_user(self, user_id: int, data: SuperadminUserUpdate, context: TenantContext) -> User:
        user = self.get_any_user(user_id)
        before = {"username": user.username, "role": user.role.value, "organizationId": user.organization_id}

        if data.username and data.username != user.username:
            self._ensure_unique_username(data.username, exclude_id=user.id)

        role = data.role or Role(user.role)
        organization_id = self._resolve_organization(
            role, data.organizationId if data.organizationId is not None else user.organization_id
        )

        user = self._update(
            user,
            username=data.username,
            role=role,
            organization_id=organization_id,
            password_hash=hash_password(data.password) if data.password else None,
        )

        self.history.record(
            context,
            HistoryAction.UPDATE,
            EntityType.USER,
            user.id,
            details={
                "before": before,
                "after": {"username": user.username, "role": user.role.value, "organizationId": organization_id},
                "passwordChanged": bool(data.password),
            },
            organization_id=organization_id,
        )
        return user

    def delete_any_user(self, user_id: int, context: TenantContext) -> None:
        if user_id == context.user_id:
            raise HTTPException(status_code=400, detail="errors.cannotDeleteSelf")

        user = self.get_any_user(user_id)
        username, organization_id = user.username, user.organization_id

        self.repo.delete_user(self.db, user)
        logger.info(f"🗑️ Superadmin {context.username} deleted user {username}")

        self.history.record(
            context,
            HistoryAction.DELETE,
            EntityType.USER,
            user_id,
            details={"username": username},
            organization_id=organization_id,
        )
