"""User domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import Role
from ...security_utils import MIN_PASSWORD_LENGTH
from ...shared.pagination import Pagination
from ...shared.validators import MAX_USERNAME_LENGTH, require_text
from ..organizations.schemas import OrganizationSummary

ORGANIZATION_ROLES = (Role.ADMIN, Role.USER)


def _check_password(v: Optional[str]) -> Optional[str]:
    if v is not None and len(v) < MIN_PASSWORD_LENGTH:
        raise ValueError("validation.passwordTooShort")
    return v


class UserCreate(BaseModel):
    """Schema for an admin creating a user in their own organization"""

    username: str
    password: str
    role: Role = Role.USER

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        return require_text(v, "validation.usernameRequired", MAX_USERNAME_LENGTH, "validation.usernameTooLong")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return _check_password(v)

    @field_validator("role")
    @classmethod
    def validate_role(cls, v):
        if v not in ORGANIZATION_ROLES:
            raise ValueError("validation.invalidRole")
        return v


class UserUpdate(UserCreate):
    """Password is only changed when provided"""

    password: Optional[str] = None
    role: Optional[Role] = None

    @field_validator("role")
    @classmethod
    def validate_role(cls, v):
        if v is not None and v not in ORGANIZATION_ROLES:
            raise ValueError("validation.invalidRole")
        return v


class SuperadminUserCreate(BaseModel):
    """Schema for a superadmin creating a user in any organization"""

    username: str
    password: str
    role: Role = Role.USER
    organizationId: Optional[int] = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        return require_text(v, "validation.usernameRequired", MAX_USERNAME_LENGTH, "validation.usernameTooLong")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return _check_password(v)


class SuperadminUserUpdate(BaseModel):
    """Every field is optional; omitted fields keep their value"""

    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[Role] = None
    organizationId: Optional[int] = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if v is None:
            return v
        return require_text(v, "validation.usernameRequired", MAX_USERNAME_LENGTH, "validation.usernameTooLong")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return _check_password(v)


class UserResponse(BaseModel):
    """Schema for user response; the password hash is never returned"""

    id: int
    username: str
    role: str
    organizationId: Optional[int] = None
    organization: Optional[OrganizationSummary] = None
    createdAt: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_model(cls, user) -> "UserResponse":
        organization = user.organization
        return cls(
            id=user.id,
            username=user.username,
            role=Role(user.role).value,
            organizationId=user.organization_id,
            organization=(
                OrganizationSummary(id=organization.id, name=organization.name, slug=organization.slug)
                if organization
                else None
            ),
            createdAt=user.created_at,
        )


class UserListResponse(BaseModel):
    users: list[UserResponse]
    pagination: Pagination
