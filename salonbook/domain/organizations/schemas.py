"""Organization domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import (
    MAX_NAME_LENGTH,
    require_text,
    validate_booking_interval,
    validate_display_time,
    validate_slug,
    validate_timezone,
)


class OrganizationCreate(BaseModel):
    """Schema for creating a new organization"""

    name: str
    slug: str
    timezone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "validation.organizationNameSlugRequired", MAX_NAME_LENGTH, "validation.nameTooLong")

    @field_validator("slug")
    @classmethod
    def validate_slug_field(cls, v):
        return validate_slug(v)

    @field_validator("timezone")
    @classmethod
    def validate_timezone_field(cls, v):
        if v is None:
            return v
        return validate_timezone(v)


class OrganizationUpdate(OrganizationCreate):
    """Schema for updating an organization"""

    isActive: Optional[bool] = None


class OrganizationSettingsUpdate(BaseModel):
    """Calendar settings an organization admin may change"""

    bookingInterval: Optional[int] = None
    displayStartTime: Optional[str] = None
    displayEndTime: Optional[str] = None
    timezone: Optional[str] = None

    @field_validator("bookingInterval")
    @classmethod
    def validate_interval(cls, v):
        if v is None:
            return v
        return validate_booking_interval(v)

    @field_validator("displayStartTime", "displayEndTime")
    @classmethod
    def validate_display_times(cls, v):
        if v is None:
            return v
        return validate_display_time(v)

    @field_validator("timezone")
    @classmethod
    def validate_timezone_field(cls, v):
        if v is None:
            return v
        return validate_timezone(v)


class OrganizationSummary(BaseModel):
    id: int
    name: str
    slug: str


class OrganizationResponse(BaseModel):
    """Schema for organization response"""

    id: int
    name: str
    slug: str
    isActive: bool
    timezone: str
    bookingInterval: int
    displayStartTime: str
    displayEndTime: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    userCount: Optional[int] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_model(cls, organization, user_count: Optional[int] = None) -> "OrganizationResponse":
        return cls(
            id=organization.id,
            name=organization.name,
            slug=organization.slug,
            isActive=organization.is_active,
            timezone=organization.timezone,
            bookingInterval=organization.booking_interval,
            displayStartTime=organization.display_start_time,
            displayEndTime=organization.display_end_time,
            createdAt=organization.created_at,
            updatedAt=organization.updated_at,
            userCount=user_count,
        )
