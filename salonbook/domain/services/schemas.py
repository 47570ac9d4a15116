"""Service domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import MAX_NAME_LENGTH, require_text


class ServiceCreate(BaseModel):
    """Schema for creating a new salon service"""

    name: str
    duration: int = Field(gt=0)
    price: float = Field(ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "validation.nameRequired", MAX_NAME_LENGTH, "validation.nameTooLong")


class ServiceUpdate(ServiceCreate):
    """Schema for updating a salon service"""

    isHidden: bool


class ServiceResponse(BaseModel):
    """Schema for service response"""

    id: int
    name: str
    duration: int
    price: float
    isHidden: bool
    status: str
    organizationId: int
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_model(cls, service) -> "ServiceResponse":
        return cls(
            id=service.id,
            name=service.name,
            duration=service.duration,
            price=service.price,
            isHidden=service.is_hidden,
            status=service.status.value,
            organizationId=service.organization_id,
            createdAt=service.created_at,
            updatedAt=service.updated_at,
        )


class ServiceRestoreResponse(BaseModel):
    message: str
    service: ServiceResponse
