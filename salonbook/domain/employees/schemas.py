"""Employee domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import MAX_NAME_LENGTH, require_text


class EmployeeCreate(BaseModel):
    """Schema for creating a new employee"""

    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "validation.nameRequired", MAX_NAME_LENGTH, "validation.nameTooLong")


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee; both fields are required"""

    name: str
    isHidden: bool

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "validation.nameRequired", MAX_NAME_LENGTH, "validation.nameTooLong")


class EmployeeResponse(BaseModel):
    """Schema for employee response"""

    id: int
    name: str
    isHidden: bool
    status: str
    organizationId: int
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_model(cls, employee) -> "EmployeeResponse":
        return cls(
            id=employee.id,
            name=employee.name,
            isHidden=employee.is_hidden,
            status=employee.status.value,
            organizationId=employee.organization_id,
            createdAt=employee.created_at,
            updatedAt=employee.updated_at,
        )


class EmployeeAvailabilityResponse(EmployeeResponse):
    """Employee with availability for a requested time slot"""

    available: bool


class EmployeeRestoreResponse(BaseModel):
    message: str
    employee: EmployeeResponse
