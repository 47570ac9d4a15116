"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from ...shared.pagination import Pagination
from ...shared.validators import MAX_CLIENT_NOTES_LENGTH, MAX_NAME_LENGTH, require_text, validate_phone


class ClientCreate(BaseModel):
    """Schema for creating a new client"""

    full_name: str
    phone: str
    notes: Optional[str] = ""

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        return require_text(v, "validation.fullNameRequired", MAX_NAME_LENGTH, "validation.fullNameTooLong")

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        if not isinstance(v, str):
            raise ValueError("validation.phoneInvalid")
        return validate_phone(v)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        v = (v or "").strip()
        if len(v) > MAX_CLIENT_NOTES_LENGTH:
            raise ValueError("validation.notesTooLong")
        return v


class ClientUpdate(ClientCreate):
    """Schema for updating an existing client"""

    isHidden: bool


class ClientResponse(BaseModel):
    """Schema for client response"""

    id: int
    full_name: str
    phone: str
    notes: str
    isHidden: bool
    status: str
    organizationId: int
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_model(cls, client) -> "ClientResponse":
        return cls(
            id=client.id,
            full_name=client.full_name,
            phone=client.phone,
            notes=client.notes or "",
            isHidden=client.is_hidden,
            status=client.status.value,
            organizationId=client.organization_id,
            createdAt=client.created_at,
            updatedAt=client.updated_at,
        )


class ClientListResponse(BaseModel):
    clients: list[ClientResponse]
    pagination: Pagination


class ClientRestoreResponse(BaseModel):
    message: str
    client: ClientResponse


class ClientBulkRequest(BaseModel):
    """Rows are validated one by one so a bad row does not reject the batch"""

    clients: list[dict[str, Any]]

    @field_validator("clients")
    @classmethod
    def validate_clients(cls, v):
        if not v:
            raise ValueError("validation.clientsRequired")
        return v


class ClientBulkError(BaseModel):
    index: int
    phone: Optional[str] = None
    error: str


class ClientBulkResult(BaseModel):
    created: int
    skipped: int
    errors: list[ClientBulkError]


class HistoryLabel(BaseModel):
    """Name and visibility of a related record at read time"""

    name: str
    isHidden: bool


class HistoryClient(BaseModel):
    full_name: str
    phone: str
    isHidden: bool


class ClientBookingHistory(BaseModel):
    """A past or upcoming booking as shown in a client's history"""

    id: int
    start_time: datetime
    end_time: datetime
    services: list[HistoryLabel]
    employee: HistoryLabel
    price: float
    notes: str
    client_id: int
    client: Optional[HistoryClient] = None
