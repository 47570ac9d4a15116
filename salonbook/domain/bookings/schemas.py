"""Booking domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.timezone import to_org_time


class BookingCreate(BaseModel):
    """
    Schema for creating or moving a booking.

    Times without an offset are wall-clock times in the organization's
    timezone. ``total_price`` defaults to the sum of the service prices.
    """

    employee_id: int
    client_id: int
    start_time: datetime
    end_time: datetime
    service_ids: list[int]
    total_price: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = ""

    @field_validator("service_ids")
    @classmethod
    def validate_service_ids(cls, v):
        if not v:
            raise ValueError("validation.bookingFieldsRequired")
        # Drop repeats, keep order
        return list(dict.fromkeys(v))

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return (v or "").strip()


class BookingUpdate(BookingCreate):
    """Schema for updating a booking; every field of a create is required again"""


class BookingEmployee(BaseModel):
    id: int
    name: str


class BookingClient(BaseModel):
    id: int
    name: str
    phone: str
    notes: str = ""


class BookingServiceItem(BaseModel):
    id: int
    name: str
    duration: int
    price: float


class BookingResponse(BaseModel):
    """Booking with times rendered in the organization's timezone"""

    id: int
    startTime: datetime
    endTime: datetime
    price: float
    notes: str
    employee: BookingEmployee
    client: BookingClient
    services: list[BookingServiceItem]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_model(cls, booking, tz_name: Optional[str]) -> "BookingResponse":
        return cls(
            id=booking.id,
            startTime=to_org_time(booking.start_time, tz_name),
            endTime=to_org_time(booking.end_time, tz_name),
            price=booking.price,
            notes=booking.notes or "",
            employee=BookingEmployee(id=booking.employee.id, name=booking.employee.name),
            client=BookingClient(
                id=booking.client.id,
                name=booking.client.full_name,
                phone=booking.client.phone,
                notes=booking.client.notes or "",
            ),
            services=[
                BookingServiceItem(id=s.id, name=s.name, duration=s.duration, price=s.price)
                for s in booking.services
            ],
            # created_at/updated_at come from the database clock, which is UTC
            created_at=to_org_time(booking.created_at, tz_name),
            updated_at=to_org_time(booking.updated_at, tz_name),
        )
