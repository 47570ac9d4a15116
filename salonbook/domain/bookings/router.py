"""Booking router - FastAPI endpoints for booking operations"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import TenantContext, get_tenant_context
from ...database import get_db
from ...i18n import get_language, translate
from .schemas import BookingCreate, BookingResponse, BookingUpdate
from .service import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.get("", response_model=list[BookingResponse])
async def get_bookings(
    month: Optional[int] = Query(None, description="Calendar month 1-12, used with year"),
    year: Optional[int] = Query(None),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    context: TenantContext = Depends(get_tenant_context),
    service: BookingService = Depends(get_booking_service),
):
    """List bookings, earliest first, with times in the organization's timezone"""
    bookings = service.get_bookings(context, month=month, year=year, start_date=start_date, end_date=end_date)
    tz_name = service.get_timezone(context)
    return [BookingResponse.from_model(b, tz_name) for b in bookings]


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    context: TenantContext = Depends(get_tenant_context),
    service: BookingService = Depends(get_booking_service),
):
    booking = service.get_booking(booking_id, context)
    return BookingResponse.from_model(booking, service.get_timezone(context))


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    context: TenantContext = Depends(get_tenant_context),
    service: BookingService = Depends(get_booking_service),
):
    """Create a booking; overlapping employee or client bookings are rejected"""
    booking = service.create_booking(data, context)
    return BookingResponse.from_model(booking, service.get_timezone(context))


@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: int,
    data: BookingUpdate,
    context: TenantContext = Depends(get_tenant_context),
    service: BookingService = Depends(get_booking_service),
):
    """Move or edit a booking"""
    booking = service.update_booking(booking_id, data, context)
    return BookingResponse.from_model(booking, service.get_timezone(context))


@router.delete("/{booking_id}")
async def delete_booking(
    booking_id: int,
    context: TenantContext = Depends(get_tenant_context),
    service: BookingService = Depends(get_booking_service),
    language: str = Depends(get_language),
):
    service.delete_booking(booking_id, context)
    return {"message": translate("success.bookingDeleted", language)}
