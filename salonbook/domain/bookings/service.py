"""Booking service - Business logic and the overlap checker"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import TenantContext
from ...models import Booking, Client, Employee, EntityType, HistoryAction, Service
from ...shared.timezone import month_range_utc, parse_datetime, to_org_time, to_utc
from ..clients.repository import ClientRepository
from ..employees.repository import EmployeeRepository
from ..history.service import HistoryRecorder
from ..organizations.repository import OrganizationRepository
from ..services.repository import ServiceRepository
from .repository import BookingRepository
from .schemas import BookingCreate, BookingUpdate

logger = logging.getLogger(__name__)


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()
        self.history = HistoryRecorder(db)

    def get_timezone(self, context: TenantContext) -> str:
        return OrganizationRepository.get_timezone(self.db, context.organization_id)

    def get_bookings(
        self,
        context: TenantContext,
        month: Optional[int] = None,
        year: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[Booking]:
        """
        Bookings of the organization, optionally limited to a calendar month
        or to a ``start_date``..``end_date`` range (org-local, end inclusive).
        """
        tz_name = self.get_timezone(context)
        start = end = None

        if month is not None or year is not None:
            if month is None or year is None or not 1 <= month <= 12 or not 1 <= year <= 9998:
                raise HTTPException(status_code=400, detail="validation.monthYearInvalid")
            try:
                start, end = month_range_utc(year, month, tz_name)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e)) from None
        elif start_date and end_date:
            try:
                start = to_utc(parse_datetime(start_date), tz_name)
                end = to_utc(_range_end(end_date), tz_name)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e)) from None

        return self.repo.get_bookings(self.db, context.organization_id, start=start, end=end)

    def get_booking(self, booking_id: int, context: TenantContext) -> Booking:
        booking = self.repo.get_booking_by_id(self.db, booking_id, context.organization_id)
        if not booking:
            raise HTTPException(status_code=404, detail="errors.bookingNotFound")
        return booking

    def _resolve_references(
        self, data: BookingCreate, context: TenantContext
    ) -> tuple[Employee, Client, list[Service]]:
        """
        Load the employee, client and services of a booking request.

        The employee row is locked until the transaction ends, which
        serializes concurrent bookings for the same employee.
        """
        org_id = context.organization_id

        employee = EmployeeRepository.get_employee_by_id(self.db, data.employee_id, org_id, lock=True)
        if not employee:
            raise HTTPException(status_code=404, detail="errors.employeeNotFound")

        client = ClientRepository.get_client_by_id(self.db, data.client_id, org_id)
        if not client:
            raise HTTPException(status_code=404, detail="errors.clientNotFound")

        services = ServiceRepository.get_services_by_ids(self.db, data.service_ids, org_id)
        if len(services) != len(data.service_ids):
            raise HTTPException(status_code=404, detail="errors.serviceNotFound")

        return employee, client, services

    def _check_overlaps(
        self,
        context: TenantContext,
        employee_id: int,
        client_id: int,
        start: datetime,
        end: datetime,
        exclude_id: Optional[int] = None,
    ) -> None:
        org_id = context.organization_id

        clash = self.repo.find_overlapping(
            self.db, org_id, start, end, employee_id=employee_id, exclude_id=exclude_id
        )
        if clash:
            logger.info(f"⛔ Employee {employee_id} already booked (booking #{clash.id}) for {start} - {end}")
            raise HTTPException(status_code=400, detail="errors.employeeNotAvailable")

        clash = self.repo.find_overlapping(
            self.db, org_id, start, end, client_id=client_id, exclude_id=exclude_id
        )
        if clash:
            logger.info(f"⛔ Client {client_id} already booked (booking #{clash.id}) for {start} - {end}")
            raise HTTPException(status_code=400, detail="errors.clientHasBooking")

    def _write_booking(
        self,
        booking: Booking,
        data: BookingCreate,
        context: TenantContext,
        tz_name: str,
    ) -> Booking:
        """Validate, check for overlaps and save ``booking`` in one transaction"""
        try:
            start = to_utc(data.start_time, tz_name)
            end = to_utc(data.end_time, tz_name)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from None
        if start >= end:
            raise HTTPException(status_code=400, detail="validation.invalidTimeRange")

        try:
            employee, client, services = self._resolve_references(data, context)
            self._check_overlaps(context, employee.id, client.id, start, end, exclude_id=booking.id)

            booking.employee = employee
            booking.client = client
            booking.start_time = start
            booking.end_time = end
            booking.services = services
            booking.price = (
                data.total_price if data.total_price is not None else sum(s.price for s in services)
            )
            booking.notes = data.notes or ""
            return self.repo.save_booking(self.db, booking)
        except Exception:
            # Releases the employee row lock
            self.db.rollback()
            raise

    def create_booking(self, data: BookingCreate, context: TenantContext) -> Booking:
        tz_name = self.get_timezone(context)
        booking = self._write_booking(Booking(organization_id=context.organization_id), data, context, tz_name)
        logger.info(
            f"📅 Booking #{booking.id} created for employee {booking.employee_id} "
            f"at {booking.start_time} UTC (org={context.organization_id})"
        )

        self.history.record(
            context, HistoryAction.CREATE, EntityType.BOOKING, booking.id, details=_booking_details(booking, tz_name)
        )
        return booking

    def update_booking(self, booking_id: int, data: BookingUpdate, context: TenantContext) -> Booking:
        tz_name = self.get_timezone(context)
        booking = self.get_booking(booking_id, context)
        before = _booking_details(booking, tz_name)

        booking = self._write_booking(booking, data, context, tz_name)

        self.history.record(
            context,
            HistoryAction.UPDATE,
            EntityType.BOOKING,
            booking.id,
            details={"before": before, "after": _booking_details(booking, tz_name)},
        )
        return booking

    def delete_booking(self, booking_id: int, context: TenantContext) -> None:
        """Bookings are removed for good"""
        tz_name = self.get_timezone(context)
        booking = self.get_booking(booking_id, context)
        details = _booking_details(booking, tz_name)

        self.repo.delete_booking(self.db, booking)
        logger.info(f"🗑️ Booking #{booking_id} deleted (org={context.organization_id})")

        self.history.record(context, HistoryAction.DELETE, EntityType.BOOKING, booking_id, details=details)


def _range_end(value: str) -> datetime:
    """Parse the end of a date range; a bare date covers that whole day"""
    parsed = parse_datetime(value)
    if len(value.strip()) == 10:
        try:
            parsed += timedelta(days=1)
        except OverflowError:
            raise ValueError("validation.invalidDate") from None
    return parsed


def _booking_details(booking: Booking, tz_name: str) -> dict:
    start = to_org_time(booking.start_time, tz_name)
    end = to_org_time(booking.end_time, tz_name)
    return {
        "client": booking.client.full_name if booking.client else None,
        "phone": booking.client.phone if booking.client else None,
        "employee": booking.employee.name if booking.employee else None,
        "services": [s.name for s in booking.services],
        "startTime": start.isoformat() if start else None,
        "endTime": end.isoformat() if end else None,
        "price": booking.price,
    }
