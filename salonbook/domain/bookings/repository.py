"""Booking repository - Database operations for bookings"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Query, Session, joinedload, selectinload

from ...models import Booking


def _with_relations(query: Query) -> Query:
    return query.options(
        joinedload(Booking.employee),
        joinedload(Booking.client),
        selectinload(Booking.services),
    )


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_bookings(
        db: Session,
        organization_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Booking]:
        """Bookings starting within [start, end), earliest first"""
        query = _with_relations(db.query(Booking)).filter(Booking.organization_id == organization_id)

        if start is not None:
            query = query.filter(Booking.start_time >= start)
        if end is not None:
            query = query.filter(Booking.start_time < end)

        return query.order_by(Booking.start_time, Booking.id).all()

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: int, organization_id: int) -> Optional[Booking]:
        return (
            _with_relations(db.query(Booking))
            .filter(Booking.id == booking_id, Booking.organization_id == organization_id)
            .first()
        )

    @staticmethod
    def find_overlapping(
        db: Session,
        organization_id: int,
        start: datetime,
        end: datetime,
        employee_id: Optional[int] = None,
        client_id: Optional[int] = None,
        exclude_id: Optional[int] = None,
    ) -> Optional[Booking]:
        """
        First booking intersecting the half-open interval [start, end).

        Two intervals overlap when ``existing.start < end`` and
        ``existing.end > start``; touching endpoints do not overlap.
        """
        query = db.query(Booking).filter(
            Booking.organization_id == organization_id,
            Booking.start_time < end,
            Booking.end_time > start,
        )
        if employee_id is not None:
            query = query.filter(Booking.employee_id == employee_id)
        if client_id is not None:
            query = query.filter(Booking.client_id == client_id)
        if exclude_id is not None:
            query = query.filter(Booking.id != exclude_id)
        return query.first()

    @staticmethod
    def save_booking(db: Session, booking: Booking) -> Booking:
        """Persist a new or changed booking and end the transaction"""
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def delete_booking(db: Session, booking: Booking) -> None:
        db.delete(booking)
        db.commit()
