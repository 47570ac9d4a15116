"""Service repository - Database operations for salon services"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Booking, RecordStatus, Service, booking_services


class ServiceRepository:
    """Repository for salon service database operations"""

    @staticmethod
    def get_services(db: Session, organization_id: int, include_hidden: bool = False) -> list[Service]:
        """Services of an organization, newest first"""
        query = db.query(Service).filter(Service.organization_id == organization_id)

        if not include_hidden:
            query = query.filter(Service.status == RecordStatus.ACTIVE)

        return query.order_by(Service.created_at.desc(), Service.id.desc()).all()

    @staticmethod
    def get_service_by_id(db: Session, service_id: int, organization_id: int) -> Optional[Service]:
        return (
            db.query(Service)
            .filter(Service.id == service_id, Service.organization_id == organization_id)
            .first()
        )

    @staticmethod
    def get_services_by_ids(db: Session, service_ids: list[int], organization_id: int) -> list[Service]:
        """Services of the organization among ``service_ids``"""
        return (
            db.query(Service)
            .filter(Service.id.in_(service_ids), Service.organization_id == organization_id)
            .order_by(Service.id)
            .all()
        )

    @staticmethod
    def create_service(db: Session, organization_id: int, **service_data) -> Service:
        service = Service(organization_id=organization_id, **service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        """Update a service with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(service, key):
                setattr(service, key, value)

        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def count_future_bookings(db: Session, service_id: int, now: datetime) -> int:
        """Bookings including the service that have not ended yet"""
        return (
            db.query(func.count(Booking.id))
            .join(booking_services, booking_services.c.booking_id == Booking.id)
            .filter(booking_services.c.service_id == service_id, Booking.end_time > now)
            .scalar()
            or 0
        )
