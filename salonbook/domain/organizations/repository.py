"""Organization repository - Database operations for organizations"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...config import DEFAULT_TIMEZONE
from ...models import (
    Booking,
    Client,
    Employee,
    History,
    Organization,
    Service,
    User,
    booking_services,
)


class OrganizationRepository:
    """Repository for organization database operations"""

    @staticmethod
    def get_by_id(db: Session, organization_id: int) -> Optional[Organization]:
        return db.query(Organization).filter(Organization.id == organization_id).first()

    @staticmethod
    def get_by_slug(db: Session, slug: str, exclude_id: Optional[int] = None) -> Optional[Organization]:
        """Find an organization by slug, optionally ignoring one id"""
        query = db.query(Organization).filter(Organization.slug == slug)
        if exclude_id is not None:
            query = query.filter(Organization.id != exclude_id)
        return query.first()

    @staticmethod
    def get_timezone(db: Session, organization_id: Optional[int]) -> str:
        """Timezone of an organization, defaulting when it is missing"""
        if organization_id is None:
            return DEFAULT_TIMEZONE
        tz_name = (
            db.query(Organization.timezone).filter(Organization.id == organization_id).scalar()
        )
        return tz_name or DEFAULT_TIMEZONE

    @staticmethod
    def list_with_user_counts(db: Session) -> list[tuple[Organization, int]]:
        """All organizations ordered by name with their user counts"""
        return (
            db.query(Organization, func.count(User.id))
            .outerjoin(User, User.organization_id == Organization.id)
            .group_by(Organization.id)
            .order_by(Organization.name.asc())
            .all()
        )

    @staticmethod
    def count_users(db: Session, organization_id: int) -> int:
        return (
            db.query(func.count(User.id)).filter(User.organization_id == organization_id).scalar()
            or 0
        )

    @staticmethod
    def create(db: Session, **organization_data) -> Organization:
        organization = Organization(**organization_data)
        db.add(organization)
        db.commit()
        db.refresh(organization)
        return organization

    @staticmethod
    def update(db: Session, organization: Organization, **updates) -> Organization:
        """Update an organization with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(organization, key):
                setattr(organization, key, value)

        db.commit()
        db.refresh(organization)
        return organization

    @staticmethod
    def delete(db: Session, organization: Organization) -> None:
        """Delete an organization together with its tenant data"""
        organization_id = organization.id
        booking_ids = db.query(Booking.id).filter(Booking.organization_id == organization_id)

        db.execute(
            booking_services.delete().where(booking_services.c.booking_id.in_(booking_ids.scalar_subquery()))
        )
        for model in (Booking, Client, Service, Employee, History):
            db.query(model).filter(model.organization_id == organization_id).delete(
                synchronize_session=False
            )

        db.delete(organization)
        db.commit()
