"""Organization service - Business logic for tenants"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import TenantContext
from ...models import EntityType, HistoryAction, Organization
from ..history.service import HistoryRecorder
from .repository import OrganizationRepository
from .schemas import OrganizationCreate, OrganizationSettingsUpdate, OrganizationUpdate

logger = logging.getLogger(__name__)


class OrganizationService:
    """Service layer for organization business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrganizationRepository()
        self.history = HistoryRecorder(db)

    def get_organizations(self) -> list[tuple[Organization, int]]:
        return self.repo.list_with_user_counts(self.db)

    def get_organization(self, organization_id: int) -> Organization:
        organization = self.repo.get_by_id(self.db, organization_id)
        if not organization:
            raise HTTPException(status_code=404, detail="errors.organizationNotFound")
        return organization

    def create_organization(self, data: OrganizationCreate) -> Organization:
        if self.repo.get_by_slug(self.db, data.slug):
            raise HTTPException(status_code=400, detail="errors.duplicateSlug")

        organization_data = {"name": data.name, "slug": data.slug, "is_active": True}
        if data.timezone:
            organization_data["timezone"] = data.timezone

        organization = self.repo.create(self.db, **organization_data)
        logger.info(f"🏢 Organization created: {organization.slug} (id={organization.id})")
        return organization

    def update_organization(self, organization_id: int, data: OrganizationUpdate) -> Organization:
        if self.repo.get_by_slug(self.db, data.slug, exclude_id=organization_id):
            raise HTTPException(status_code=400, detail="errors.duplicateSlug")

        organization = self.get_organization(organization_id)
        return self.repo.update(
            self.db,
            organization,
            name=data.name,
            slug=data.slug,
            is_active=data.isActive,
            timezone=data.timezone,
        )

    def delete_organization(self, organization_id: int) -> None:
        user_count = self.repo.count_users(self.db, organization_id)
        if user_count > 0:
            logger.warning(
                f"⚠️ Refusing to delete organization {organization_id} with {user_count} users"
            )
            raise HTTPException(status_code=400, detail="errors.organizationHasUsers")

        organization = self.get_organization(organization_id)
        self.repo.delete(self.db, organization)
        logger.info(f"🗑️ Organization deleted: id={organization_id}")

    def update_settings(
        self, organization_id: int, data: OrganizationSettingsUpdate, context: TenantContext
    ) -> Organization:
        """Change calendar settings; admins may only change their own organization"""
        if not context.is_superadmin and context.organization_id != organization_id:
            raise HTTPException(status_code=403, detail="errors.forbidden")

        organization = self.get_organization(organization_id)

        start = data.displayStartTime or organization.display_start_time
        end = data.displayEndTime or organization.display_end_time
        if start >= end:
            raise HTTPException(status_code=400, detail="validation.displayWindowInvalid")

        previous = {
            "bookingInterval": organization.booking_interval,
            "displayStartTime": organization.display_start_time,
            "displayEndTime": organization.display_end_time,
            "timezone": organization.timezone,
        }
        organization = self.repo.update(
            self.db,
            organization,
            booking_interval=data.bookingInterval,
            display_start_time=data.displayStartTime,
            display_end_time=data.displayEndTime,
            timezone=data.timezone,
        )

        self.history.record(
            context,
            HistoryAction.SETTINGS,
            EntityType.ORGANIZATION,
            organization.id,
            details={
                "before": previous,
                "after": {
                    "bookingInterval": organization.booking_interval,
                    "displayStartTime": organization.display_start_time,
                    "displayEndTime": organization.display_end_time,
                    "timezone": organization.timezone,
                },
            },
            organization_id=organization.id,
        )
        return organization
