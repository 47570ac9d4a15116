"""Organization router - superadmin tenant management and settings"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import RoleGuard, TenantContext, require_superadmin
from ...database import get_db
from ...i18n import get_language, translate
from ...models import Role
from .schemas import (
    OrganizationCreate,
    OrganizationResponse,
    OrganizationSettingsUpdate,
    OrganizationUpdate,
)
from .service import OrganizationService

router = APIRouter(prefix="/organizations", tags=["Organizations"])

require_settings_access = RoleGuard(Role.ADMIN, Role.SUPERADMIN)


def get_organization_service(db: Session = Depends(get_db)) -> OrganizationService:
    """Dependency injection for OrganizationService"""
    return OrganizationService(db)


@router.get("", response_model=list[OrganizationResponse])
async def get_organizations(
    _: TenantContext = Depends(require_superadmin),
    service: OrganizationService = Depends(get_organization_service),
):
    """All organizations with their user counts"""
    return [
        OrganizationResponse.from_model(organization, user_count)
        for organization, user_count in service.get_organizations()
    ]


@router.get("/{organization_id}", response_model=OrganizationResponse)
async def get_organization(
    organization_id: int,
    _: TenantContext = Depends(require_superadmin),
    service: OrganizationService = Depends(get_organization_service),
):
    return OrganizationResponse.from_model(service.get_organization(organization_id))


@router.post("", response_model=OrganizationResponse, status_code=201)
async def create_organization(
    data: OrganizationCreate,
    _: TenantContext = Depends(require_superadmin),
    service: OrganizationService = Depends(get_organization_service),
):
    return OrganizationResponse.from_model(service.create_organization(data))


@router.put("/{organization_id}", response_model=OrganizationResponse)
async def update_organization(
    organization_id: int,
    data: OrganizationUpdate,
    _: TenantContext = Depends(require_superadmin),
    service: OrganizationService = Depends(get_organization_service),
):
    return OrganizationResponse.from_model(service.update_organization(organization_id, data))


@router.delete("/{organization_id}")
async def delete_organization(
    organization_id: int,
    _: TenantContext = Depends(require_superadmin),
    service: OrganizationService = Depends(get_organization_service),
    language: str = Depends(get_language),
):
    """Delete an organization that has no users left"""
    service.delete_organization(organization_id)
    return {"message": translate("success.organizationDeleted", language)}


@router.patch("/{organization_id}/settings", response_model=OrganizationResponse)
async def update_organization_settings(
    organization_id: int,
    data: OrganizationSettingsUpdate,
    context: TenantContext = Depends(require_settings_access),
    service: OrganizationService = Depends(get_organization_service),
):
    """Update booking interval, calendar display window and timezone"""
    return OrganizationResponse.from_model(service.update_settings(organization_id, data, context))
