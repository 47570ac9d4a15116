"""Service router - FastAPI endpoints for the service catalog"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import TenantContext, get_tenant_context
from ...database import get_db
from ...i18n import get_language, translate
from .schemas import ServiceCreate, ServiceResponse, ServiceRestoreResponse, ServiceUpdate
from .service import CatalogService

router = APIRouter(prefix="/services", tags=["Services"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@router.get("", response_model=list[ServiceResponse])
async def get_services(
    showHidden: bool = Query(False, description="Include hidden services"),
    context: TenantContext = Depends(get_tenant_context),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return [ServiceResponse.from_model(s) for s in catalog.get_services(context, showHidden)]


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: int,
    context: TenantContext = Depends(get_tenant_context),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return ServiceResponse.from_model(catalog.get_service(service_id, context))


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    context: TenantContext = Depends(get_tenant_context),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return ServiceResponse.from_model(catalog.create_service(data, context))


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    context: TenantContext = Depends(get_tenant_context),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return ServiceResponse.from_model(catalog.update_service(service_id, data, context))


@router.delete("/{service_id}")
async def delete_service(
    service_id: int,
    context: TenantContext = Depends(get_tenant_context),
    catalog: CatalogService = Depends(get_catalog_service),
    language: str = Depends(get_language),
):
    """Soft delete a service"""
    catalog.delete_service(service_id, context)
    return {"message": translate("success.serviceDeleted", language)}


@router.patch("/{service_id}/restore", response_model=ServiceRestoreResponse)
async def restore_service(
    service_id: int,
    context: TenantContext = Depends(get_tenant_context),
    catalog: CatalogService = Depends(get_catalog_service),
    language: str = Depends(get_language),
):
    service = catalog.restore_service(service_id, context)
    return ServiceRestoreResponse(
        message=translate("success.serviceRestored", language),
        service=ServiceResponse.from_model(service),
    )
