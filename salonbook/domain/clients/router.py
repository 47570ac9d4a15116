"""Client router - FastAPI endpoints for client operations"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import TenantContext, get_tenant_context
from ...database import get_db
from ...i18n import get_language, translate
from .schemas import (
    ClientBookingHistory,
    ClientBulkRequest,
    ClientBulkResult,
    ClientCreate,
    ClientListResponse,
    ClientResponse,
    ClientRestoreResponse,
    ClientUpdate,
)
from .service import ClientService

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=ClientListResponse)
async def get_clients(
    q: Optional[str] = Query(None, description="Search by name or phone"),
    showHidden: bool = Query(False),
    page: Optional[int] = Query(1),
    limit: Optional[int] = Query(None),
    context: TenantContext = Depends(get_tenant_context),
    service: ClientService = Depends(get_client_service),
):
    """Get a page of clients ordered by name"""
    result = service.get_clients(context, search=q, show_hidden=showHidden, page=page, limit=limit)
    return ClientListResponse(
        clients=[ClientResponse.from_model(c) for c in result["clients"]],
        pagination=result["pagination"],
    )


@router.get("/all/history", response_model=list[ClientBookingHistory])
async def get_all_clients_history(
    context: TenantContext = Depends(get_tenant_context),
    service: ClientService = Depends(get_client_service),
):
    """Booking history of every client, hidden ones included"""
    return service.get_all_history(context)


@router.post("/bulk", response_model=ClientBulkResult)
async def bulk_create_clients(
    data: ClientBulkRequest,
    context: TenantContext = Depends(get_tenant_context),
    service: ClientService = Depends(get_client_service),
    language: str = Depends(get_language),
):
    """Import many clients; invalid rows and duplicate phones are skipped"""
    result = service.bulk_create_clients(data.clients, context)
    for error in result["errors"]:
        error["error"] = translate(error["error"], language)
    return result


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: int,
    context: TenantContext = Depends(get_tenant_context),
    service: ClientService = Depends(get_client_service),
):
    return ClientResponse.from_model(service.get_client(client_id, context))


@router.get("/{client_id}/history", response_model=list[ClientBookingHistory])
async def get_client_history(
    client_id: int,
    context: TenantContext = Depends(get_tenant_context),
    service: ClientService = Depends(get_client_service),
):
    return service.get_client_history(client_id, context)


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(
    data: ClientCreate,
    context: TenantContext = Depends(get_tenant_context),
    service: ClientService = Depends(get_client_service),
):
    return ClientResponse.from_model(service.create_client(data, context))


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: int,
    data: ClientUpdate,
    context: TenantContext = Depends(get_tenant_context),
    service: ClientService = Depends(get_client_service),
):
    return ClientResponse.from_model(service.update_client(client_id, data, context))


@router.delete("/{client_id}")
async def delete_client(
    client_id: int,
    context: TenantContext = Depends(get_tenant_context),
    service: ClientService = Depends(get_client_service),
    language: str = Depends(get_language),
):
    """Soft delete a client"""
    service.delete_client(client_id, context)
    return {"message": translate("success.clientDeleted", language)}


@router.patch("/{client_id}/restore", response_model=ClientRestoreResponse)
async def restore_client(
    client_id: int,
    context: TenantContext = Depends(get_tenant_context),
    service: ClientService = Depends(get_client_service),
    language: str = Depends(get_language),
):
    client = service.restore_client(client_id, context)
    return ClientRestoreResponse(
        message=translate("success.clientRestored", language),
        client=ClientResponse.from_model(client),
    )
