"""History router - audit log listing"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import TenantContext, get_tenant_context
from ...database import get_db
from .schemas import HistoryPage, HistoryResponse
from .service import DEFAULT_PAGE_SIZE, HistoryService

router = APIRouter(prefix="/history", tags=["History"])


def get_history_service(db: Session = Depends(get_db)) -> HistoryService:
    """Dependency injection for HistoryService"""
    return HistoryService(db)


@router.get("", response_model=HistoryPage)
async def get_history(
    entityType: Optional[str] = Query(None, description="Filter by entity type"),
    action: Optional[str] = Query(None, description="Filter by action"),
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    context: TenantContext = Depends(get_tenant_context),
    service: HistoryService = Depends(get_history_service),
):
    """Paginated audit log of the caller's organization, newest first"""
    result = service.list_history(context, entityType, action, page, limit)
    return HistoryPage(
        items=[HistoryResponse.from_model(entry) for entry in result["items"]],
        page=result["page"],
        limit=result["limit"],
        total=result["total"],
    )
