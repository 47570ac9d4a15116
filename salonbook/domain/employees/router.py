"""Employee router - FastAPI endpoints for employee operations"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import TenantContext, get_tenant_context
from ...database import get_db
from ...i18n import get_language, translate
from .schemas import (
    EmployeeAvailabilityResponse,
    EmployeeCreate,
    EmployeeResponse,
    EmployeeRestoreResponse,
    EmployeeUpdate,
)
from .service import EmployeeService

router = APIRouter(prefix="/employees", tags=["Employees"])


def get_employee_service(db: Session = Depends(get_db)) -> EmployeeService:
    """Dependency injection for EmployeeService"""
    return EmployeeService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[EmployeeResponse])
async def get_employees(
    showHidden: bool = Query(False, description="Include hidden employees"),
    context: TenantContext = Depends(get_tenant_context),
    service: EmployeeService = Depends(get_employee_service),
):
    """List employees; hidden ones only when showHidden=true"""
    return [EmployeeResponse.from_model(e) for e in service.get_employees(context, showHidden)]


@router.get("/available", response_model=list[EmployeeAvailabilityResponse])
async def get_available_employees(
    start_time: Optional[str] = Query(None),
    end_time: Optional[str] = Query(None),
    context: TenantContext = Depends(get_tenant_context),
    service: EmployeeService = Depends(get_employee_service),
):
    """Visible employees flagged with availability for a time slot"""
    return [
        EmployeeAvailabilityResponse(**EmployeeResponse.from_model(e).model_dump(), available=available)
        for e, available in service.get_availability(context, start_time, end_time)
    ]


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: int,
    context: TenantContext = Depends(get_tenant_context),
    service: EmployeeService = Depends(get_employee_service),
):
    return EmployeeResponse.from_model(service.get_employee(employee_id, context))


@router.post("", response_model=EmployeeResponse, status_code=201)
async def create_employee(
    data: EmployeeCreate,
    context: TenantContext = Depends(get_tenant_context),
    service: EmployeeService = Depends(get_employee_service),
):
    return EmployeeResponse.from_model(service.create_employee(data, context))


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    data: EmployeeUpdate,
    context: TenantContext = Depends(get_tenant_context),
    service: EmployeeService = Depends(get_employee_service),
):
    return EmployeeResponse.from_model(service.update_employee(employee_id, data, context))


@router.delete("/{employee_id}")
async def delete_employee(
    employee_id: int,
    context: TenantContext = Depends(get_tenant_context),
    service: EmployeeService = Depends(get_employee_service),
    language: str = Depends(get_language),
):
    """Soft delete an employee"""
    service.delete_employee(employee_id, context)
    return {"message": translate("success.employeeDeleted", language)}


@router.patch("/{employee_id}/restore", response_model=EmployeeRestoreResponse)
async def restore_employee(
    employee_id: int,
    context: TenantContext = Depends(get_tenant_context),
    service: EmployeeService = Depends(get_employee_service),
    language: str = Depends(get_language),
):
    """Make a hidden employee visible again"""
    employee = service.restore_employee(employee_id, context)
    return EmployeeRestoreResponse(
        message=translate("success.employeeRestored", language),
        employee=EmployeeResponse.from_model(employee),
    )
