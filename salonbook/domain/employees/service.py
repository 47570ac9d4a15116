"""Employee service - Business logic for employee operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import TenantContext
from ...models import Employee, EntityType, HistoryAction, RecordStatus
from ...shared.timezone import parse_datetime, to_utc, utcnow
from ..history.service import HistoryRecorder
from ..organizations.repository import OrganizationRepository
from .repository import EmployeeRepository
from .schemas import EmployeeCreate, EmployeeUpdate

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service layer for employee business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = EmployeeRepository()
        self.history = HistoryRecorder(db)

    def get_employees(self, context: TenantContext, show_hidden: bool = False) -> list[Employee]:
        return self.repo.get_employees(self.db, context.organization_id, include_hidden=show_hidden)

    def get_employee(self, employee_id: int, context: TenantContext) -> Employee:
        """Get a specific employee, hidden or not"""
        employee = self.repo.get_employee_by_id(self.db, employee_id, context.organization_id)
        if not employee:
            raise HTTPException(status_code=404, detail="errors.employeeNotFound")
        return employee

    def get_availability(
        self, context: TenantContext, start_time: str, end_time: str
    ) -> list[tuple[Employee, bool]]:
        """Visible employees paired with whether they are free for the slot"""
        if not start_time or not end_time:
            raise HTTPException(status_code=400, detail="validation.timeRangeRequired")

        tz_name = OrganizationRepository.get_timezone(self.db, context.organization_id)
        try:
            start = to_utc(parse_datetime(start_time), tz_name)
            end = to_utc(parse_datetime(end_time), tz_name)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from None

        if start >= end:
            raise HTTPException(status_code=400, detail="validation.invalidTimeRange")

        employees = self.repo.get_employees(self.db, context.organization_id)
        busy = self.repo.get_busy_employee_ids(self.db, context.organization_id, start, end)
        return [(employee, employee.id not in busy) for employee in employees]

    def create_employee(self, data: EmployeeCreate, context: TenantContext) -> Employee:
        employee = self.repo.create_employee(self.db, context.organization_id, name=data.name)
        logger.info(f"👤 Employee created: {employee.name} (org={context.organization_id})")

        self.history.record(
            context,
            HistoryAction.CREATE,
            EntityType.EMPLOYEE,
            employee.id,
            details={"name": employee.name},
        )
        return employee

    def _ensure_no_future_bookings(self, employee: Employee) -> None:
        """Employees with bookings still ahead may not be hidden"""
        if self.repo.count_future_bookings(self.db, employee.id, utcnow()) > 0:
            raise HTTPException(status_code=400, detail="errors.employeeHasFutureBookings")

    def update_employee(self, employee_id: int, data: EmployeeUpdate, context: TenantContext) -> Employee:
        employee = self.get_employee(employee_id, context)
        previous_name = employee.name
        if data.isHidden and not employee.is_hidden:
            self._ensure_no_future_bookings(employee)

        employee = self.repo.update_employee(
            self.db,
            employee,
            name=data.name,
            status=RecordStatus.HIDDEN if data.isHidden else RecordStatus.ACTIVE,
        )

        self.history.record(
            context,
            HistoryAction.UPDATE,
            EntityType.EMPLOYEE,
            employee.id,
            details={"name": {"from": previous_name, "to": employee.name}, "isHidden": employee.is_hidden},
        )
        return employee

    def delete_employee(self, employee_id: int, context: TenantContext) -> Employee:
        """Soft delete: hide the employee unless bookings are still ahead"""
        employee = self.get_employee(employee_id, context)

        self._ensure_no_future_bookings(employee)
        employee.hide()
        employee = self.repo.update_employee(self.db, employee)

        self.history.record(
            context, HistoryAction.DELETE, EntityType.EMPLOYEE, employee.id, details={"name": employee.name}
        )
        return employee

    def restore_employee(self, employee_id: int, context: TenantContext) -> Employee:
        employee = self.get_employee(employee_id, context)
        employee.restore()
        employee = self.repo.update_employee(self.db, employee)

        self.history.record(
            context, HistoryAction.RESTORE, EntityType.EMPLOYEE, employee.id, details={"name": employee.name}
        )
        return employee
