"""Employee repository - Database operations for employees"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Booking, Employee, RecordStatus


class EmployeeRepository:
    """Repository for employee database operations"""

    @staticmethod
    def get_employees(db: Session, organization_id: int, include_hidden: bool = False) -> list[Employee]:
        """Employees of an organization, newest first"""
        query = db.query(Employee).filter(Employee.organization_id == organization_id)

        if not include_hidden:
            query = query.filter(Employee.status == RecordStatus.ACTIVE)

        return query.order_by(Employee.created_at.desc(), Employee.id.desc()).all()

    @staticmethod
    def get_employee_by_id(
        db: Session, employee_id: int, organization_id: int, lock: bool = False
    ) -> Optional[Employee]:
        """
        Get an employee of an organization.

        ``lock`` takes a row lock (SELECT ... FOR UPDATE) held until commit.
        """
        query = db.query(Employee).filter(
            Employee.id == employee_id, Employee.organization_id == organization_id
        )
        if lock:
            query = query.with_for_update()
        return query.first()

    @staticmethod
    def create_employee(db: Session, organization_id: int, **employee_data) -> Employee:
        employee = Employee(organization_id=organization_id, **employee_data)
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee

    @staticmethod
    def update_employee(db: Session, employee: Employee, **updates) -> Employee:
        """Update an employee with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(employee, key):
                setattr(employee, key, value)

        db.commit()
        db.refresh(employee)
        return employee

    @staticmethod
    def count_future_bookings(db: Session, employee_id: int, now: datetime) -> int:
        """Bookings of the employee that have not ended yet"""
        return (
            db.query(func.count(Booking.id))
            .filter(Booking.employee_id == employee_id, Booking.end_time > now)
            .scalar()
            or 0
        )

    @staticmethod
    def get_busy_employee_ids(
        db: Session, organization_id: int, start: datetime, end: datetime
    ) -> set[int]:
        """Ids of employees with a booking intersecting [start, end)"""
        rows = (
            db.query(Booking.employee_id)
            .filter(
                Booking.organization_id == organization_id,
                Booking.start_time < end,
                Booking.end_time > start,
            )
            .distinct()
            .all()
        )
        return {row[0] for row in rows}
