"""Salon service catalog - Business logic for service operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import TenantContext
from ...models import EntityType, HistoryAction, RecordStatus, Service
from ...shared.timezone import utcnow
from ..history.service import HistoryRecorder
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


def _service_details(service: Service) -> dict:
    return {"name": service.name, "price": service.price, "duration": service.duration}


class CatalogService:
    """Service layer for the organization's service catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()
        self.history = HistoryRecorder(db)

    def get_services(self, context: TenantContext, show_hidden: bool = False) -> list[Service]:
        return self.repo.get_services(self.db, context.organization_id, include_hidden=show_hidden)

    def get_service(self, service_id: int, context: TenantContext) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id, context.organization_id)
        if not service:
            raise HTTPException(status_code=404, detail="errors.serviceNotFound")
        return service

    def create_service(self, data: ServiceCreate, context: TenantContext) -> Service:
        service = self.repo.create_service(
            self.db,
            context.organization_id,
            name=data.name,
            duration=data.duration,
            price=data.price,
        )
        logger.info(f"💇 Service created: {service.name} (org={context.organization_id})")

        self.history.record(
            context, HistoryAction.CREATE, EntityType.SERVICE, service.id, details=_service_details(service)
        )
        return service

    def _ensure_no_future_bookings(self, service: Service) -> None:
        """Services used by upcoming bookings may not be hidden"""
        if self.repo.count_future_bookings(self.db, service.id, utcnow()) > 0:
            raise HTTPException(status_code=400, detail="errors.serviceHasFutureBookings")

    def update_service(self, service_id: int, data: ServiceUpdate, context: TenantContext) -> Service:
        service = self.get_service(service_id, context)
        before = _service_details(service)
        if data.isHidden and not service.is_hidden:
            self._ensure_no_future_bookings(service)

        service = self.repo.update_service(
            self.db,
            service,
            name=data.name,
            duration=data.duration,
            price=data.price,
            status=RecordStatus.HIDDEN if data.isHidden else RecordStatus.ACTIVE,
        )

        self.history.record(
            context,
            HistoryAction.UPDATE,
            EntityType.SERVICE,
            service.id,
            details={"before": before, "after": _service_details(service), "isHidden": service.is_hidden},
        )
        return service

    def delete_service(self, service_id: int, context: TenantContext) -> Service:
        """Soft delete: hide the service unless upcoming bookings use it"""
        service = self.get_service(service_id, context)

        self._ensure_no_future_bookings(service)
        service.hide()
        service = self.repo.update_service(self.db, service)

        self.history.record(
            context, HistoryAction.DELETE, EntityType.SERVICE, service.id, details=_service_details(service)
        )
        return service

    def restore_service(self, service_id: int, context: TenantContext) -> Service:
        service = self.get_service(service_id, context)
        service.restore()
        service = self.repo.update_service(self.db, service)

        self.history.record(
            context, HistoryAction.RESTORE, EntityType.SERVICE, service.id, details=_service_details(service)
        )
        return service
