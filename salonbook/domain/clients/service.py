"""Client service - Business logic for client operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import TenantContext
from ...models import Booking, Client, EntityType, HistoryAction, RecordStatus
from ...shared.errors import validation_error_key
from ...shared.pagination import build_pagination, clamp_page
from ...shared.timezone import to_org_time, utcnow
from ..history.service import HistoryRecorder
from ..organizations.repository import OrganizationRepository
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


def _client_details(client: Client) -> dict:
    return {"full_name": client.full_name, "phone": client.phone, "notes": client.notes}


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()
        self.history = HistoryRecorder(db)

    def get_clients(
        self,
        context: TenantContext,
        search: Optional[str] = None,
        show_hidden: bool = False,
        page: Optional[int] = 1,
        limit: Optional[int] = DEFAULT_PAGE_SIZE,
    ) -> dict:
        """Search clients by name or phone, one page at a time"""
        page_num, page_size = clamp_page(page, limit, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)
        clients, total = self.repo.search_clients(
            self.db,
            context.organization_id,
            search=search,
            include_hidden=show_hidden,
            offset=(page_num - 1) * page_size,
            limit=page_size,
        )
        return {"clients": clients, "pagination": build_pagination(page_num, page_size, total)}

    def get_client(self, client_id: int, context: TenantContext) -> Client:
        """Get a specific client, hidden or not"""
        client = self.repo.get_client_by_id(self.db, client_id, context.organization_id)
        if not client:
            raise HTTPException(status_code=404, detail="errors.clientNotFound")
        return client

    def _ensure_unique_phone(self, context: TenantContext, phone: str, exclude_id: Optional[int] = None):
        if self.repo.get_client_by_phone(self.db, context.organization_id, phone, exclude_id=exclude_id):
            raise HTTPException(status_code=400, detail="errors.duplicatePhone")

    def create_client(self, data: ClientCreate, context: TenantContext) -> Client:
        self._ensure_unique_phone(context, data.phone)

        try:
            client = self.repo.create_client(
                self.db,
                context.organization_id,
                full_name=data.full_name,
                phone=data.phone,
                notes=data.notes or "",
            )
        except IntegrityError:
            # Concurrent insert of the same phone
            self.db.rollback()
            raise HTTPException(status_code=400, detail="errors.duplicatePhone") from None

        logger.info(f"✅ Client created: {client.full_name} (org={context.organization_id})")
        self.history.record(
            context, HistoryAction.CREATE, EntityType.CLIENT, client.id, details=_client_details(client)
        )
        return client

    def _ensure_no_future_bookings(self, client: Client) -> None:
        """Clients with bookings still ahead may not be hidden"""
        if self.repo.count_future_bookings(self.db, client.id, utcnow()) > 0:
            raise HTTPException(status_code=400, detail="errors.clientHasFutureBookings")

    def update_client(self, client_id: int, data: ClientUpdate, context: TenantContext) -> Client:
        client = self.get_client(client_id, context)
        before = _client_details(client)
        if data.isHidden and not client.is_hidden:
            self._ensure_no_future_bookings(client)

        if data.phone != client.phone:
            self._ensure_unique_phone(context, data.phone, exclude_id=client.id)

        try:
            client = self.repo.update_client(
                self.db,
                client,
                full_name=data.full_name,
                phone=data.phone,
                notes=data.notes or "",
                status=RecordStatus.HIDDEN if data.isHidden else RecordStatus.ACTIVE,
            )
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(status_code=400, detail="errors.duplicatePhone") from None

        self.history.record(
            context,
            HistoryAction.UPDATE,
            EntityType.CLIENT,
            client.id,
            details={"before": before, "after": _client_details(client), "isHidden": client.is_hidden},
        )
        return client

    def delete_client(self, client_id: int, context: TenantContext) -> Client:
        """Soft delete: hide the client unless bookings are still ahead"""
        client = self.get_client(client_id, context)

        self._ensure_no_future_bookings(client)
        client.hide()
        client = self.repo.update_client(self.db, client)

        self.history.record(
            context, HistoryAction.DELETE, EntityType.CLIENT, client.id, details=_client_details(client)
        )
        return client

    def restore_client(self, client_id: int, context: TenantContext) -> Client:
        client = self.get_client(client_id, context)
        client.restore()
        client = self.repo.update_client(self.db, client)

        self.history.record(
            context, HistoryAction.RESTORE, EntityType.CLIENT, client.id, details=_client_details(client)
        )
        return client

    def bulk_create_clients(self, rows: list[dict], context: TenantContext) -> dict:
        """
        Import many clients at once.

        Invalid rows and phones that already exist (in the organization or
        earlier in the same batch) are skipped and reported; the rest are
        inserted together. If the batch insert hits a phone that was added
        concurrently, the rows are inserted one at a time instead and the
        clashing ones are reported as duplicates.
        """
        known_phones = self.repo.get_phones(self.db, context.organization_id)
        accepted: list[tuple[int, dict]] = []
        errors: list[dict] = []

        for index, row in enumerate(rows):
            try:
                data = ClientCreate(**row)
            except ValidationError as e:
                errors.append(
                    {"index": index, "phone": _raw_phone(row), "error": validation_error_key(e.errors())}
                )
                continue

            if data.phone in known_phones:
                errors.append({"index": index, "phone": data.phone, "error": "errors.duplicatePhone"})
                continue

            known_phones.add(data.phone)
            accepted.append((index, {"full_name": data.full_name, "phone": data.phone, "notes": data.notes or ""}))

        created: list[Client] = []
        if accepted:
            try:
                created = self.repo.bulk_create_clients(
                    self.db, context.organization_id, [client_data for _, client_data in accepted]
                )
            except IntegrityError:
                self.db.rollback()
                logger.warning(
                    f"⚠️ Bulk client import for org {context.organization_id} hit a duplicate phone, "
                    "retrying row by row"
                )
                created = self._create_clients_one_by_one(accepted, context, errors)

        errors.sort(key=lambda error: error["index"])
        logger.info(
            f"📥 Bulk client import for org {context.organization_id}: "
            f"{len(created)} created, {len(errors)} skipped"
        )

        if created:
            self.history.record(
                context,
                HistoryAction.CREATE,
                EntityType.CLIENT,
                0,
                details={"bulk": True, "created": len(created), "clientIds": [c.id for c in created]},
            )

        return {"created": len(created), "skipped": len(errors), "errors": errors}

    def _create_clients_one_by_one(
        self, accepted: list[tuple[int, dict]], context: TenantContext, errors: list[dict]
    ) -> list[Client]:
        created = []
        for index, client_data in accepted:
            try:
                created.append(self.repo.create_client(self.db, context.organization_id, **client_data))
            except IntegrityError:
                self.db.rollback()
                errors.append({"index": index, "phone": client_data["phone"], "error": "errors.duplicatePhone"})
        return created

    def get_client_history(self, client_id: int, context: TenantContext) -> list[dict]:
        """Bookings of one client, latest first"""
        client = self.get_client(client_id, context)
        bookings = self.repo.get_booking_history(self.db, context.organization_id, client_id=client.id)
        return self._history_rows(context, bookings, include_client=False)

    def get_all_history(self, context: TenantContext) -> list[dict]:
        """Bookings of every client in the organization, hidden clients included"""
        bookings = self.repo.get_booking_history(self.db, context.organization_id)
        return self._history_rows(context, bookings, include_client=True)

    def _history_rows(self, context: TenantContext, bookings: list[Booking], include_client: bool) -> list[dict]:
        tz_name = OrganizationRepository.get_timezone(self.db, context.organization_id)
        rows = []
        for booking in bookings:
            row = {
                "id": booking.id,
                "start_time": to_org_time(booking.start_time, tz_name),
                "end_time": to_org_time(booking.end_time, tz_name),
                "services": [{"name": s.name, "isHidden": s.is_hidden} for s in booking.services],
                "employee": {"name": booking.employee.name, "isHidden": booking.employee.is_hidden},
                "price": booking.price,
                "notes": booking.notes or "",
                "client_id": booking.client_id,
            }
            if include_client:
                row["client"] = {
                    "full_name": booking.client.full_name,
                    "phone": booking.client.phone,
                    "isHidden": booking.client.is_hidden,
                }
            rows.append(row)
        return rows


def _raw_phone(row: dict) -> Optional[str]:
    phone = row.get("phone")
    return str(phone) if phone is not None else None
