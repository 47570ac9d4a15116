"""History service - best-effort audit recorder and history listing"""

import logging
import threading
from typing import Any, Optional

from sqlalchemy.orm import Session

from ...auth import TenantContext
from ...models import EntityType, History, HistoryAction
from ...shared.pagination import clamp_page
from .repository import HistoryRepository

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 200
DEFAULT_PAGE_SIZE = 50


class HistoryRecorder:
    """
    Append-only audit channel.

    ``record`` must be called after the primary change is committed. A failed
    write is rolled back, logged and counted in ``failed_writes``; it is never
    raised to the caller.
    """

    _lock = threading.Lock()
    failed_writes = 0

    def __init__(self, db: Session):
        self.db = db
        self.repo = HistoryRepository()

    def record(
        self,
        context: TenantContext,
        action: HistoryAction,
        entity_type: EntityType,
        entity_id: int,
        details: Optional[Any] = None,
        organization_id: Optional[int] = None,
    ) -> Optional[History]:
        organization_id = organization_id if organization_id is not None else context.organization_id
        action = getattr(action, "value", action)
        entity_type = getattr(entity_type, "value", entity_type)
        try:
            entry = self.repo.add_entry(
                self.db,
                organization_id=organization_id,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                user_id=context.user_id,
                username=context.username,
                details=details or {},
            )
            logger.debug(f"📝 History: {context.username} {action} {entity_type}#{entity_id}")
            return entry
        except Exception:
            self.db.rollback()
            with HistoryRecorder._lock:
                HistoryRecorder.failed_writes += 1
            logger.exception(
                f"❌ Failed to record history ({action} {entity_type}#{entity_id}) "
                f"for user {context.user_id}"
            )
            return None


class HistoryService:
    """Service layer for reading the audit trail"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = HistoryRepository()

    def list_history(
        self,
        context: TenantContext,
        entity_type: Optional[str] = None,
        action: Optional[str] = None,
        page: Optional[int] = 1,
        limit: Optional[int] = DEFAULT_PAGE_SIZE,
    ) -> dict:
        page_num, page_size = clamp_page(page, limit, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)

        items, total = self.repo.list_entries(
            self.db,
            context.organization_id,
            entity_type=entity_type,
            action=action,
            offset=(page_num - 1) * page_size,
            limit=page_size,
        )
        return {"items": items, "page": page_num, "limit": page_size, "total": total}
