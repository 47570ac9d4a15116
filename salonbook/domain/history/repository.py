"""History repository - Database operations for audit entries"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import History


class HistoryRepository:
    """Repository for history database operations"""

    @staticmethod
    def add_entry(db: Session, **entry_data) -> History:
        """Append an audit entry"""
        entry = History(**entry_data)
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry

    @staticmethod
    def list_entries(
        db: Session,
        organization_id: int,
        entity_type: Optional[str] = None,
        action: Optional[str] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[list[History], int]:
        """Newest-first page of entries plus the total count for the filter"""
        query = db.query(History).filter(History.organization_id == organization_id)

        if entity_type:
            query = query.filter(History.entity_type == entity_type)
        if action:
            query = query.filter(History.action == action)

        total = query.count()
        items = (
            query.order_by(History.created_at.desc(), History.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, total
