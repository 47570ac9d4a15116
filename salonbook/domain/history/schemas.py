"""History domain schemas"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class HistoryResponse(BaseModel):
    """Schema for one audit entry"""

    id: int
    action: str
    entityType: str
    entityId: int
    userId: Optional[int]
    username: Optional[str]
    details: Optional[Any] = None
    organizationId: Optional[int]
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, entry) -> "HistoryResponse":
        return cls(
            id=entry.id,
            action=entry.action,
            entityType=entry.entity_type,
            entityId=entry.entity_id,
            userId=entry.user_id,
            username=entry.username,
            details=entry.details,
            organizationId=entry.organization_id,
            createdAt=entry.created_at,
        )


class HistoryPage(BaseModel):
    items: list[HistoryResponse]
    page: int
    limit: int
    total: int
