"""Client repository - Database operations for clients"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Booking, Client, RecordStatus


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def search_clients(
        db: Session,
        organization_id: int,
        search: Optional[str] = None,
        include_hidden: bool = False,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[list[Client], int]:
        """
        Clients of an organization ordered by name.

        ``search`` matches full name or phone, case-insensitively.
        Returns (page_of_clients, total_matching).
        """
        query = db.query(Client).filter(Client.organization_id == organization_id)

        if not include_hidden:
            query = query.filter(Client.status == RecordStatus.ACTIVE)

        if search:
            term = search.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            pattern = f"%{term}%"
            query = query.filter(
                or_(Client.full_name.ilike(pattern, escape="\\"), Client.phone.ilike(pattern, escape="\\"))
            )

        total = query.with_entities(func.count(Client.id)).scalar() or 0
        clients = query.order_by(Client.full_name, Client.id).offset(offset).limit(limit).all()
        return clients, total

    @staticmethod
    def get_client_by_id(db: Session, client_id: int, organization_id: int) -> Optional[Client]:
        """Get a specific client by ID"""
        return (
            db.query(Client)
            .filter(Client.id == client_id, Client.organization_id == organization_id)
            .first()
        )

    @staticmethod
    def get_client_by_phone(
        db: Session, organization_id: int, phone: str, exclude_id: Optional[int] = None
    ) -> Optional[Client]:
        query = db.query(Client).filter(Client.organization_id == organization_id, Client.phone == phone)
        if exclude_id is not None:
            query = query.filter(Client.id != exclude_id)
        return query.first()

    @staticmethod
    def get_phones(db: Session, organization_id: int) -> set[str]:
        rows = db.query(Client.phone).filter(Client.organization_id == organization_id).all()
        return {row[0] for row in rows}

    @staticmethod
    def create_client(db: Session, organization_id: int, **client_data) -> Client:
        """Create a new client"""
        client = Client(organization_id=organization_id, **client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def bulk_create_clients(db: Session, organization_id: int, rows: list[dict]) -> list[Client]:
        """Insert many clients in a single transaction"""
        clients = [Client(organization_id=organization_id, **row) for row in rows]
        db.add_all(clients)
        db.commit()
        for client in clients:
            db.refresh(client)
        return clients

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def count_future_bookings(db: Session, client_id: int, now: datetime) -> int:
        """Bookings of the client that have not ended yet"""
        return (
            db.query(func.count(Booking.id))
            .filter(Booking.client_id == client_id, Booking.end_time > now)
            .scalar()
            or 0
        )

    @staticmethod
    def get_booking_history(
        db: Session, organization_id: int, client_id: Optional[int] = None
    ) -> list[Booking]:
        """Bookings with employee, client and services loaded, latest start first"""
        query = (
            db.query(Booking)
            .options(
                joinedload(Booking.employee),
                joinedload(Booking.client),
                selectinload(Booking.services),
            )
            .filter(Booking.organization_id == organization_id)
        )
        if client_id is not None:
            query = query.filter(Booking.client_id == client_id)
        return query.order_by(Booking.start_time.desc(), Booking.id.desc()).all()
