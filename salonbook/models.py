import enum

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .config import DEFAULT_TIMEZONE
from .database import Base


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class RecordStatus(str, enum.Enum):
    """Soft-delete state shared by employees, services and clients"""

    ACTIVE = "active"
    HIDDEN = "hidden"


class HistoryAction(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RESTORE = "restore"
    LOGIN = "login"
    SETTINGS = "settings"


class EntityType(str, enum.Enum):
    BOOKING = "booking"
    CLIENT = "client"
    EMPLOYEE = "employee"
    SERVICE = "service"
    USER = "user"
    ORGANIZATION = "organization"
    SYSTEM = "system"


def _enum_column(enum_cls, **kwargs):
    return Column(
        Enum(
            enum_cls,
            native_enum=False,
            length=20,
            values_callable=lambda members: [m.value for m in members],
        ),
        **kwargs,
    )


class SoftDeleteMixin:
    """Adds the active/hidden status column and the legacy ``is_hidden`` view of it"""

    status = _enum_column(RecordStatus, default=RecordStatus.ACTIVE, nullable=False, index=True)

    @property
    def is_hidden(self) -> bool:
        return self.status == RecordStatus.HIDDEN

    def hide(self) -> None:
        self.status = RecordStatus.HIDDEN

    def restore(self) -> None:
        self.status = RecordStatus.ACTIVE


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(100), unique=True, index=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    timezone = Column(String(64), default=DEFAULT_TIMEZONE, nullable=False)
    booking_interval = Column(Integer, default=15, nullable=False)  # 15 or 30 minutes
    display_start_time = Column(String(5), default="08:00", nullable=False)  # HH:MM
    display_end_time = Column(String(5), default="20:00", nullable=False)  # HH:MM
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    users = relationship("User", back_populates="organization")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(150), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = _enum_column(Role, default=Role.USER, nullable=False)
    # Null only for superadmins
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=True, index=True)
    created_at = Column(DateTime, server_default=func.now())

    organization = relationship("Organization", back_populates="users")


class Employee(SoftDeleteMixin, Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    bookings = relationship("Booking", back_populates="employee")


class Service(SoftDeleteMixin, Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    price = Column(Float, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Client(SoftDeleteMixin, Base):
    __tablename__ = "clients"
    __table_args__ = (
        UniqueConstraint("organization_id", "phone", name="uq_clients_organization_phone"),
        Index("ix_clients_organization_full_name", "organization_id", "full_name"),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    notes = Column(String(100), default="", nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    bookings = relationship("Booking", back_populates="client")


booking_services = Table(
    "booking_services",
    Base.metadata,
    Column("booking_id", Integer, ForeignKey("bookings.id", ondelete="CASCADE"), primary_key=True),
    Column("service_id", Integer, ForeignKey("services.id"), primary_key=True),
)


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_employee_interval", "employee_id", "start_time", "end_time"),
        Index("ix_bookings_client_interval", "client_id", "start_time", "end_time"),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    # Naive UTC
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    price = Column(Float, nullable=False, default=0)
    notes = Column(Text, default="", nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    employee = relationship("Employee", back_populates="bookings")
    client = relationship("Client", back_populates="bookings")
    services = relationship("Service", secondary=booking_services, order_by="Service.id")


class History(Base):
    __tablename__ = "history"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=True, index=True)
    action = Column(String(50), nullable=False, index=True)  # create, update, delete, restore, login, settings
    entity_type = Column(String(50), nullable=False, index=True)  # booking, client, employee, service, user, ...
    entity_id = Column(Integer, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    username = Column(String(150), nullable=True)  # snapshot at write time
    details = Column(JSON, default=dict, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), index=True)
