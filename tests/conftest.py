"""
Pytest configuration and shared fixtures
"""
import os
from datetime import timedelta

# Configure the application before it is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-minimum-32-chars-long-for-security"
os.environ["ENVIRONMENT"] = "testing"
os.environ["DEFAULT_LANGUAGE"] = "en"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salonbook.database import Base, get_db
from salonbook.main import app
from salonbook.models import Client, Employee, Organization, Role, Service, User
from salonbook.security_utils import hash_password
from salonbook.shared.timezone import utcnow

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "secret123"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database():
    """Fresh schema for every test"""
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_org(db):
    """Factory creating organizations; timezone defaults to UTC so times compare directly"""

    def _make(slug="salon", name=None, timezone="UTC", is_active=True):
        organization = Organization(
            name=name or slug.title(), slug=slug, timezone=timezone, is_active=is_active
        )
        db.add(organization)
        db.commit()
        db.refresh(organization)
        return organization

    return _make


@pytest.fixture
def make_user(db):
    def _make(username, role=Role.USER, organization=None, password=PASSWORD):
        user = User(
            username=username,
            password_hash=hash_password(password),
            role=role,
            organization_id=organization.id if organization else None,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def anon_client():
    return TestClient(app)


@pytest.fixture
def login():
    """Factory returning a TestClient holding the session cookie of ``username``"""

    def _login(username, password=PASSWORD):
        client = TestClient(app)
        response = client.post("/api/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return client

    return _login


@pytest.fixture
def org(make_org):
    return make_org("salon")


@pytest.fixture
def other_org(make_org):
    return make_org("other-salon")


@pytest.fixture
def admin_user(make_user, org):
    return make_user("admin", Role.ADMIN, org)


@pytest.fixture
def staff_user(make_user, org):
    return make_user("staff", Role.USER, org)


@pytest.fixture
def superadmin_user(make_user):
    return make_user("root", Role.SUPERADMIN)


@pytest.fixture
def admin_client(admin_user, login):
    return login(admin_user.username)


@pytest.fixture
def staff_client(staff_user, login):
    return login(staff_user.username)


@pytest.fixture
def superadmin_client(superadmin_user, login):
    return login(superadmin_user.username)


@pytest.fixture
def employee(db, org):
    record = Employee(organization_id=org.id, name="Ana")
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@pytest.fixture
def service(db, org):
    record = Service(organization_id=org.id, name="Haircut", duration=30, price=500.0)
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@pytest.fixture
def customer(db, org):
    record = Client(organization_id=org.id, full_name="Marija Petrova", phone="+38970111222")
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@pytest.fixture
def tomorrow():
    """Midnight of tomorrow (UTC), so bookings built from it are in the future"""
    return (utcnow() + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)


def slot(day, start, end):
    """ISO start/end strings for ``day`` at HH:MM ``start`` and ``end``"""
    start_h, start_m = map(int, start.split(":"))
    end_h, end_m = map(int, end.split(":"))
    return (
        day.replace(hour=start_h, minute=start_m).isoformat(),
        day.replace(hour=end_h, minute=end_m).isoformat(),
    )


@pytest.fixture
def booking_payload(employee, customer, service, tomorrow):
    """Factory for booking request bodies"""

    def _payload(start="10:00", end="10:30", **overrides):
        start_time, end_time = slot(tomorrow, start, end)
        body = {
            "employee_id": employee.id,
            "client_id": customer.id,
            "start_time": start_time,
            "end_time": end_time,
            "service_ids": [service.id],
        }
        body.update(overrides)
        return body

    return _payload


@pytest.fixture
def session_factory():
    """Session factory bound to the test engine, for code that opens its own sessions"""
    return TestingSessionLocal
