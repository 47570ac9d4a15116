"""
Tests for client management, bulk import and booking history
"""
import pytest

from salonbook.domain.clients.repository import ClientRepository
from salonbook.models import Client, History


@pytest.mark.api
class TestClientCrud:
    """Tests for /api/clients"""

    def test_create(self, staff_client, org):
        response = staff_client.post(
            "/api/clients", json={"full_name": "Ivana Trajkova", "phone": " 070123456 ", "notes": "Allergic to ammonia"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["phone"] == "070123456"
        assert body["notes"] == "Allergic to ammonia"
        assert body["organizationId"] == org.id

    def test_numeric_phone_is_accepted(self, staff_client):
        response = staff_client.post("/api/clients", json={"full_name": "Ivana", "phone": 70123456})
        assert response.status_code == 201
        assert response.json()["phone"] == "70123456"

    def test_duplicate_phone_in_same_organization(self, staff_client, customer):
        response = staff_client.post("/api/clients", json={"full_name": "Someone", "phone": customer.phone})
        assert response.status_code == 400
        assert response.json() == {"error": "A client with this phone number already exists"}

    def test_same_phone_in_another_organization(self, staff_client, db, other_org):
        db.add(Client(organization_id=other_org.id, full_name="Elsewhere", phone="070555444"))
        db.commit()

        response = staff_client.post("/api/clients", json={"full_name": "Here", "phone": "070555444"})
        assert response.status_code == 201

    @pytest.mark.parametrize(
        "payload,message",
        [
            ({"full_name": " ", "phone": "070123456"}, "Full name is required"),
            ({"full_name": "x" * 256, "phone": "070123456"}, "Full name may be at most 255 characters long"),
            ({"full_name": "Ana", "phone": "1" * 51}, "Phone is required and may contain only digits 0-9"),
            ({"full_name": "Ana", "phone": "070-123"}, "Phone is required and may contain only digits 0-9"),
            ({"full_name": "Ana"}, "Phone is required and may contain only digits 0-9"),
            ({"full_name": "Ana", "phone": "070123456", "notes": "x" * 101}, "Notes may be at most 100 characters long"),
        ],
    )
    def test_validation(self, staff_client, payload, message):
        response = staff_client.post("/api/clients", json=payload)
        assert response.status_code == 400
        assert response.json() == {"error": message}

    def test_update_to_existing_phone(self, staff_client, customer, db, org):
        other = Client(organization_id=org.id, full_name="Petar", phone="070999888")
        db.add(other)
        db.commit()

        response = staff_client.put(
            f"/api/clients/{other.id}",
            json={"full_name": "Petar", "phone": customer.phone, "isHidden": False},
        )
        assert response.status_code == 400

    def test_update_keeping_own_phone(self, staff_client, customer):
        response = staff_client.put(
            f"/api/clients/{customer.id}",
            json={"full_name": "Marija P.", "phone": customer.phone, "notes": "VIP", "isHidden": False},
        )
        assert response.status_code == 200
        assert response.json()["full_name"] == "Marija P."
        assert response.json()["notes"] == "VIP"


@pytest.mark.api
class TestClientListing:
    """Search and pagination"""

    @pytest.fixture
    def many_clients(self, db, org):
        db.add_all(
            Client(organization_id=org.id, full_name=f"Client {i:02d}", phone=f"07000{i:04d}") for i in range(25)
        )
        db.commit()

    def test_ordered_by_name_with_pagination(self, staff_client, many_clients):
        body = staff_client.get("/api/clients", params={"page": 2, "limit": 10}).json()

        assert [c["full_name"] for c in body["clients"]][0] == "Client 10"
        assert body["pagination"] == {"page": 2, "limit": 10, "total": 25, "totalPages": 3, "hasMore": True}

    def test_search_by_name_or_phone(self, staff_client, many_clients, customer):
        by_name = staff_client.get("/api/clients", params={"q": "marija"}).json()
        assert [c["id"] for c in by_name["clients"]] == [customer.id]

        by_phone = staff_client.get("/api/clients", params={"q": "0000012"}).json()
        assert [c["full_name"] for c in by_phone["clients"]] == ["Client 12"]

    def test_wildcards_in_search_are_literal(self, staff_client, many_clients, db, org):
        db.add(Client(organization_id=org.id, full_name="Ana_Marija 100%", phone="070999999"))
        db.commit()

        for term in ("_", "%", "100%"):
            body = staff_client.get("/api/clients", params={"q": term}).json()
            assert [c["full_name"] for c in body["clients"]] == ["Ana_Marija 100%"]

    def test_limit_is_clamped(self, staff_client, many_clients):
        body = staff_client.get("/api/clients", params={"limit": 10000}).json()
        assert body["pagination"]["limit"] == 200
        assert len(body["clients"]) == 25

    def test_hidden_clients(self, staff_client, customer):
        staff_client.delete(f"/api/clients/{customer.id}")

        assert staff_client.get("/api/clients").json()["clients"] == []
        hidden = staff_client.get("/api/clients", params={"showHidden": "true"}).json()
        assert hidden["clients"][0]["status"] == "hidden"


@pytest.mark.api
class TestClientSoftDelete:
    """Hiding and restoring clients"""

    def test_delete_with_upcoming_booking(self, staff_client, customer, booking_payload):
        staff_client.post("/api/bookings", json=booking_payload())

        response = staff_client.delete(f"/api/clients/{customer.id}")
        assert response.status_code == 400
        assert response.json() == {"error": "Cannot delete a client with upcoming bookings"}

    def test_hiding_through_update_with_upcoming_booking(self, staff_client, customer, booking_payload):
        staff_client.post("/api/bookings", json=booking_payload())

        response = staff_client.put(
            f"/api/clients/{customer.id}",
            json={"full_name": customer.full_name, "phone": customer.phone, "isHidden": True},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Cannot delete a client with upcoming bookings"}
        assert staff_client.get(f"/api/clients/{customer.id}").json()["isHidden"] is False

    def test_restore(self, staff_client, customer):
        assert staff_client.delete(f"/api/clients/{customer.id}").json() == {"message": "Client deleted"}

        response = staff_client.patch(f"/api/clients/{customer.id}/restore")
        assert response.status_code == 200
        assert response.json()["client"]["isHidden"] is False


@pytest.mark.api
class TestClientBulkImport:
    """Tests for POST /api/clients/bulk"""

    def test_valid_rows_are_created_and_bad_rows_skipped(self, staff_client, customer, db):
        response = staff_client.post(
            "/api/clients/bulk",
            json={
                "clients": [
                    {"full_name": "Ana", "phone": "070100100"},
                    {"full_name": "Ana again", "phone": "070100100"},
                    {"full_name": "Existing", "phone": customer.phone},
                    {"full_name": "", "phone": "070200200"},
                    {"full_name": "Bojan", "phone": "bad"},
                    {"full_name": "Vesna", "phone": 70300300},
                ]
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["created"] == 2
        assert body["skipped"] == 4
        assert [e["index"] for e in body["errors"]] == [1, 2, 3, 4]
        assert body["errors"][0]["error"] == "A client with this phone number already exists"
        assert body["errors"][3] == {
            "index": 4,
            "phone": "bad",
            "error": "Phone is required and may contain only digits 0-9",
        }

        assert db.query(Client).count() == 3

    def test_single_history_entry(self, staff_client, db):
        staff_client.post(
            "/api/clients/bulk",
            json={"clients": [{"full_name": "A", "phone": "070100100"}, {"full_name": "B", "phone": "070100101"}]},
        )

        entry = db.query(History).filter(History.entity_type == "client").one()
        assert entry.entity_id == 0
        assert entry.details["bulk"] is True
        assert entry.details["created"] == 2
        assert len(entry.details["clientIds"]) == 2

    def test_phone_added_meanwhile_is_reported_as_duplicate(self, staff_client, customer, db, monkeypatch):
        # The phone lookup misses a client inserted after it ran
        monkeypatch.setattr(ClientRepository, "get_phones", staticmethod(lambda session, organization_id: set()))
        existing_phone = customer.phone

        response = staff_client.post(
            "/api/clients/bulk",
            json={
                "clients": [
                    {"full_name": "Ana", "phone": "070100100"},
                    {"full_name": "Late copy", "phone": existing_phone},
                    {"full_name": "Bojan", "phone": "070100200"},
                ]
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["created"] == 2
        assert body["skipped"] == 1
        assert body["errors"] == [
            {"index": 1, "phone": existing_phone, "error": "A client with this phone number already exists"}
        ]
        assert db.query(Client).count() == 3

        entry = db.query(History).filter(History.entity_type == "client").one()
        assert entry.details["created"] == 2

    def test_empty_list(self, staff_client):
        response = staff_client.post("/api/clients/bulk", json={"clients": []})
        assert response.status_code == 400
        assert response.json() == {"error": "A non-empty list of clients is required"}


@pytest.mark.api
class TestClientHistory:
    """Booking history per client and for the whole organization"""

    def test_client_history(self, staff_client, customer, employee, booking_payload):
        staff_client.post("/api/bookings", json=booking_payload("10:00", "10:30"))
        staff_client.post("/api/bookings", json=booking_payload("12:00", "12:30"))

        rows = staff_client.get(f"/api/clients/{customer.id}/history").json()

        assert len(rows) == 2
        assert rows[0]["start_time"] > rows[1]["start_time"]
        assert rows[0]["employee"] == {"name": "Ana", "isHidden": False}
        assert rows[0]["services"] == [{"name": "Haircut", "isHidden": False}]
        assert rows[0]["client"] is None

    def test_history_of_unknown_client(self, staff_client):
        assert staff_client.get("/api/clients/999/history").status_code == 404

    def test_all_history_includes_client(self, staff_client, customer, booking_payload):
        staff_client.post("/api/bookings", json=booking_payload())

        rows = staff_client.get("/api/clients/all/history").json()
        assert rows[0]["client"] == {"full_name": customer.full_name, "phone": customer.phone, "isHidden": False}
