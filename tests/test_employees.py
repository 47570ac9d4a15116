"""
Tests for employee management and availability
"""
import pytest

from salonbook.models import Employee, History


@pytest.mark.api
class TestEmployeeCrud:
    """Tests for /api/employees"""

    def test_create_and_list(self, staff_client, org):
        response = staff_client.post("/api/employees", json={"name": "  Ana  "})

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Ana"
        assert body["isHidden"] is False
        assert body["status"] == "active"
        assert body["organizationId"] == org.id

        listed = staff_client.get("/api/employees").json()
        assert [e["name"] for e in listed] == ["Ana"]

    def test_newest_first(self, staff_client):
        staff_client.post("/api/employees", json={"name": "Ana"})
        staff_client.post("/api/employees", json={"name": "Elena"})

        assert [e["name"] for e in staff_client.get("/api/employees").json()] == ["Elena", "Ana"]

    def test_name_required(self, staff_client):
        response = staff_client.post("/api/employees", json={"name": "   "})
        assert response.status_code == 400
        assert response.json() == {"error": "Name is required"}

    def test_name_too_long(self, staff_client):
        response = staff_client.post("/api/employees", json={"name": "x" * 256})
        assert response.status_code == 400
        assert response.json() == {"error": "Name may be at most 255 characters long"}
        assert staff_client.post("/api/employees", json={"name": "x" * 255}).status_code == 201

    def test_update_requires_visibility_flag(self, staff_client, employee):
        response = staff_client.put(f"/api/employees/{employee.id}", json={"name": "Ana M."})
        assert response.status_code == 400

    def test_update(self, staff_client, employee):
        response = staff_client.put(
            f"/api/employees/{employee.id}", json={"name": "Ana M.", "isHidden": True}
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Ana M."
        assert response.json()["status"] == "hidden"

    def test_unknown_employee(self, staff_client):
        assert staff_client.get("/api/employees/999").status_code == 404
        assert staff_client.delete("/api/employees/999").status_code == 404

    def test_other_organization_is_invisible(self, staff_client, db, other_org):
        foreign = Employee(organization_id=other_org.id, name="Stranger")
        db.add(foreign)
        db.commit()

        assert staff_client.get("/api/employees").json() == []
        assert staff_client.get(f"/api/employees/{foreign.id}").status_code == 404


@pytest.mark.api
class TestEmployeeSoftDelete:
    """Hiding and restoring employees"""

    def test_delete_hides(self, staff_client, employee, db):
        response = staff_client.delete(f"/api/employees/{employee.id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Employee deleted"}
        assert staff_client.get("/api/employees").json() == []

        hidden = staff_client.get("/api/employees", params={"showHidden": "true"}).json()
        assert hidden[0]["isHidden"] is True

        # The row is kept
        assert db.query(Employee).count() == 1

    def test_delete_with_upcoming_booking(self, staff_client, employee, booking_payload):
        staff_client.post("/api/bookings", json=booking_payload())

        response = staff_client.delete(f"/api/employees/{employee.id}")
        assert response.status_code == 400
        assert response.json() == {"error": "Cannot delete an employee with upcoming bookings"}

    def test_hiding_through_update_with_upcoming_booking(self, staff_client, employee, booking_payload):
        staff_client.post("/api/bookings", json=booking_payload())

        response = staff_client.put(f"/api/employees/{employee.id}", json={"name": "Ana", "isHidden": True})
        assert response.status_code == 400
        assert response.json() == {"error": "Cannot delete an employee with upcoming bookings"}
        assert staff_client.get(f"/api/employees/{employee.id}").json()["isHidden"] is False

    def test_update_of_visible_employee_with_upcoming_booking(self, staff_client, employee, booking_payload):
        staff_client.post("/api/bookings", json=booking_payload())

        response = staff_client.put(f"/api/employees/{employee.id}", json={"name": "Ana M.", "isHidden": False})
        assert response.status_code == 200
        assert response.json()["name"] == "Ana M."

    def test_restore(self, staff_client, employee):
        staff_client.delete(f"/api/employees/{employee.id}")

        response = staff_client.patch(f"/api/employees/{employee.id}/restore")
        assert response.status_code == 200
        assert response.json()["message"] == "Employee restored"
        assert response.json()["employee"]["isHidden"] is False
        assert len(staff_client.get("/api/employees").json()) == 1

    def test_mutations_are_recorded(self, staff_client, employee, db):
        staff_client.delete(f"/api/employees/{employee.id}")
        staff_client.patch(f"/api/employees/{employee.id}/restore")

        actions = [h.action for h in db.query(History).filter(History.entity_type == "employee").order_by(History.id)]
        assert actions == ["delete", "restore"]


@pytest.mark.api
class TestEmployeeAvailability:
    """Tests for /api/employees/available"""

    def test_busy_employee_is_flagged(self, staff_client, employee, booking_payload, db, org, tomorrow):
        elena = Employee(organization_id=org.id, name="Elena")
        db.add(elena)
        db.commit()
        staff_client.post("/api/bookings", json=booking_payload("10:00", "11:00"))

        response = staff_client.get(
            "/api/employees/available",
            params={
                "start_time": tomorrow.replace(hour=10, minute=30).isoformat(),
                "end_time": tomorrow.replace(hour=11, minute=30).isoformat(),
            },
        )

        assert response.status_code == 200
        availability = {e["name"]: e["available"] for e in response.json()}
        assert availability == {"Ana": False, "Elena": True}

    def test_adjacent_slot_is_free(self, staff_client, employee, booking_payload, tomorrow):
        staff_client.post("/api/bookings", json=booking_payload("10:00", "11:00"))

        response = staff_client.get(
            "/api/employees/available",
            params={
                "start_time": tomorrow.replace(hour=11).isoformat(),
                "end_time": tomorrow.replace(hour=12).isoformat(),
            },
        )
        assert response.json()[0]["available"] is True

    def test_times_required(self, staff_client):
        response = staff_client.get("/api/employees/available")
        assert response.status_code == 400
        assert response.json() == {"error": "Start and end time are required"}

    def test_invalid_date(self, staff_client):
        response = staff_client.get(
            "/api/employees/available", params={"start_time": "soon", "end_time": "later"}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid date format"}
