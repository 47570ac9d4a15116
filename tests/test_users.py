"""
Tests for user management by organization admins and superadmins
"""
import pytest

from salonbook.models import History, Role, User
from salonbook.security_utils import verify_password


@pytest.mark.api
class TestAdminUsers:
    """Tests for /api/users"""

    def test_list_only_own_organization(self, admin_client, staff_user, make_user, other_org):
        make_user("outsider", organization=other_org)

        usernames = {u["username"] for u in admin_client.get("/api/users").json()}
        assert usernames == {"admin", "staff"}

    def test_password_hash_is_never_returned(self, admin_client, staff_user):
        body = admin_client.get(f"/api/users/{staff_user.id}").json()
        assert "password" not in body
        assert "password_hash" not in body
        assert body["organization"]["slug"] == "salon"

    def test_create(self, admin_client, org, db):
        response = admin_client.post(
            "/api/users", json={"username": "reception", "password": "front-desk", "role": "user"}
        )

        assert response.status_code == 201
        assert response.json()["organizationId"] == org.id
        user = db.query(User).filter(User.username == "reception").one()
        assert verify_password("front-desk", user.password_hash)

    def test_duplicate_username(self, admin_client, staff_user):
        response = admin_client.post("/api/users", json={"username": "staff", "password": "secret123"})
        assert response.status_code == 400
        assert response.json() == {"error": "A user with this username already exists"}

    @pytest.mark.parametrize(
        "payload,message",
        [
            ({"username": "", "password": "secret123"}, "Username is required"),
            ({"username": "u" * 151, "password": "secret123"}, "Username may be at most 150 characters long"),
            ({"username": "new", "password": "abc"}, "Password must be at least 4 characters long"),
            ({"username": "new", "password": "secret123", "role": "superadmin"}, "Invalid role"),
            ({"username": "new", "password": "secret123", "role": "owner"}, "Invalid role"),
        ],
    )
    def test_validation(self, admin_client, payload, message):
        response = admin_client.post("/api/users", json=payload)
        assert response.status_code == 400
        assert response.json() == {"error": message}

    def test_update_without_password_keeps_it(self, admin_client, staff_user, login):
        response = admin_client.put(f"/api/users/{staff_user.id}", json={"username": "staff2", "role": "admin"})

        assert response.status_code == 200
        assert response.json()["role"] == "admin"
        login("staff2")

    def test_update_password(self, admin_client, staff_user, login):
        admin_client.put(f"/api/users/{staff_user.id}", json={"username": "staff", "password": "new-pass"})
        login("staff", password="new-pass")

    def test_cannot_touch_other_organization(self, admin_client, make_user, other_org):
        outsider = make_user("outsider", organization=other_org)

        assert admin_client.get(f"/api/users/{outsider.id}").status_code == 404
        assert admin_client.delete(f"/api/users/{outsider.id}").status_code == 404

    def test_delete(self, admin_client, staff_user, db):
        response = admin_client.delete(f"/api/users/{staff_user.id}")

        assert response.status_code == 200
        assert response.json() == {"message": "User deleted"}
        assert db.query(User).filter(User.id == staff_user.id).first() is None

    def test_cannot_delete_self(self, admin_client, admin_user):
        response = admin_client.delete(f"/api/users/{admin_user.id}")
        assert response.status_code == 400
        assert response.json() == {"error": "You cannot delete yourself"}


@pytest.mark.api
class TestSuperadminUsers:
    """Tests for /api/superadmin/users"""

    def test_list_with_filter_and_pagination(self, superadmin_client, admin_user, staff_user, make_user, other_org):
        make_user("outsider", organization=other_org)

        body = superadmin_client.get("/api/superadmin/users").json()
        assert body["pagination"]["total"] == 4

        body = superadmin_client.get("/api/superadmin/users", params={"organizationId": other_org.id}).json()
        assert [u["username"] for u in body["users"]] == ["outsider"]

        body = superadmin_client.get("/api/superadmin/users", params={"limit": 2, "page": 2}).json()
        assert len(body["users"]) == 2
        assert body["pagination"]["hasMore"] is False

    def test_create_in_any_organization(self, superadmin_client, other_org, db):
        response = superadmin_client.post(
            "/api/superadmin/users",
            json={"username": "boss", "password": "secret123", "role": "admin", "organizationId": other_org.id},
        )

        assert response.status_code == 201
        assert response.json()["organization"]["slug"] == "other-salon"

        entry = db.query(History).filter(History.entity_type == "user").one()
        assert entry.organization_id == other_org.id

    def test_organization_required_for_non_superadmins(self, superadmin_client):
        response = superadmin_client.post(
            "/api/superadmin/users", json={"username": "boss", "password": "secret123", "role": "admin"}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Organization identifier is required"}

    def test_unknown_organization(self, superadmin_client):
        response = superadmin_client.post(
            "/api/superadmin/users",
            json={"username": "boss", "password": "secret123", "organizationId": 4040},
        )
        assert response.status_code == 404

    def test_create_superadmin_without_organization(self, superadmin_client, org):
        response = superadmin_client.post(
            "/api/superadmin/users",
            json={"username": "root2", "password": "secret123", "role": "superadmin", "organizationId": org.id},
        )

        assert response.status_code == 201
        assert response.json()["organizationId"] is None

    def test_move_user_to_another_organization(self, superadmin_client, staff_user, other_org):
        response = superadmin_client.put(
            f"/api/superadmin/users/{staff_user.id}", json={"organizationId": other_org.id}
        )

        assert response.status_code == 200
        assert response.json()["username"] == "staff"
        assert response.json()["organizationId"] == other_org.id

    def test_delete_any_user(self, superadmin_client, staff_user):
        assert superadmin_client.delete(f"/api/superadmin/users/{staff_user.id}").status_code == 200
        assert superadmin_client.get(f"/api/superadmin/users/{staff_user.id}").status_code == 404

    def test_cannot_delete_self(self, superadmin_client, superadmin_user):
        assert superadmin_client.delete(f"/api/superadmin/users/{superadmin_user.id}").status_code == 400

    def test_role_enum_is_stored(self, superadmin_client, db, org):
        superadmin_client.post(
            "/api/superadmin/users",
            json={"username": "boss", "password": "secret123", "role": "admin", "organizationId": org.id},
        )
        assert db.query(User).filter(User.username == "boss").one().role == Role.ADMIN
