"""
Client management API tests.

Tests cover client creation with its option validation and tech stack
handling, listing with plan status, updates, the form catalog, and
per-client employee assignment.
"""
from datetime import timedelta
from uuid import uuid4
from fastapi import status

from dashboard.database.models import Client
from dashboard.services.timekeeping import as_utc, utcnow

from .test_base import API, BaseAPITest, DatabaseTestUtilities, TestDataFactory


class TestCreateClient(BaseAPITest):
    """Test cases for client creation."""

    def test_create_client_success(self, client, db_session, admin_headers, sample_client_data):
        before = utcnow()

        result = client.post(f"{API}/clients/", json=sample_client_data, headers=admin_headers)

        self.assert_success_response(result, status.HTTP_201_CREATED)
        data = result.json()
        assert data["name"] == "Acme Corp"
        assert data["timezone"] == "Asia/Kolkata"
        assert data["plan"] == "Tech Launch Bundle"
        assert data["tech_stack"] == ["MERN"]
        assert data["assigned_employees"] == []
        assert data["plan_status"] == "Active"

        stored = db_session.query(Client).one()
        end = as_utc(stored.plan_end_date)
        assert before + timedelta(days=365) <= end <= utcnow() + timedelta(days=365)

    def test_other_tech_stack_replaces_other(self, client, admin_headers):
        payload = TestDataFactory.create_client(
            tech_stack=["Other", "Java"], other_tech_stack="  Django  "
        )

        result = client.post(f"{API}/clients/", json=payload, headers=admin_headers)

        self.assert_success_response(result, status.HTTP_201_CREATED)
        assert result.json()["tech_stack"] == ["Java", "Django"]

    def test_other_kept_without_custom_text(self, client, admin_headers):
        payload = TestDataFactory.create_client(tech_stack=["Other"], other_tech_stack="   ")

        result = client.post(f"{API}/clients/", json=payload, headers=admin_headers)

        self.assert_success_response(result, status.HTTP_201_CREATED)
        assert result.json()["tech_stack"] == ["Other"]

    def test_create_with_initial_employees(self, client, db_session, admin_headers, employee_user):
        payload = TestDataFactory.create_client(assigned_employees=[str(employee_user.id)])

        result = client.post(f"{API}/clients/", json=payload, headers=admin_headers)

        self.assert_success_response(result, status.HTTP_201_CREATED)
        data = result.json()
        assert data["assigned_employees"] == [str(employee_user.id)]
        db_session.refresh(employee_user)
        assert str(employee_user.assigned_client_id) == data["id"]
        assert employee_user.company_name == "Acme Corp"

    def test_create_with_unknown_employee(self, client, db_session, admin_headers):
        payload = TestDataFactory.create_client(assigned_employees=[str(uuid4())])

        result = client.post(f"{API}/clients/", json=payload, headers=admin_headers)

        self.assert_not_found(result, "Employee not found")
        assert db_session.query(Client).count() == 0

    def test_name_required(self, client, admin_headers):
        payload = TestDataFactory.create_client(name="  ")

        result = client.post(f"{API}/clients/", json=payload, headers=admin_headers)

        self.assert_validation_error(result, "name")

    def test_unknown_timezone(self, client, admin_headers):
        payload = TestDataFactory.create_client(timezone="Mars/Olympus_Mons")

        result = client.post(f"{API}/clients/", json=payload, headers=admin_headers)

        self.assert_validation_error(result, "timezone")

    def test_unknown_plan(self, client, admin_headers):
        payload = TestDataFactory.create_client(plan="Free Tier")

        result = client.post(f"{API}/clients/", json=payload, headers=admin_headers)

        self.assert_validation_error(result, "plan")

    def test_unknown_business_type(self, client, admin_headers):
        payload = TestDataFactory.create_client(business_type="Shipping")

        result = client.post(f"{API}/clients/", json=payload, headers=admin_headers)

        self.assert_validation_error(result, "business_type")

    def test_unknown_tech_stack(self, client, admin_headers):
        payload = TestDataFactory.create_client(tech_stack=["COBOL"])

        result = client.post(f"{API}/clients/", json=payload, headers=admin_headers)

        self.assert_validation_error(result, "tech_stack")


class TestListClients(BaseAPITest):
    """Test cases for listing and reading clients."""

    def test_list_newest_first_with_plan_status(self, client, db_session, admin_headers):
        now = utcnow()
        DatabaseTestUtilities.create_test_client(
            db_session, name="Old", created_at=now - timedelta(days=3),
            plan_end_date=now - timedelta(days=1)
        )
        DatabaseTestUtilities.create_test_client(
            db_session, name="Middle", created_at=now - timedelta(days=2),
            plan_end_date=now + timedelta(days=10)
        )
        DatabaseTestUtilities.create_test_client(
            db_session, name="New", created_at=now - timedelta(days=1),
            plan_end_date=None
        )

        result = client.get(f"{API}/clients/", headers=admin_headers)

        self.assert_success_response(result)
        data = result.json()
        assert data["total"] == 3
        assert [(c["name"], c["plan_status"]) for c in data["clients"]] == [
            ("New", "Unknown"),
            ("Middle", "Expiring Soon"),
            ("Old", "Expired"),
        ]

    def test_get_client(self, client, db_session, admin_headers):
        acme = DatabaseTestUtilities.create_test_client(db_session, name="Acme Corp")

        result = client.get(f"{API}/clients/{acme.id}", headers=admin_headers)

        self.assert_success_response(result)
        assert result.json()["name"] == "Acme Corp"

    def test_get_unknown_client(self, client, admin_headers):
        result = client.get(f"{API}/clients/{uuid4()}", headers=admin_headers)

        self.assert_not_found(result, "Client not found")

    def test_options_catalog(self, client, employee_headers):
        result = client.get(f"{API}/clients/options", headers=employee_headers)

        self.assert_success_response(result)
        data = result.json()
        assert {"value": "America/Sao_Paulo", "label": "South America (Brazil) - Sao Paulo (UTC-03:00)"} \
            in data["timezones"]
        assert "Other" in data["tech_stack_options"]
        assert len(data["plans"]) == 10
        assert data["departments"] == ["Marketing", "Sales", "Tech", "Finance"]


class TestUpdateClient(BaseAPITest):
    """Test cases for client updates."""

    def test_rename_refreshes_company_name(self, client, db_session, admin_headers, employee_user):
        acme = DatabaseTestUtilities.create_test_client(db_session, name="Acme Corp")
        DatabaseTestUtilities.assign(db_session, acme, employee_user)

        result = client.put(f"{API}/clients/{acme.id}", json={"name": "Acme Industries"},
                            headers=admin_headers)

        self.assert_success_response(result)
        assert result.json()["name"] == "Acme Industries"
        db_session.refresh(employee_user)
        assert employee_user.company_name == "Acme Industries"

    def test_partial_update_keeps_other_fields(self, client, db_session, admin_headers):
        acme = DatabaseTestUtilities.create_test_client(
            db_session, name="Acme Corp", plan="Tech Launch Bundle", business_type="SaaS"
        )

        result = client.put(f"{API}/clients/{acme.id}", json={"business_type": "Retail"},
                            headers=admin_headers)

        self.assert_success_response(result)
        assert result.json()["business_type"] == "Retail"
        assert result.json()["plan"] == "Tech Launch Bundle"
        assert result.json()["name"] == "Acme Corp"

    def test_update_tech_stack_with_other(self, client, db_session, admin_headers):
        acme = DatabaseTestUtilities.create_test_client(db_session, name="Acme Corp")

        result = client.put(
            f"{API}/clients/{acme.id}",
            json={"tech_stack": ["Other"], "other_tech_stack": "Rails"},
            headers=admin_headers
        )

        self.assert_success_response(result)
        assert result.json()["tech_stack"] == ["Rails"]

    def test_custom_tech_stack_survives_resave(self, client, admin_headers):
        payload = TestDataFactory.create_client(tech_stack=["MERN", "Other"], other_tech_stack="Rust")
        created = client.post(f"{API}/clients/", json=payload, headers=admin_headers)
        stored = created.json()
        assert stored["tech_stack"] == ["MERN", "Rust"]

        result = client.put(
            f"{API}/clients/{stored['id']}",
            json={"name": stored["name"], "tech_stack": stored["tech_stack"]},
            headers=admin_headers
        )

        self.assert_success_response(result)
        assert result.json()["tech_stack"] == ["MERN", "Rust"]

    def test_custom_tech_stack_can_be_dropped(self, client, db_session, admin_headers):
        acme = DatabaseTestUtilities.create_test_client(db_session, name="Acme Corp", tech_stack=["Java", "Rust"])

        result = client.put(f"{API}/clients/{acme.id}", json={"tech_stack": ["Java"]}, headers=admin_headers)

        self.assert_success_response(result)
        assert result.json()["tech_stack"] == ["Java"]

    def test_update_rejects_new_unknown_tech(self, client, db_session, admin_headers):
        acme = DatabaseTestUtilities.create_test_client(db_session, name="Acme Corp", tech_stack=["Java", "Rust"])

        result = client.put(f"{API}/clients/{acme.id}", json={"tech_stack": ["Rust", "COBOL"]},
                            headers=admin_headers)

        self.assert_error_response(result, 422, "Unknown tech stack option: COBOL")
        db_session.refresh(acme)
        assert acme.tech_stack == ["Java", "Rust"]

    def test_update_validates_plan(self, client, db_session, admin_headers):
        acme = DatabaseTestUtilities.create_test_client(db_session, name="Acme Corp")

        result = client.put(f"{API}/clients/{acme.id}", json={"plan": "Free Tier"}, headers=admin_headers)

        self.assert_validation_error(result, "plan")


class TestClientEmployees(BaseAPITest):
    """Test cases for assigning employees from the client side."""

    def test_add_and_remove_employee(self, client, db_session, admin_headers, employee_user):
        acme = DatabaseTestUtilities.create_test_client(db_session, name="Acme Corp")

        added = client.post(f"{API}/clients/{acme.id}/employees/{employee_user.id}", headers=admin_headers)
        self.assert_success_response(added)
        assert added.json()["assigned_employees"] == [str(employee_user.id)]

        removed = client.delete(f"{API}/clients/{acme.id}/employees/{employee_user.id}", headers=admin_headers)
        self.assert_success_response(removed)
        assert removed.json()["assigned_employees"] == []
        db_session.refresh(employee_user)
        assert employee_user.assigned_client_id is None
        assert employee_user.company_name is None

    def test_adding_twice_keeps_one_entry(self, client, db_session, admin_headers, employee_user):
        acme = DatabaseTestUtilities.create_test_client(db_session, name="Acme Corp")

        client.post(f"{API}/clients/{acme.id}/employees/{employee_user.id}", headers=admin_headers)
        result = client.post(f"{API}/clients/{acme.id}/employees/{employee_user.id}", headers=admin_headers)

        assert result.json()["assigned_employees"] == [str(employee_user.id)]

    def test_add_unknown_employee(self, client, db_session, admin_headers):
        acme = DatabaseTestUtilities.create_test_client(db_session, name="Acme Corp")

        result = client.post(f"{API}/clients/{acme.id}/employees/{uuid4()}", headers=admin_headers)

        self.assert_not_found(result, "Employee not found")

    def test_add_to_unknown_client(self, client, admin_headers, employee_user):
        result = client.post(f"{API}/clients/{uuid4()}/employees/{employee_user.id}", headers=admin_headers)

        self.assert_not_found(result, "Client not found")
