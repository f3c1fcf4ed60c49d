"""
Daily report and admin dashboard tests.
"""
from datetime import date, datetime, time, timedelta, timezone
from uuid import uuid4
from fastapi import status

from dashboard.database.models import DoneWork
from dashboard.schemas.report import DailyReportResponse, ReportEmployee, ReportTask
from dashboard.services import reports
from dashboard.services.timekeeping import utcnow

from .test_base import API, BaseAPITest, DatabaseTestUtilities


def _done(db_session, user, task, completed_at):
    db_session.add(DoneWork(id=uuid4(), user_id=user.id, task=task,
                            completed_at=completed_at, work_session_duration=0))
    db_session.commit()


def _today_start() -> datetime:
    return datetime.combine(utcnow().date(), time.min, tzinfo=timezone.utc)


class TestDailyReport(BaseAPITest):
    """Test cases for the report endpoints."""

    def test_report_lists_todays_tasks_newest_first(self, client, db_session, employee_user, employee_headers):
        now = utcnow()
        _done(db_session, employee_user, "Earlier today", now - timedelta(seconds=2))
        _done(db_session, employee_user, "Just now", now)
        _done(db_session, employee_user, "Yesterday", _today_start() - timedelta(minutes=1))

        result = client.get(f"{API}/reports/daily", headers=employee_headers)

        self.assert_success_response(result)
        data = result.json()
        assert data["date"] == now.date().isoformat()
        assert data["employee"] == {"name": "Test Employee", "email": "employee@example.com"}
        assert [t["task"] for t in data["tasks"]] == ["Just now", "Earlier today"]
        assert data["total_tasks"] == 2

    def test_report_client_name(self, client, db_session, employee_user, employee_headers):
        acme = DatabaseTestUtilities.create_test_client(db_session, name="Acme Corp")
        DatabaseTestUtilities.assign(db_session, acme, employee_user)

        result = client.get(f"{API}/reports/daily", headers=employee_headers)

        assert result.json()["client_name"] == "Acme Corp"

    def test_report_without_client(self, client, employee_headers):
        result = client.get(f"{API}/reports/daily", headers=employee_headers)

        assert result.json()["client_name"] == "No client assigned"
        assert result.json()["tasks"] == []

    def test_report_hours_worked(self, client, db_session, employee_user, employee_headers):
        DatabaseTestUtilities.create_completed_session(db_session, employee_user, _today_start(), 5400)
        DatabaseTestUtilities.create_completed_session(
            db_session, employee_user, _today_start() - timedelta(hours=5), 3600
        )

        result = client.get(f"{API}/reports/daily", headers=employee_headers)

        assert result.json()["hours_worked"] == 1.5

    def test_text_report(self, client, db_session, employee_user, employee_headers):
        _done(db_session, employee_user, "Fixed login bug", utcnow())

        result = client.post(f"{API}/reports/daily/text", json={"notes": "Good day"},
                             headers=employee_headers)

        assert result.status_code == status.HTTP_200_OK
        assert result.headers["content-type"].startswith("text/plain")
        assert "Daily Work Report" in result.text
        assert "Employee: Test Employee <employee@example.com>" in result.text
        assert "Completed tasks (1):" in result.text
        assert "Fixed login bug" in result.text
        assert "Good day" in result.text

    def test_text_report_without_body(self, client, employee_headers):
        result = client.post(f"{API}/reports/daily/text", headers=employee_headers)

        assert result.status_code == status.HTTP_200_OK
        assert "No tasks completed today." in result.text
        assert "(none)" in result.text

    def test_pdf_report(self, client, db_session, employee_user, employee_headers):
        _done(db_session, employee_user, "Reviewed <b>markup</b> & escaping", utcnow())

        result = client.post(f"{API}/reports/daily/pdf", json={"notes": "Line one\nLine two"},
                             headers=employee_headers)

        assert result.status_code == status.HTTP_200_OK
        assert result.headers["content-type"] == "application/pdf"
        assert "attachment" in result.headers["content-disposition"]
        assert f'filename="daily-report-{utcnow().date().isoformat()}.pdf"' in \
            result.headers["content-disposition"]
        assert result.content.startswith(b"%PDF")

    def test_report_fields(self, client, employee_headers):
        result = client.get(f"{API}/reports/daily", headers=employee_headers)

        self.assert_success_response(result)
        data = result.json()
        for key in ("date", "employee", "client_name", "tasks", "total_tasks", "hours_worked"):
            assert key in data
        assert "day" not in data
        assert set(data["employee"]) == {"name", "email"}

    def test_requires_sign_in(self, client):
        result = client.get(f"{API}/reports/daily")

        self.assert_unauthorized(result)


class TestReportRendering:
    """Unit tests for the report renderers."""

    def _report(self, tasks):
        return DailyReportResponse(
            date=date(2024, 3, 15),
            timezone="Asia/Kolkata",
            employee=ReportEmployee(name="Test Employee", email="employee@example.com"),
            client_name="Acme Corp",
            tasks=tasks,
            total_tasks=len(tasks),
            hours_worked=7.25,
            generated_at=datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)
        )

    def test_text_uses_report_timezone(self):
        task = ReportTask(id=uuid4(), task="Deploy",
                          completed_at=datetime(2024, 3, 15, 4, 30, tzinfo=timezone.utc))

        text = reports.render_text(self._report([task]))

        assert "  1. [10:00] Deploy" in text
        assert "Hours worked: 7.25" in text
        assert "Client: Acme Corp" in text

    def test_blank_notes_render_as_none(self):
        text = reports.render_text(self._report([]), notes="   ")

        assert text.endswith("Notes / Feedback:\n(none)\n")

    def test_pdf_bytes(self):
        pdf = reports.render_pdf(self._report([]), notes=None)

        assert pdf.startswith(b"%PDF")


class TestAdminDashboard(BaseAPITest):
    """Test cases for the admin dashboard summary."""

    def test_dashboard_counts(self, client, db_session, admin_headers, employee_user):
        employee_user.department = "Tech"
        sales = DatabaseTestUtilities.create_test_user(
            db_session, name="Sales Person", email="sales@example.com", department="Sales"
        )
        sales.active = False
        db_session.commit()
        DatabaseTestUtilities.create_test_client(db_session, name="Acme", business_type="SaaS")
        DatabaseTestUtilities.create_test_client(db_session, name="Globex", business_type="SaaS")
        DatabaseTestUtilities.create_test_client(db_session, name="Initech")

        result = client.get(f"{API}/admin/dashboard", headers=admin_headers)

        self.assert_success_response(result)
        data = result.json()
        assert data["total_clients"] == 3
        assert data["total_employees"] == 3
        assert data["active_employees"] == 2
        assert data["incomplete_profiles"] == 1
        assert data["department_counts"] == {"Tech": 1, "Sales": 1, "Unassigned": 1}
        assert data["business_type_counts"] == {"SaaS": 2, "Not Specified": 1}
