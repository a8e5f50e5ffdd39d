"""Admin API and seed-admin CLI tests."""

from datetime import date

import pytest

pytestmark = pytest.mark.integration

from tryluck.core.auth.auth_service import ensure_admin, issue_admin_token
from tryluck.core.auth.models import AdminUser
from tryluck.domains.habits.models.habit_models import Habit, HabitCompletion
from tryluck.domains.journal.models import LuckEntry, WoopEntry
from tryluck.domains.state.models import CompletionHistory, UserStreak
from tryluck.extensions import db


@pytest.fixture()
def admin_headers(app):
    admin, _ = ensure_admin("admin", "admin-pass")
    return {"Authorization": f"Bearer {issue_admin_token(admin)}"}


def _activity(user_id, template_id="water", minutes=30):
    habit = Habit(
        user_id=user_id,
        template_id=template_id,
        date_added=date(2024, 7, 1),
        total_minutes_spent=minutes,
    )
    db.session.add(habit)
    db.session.flush()
    db.session.add_all(
        [
            HabitCompletion(habit_id=habit.id, user_id=user_id, completed_date=date(2024, 7, 1)),
            HabitCompletion(habit_id=habit.id, user_id=user_id, completed_date=date(2024, 7, 2)),
            LuckEntry(user_id=user_id, entry_date=date(2024, 7, 1), event1="x"),
            WoopEntry(user_id=user_id, entry_date=date(2024, 7, 1), wish="y"),
            CompletionHistory(user_id=user_id, record_date=date(2024, 7, 1), completed_count=1),
            UserStreak(user_id=user_id, current_streak=4, max_streak=5),
        ]
    )
    db.session.commit()


class TestAdminAuth:
    def test_ping_is_public(self, client):
        body = client.get("/api/v1/admin/ping").get_json()
        assert body["ping"] == "pong"
        assert body["time"]

    def test_login(self, client, admin_headers):
        ok = client.post("/api/v1/admin/login", json={"username": "admin", "password": "admin-pass"})
        bad = client.post("/api/v1/admin/login", json={"username": "admin", "password": "nope"})

        assert ok.status_code == 200
        assert ok.get_json()["username"] == "admin"
        assert bad.status_code == 401
        assert bad.get_json()["error"] == "invalid_credentials"

    def test_user_token_forbidden(self, client, auth_headers):
        assert client.get("/api/v1/admin/dashboard", headers=auth_headers).status_code == 403

    def test_no_token(self, client):
        assert client.get("/api/v1/admin/dashboard").status_code == 401


class TestAdminStats:
    def test_dashboard_totals(self, client, admin_headers, user, other_user):
        _activity(user.id, "water", 30)
        _activity(other_user.id, "water", 15)

        body = client.get("/api/v1/admin/dashboard", headers=admin_headers).get_json()

        assert body["totalUsers"] == 2
        assert body["usersToday"] == 2
        assert body["totalHabitsCreated"] == 2
        assert body["totalCompletions"] == 4
        assert body["totalJournalEntries"] == 4
        assert body["totalMinutesTracked"] == 45
        assert body["topHabitTemplates"] == [{"templateId": "water", "count": 2}]
        assert sum(day["count"] for day in body["registrationsByDay"]) == 2

    def test_user_list_and_search(self, client, admin_headers, user, other_user):
        _activity(user.id)

        listed = client.get("/api/v1/admin/users?page=1&limit=1", headers=admin_headers).get_json()
        searched = client.get("/api/v1/admin/users?search=other", headers=admin_headers).get_json()

        assert listed["total"] == 2
        assert listed["totalPages"] == 2
        assert len(listed["users"]) == 1
        assert [u["email"] for u in searched["users"]] == ["other@example.com"]

    def test_user_list_stats(self, client, admin_headers, user):
        _activity(user.id, minutes=12)

        row = client.get("/api/v1/admin/users", headers=admin_headers).get_json()["users"][0]

        assert row["habitCount"] == 1
        assert row["totalCompletions"] == 2
        assert row["currentStreak"] == 4
        assert row["totalMinutes"] == 12

    def test_user_detail(self, client, admin_headers, user):
        _activity(user.id)

        body = client.get(f"/api/v1/admin/users/{user.id}", headers=admin_headers).get_json()

        assert body["user"]["email"] == user.email
        assert body["stats"]["journalEntries"]["luck"] == 1
        assert body["stats"]["journalEntries"]["woop"] == 1
        assert len(body["habits"]) == 1

    def test_unknown_user(self, client, admin_headers):
        assert client.get("/api/v1/admin/users/999999", headers=admin_headers).status_code == 404


class TestSeedAdminCommand:
    def test_creates_once(self, app):
        runner = app.test_cli_runner()

        first = runner.invoke(args=["seed-admin", "--username", "ops", "--password", "s3cret"])
        second = runner.invoke(args=["seed-admin", "-u", "ops", "-p", "other"])

        assert "Created admin user ops" in first.output
        assert "already exists" in second.output
        assert AdminUser.query.filter_by(username="ops").count() == 1
