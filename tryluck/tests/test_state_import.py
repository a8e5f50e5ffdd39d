"""Tests for the full-replace snapshot import."""

from datetime import date
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

pytestmark = pytest.mark.integration

from tryluck.domains.habits.models.habit_models import (
    CustomTemplate,
    Habit,
    HabitChecklistItem,
    HabitCompletion,
    HabitLogEntry,
)
from tryluck.domains.journal.models import BeliefEntry, DecisionEntry, LuckEntry
from tryluck.domains.state.models import CompletionHistory, UserStreak
from tryluck.domains.state.services.import_service import import_state
from tryluck.extensions import db

TODAY = date(2024, 6, 15)


def _seed_existing(user_id):
    habit = Habit(user_id=user_id, template_id="old-habit", date_added=date(2024, 1, 1))
    db.session.add(habit)
    db.session.flush()
    db.session.add_all(
        [
            HabitCompletion(habit_id=habit.id, user_id=user_id, completed_date=date(2024, 1, 2)),
            HabitLogEntry(habit_id=habit.id, user_id=user_id, entry_date=date(2024, 1, 2), text="x"),
            HabitChecklistItem(habit_id=habit.id, text="step"),
            LuckEntry(user_id=user_id, entry_date=date(2024, 1, 2), event1="old"),
            CompletionHistory(user_id=user_id, record_date=date(2024, 1, 2), completed_count=1),
            CustomTemplate(user_id=user_id, name="Old template"),
            UserStreak(user_id=user_id, current_streak=3, max_streak=8),
        ]
    )
    db.session.commit()
    return habit


class TestReplace:
    """Import wipes the user's data and rebuilds it from the snapshot."""

    def test_previous_data_is_replaced(self, app, user):
        _seed_existing(user.id)

        result = import_state(
            user.id,
            {
                "habits": [{"templateId": "new-habit", "completionDates": ["2024-06-14"]}],
                "luckEntries": [{"date": "2024-06-14", "event1": "found a coin"}],
            },
            today=TODAY,
        )

        assert result["success"] is True
        habits = Habit.query.filter_by(user_id=user.id).all()
        assert [h.template_id for h in habits] == ["new-habit"]
        assert HabitCompletion.query.filter_by(user_id=user.id).count() == 1
        assert HabitLogEntry.query.filter_by(user_id=user.id).count() == 0
        assert HabitChecklistItem.query.count() == 0
        assert [e.event1 for e in LuckEntry.query.filter_by(user_id=user.id)] == ["found a coin"]
        assert CompletionHistory.query.filter_by(user_id=user.id).count() == 0
        assert CustomTemplate.query.filter_by(user_id=user.id).count() == 0

    def test_streak_kept_unless_snapshot_carries_it(self, app, user):
        _seed_existing(user.id)

        import_state(user.id, {"habits": []}, today=TODAY)
        streak = db.session.get(UserStreak, user.id)
        assert (streak.current_streak, streak.max_streak) == (3, 8)

        import_state(user.id, {"streak": 1, "maxStreak": 12}, today=TODAY)
        streak = db.session.get(UserStreak, user.id)
        assert (streak.current_streak, streak.max_streak) == (1, 12)

    def test_other_users_untouched(self, app, user, other_user):
        _seed_existing(other_user.id)

        import_state(user.id, {"habits": [{"templateId": "mine"}]}, today=TODAY)

        assert Habit.query.filter_by(user_id=other_user.id).count() == 1
        assert LuckEntry.query.filter_by(user_id=other_user.id).count() == 1
        assert CompletionHistory.query.filter_by(user_id=other_user.id).count() == 1

    def test_empty_snapshot_clears_everything(self, app, user):
        _seed_existing(user.id)

        result = import_state(user.id, {}, today=TODAY)

        assert result["report"] == {"imported": {}, "skipped": []}
        assert Habit.query.filter_by(user_id=user.id).count() == 0
        assert LuckEntry.query.filter_by(user_id=user.id).count() == 0


class TestHabitItems:
    def test_nested_rows_and_client_field_names(self, app, user):
        result = import_state(
            user.id,
            {
                "habits": [
                    {
                        "templateId": "meditate",
                        "column": "doing",
                        "order": 2,
                        "dateAdded": "2024-06-01",
                        "totalMinutesSpent": 40,
                        "completionDates": ["2024-06-14", "2024-06-13", "2024-06-14"],
                        "logEntries": [
                            {"date": "2024-06-14", "text": "calm", "durationMinutes": 20},
                            {"text": "no date"},
                        ],
                        "checklist": [{"text": "sit", "done": True}, {"text": "breathe"}],
                    }
                ]
            },
            today=TODAY,
        )

        habit = Habit.query.filter_by(user_id=user.id).one()
        assert habit.column_status == "doing"
        assert habit.sort_order == 2
        assert habit.date_added == date(2024, 6, 1)
        assert habit.total_minutes_spent == 40
        assert sorted(c.completed_date for c in habit.completions) == [
            date(2024, 6, 13),
            date(2024, 6, 14),
        ]
        assert sorted(e.entry_date for e in habit.log_entries) == [date(2024, 6, 14), TODAY]
        assert [(i.text, i.done, i.sort_order) for i in habit.checklist_items] == [
            ("sit", True, 0),
            ("breathe", False, 1),
        ]
        assert result["report"]["imported"] == {
            "habits": 1,
            "completions": 2,
            "logEntries": 2,
            "checklist": 2,
        }

    def test_server_field_names_accepted(self, app, user):
        import_state(
            user.id,
            {"habits": [{"templateId": "read", "columnStatus": "done", "sortOrder": 5}]},
            today=TODAY,
        )

        habit = Habit.query.filter_by(user_id=user.id).one()
        assert (habit.column_status, habit.sort_order) == ("done", 5)

    def test_defaults_for_missing_fields(self, app, user):
        import_state(user.id, {"habits": [{"templateId": "walk", "column": None}]}, today=TODAY)

        habit = Habit.query.filter_by(user_id=user.id).one()
        assert habit.column_status == "todo"
        assert habit.sort_order == 0
        assert habit.date_added == TODAY
        assert habit.total_minutes_spent == 0


class TestPartialFailure:
    """One bad item is skipped and reported; the rest of the snapshot lands."""

    def test_missing_template_id_skipped(self, app, user):
        result = import_state(
            user.id,
            {
                "habits": [
                    {"templateId": "first"},
                    {"column": "todo"},
                    {"templateId": "third"},
                ]
            },
            today=TODAY,
        )

        templates = sorted(h.template_id for h in Habit.query.filter_by(user_id=user.id))
        assert templates == ["first", "third"]
        skipped = result["report"]["skipped"]
        assert len(skipped) == 1
        assert skipped[0]["section"] == "habits"
        assert skipped[0]["index"] == 1
        assert result["report"]["imported"]["habits"] == 2

    def test_duplicate_template_id_conflict_skipped(self, app, user):
        result = import_state(
            user.id,
            {
                "habits": [
                    {"templateId": "same", "completionDates": ["2024-06-10"]},
                    {"templateId": "same", "completionDates": ["2024-06-11"]},
                    {"templateId": "other"},
                ]
            },
            today=TODAY,
        )

        assert Habit.query.filter_by(user_id=user.id).count() == 2
        assert [c.completed_date for c in HabitCompletion.query.filter_by(user_id=user.id)] == [
            date(2024, 6, 10)
        ]
        assert result["report"]["skipped"] == [
            {"section": "habits", "index": 1, "reason": "conflicts with existing data"}
        ]

    def test_bad_completion_date_skipped(self, app, user):
        result = import_state(
            user.id,
            {"habits": [{"templateId": "run", "completionDates": ["2024-06-10", "yesterday", 7]}]},
            today=TODAY,
        )

        assert HabitCompletion.query.filter_by(user_id=user.id).count() == 1
        sections = [item["section"] for item in result["report"]["skipped"]]
        assert sections == ["habits[0].completionDates", "habits[0].completionDates"]

    def test_malformed_section_and_bad_journal_entry(self, app, user):
        result = import_state(
            user.id,
            {
                "habits": "not a list",
                "beliefEntries": [
                    {"belief": "I can", "beliefType": "sideways"},
                    {"belief": "I will", "beliefType": "limiting"},
                ],
            },
            today=TODAY,
        )

        beliefs = BeliefEntry.query.filter_by(user_id=user.id).all()
        assert [(b.belief, b.belief_type) for b in beliefs] == [("I will", "limiting")]
        skipped = {(item["section"], item["index"]) for item in result["report"]["skipped"]}
        assert skipped == {("habits", None), ("beliefEntries", 0)}

    def test_oversized_integer_skips_only_that_habit(self, app, user):
        _seed_existing(user.id)

        result = import_state(
            user.id,
            {
                "habits": [
                    {"templateId": "a"},
                    {"templateId": "b", "sortOrder": 10**20},
                    {"templateId": "c", "totalMinutesSpent": 5},
                ]
            },
            today=TODAY,
        )

        templates = sorted(h.template_id for h in Habit.query.filter_by(user_id=user.id))
        assert templates == ["a", "c"]
        assert result["success"] is True
        assert [(s["section"], s["index"]) for s in result["report"]["skipped"]] == [("habits", 1)]

    def test_oversized_nested_and_summary_values_reported(self, app, user):
        result = import_state(
            user.id,
            {
                "habits": [
                    {
                        "templateId": "run",
                        "logEntries": [
                            {"text": "too long", "durationMinutes": 10**12},
                            {"text": "fine", "durationMinutes": 30},
                        ],
                    }
                ],
                "customTemplates": [{"name": "Huge", "durationMinutes": 2**40}],
                "completionHistory": {"2024-06-13": 10**20, "2024-06-14": 2},
                "streak": 10**20,
                "maxStreak": 3,
            },
            today=TODAY,
        )

        assert [e.text for e in HabitLogEntry.query.filter_by(user_id=user.id)] == ["fine"]
        assert CustomTemplate.query.filter_by(user_id=user.id).count() == 0
        assert [r.record_date for r in CompletionHistory.query.filter_by(user_id=user.id)] == [
            date(2024, 6, 14)
        ]
        streak = db.session.get(UserStreak, user.id)
        assert (streak.current_streak, streak.max_streak) == (0, 3)
        sections = sorted(s["section"] for s in result["report"]["skipped"])
        assert sections == [
            "completionHistory",
            "customTemplates",
            "habits[0].logEntries",
            "streak",
        ]

    def test_negative_streak_ignored(self, app, user):
        result = import_state(user.id, {"streak": -1, "maxStreak": 4}, today=TODAY)

        streak = db.session.get(UserStreak, user.id)
        assert (streak.current_streak, streak.max_streak) == (0, 4)
        assert result["report"]["skipped"][0]["section"] == "streak"


class TestJournalAndHistory:
    def test_journal_defaults(self, app, user):
        import_state(
            user.id,
            {"decisionEntries": [{"decision": "move", "logic": None}]},
            today=TODAY,
        )

        entry = DecisionEntry.query.filter_by(user_id=user.id).one()
        assert entry.entry_date == TODAY
        assert entry.logic == ""
        assert entry.emotional_state == ""

    def test_timestamp_dates_keep_their_day(self, app, user):
        result = import_state(
            user.id,
            {
                "habits": [
                    {
                        "templateId": "run",
                        "dateAdded": "2024-06-01T22:15:00.000Z",
                        "logEntries": [{"date": "2024-06-14T08:30:00.000Z", "text": "ran"}],
                    }
                ],
                "luckEntries": [{"date": "2024-06-14T08:30:00.000Z", "event1": "green lights"}],
            },
            today=TODAY,
        )

        assert result["report"]["skipped"] == []
        habit = Habit.query.filter_by(user_id=user.id).one()
        assert habit.date_added == date(2024, 6, 1)
        entry = HabitLogEntry.query.filter_by(user_id=user.id).one()
        assert (entry.entry_date, entry.text) == (date(2024, 6, 14), "ran")
        luck = LuckEntry.query.filter_by(user_id=user.id).one()
        assert (luck.entry_date, luck.event1) == (date(2024, 6, 14), "green lights")

    def test_unparseable_journal_date_reported(self, app, user):
        result = import_state(
            user.id,
            {"gratitudeEntries": [{"date": "last tuesday", "item1": "x"}, {"item1": "y"}]},
            today=TODAY,
        )

        assert [(s["section"], s["index"]) for s in result["report"]["skipped"]] == [
            ("gratitudeEntries", 0)
        ]

    def test_history_mapping(self, app, user):
        result = import_state(
            user.id,
            {"completionHistory": {"2024-06-13": 3, "2024-06-14": 0, "bogus": 1, "2024-06-12": -2}},
            today=TODAY,
        )

        rows = {
            r.record_date: r.completed_count
            for r in CompletionHistory.query.filter_by(user_id=user.id)
        }
        assert rows == {date(2024, 6, 13): 3, date(2024, 6, 14): 0}
        assert result["report"]["imported"]["completionHistory"] == 2
        assert len(result["report"]["skipped"]) == 2

    def test_custom_templates(self, app, user):
        import_state(
            user.id,
            {"customTemplates": [{"name": "Cold shower", "timeOfDay": "evening"}, {"name": "Plank"}]},
            today=TODAY,
        )

        templates = CustomTemplate.query.filter_by(user_id=user.id).order_by(CustomTemplate.id).all()
        assert [(t.name, t.time_of_day, t.layer) for t in templates] == [
            ("Cold shower", "evening", "biology"),
            ("Plank", "morning", "biology"),
        ]


class TestConnectivityFailure:
    def test_operational_error_propagates_and_rolls_back(self, app, user):
        _seed_existing(user.id)
        error = OperationalError("DELETE FROM user_habits", {}, Exception("connection lost"))

        with patch("tryluck.domains.state.services.import_service._wipe", side_effect=error):
            with pytest.raises(OperationalError):
                import_state(user.id, {"habits": [{"templateId": "new"}]}, today=TODAY)

        assert [h.template_id for h in Habit.query.filter_by(user_id=user.id)] == ["old-habit"]
        assert LuckEntry.query.filter_by(user_id=user.id).count() == 1


class TestImportApi:
    def test_import_endpoint(self, client, auth_headers, user):
        resp = client.post(
            "/api/v1/state/import",
            json={"habits": [{"templateId": "api-habit"}], "streak": 2, "maxStreak": 2},
            headers=auth_headers,
        )

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["success"] is True
        assert body["report"]["imported"] == {"habits": 1}
        assert Habit.query.filter_by(user_id=user.id).count() == 1

    def test_non_object_body_rejected(self, client, auth_headers):
        resp = client.post("/api/v1/state/import", json=[1, 2], headers=auth_headers)

        assert resp.status_code == 400
        assert resp.get_json()["error"] == "validation_error"

    def test_requires_auth(self, client):
        assert client.post("/api/v1/state/import", json={}).status_code == 401
