"""initial schema: accounts, habit board, journals, streaks

Revision ID: 20260301_initial_schema
Revises:
Create Date: 2026-03-01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20260301_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

JOURNAL_TABLES = {
    "luck_entries": [("event1", True), ("event2", True), ("event3", True)],
    "gratitude_entries": [("item1", True), ("item2", True), ("item3", True)],
    "decision_entries": [
        ("decision", False),
        ("logic", True),
        ("expectation", True),
        ("emotional_state", True),
    ],
    "woop_entries": [("wish", False), ("outcome", True), ("obstacle", True), ("plan", True)],
    "prophecy_entries": [("prophecy", False), ("reasoning", True), ("steps", True)],
    "belief_entries": [("belief", False), ("origin", True), ("impact", True)],
}


def _user_fk() -> sa.Column:
    return sa.Column(
        "user_id",
        sa.Integer(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def _habit_fk() -> sa.Column:
    return sa.Column(
        "habit_id",
        sa.Integer(),
        sa.ForeignKey("user_habits.id", ondelete="CASCADE"),
        nullable=False,
    )


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now())


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("display_name", sa.String(length=255)),
        sa.Column("avatar_url", sa.Text()),
        sa.Column("auth_method", sa.String(length=20), nullable=False, server_default="email"),
        sa.Column("google_id", sa.String(length=255), unique=True),
        sa.Column("password_hash", sa.String(length=255)),
        sa.Column("timezone", sa.String(length=64)),
        _created_at(),
        sa.Column("last_active", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "admin_users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=100), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        _created_at(),
    )

    op.create_table(
        "user_habits",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("template_id", sa.String(length=50), nullable=False),
        sa.Column("column_status", sa.String(length=20), nullable=False, server_default="todo"),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("date_added", sa.Date(), nullable=False),
        sa.Column("total_minutes_spent", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("cover_image_url", sa.Text()),
        sa.Column("custom_duration_minutes", sa.Integer()),
        sa.Column("prophecy_text", sa.Text()),
        _created_at(),
        sa.UniqueConstraint("user_id", "template_id", name="uq_user_habits_user_template"),
    )
    op.create_index("ix_user_habits_user_id", "user_habits", ["user_id"])

    op.create_table(
        "habit_completions",
        sa.Column("id", sa.Integer(), primary_key=True),
        _habit_fk(),
        _user_fk(),
        sa.Column("completed_date", sa.Date(), nullable=False),
        _created_at(),
        sa.UniqueConstraint("habit_id", "completed_date", name="uq_habit_completions_habit_date"),
    )
    op.create_index(
        "ix_habit_completions_user_date", "habit_completions", ["user_id", "completed_date"]
    )

    op.create_table(
        "habit_log_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        _habit_fk(),
        _user_fk(),
        sa.Column("entry_date", sa.Date(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("duration_minutes", sa.Integer()),
        _created_at(),
    )
    op.create_index("ix_habit_log_entries_habit_id", "habit_log_entries", ["habit_id"])
    op.create_index("ix_habit_log_entries_user_id", "habit_log_entries", ["user_id"])

    op.create_table(
        "habit_checklist_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        _habit_fk(),
        sa.Column("text", sa.String(length=500), nullable=False),
        sa.Column("done", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_habit_checklist_items_habit_id", "habit_checklist_items", ["habit_id"])

    op.create_table(
        "custom_templates",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("layer", sa.String(length=20), nullable=False, server_default="biology"),
        sa.Column("name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("description", sa.Text()),
        sa.Column("science", sa.Text()),
        sa.Column("time_of_day", sa.String(length=10), nullable=False, server_default="morning"),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="10"),
        sa.Column("difficulty", sa.String(length=10), nullable=False, server_default="easy"),
        sa.Column("tiny_habit_anchor", sa.Text()),
        sa.Column("what_you_feel", sa.Text()),
        sa.Column("common_mistakes", sa.Text()),
        sa.Column("custom_name", sa.String(length=255)),
        _created_at(),
    )
    op.create_index("ix_custom_templates_user_id", "custom_templates", ["user_id"])

    for table, text_columns in JOURNAL_TABLES.items():
        columns = [
            sa.Column("id", sa.Integer(), primary_key=True),
            _user_fk(),
            sa.Column("entry_date", sa.Date(), nullable=False),
        ]
        for name, has_default in text_columns:
            columns.append(
                sa.Column(
                    name, sa.Text(), nullable=False, server_default="" if has_default else None
                )
            )
        if table == "belief_entries":
            columns.append(
                sa.Column(
                    "belief_type", sa.String(length=10), nullable=False, server_default="empowering"
                )
            )
        columns.append(_created_at())
        op.create_table(table, *columns)
        op.create_index(f"ix_{table}_user_id", table, ["user_id"])

    op.create_table(
        "completion_history",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("record_date", sa.Date(), nullable=False),
        sa.Column("completed_count", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("user_id", "record_date", name="uq_completion_history_user_date"),
    )
    op.create_index("ix_completion_history_user_id", "completion_history", ["user_id"])

    op.create_table(
        "user_streaks",
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
            autoincrement=False,
        ),
        sa.Column("current_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("max_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_computed", sa.Date()),
    )

    op.create_table(
        "onboarding",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("main_pain", sa.String(length=20)),
        sa.Column("desired_outcome", sa.Text()),
        sa.Column("priority_areas", sa.JSON()),
        sa.Column("daily_minutes", sa.Integer()),
        sa.Column("wake_time", sa.String(length=10)),
        sa.Column("tracker_experience", sa.String(length=20)),
        sa.Column(
            "onboarding_completed", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        _created_at(),
    )


def downgrade():
    op.drop_table("onboarding")
    op.drop_table("user_streaks")
    op.drop_index("ix_completion_history_user_id", table_name="completion_history")
    op.drop_table("completion_history")
    for table in reversed(list(JOURNAL_TABLES)):
        op.drop_index(f"ix_{table}_user_id", table_name=table)
        op.drop_table(table)
    op.drop_index("ix_custom_templates_user_id", table_name="custom_templates")
    op.drop_table("custom_templates")
    op.drop_index("ix_habit_checklist_items_habit_id", table_name="habit_checklist_items")
    op.drop_table("habit_checklist_items")
    op.drop_index("ix_habit_log_entries_user_id", table_name="habit_log_entries")
    op.drop_index("ix_habit_log_entries_habit_id", table_name="habit_log_entries")
    op.drop_table("habit_log_entries")
    op.drop_index("ix_habit_completions_user_date", table_name="habit_completions")
    op.drop_table("habit_completions")
    op.drop_index("ix_user_habits_user_id", table_name="user_habits")
    op.drop_table("user_habits")
    op.drop_table("admin_users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
