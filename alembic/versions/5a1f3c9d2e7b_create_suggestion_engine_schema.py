"""Create suggestion engine schema

Revision ID: 5a1f3c9d2e7b
Revises:
Create Date: 2026-10-17
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "5a1f3c9d2e7b"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("email", sa.String(), nullable=False, unique=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "tasks",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user_id", sa.String(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("due_date", sa.DateTime(), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("energy_level", sa.String(), nullable=True),
        sa.Column("scheduled_start", sa.DateTime(), nullable=True),
        sa.Column("scheduled_end", sa.DateTime(), nullable=True),
        sa.Column("is_auto_scheduled", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index(op.f("ix_tasks_user_id"), "tasks", ["user_id"], unique=False)
    op.create_index(op.f("ix_tasks_status"), "tasks", ["status"], unique=False)
    op.create_index(op.f("ix_tasks_scheduled_start"), "tasks", ["scheduled_start"], unique=False)

    op.create_table(
        "calendar_feeds",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user_id", sa.String(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index(op.f("ix_calendar_feeds_user_id"), "calendar_feeds", ["user_id"], unique=False)

    op.create_table(
        "calendar_events",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("feed_id", sa.String(), sa.ForeignKey("calendar_feeds.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("start", sa.DateTime(), nullable=False),
        sa.Column("end", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index(op.f("ix_calendar_events_feed_id"), "calendar_events", ["feed_id"], unique=False)
    op.create_index(op.f("ix_calendar_events_start"), "calendar_events", ["start"], unique=False)

    op.create_table(
        "auto_schedule_settings",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user_id", sa.String(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("work_days", sa.JSON(), nullable=False),
        sa.Column("selected_calendars", sa.JSON(), nullable=False),
        sa.Column("work_hour_start", sa.Integer(), nullable=False),
        sa.Column("work_hour_end", sa.Integer(), nullable=False),
        sa.Column("buffer_minutes", sa.Integer(), nullable=False),
        sa.Column("high_energy_start", sa.Integer(), nullable=True),
        sa.Column("high_energy_end", sa.Integer(), nullable=True),
        sa.Column("medium_energy_start", sa.Integer(), nullable=True),
        sa.Column("medium_energy_end", sa.Integer(), nullable=True),
        sa.Column("low_energy_start", sa.Integer(), nullable=True),
        sa.Column("low_energy_end", sa.Integer(), nullable=True),
        sa.Column("enforce_breaks", sa.Boolean(), nullable=False),
        sa.Column("min_break_duration", sa.Integer(), nullable=False),
        sa.Column("max_consecutive_hours", sa.Integer(), nullable=False),
        sa.Column("enable_suggestions", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "schedule_suggestions",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("user_id", sa.String(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("task_id", sa.String(), sa.ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False),
        sa.Column("suggestion_type", sa.String(), nullable=False),
        sa.Column("reason", sa.String(), nullable=False),
        sa.Column("confidence", sa.Float(), nullable=False),
        sa.Column("current_start", sa.DateTime(), nullable=True),
        sa.Column("current_end", sa.DateTime(), nullable=True),
        sa.Column("suggested_start", sa.DateTime(), nullable=True),
        sa.Column("suggested_end", sa.DateTime(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("responded_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
    )
    op.create_index(op.f("ix_schedule_suggestions_user_id"), "schedule_suggestions", ["user_id"], unique=False)
    op.create_index(op.f("ix_schedule_suggestions_task_id"), "schedule_suggestions", ["task_id"], unique=False)
    op.create_index(op.f("ix_schedule_suggestions_status"), "schedule_suggestions", ["status"], unique=False)
    op.create_index(op.f("ix_schedule_suggestions_expires_at"), "schedule_suggestions", ["expires_at"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("schedule_suggestions")
    op.drop_table("auto_schedule_settings")
    op.drop_table("calendar_events")
    op.drop_table("calendar_feeds")
    op.drop_table("tasks")
    op.drop_table("users")
