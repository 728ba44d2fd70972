"""Calendar events

Revision ID: 0002_events
Revises: 0001_initial
Create Date: 2026-10-18
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "0002_events"
down_revision = "0001_initial"
branch_labels = None
depends_on = None


# Created with the tasks table in 0001_initial.
task_priority_enum = postgresql.ENUM("High", "Medium", "Low", name="task_priority", create_type=False)


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("startTime", sa.Time(), nullable=True),
        sa.Column("endTime", sa.Time(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("priority", task_priority_enum, nullable=True),
        sa.Column("caseId", sa.Integer(), nullable=True),
        sa.Column("creator", sa.Integer(), nullable=False),
        sa.Column("createdAt", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updatedAt", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["caseId"], ["cases.id"], name="fk_events_caseId_cases", ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["creator"], ["users.id"], name="fk_events_creator_users"),
        sa.PrimaryKeyConstraint("id", name="pk_events"),
    )
    op.create_index("ix_events_id", "events", ["id"], unique=False)
    op.create_index("ix_events_date", "events", ["date"], unique=False)
    op.create_index("ix_events_caseId", "events", ["caseId"], unique=False)
    op.create_index("ix_events_creator", "events", ["creator"], unique=False)

    op.create_table(
        "event_attendees",
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("person_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["event_id"], ["events.id"], name="fk_event_attendees_event_id_events", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["person_id"], ["persons.id"], name="fk_event_attendees_person_id_persons", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("event_id", "person_id", name="pk_event_attendees"),
    )


def downgrade() -> None:
    op.drop_table("event_attendees")
    op.drop_table("events")
