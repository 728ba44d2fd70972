"""Initial Lexdesk schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


case_status_enum = sa.Enum("active", "closed", "pending", name="case_status")
account_type_enum = sa.Enum("Individual", "Business", "Corporate", name="account_type")
task_status_enum = sa.Enum("Not Started", "In Progress", "Completed", "Overdue", "Pending", name="task_status")
task_priority_enum = sa.Enum("High", "Medium", "Low", name="task_priority")


def _timestamps() -> list[sa.Column]:
    # Migrated records use camelCase timestamp columns.
    return [
        sa.Column("createdAt", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updatedAt", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("firm_name", sa.String(length=255), nullable=True),
        sa.Column("phone_number", sa.String(length=50), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_id", "users", ["id"], unique=False)
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_is_active", "users", ["is_active"], unique=False)

    op.create_table(
        "clients",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("company", sa.String(length=255), nullable=False),
        sa.Column("contact_person", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("account_type", account_type_enum, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_clients"),
    )
    op.create_index("ix_clients_id", "clients", ["id"], unique=False)
    op.create_index("ix_clients_email", "clients", ["email"], unique=True)
    op.create_index("ix_clients_is_active", "clients", ["is_active"], unique=False)

    op.create_table(
        "persons",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_persons"),
    )
    op.create_index("ix_persons_id", "persons", ["id"], unique=False)
    op.create_index("ix_persons_email", "persons", ["email"], unique=False)

    op.create_table(
        "cases",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("case_name", sa.String(length=255), nullable=False),
        sa.Column("case_number", sa.String(length=100), nullable=True),
        sa.Column("practice_area", sa.String(length=120), nullable=False),
        sa.Column("case_stage", sa.String(length=120), nullable=False),
        sa.Column("date_opened", sa.Date(), nullable=False),
        sa.Column("office", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("statute_of_limitations", sa.Date(), nullable=True),
        sa.Column("conflict_check", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("conflict_check_notes", sa.Text(), nullable=True),
        sa.Column("custom_fields", sa.JSON(), nullable=True),
        sa.Column("status", case_status_enum, nullable=False, server_default="active"),
        sa.Column("lawyer", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["lawyer"], ["users.id"], name="fk_cases_lawyer_users"),
        sa.PrimaryKeyConstraint("id", name="pk_cases"),
    )
    op.create_index("ix_cases_id", "cases", ["id"], unique=False)
    op.create_index("ix_cases_case_number", "cases", ["case_number"], unique=True)
    op.create_index("ix_cases_date_opened", "cases", ["date_opened"], unique=False)
    op.create_index("ix_cases_status", "cases", ["status"], unique=False)
    op.create_index("ix_cases_lawyer", "cases", ["lawyer"], unique=False)

    for table, column, referred in (
        ("case_clients", "client_id", "clients"),
        ("case_contacts", "person_id", "persons"),
        ("case_staff", "person_id", "persons"),
    ):
        op.create_table(
            table,
            sa.Column("case_id", sa.Integer(), nullable=False),
            sa.Column(column, sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(
                ["case_id"], ["cases.id"], name=f"fk_{table}_case_id_cases", ondelete="CASCADE"
            ),
            sa.ForeignKeyConstraint(
                [column], [f"{referred}.id"], name=f"fk_{table}_{column}_{referred}", ondelete="CASCADE"
            ),
            sa.PrimaryKeyConstraint("case_id", column, name=f"pk_{table}"),
        )

    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("case", sa.Integer(), nullable=False),
        sa.Column("user", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("subtotal", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("tax", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("total", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="Draft"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("paymentTerms", sa.String(length=255), nullable=True),
        sa.Column("dueDate", sa.Date(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["case"], ["cases.id"], name="fk_invoices_case_cases"),
        sa.ForeignKeyConstraint(["user"], ["users.id"], name="fk_invoices_user_users"),
        sa.PrimaryKeyConstraint("id", name="pk_invoices"),
    )
    op.create_index("ix_invoices_id", "invoices", ["id"], unique=False)
    op.create_index("ix_invoices_case", "invoices", ["case"], unique=False)
    op.create_index("ix_invoices_user", "invoices", ["user"], unique=False)
    op.create_index("ix_invoices_date", "invoices", ["date"], unique=False)
    op.create_index("ix_invoices_status", "invoices", ["status"], unique=False)

    op.create_table(
        "invoice_expenses",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("invoice_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("cost", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("billable", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(
            ["invoice_id"], ["invoices.id"], name="fk_invoice_expenses_invoice_id_invoices", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_invoice_expenses"),
    )
    op.create_index("ix_invoice_expenses_id", "invoice_expenses", ["id"], unique=False)
    op.create_index("ix_invoice_expenses_invoice_id", "invoice_expenses", ["invoice_id"], unique=False)

    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("case", sa.Integer(), nullable=False),
        sa.Column("assignedTo", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", task_status_enum, nullable=False, server_default="Not Started"),
        sa.Column("priority", task_priority_enum, nullable=False),
        sa.Column("progress", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("dueDate", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("progress >= 0 AND progress <= 100", name="ck_tasks_progress_range"),
        sa.ForeignKeyConstraint(["case"], ["cases.id"], name="fk_tasks_case_cases", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["assignedTo"], ["persons.id"], name="fk_tasks_assignedTo_persons"),
        sa.PrimaryKeyConstraint("id", name="pk_tasks"),
    )
    op.create_index("ix_tasks_id", "tasks", ["id"], unique=False)
    op.create_index("ix_tasks_case", "tasks", ["case"], unique=False)
    op.create_index("ix_tasks_assignedTo", "tasks", ["assignedTo"], unique=False)
    op.create_index("ix_tasks_status", "tasks", ["status"], unique=False)
    op.create_index("ix_tasks_dueDate", "tasks", ["dueDate"], unique=False)


def downgrade() -> None:
    op.drop_table("tasks")
    op.drop_table("invoice_expenses")
    op.drop_table("invoices")
    for table in ("case_staff", "case_contacts", "case_clients"):
        op.drop_table(table)
    op.drop_table("cases")
    op.drop_table("persons")
    op.drop_table("clients")
    op.drop_table("users")

    bind = op.get_bind()
    for enum in (task_priority_enum, task_status_enum, account_type_enum, case_status_enum):
        enum.drop(bind, checkfirst=True)
