"""Initial schema for work scheduling.

Revision ID: 20251101_0001
Revises:
Create Date: 2025-11-01 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20251101_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "role",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=80), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("permissions", sa.JSON(), nullable=False),
    )
    op.create_index("ix_role_id", "role", ["id"])

    op.create_table(
        "employee",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("role_id", sa.Integer(), sa.ForeignKey("role.id", ondelete="SET NULL"), nullable=True),
        sa.Column("exclude_from_hours", sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    shift_table = op.create_table(
        "shift",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("abbreviation", sa.String(length=8), nullable=False, server_default=""),
        sa.Column("color", sa.String(length=16), nullable=False, server_default="#cccccc"),
        sa.Column("hours", sa.Numeric(4, 2), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=True),
        sa.Column("end_time", sa.String(length=5), nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    op.create_table(
        "scheduleentry",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "employee_id",
            sa.String(length=64),
            sa.ForeignKey("employee.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("day", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("shift_id", sa.String(length=64), sa.ForeignKey("shift.id"), nullable=False),
        sa.UniqueConstraint("employee_id", "day", "month", "year", name="uq_scheduleentry_employee_day"),
    )
    op.create_index("ix_scheduleentry_id", "scheduleentry", ["id"])
    op.create_index("ix_scheduleentry_employee_id", "scheduleentry", ["employee_id"])
    op.create_index("ix_scheduleentry_month", "scheduleentry", ["month"])
    op.create_index("ix_scheduleentry_year", "scheduleentry", ["year"])

    op.create_table(
        "employeepreference",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "employee_id",
            sa.String(length=64),
            sa.ForeignKey("employee.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("preference_type", sa.String(length=32), nullable=False),
        sa.Column("target_date", sa.Date(), nullable=False),
        sa.Column(
            "target_shift_id",
            sa.String(length=64),
            sa.ForeignKey("shift.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("priority", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_employeepreference_employee_id", "employeepreference", ["employee_id"])
    op.create_index("ix_employeepreference_target_date", "employeepreference", ["target_date"])

    op.create_table(
        "validationrule",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("rule_type", sa.String(length=64), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("config", sa.JSON(), nullable=False),
        sa.Column("applies_to_roles", sa.JSON(), nullable=True),
        sa.Column("applies_to_employees", sa.JSON(), nullable=True),
        sa.Column("enforcement_type", sa.String(length=16), nullable=True),
        sa.Column("custom_message", sa.Text(), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_validationrule_rule_type", "validationrule", ["rule_type"])

    op.bulk_insert(
        shift_table,
        [
            {
                "id": "day-off",
                "name": "Day off",
                "abbreviation": "OFF",
                "color": "#ef4444",
                "hours": 0,
                "start_time": None,
                "end_time": None,
                "is_default": True,
            }
        ],
    )


def downgrade() -> None:
    op.drop_index("ix_validationrule_rule_type", table_name="validationrule")
    op.drop_table("validationrule")
    op.drop_index("ix_employeepreference_target_date", table_name="employeepreference")
    op.drop_index("ix_employeepreference_employee_id", table_name="employeepreference")
    op.drop_table("employeepreference")
    op.drop_index("ix_scheduleentry_year", table_name="scheduleentry")
    op.drop_index("ix_scheduleentry_month", table_name="scheduleentry")
    op.drop_index("ix_scheduleentry_employee_id", table_name="scheduleentry")
    op.drop_index("ix_scheduleentry_id", table_name="scheduleentry")
    op.drop_table("scheduleentry")
    op.drop_table("shift")
    op.drop_table("employee")
    op.drop_index("ix_role_id", table_name="role")
    op.drop_table("role")
