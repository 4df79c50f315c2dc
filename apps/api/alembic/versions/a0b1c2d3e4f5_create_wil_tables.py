"""create WIL tables

Revision ID: a0b1c2d3e4f5
Revises:
Create Date: 2026-10-19 09:00:00.000000

This migration creates the full WIL schema:
1. wil_application (with the Pending/Accepted/Rejected status enum)
2. One-time code tables: signup_codes, staff_codes, event_codes
3. blocked_signups
4. Accounts: student_users (with status enum), users, staff_users, mentor_users
5. daily_logsheet (unique per student per day)
6. guest_lectures and event_attendance
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a0b1c2d3e4f5"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

application_status = sa.Enum("Pending", "Accepted", "Rejected", name="application_status")
student_status = sa.Enum("active", "inactive", "suspended", "unenrolled", name="student_status")
register_status = sa.Enum("active", "inactive", name="register_status")


def _base_columns() -> list[sa.Column]:
    """Primary key and created_at shared by every table."""
    return [
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _account_columns() -> list[sa.Column]:
    return [
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=20), nullable=True),
        sa.Column("password_hash", sa.Text(), nullable=False),
    ]


def upgrade() -> None:
    """Create all WIL tables."""
    # Applications
    op.create_table(
        "wil_application",
        *_base_columns(),
        sa.Column("province", sa.String(length=100), nullable=True),
        sa.Column("title", sa.String(length=20), nullable=True),
        sa.Column("initials", sa.String(length=10), nullable=True),
        sa.Column("surname", sa.String(length=100), nullable=False),
        sa.Column("first_names", sa.String(length=100), nullable=False),
        sa.Column("student_number", sa.String(length=20), nullable=False),
        sa.Column("level_of_study", sa.String(length=50), nullable=True),
        sa.Column("race", sa.String(length=50), nullable=True),
        sa.Column("gender", sa.String(length=10), nullable=True),
        sa.Column("email_address", sa.String(length=100), nullable=False),
        sa.Column("physical_address", sa.Text(), nullable=True),
        sa.Column("home_town", sa.String(length=100), nullable=True),
        sa.Column("cell_phone_number", sa.String(length=20), nullable=True),
        sa.Column("municipality_name", sa.String(length=100), nullable=True),
        sa.Column("town_situated", sa.String(length=100), nullable=True),
        sa.Column("contact_person", sa.String(length=100), nullable=True),
        sa.Column("contact_email", sa.String(length=100), nullable=True),
        sa.Column("telephone_number", sa.String(length=20), nullable=True),
        sa.Column("contact_cell_phone", sa.String(length=20), nullable=True),
        sa.Column("declaration_info_1", sa.Text(), nullable=True),
        sa.Column("declaration_info_2", sa.Text(), nullable=True),
        sa.Column("declaration_info_3", sa.Text(), nullable=True),
        sa.Column("signature_image", sa.String(length=255), nullable=True),
        sa.Column("id_document", sa.String(length=255), nullable=True),
        sa.Column("cv_document", sa.String(length=255), nullable=True),
        sa.Column("status", application_status, server_default="Pending", nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_wil_application_status", "wil_application", ["status"])
    op.create_index("ix_wil_application_student_number", "wil_application", ["student_number"])
    op.create_index("ix_wil_application_email_address", "wil_application", ["email_address"])

    # One-time codes
    op.create_table(
        "signup_codes",
        *_base_columns(),
        sa.Column("code", sa.String(length=16), nullable=False),
        sa.Column("application_id", sa.Integer(), nullable=False),
        sa.Column("first_names", sa.String(length=200), nullable=False),
        sa.Column("surname", sa.String(length=200), nullable=False),
        sa.Column("student_number", sa.String(length=50), nullable=False),
        sa.Column("level_of_study", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(["application_id"], ["wil_application.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )
    op.create_index("ix_signup_codes_application_id", "signup_codes", ["application_id"])

    op.create_table(
        "staff_codes",
        *_base_columns(),
        sa.Column("code", sa.String(length=16), nullable=False),
        sa.Column("staff_name", sa.String(length=200), nullable=False),
        sa.Column("staff_email", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )

    op.create_table(
        "event_codes",
        *_base_columns(),
        sa.Column("code", sa.String(length=16), nullable=False),
        sa.Column("guest_name", sa.String(length=200), nullable=False),
        sa.Column("guest_email", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )

    op.create_table(
        "blocked_signups",
        *_base_columns(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    # Accounts
    op.create_table(
        "student_users",
        *_base_columns(),
        *_account_columns(),
        sa.Column("student_number", sa.String(length=20), nullable=False),
        sa.Column("status", student_status, server_default="active", nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_student_users_email", "student_users", ["email"], unique=True)
    op.create_index(
        "ix_student_users_student_number", "student_users", ["student_number"], unique=True
    )

    for table in ("users", "staff_users", "mentor_users"):
        op.create_table(
            table,
            *_base_columns(),
            *_account_columns(),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{table}_email", table, ["email"], unique=True)

    # Logsheets
    op.create_table(
        "daily_logsheet",
        *_base_columns(),
        sa.Column("student_number", sa.String(length=20), nullable=False),
        sa.Column("log_date", sa.Date(), nullable=False),
        sa.Column("ehp_hi_number", sa.String(length=50), nullable=False),
        sa.Column("activities", sa.JSON(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("situation_description", sa.Text(), nullable=True),
        sa.Column("situation_evaluation", sa.Text(), nullable=True),
        sa.Column("situation_interpretation", sa.Text(), nullable=True),
        sa.Column("student_signature", sa.String(length=255), nullable=True),
        sa.Column("supervisor_signature", sa.String(length=255), nullable=True),
        sa.Column("date_stamp", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("student_number", "log_date", name="uq_daily_logsheet_student_date"),
    )
    op.create_index("ix_daily_logsheet_student_number", "daily_logsheet", ["student_number"])

    # Events
    op.create_table(
        "guest_lectures",
        *_base_columns(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("guest_name", sa.String(length=200), nullable=False),
        sa.Column("guest_email", sa.String(length=255), nullable=False),
        sa.Column("event_type", sa.String(length=100), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("register_status", register_status, nullable=False),
        sa.Column("document_path", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_guest_lectures_event_date", "guest_lectures", ["event_date"])

    op.create_table(
        "event_attendance",
        *_base_columns(),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("attended", sa.Boolean(), nullable=False),
        sa.Column("signed_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["event_id"], ["guest_lectures.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["student_id"], ["wil_application.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_event_attendance_event_student", "event_attendance", ["event_id", "student_id"]
    )


def downgrade() -> None:
    """Drop all WIL tables and enum types."""
    op.drop_table("event_attendance")
    op.drop_table("guest_lectures")
    op.drop_table("daily_logsheet")
    for table in ("mentor_users", "staff_users", "users", "student_users"):
        op.drop_table(table)
    op.drop_table("blocked_signups")
    op.drop_table("event_codes")
    op.drop_table("staff_codes")
    op.drop_table("signup_codes")
    op.drop_table("wil_application")

    bind = op.get_bind()
    register_status.drop(bind, checkfirst=True)
    student_status.drop(bind, checkfirst=True)
    application_status.drop(bind, checkfirst=True)
