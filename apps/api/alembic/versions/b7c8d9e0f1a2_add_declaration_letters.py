"""add declaration letters and case-insensitive blocklist index

Revision ID: b7c8d9e0f1a2
Revises: a0b1c2d3e4f5
Create Date: 2026-10-19 14:00:00.000000

1. declaration_letters: supervisor assessments of a student's placement
2. An index on lower(email) for blocked_signups, matching how the
   blocklist is queried
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "b7c8d9e0f1a2"
down_revision: str | Sequence[str] | None = "a0b1c2d3e4f5"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

RATING_COLUMNS = (
    "work_ethic",
    "timeliness",
    "attitude",
    "dress",
    "interaction",
    "responsibility",
    "report_writing",
)


def upgrade() -> None:
    op.create_table(
        "declaration_letters",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("student_number", sa.String(length=20), nullable=False),
        sa.Column("student_name", sa.String(length=200), nullable=False),
        sa.Column("declaration_date", sa.Date(), nullable=True),
        sa.Column("supervisor_name", sa.String(length=200), nullable=False),
        sa.Column("employer_name", sa.String(length=200), nullable=False),
        sa.Column("position", sa.String(length=100), nullable=False),
        sa.Column("hi_number", sa.String(length=50), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        *[sa.Column(name, sa.String(length=50), nullable=False) for name in RATING_COLUMNS],
        sa.Column("general_comments", sa.Text(), nullable=True),
        sa.Column("supervisor_signature", sa.String(length=255), nullable=True),
        sa.Column("signature_date", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_declaration_letters_student_number", "declaration_letters", ["student_number"]
    )

    op.create_index(
        "ix_blocked_signups_email_lower", "blocked_signups", [sa.text("lower(email)")]
    )


def downgrade() -> None:
    op.drop_index("ix_blocked_signups_email_lower", table_name="blocked_signups")
    op.drop_index("ix_declaration_letters_student_number", table_name="declaration_letters")
    op.drop_table("declaration_letters")
