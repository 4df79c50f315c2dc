"""
Student Activity Models

Daily logsheets are the activity evidence that drives a student's
active/inactive status.
"""

from datetime import date

from sqlalchemy import JSON, Date, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from wil_api.modules.shared import BaseModel

MAX_ACTIVITIES = 14


class DailyLogsheet(BaseModel):
    """
    One day of placement activity for a student.

    At most one logsheet per student per day. `activities` is a list of
    {"activity": str, "hours": float | None} entries, at most 14.
    """

    __tablename__ = "daily_logsheet"

    student_number: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    log_date: Mapped[date] = mapped_column(Date, nullable=False)
    ehp_hi_number: Mapped[str] = mapped_column(String(50), nullable=False)
    activities: Mapped[list] = mapped_column(JSON, nullable=False)

    # Reflection
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    situation_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    situation_evaluation: Mapped[str | None] = mapped_column(Text, nullable=True)
    situation_interpretation: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Signature and stamp document paths
    student_signature: Mapped[str | None] = mapped_column(String(255), nullable=True)
    supervisor_signature: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date_stamp: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        UniqueConstraint("student_number", "log_date", name="uq_daily_logsheet_student_date"),
    )
