"""
Event Models

Guest lectures and students' registrations/attendance for them.
"""

import enum
from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from wil_api.modules.shared import BaseModel, value_enum


class RegisterStatus(str, enum.Enum):
    """Whether students may currently register for a lecture."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class GuestLecture(BaseModel):
    """A guest lecture, created by the guest with a one-time event code."""

    __tablename__ = "guest_lectures"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    guest_name: Mapped[str] = mapped_column(String(200), nullable=False)
    guest_email: Mapped[str] = mapped_column(String(255), nullable=False)
    event_type: Mapped[str] = mapped_column(String(100), nullable=False)
    event_date: Mapped[date] = mapped_column(Date, nullable=False)
    register_status: Mapped[RegisterStatus] = mapped_column(
        value_enum(RegisterStatus, "register_status"),
        nullable=False,
        default=RegisterStatus.ACTIVE,
    )
    document_path: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (Index("ix_guest_lectures_event_date", "event_date"),)


class EventAttendance(BaseModel):
    """
    A student's registration for a lecture.

    `student_id` references the student's accepted application.
    `signed_at` is set when attendance is confirmed.
    """

    __tablename__ = "event_attendance"

    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("guest_lectures.id", ondelete="CASCADE"), nullable=False
    )
    student_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("wil_application.id", ondelete="CASCADE"), nullable=False
    )
    attended: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    signed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("ix_event_attendance_event_student", "event_id", "student_id"),)
