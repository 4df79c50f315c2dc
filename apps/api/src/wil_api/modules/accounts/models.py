"""
Account Models

Accounts created by redeeming one-time codes. A student signup writes both
a StudentUser and a User row with the same password hash.
"""

import enum

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from wil_api.modules.shared import BaseModel, value_enum


class AccountKind(str, enum.Enum):
    """Which signup flow created the account."""

    STUDENT = "student"
    STAFF = "staff"
    MENTOR = "mentor"


class StudentStatus(str, enum.Enum):
    """Lifecycle status of a student account."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    UNENROLLED = "unenrolled"


class StudentUser(BaseModel):
    """Student account, linked to the application through student_number."""

    __tablename__ = "student_users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    title: Mapped[str | None] = mapped_column(String(20), nullable=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    student_number: Mapped[str] = mapped_column(
        String(20), unique=True, index=True, nullable=False
    )
    status: Mapped[StudentStatus] = mapped_column(
        value_enum(StudentStatus, "student_status"),
        nullable=False,
        default=StudentStatus.ACTIVE,
        server_default=StudentStatus.ACTIVE.value,
    )

    def __repr__(self) -> str:
        return f"<StudentUser(id={self.id}, student_number={self.student_number}, status={self.status.value})>"


class User(BaseModel):
    """General user directory entry, written alongside every student account."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    title: Mapped[str | None] = mapped_column(String(20), nullable=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)


class StaffUser(BaseModel):
    """Staff account."""

    __tablename__ = "staff_users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    title: Mapped[str | None] = mapped_column(String(20), nullable=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)


class MentorUser(BaseModel):
    """Mentor account."""

    __tablename__ = "mentor_users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    title: Mapped[str | None] = mapped_column(String(20), nullable=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
