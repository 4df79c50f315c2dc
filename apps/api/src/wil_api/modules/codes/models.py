"""
Code Models

One-time codes and the signup blocklist.

A code row exists exactly while the code is redeemable: redemption deletes
the row, so "used" and "never issued" are indistinguishable by design of
the storage. Blocked emails are append-only.
"""

import enum

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from wil_api.modules.shared import BaseModel


class CodeKind(str, enum.Enum):
    """Kinds of one-time codes."""

    SIGNUP = "signup"
    STAFF = "staff"
    EVENT = "event"


class SignupCode(BaseModel):
    """
    Student signup code.

    Issued when an application is accepted and bound to that applicant's
    identity. Redeemed once by the student signup.
    """

    __tablename__ = "signup_codes"

    code: Mapped[str] = mapped_column(String(16), unique=True, nullable=False)
    application_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("wil_application.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Identity copied from the application at acceptance time
    first_names: Mapped[str] = mapped_column(String(200), nullable=False)
    surname: Mapped[str] = mapped_column(String(200), nullable=False)
    student_number: Mapped[str] = mapped_column(String(50), nullable=False)
    level_of_study: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (Index("ix_signup_codes_application_id", "application_id"),)


class StaffCode(BaseModel):
    """Registration code for staff and mentors."""

    __tablename__ = "staff_codes"

    code: Mapped[str] = mapped_column(String(16), unique=True, nullable=False)
    staff_name: Mapped[str] = mapped_column(String(200), nullable=False)
    staff_email: Mapped[str] = mapped_column(String(255), nullable=False)


class EventCode(BaseModel):
    """Code authorising a guest to create one guest lecture."""

    __tablename__ = "event_codes"

    code: Mapped[str] = mapped_column(String(16), unique=True, nullable=False)
    guest_name: Mapped[str] = mapped_column(String(200), nullable=False)
    guest_email: Mapped[str] = mapped_column(String(255), nullable=False)


class BlockedSignup(BaseModel):
    """Email address that may not redeem a signup code."""

    __tablename__ = "blocked_signups"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)


CODE_MODELS: dict[CodeKind, type[SignupCode] | type[StaffCode] | type[EventCode]] = {
    CodeKind.SIGNUP: SignupCode,
    CodeKind.STAFF: StaffCode,
    CodeKind.EVENT: EventCode,
}
