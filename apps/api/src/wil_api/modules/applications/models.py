"""
Application Models

Student applications for Work Integrated Learning placements.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from wil_api.modules.shared import BaseModel, value_enum


class ApplicationStatus(str, enum.Enum):
    """Status of a WIL application."""

    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class Application(BaseModel):
    """
    WIL placement application.

    Identity fields are copied onto the signup code when the application is
    accepted. Documents are stored elsewhere; only their paths live here.
    """

    __tablename__ = "wil_application"

    # Applicant identity
    province: Mapped[str | None] = mapped_column(String(100), nullable=True)
    title: Mapped[str | None] = mapped_column(String(20), nullable=True)
    initials: Mapped[str | None] = mapped_column(String(10), nullable=True)
    surname: Mapped[str] = mapped_column(String(100), nullable=False)
    first_names: Mapped[str] = mapped_column(String(100), nullable=False)
    student_number: Mapped[str] = mapped_column(String(20), nullable=False)
    level_of_study: Mapped[str | None] = mapped_column(String(50), nullable=True)
    race: Mapped[str | None] = mapped_column(String(50), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(10), nullable=True)
    email_address: Mapped[str] = mapped_column(String(100), nullable=False)
    physical_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    home_town: Mapped[str | None] = mapped_column(String(100), nullable=True)
    cell_phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Placement host
    municipality_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    town_situated: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contact_person: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(100), nullable=True)
    telephone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    contact_cell_phone: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Declarations
    declaration_info_1: Mapped[str | None] = mapped_column(Text, nullable=True)
    declaration_info_2: Mapped[str | None] = mapped_column(Text, nullable=True)
    declaration_info_3: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Document paths
    signature_image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    id_document: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cv_document: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Status tracking
    status: Mapped[ApplicationStatus] = mapped_column(
        value_enum(ApplicationStatus, "application_status"),
        nullable=False,
        default=ApplicationStatus.PENDING,
        server_default=ApplicationStatus.PENDING.value,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_wil_application_status", "status"),
        Index("ix_wil_application_student_number", "student_number"),
        Index("ix_wil_application_email_address", "email_address"),
    )
