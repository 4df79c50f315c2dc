"""
Declaration Letter Models
"""

from datetime import date

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from wil_api.modules.shared import BaseModel


class DeclarationLetter(BaseModel):
    """
    A supervisor's declaration covering a student's placement period.

    Each rating column holds the supervisor's grade for that attribute
    (e.g. "Excellent", "Good").
    """

    __tablename__ = "declaration_letters"

    student_number: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    student_name: Mapped[str] = mapped_column(String(200), nullable=False)
    declaration_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    supervisor_name: Mapped[str] = mapped_column(String(200), nullable=False)
    employer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    position: Mapped[str] = mapped_column(String(100), nullable=False)
    hi_number: Mapped[str] = mapped_column(String(50), nullable=False)

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    work_ethic: Mapped[str] = mapped_column(String(50), nullable=False)
    timeliness: Mapped[str] = mapped_column(String(50), nullable=False)
    attitude: Mapped[str] = mapped_column(String(50), nullable=False)
    dress: Mapped[str] = mapped_column(String(50), nullable=False)
    interaction: Mapped[str] = mapped_column(String(50), nullable=False)
    responsibility: Mapped[str] = mapped_column(String(50), nullable=False)
    report_writing: Mapped[str] = mapped_column(String(50), nullable=False)
    general_comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Signature document path
    supervisor_signature: Mapped[str | None] = mapped_column(String(255), nullable=True)
    signature_date: Mapped[date | None] = mapped_column(Date, nullable=True)
