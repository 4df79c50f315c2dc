"""
Fixtures for student status tests.
"""

from datetime import date

import pytest

from wil_api.modules.accounts.models import StudentStatus, StudentUser
from wil_api.modules.students.models import DailyLogsheet

TODAY = date(2026, 3, 20)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_student(session_factory):
    """Insert a student account directly."""

    async def _make(
        student_number: str,
        status: StudentStatus = StudentStatus.ACTIVE,
    ) -> StudentUser:
        async with session_factory() as session:
            student = StudentUser(
                email=f"{student_number}@students.mut.ac.za",
                title=f"Student {student_number}",
                password_hash="hashed",
                student_number=student_number,
                status=status,
            )
            session.add(student)
            await session.commit()
            return student

    return _make


@pytest.fixture
def make_logsheet(session_factory):
    """Insert a logsheet for a student on a given date."""

    async def _make(student_number: str, log_date: date) -> DailyLogsheet:
        async with session_factory() as session:
            logsheet = DailyLogsheet(
                student_number=student_number,
                log_date=log_date,
                ehp_hi_number="EHP-001",
                activities=[{"activity": "Food premises inspection", "hours": 4}],
            )
            session.add(logsheet)
            await session.commit()
            return logsheet

    return _make
