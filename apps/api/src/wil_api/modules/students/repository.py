"""
Students Repository

Database operations for student accounts' status and their daily logsheets.
Functions flush but never commit.
"""

from datetime import date

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.modules.accounts.models import StudentStatus, StudentUser

from .models import DailyLogsheet

# ============================================
# Student accounts
# ============================================


async def get_student(
    db: AsyncSession, student_number: str, *, for_update: bool = False
) -> StudentUser | None:
    """Get a student account by student number, optionally locking the row."""
    stmt = select(StudentUser).where(StudentUser.student_number == student_number)
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def list_students(db: AsyncSession) -> list[StudentUser]:
    result = await db.execute(select(StudentUser).order_by(StudentUser.id))
    return list(result.scalars().all())


async def list_student_numbers_with_status(db: AsyncSession, status: StudentStatus) -> list[str]:
    result = await db.execute(
        select(StudentUser.student_number)
        .where(StudentUser.status == status)
        .order_by(StudentUser.id)
    )
    return list(result.scalars().all())


async def set_status(db: AsyncSession, student: StudentUser, status: StudentStatus) -> StudentUser:
    """Write a new status onto a loaded student row."""
    student.status = status
    await db.flush()
    return student


async def count_students_by_status(db: AsyncSession) -> dict[str, int]:
    """Student counts keyed by status value; every status is present."""
    result = await db.execute(
        select(StudentUser.status, func.count()).group_by(StudentUser.status)
    )
    counts = {status.value: 0 for status in StudentStatus}
    for status, count in result.all():
        counts[StudentStatus(status).value] = count
    return counts


# ============================================
# Logsheets
# ============================================


async def get_latest_log_date(db: AsyncSession, student_number: str) -> date | None:
    """Most recent log_date for a student, or None if they never logged."""
    result = await db.execute(
        select(func.max(DailyLogsheet.log_date)).where(
            DailyLogsheet.student_number == student_number
        )
    )
    return result.scalar()


async def get_logsheet(
    db: AsyncSession, student_number: str, log_date: date
) -> DailyLogsheet | None:
    result = await db.execute(
        select(DailyLogsheet).where(
            DailyLogsheet.student_number == student_number,
            DailyLogsheet.log_date == log_date,
        )
    )
    return result.scalar_one_or_none()


async def list_logsheets(db: AsyncSession, student_number: str | None = None) -> list[DailyLogsheet]:
    """Logsheets newest first, optionally for one student."""
    stmt = select(DailyLogsheet).order_by(DailyLogsheet.log_date.desc(), DailyLogsheet.id.desc())
    if student_number is not None:
        stmt = stmt.where(DailyLogsheet.student_number == student_number)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def delete_logsheet(db: AsyncSession, logsheet_id: int) -> int:
    result = await db.execute(delete(DailyLogsheet).where(DailyLogsheet.id == logsheet_id))
    return result.rowcount


async def create_logsheet(db: AsyncSession, **fields) -> DailyLogsheet:
    logsheet = DailyLogsheet(**fields)
    db.add(logsheet)
    await db.flush()
    return logsheet


async def count_logsheets_since(db: AsyncSession, since: date) -> int:
    result = await db.execute(
        select(func.count()).select_from(DailyLogsheet).where(DailyLogsheet.log_date >= since)
    )
    return result.scalar() or 0
