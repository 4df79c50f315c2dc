"""
Account Repository

Database operations for student, staff and mentor accounts.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from wil_api.modules.accounts.models import MentorUser, StaffUser, StudentUser, User

logger = logging.getLogger(__name__)


class AccountRepository:
    """Repository for account database operations. Flushes only."""

    @staticmethod
    async def create_student(
        db: AsyncSession,
        *,
        email: str,
        title: str | None,
        password_hash: str,
        student_number: str,
    ) -> tuple[StudentUser, User]:
        """
        Create the student account and its users entry.

        Both rows share one password hash. Unique violations surface on flush.

        Returns:
            (StudentUser, User)
        """
        student = StudentUser(
            email=email,
            title=title,
            password_hash=password_hash,
            student_number=student_number,
        )
        user = User(email=email, title=title, password_hash=password_hash)

        db.add_all([student, user])
        await db.flush()

        logger.info(f"Created student account: {student.id} - {email}")
        return student, user

    @staticmethod
    async def create_staff(
        db: AsyncSession, *, email: str, title: str | None, password_hash: str
    ) -> StaffUser:
        staff = StaffUser(email=email, title=title, password_hash=password_hash)
        db.add(staff)
        await db.flush()

        logger.info(f"Created staff account: {staff.id} - {email}")
        return staff

    @staticmethod
    async def create_mentor(
        db: AsyncSession, *, email: str, title: str | None, password_hash: str
    ) -> MentorUser:
        mentor = MentorUser(email=email, title=title, password_hash=password_hash)
        db.add(mentor)
        await db.flush()

        logger.info(f"Created mentor account: {mentor.id} - {email}")
        return mentor
